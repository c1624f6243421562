"""Database backup API"""

import os
from typing import Any

from fastapi import APIRouter, HTTPException

from procurement.services.scheduler import (
    backup_database, list_backups, get_backup_dir, get_db_path, get_scheduler_status
)

router = APIRouter()


@router.get("/")
async def get_backups() -> Any:
    try:
        backup_dir = get_backup_dir()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "backups": list_backups(),
        "backup_dir": os.path.abspath(backup_dir)
    }


@router.post("/create")
async def create_backup() -> Any:
    try:
        info = backup_database(db_path=get_db_path())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"Backup failed: {e}")
    return {"success": True, "backup": info}


@router.get("/scheduler")
async def scheduler_status() -> Any:
    return get_scheduler_status()
