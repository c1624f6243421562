"""
Scheduled database backup.
APScheduler copies the SQLite file once a day and keeps the newest N copies.
"""

import os
import shutil
import logging
from datetime import datetime
from typing import List, Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from procurement.core.config import settings

logger = logging.getLogger(__name__)

AUTO_BACKUP_PREFIX = "auto_backup_"

scheduler: Optional[AsyncIOScheduler] = None


def get_db_path(db_url: str = None) -> str:
    """SQLite file behind the database URI"""
    db_url = db_url or settings.SQLITE_DATABASE_URI
    for prefix in ("sqlite+aiosqlite:///", "sqlite:///"):
        if db_url.startswith(prefix):
            return db_url[len(prefix):]
    raise ValueError(f"Only SQLite databases can be backed up: {db_url}")


def get_backup_dir(db_path: str = None) -> str:
    db_path = db_path or get_db_path()
    backup_dir = os.path.join(os.path.dirname(os.path.abspath(db_path)), "backups")
    os.makedirs(backup_dir, exist_ok=True)
    return backup_dir


def backup_database(prefix: str = "backup_", db_path: str = None) -> dict:
    """Copy the database file into the backup directory"""
    db_path = db_path or get_db_path()
    if not os.path.exists(db_path):
        raise FileNotFoundError(f"Database file not found: {db_path}")

    backup_dir = get_backup_dir(db_path)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_filename = f"{prefix}{timestamp}.db"
    backup_path = os.path.join(backup_dir, backup_filename)
    shutil.copy2(db_path, backup_path)

    stat = os.stat(backup_path)
    return {
        "filename": backup_filename,
        "size": stat.st_size,
        "size_display": f"{stat.st_size / 1024 / 1024:.2f} MB",
        "created_at": datetime.fromtimestamp(stat.st_mtime).isoformat(),
    }


def list_backups(db_path: str = None) -> List[dict]:
    """Backups, newest first"""
    backup_dir = get_backup_dir(db_path)
    backups = []
    for filename in os.listdir(backup_dir):
        if filename.endswith(".db"):
            stat = os.stat(os.path.join(backup_dir, filename))
            backups.append({
                "filename": filename,
                "size": stat.st_size,
                "size_display": f"{stat.st_size / 1024 / 1024:.2f} MB",
                "created_at": datetime.fromtimestamp(stat.st_mtime).isoformat(),
            })
    backups.sort(key=lambda x: x["created_at"], reverse=True)
    return backups


def auto_backup():
    """Scheduled job; failures are logged, the scheduler keeps running"""
    try:
        info = backup_database(prefix=AUTO_BACKUP_PREFIX)
    except (OSError, ValueError) as e:
        logger.error(f"Automatic backup failed: {e}")
        return

    logger.info(f"Automatic backup done: {info['filename']} ({info['size_display']})")
    cleanup_old_backups(get_backup_dir(), keep_count=settings.AUTO_BACKUP_KEEP_COUNT)


def cleanup_old_backups(backup_dir: str, keep_count: int = 7):
    """Keep only the newest keep_count automatic backups"""
    auto_backups = []
    for filename in os.listdir(backup_dir):
        if filename.startswith(AUTO_BACKUP_PREFIX) and filename.endswith(".db"):
            filepath = os.path.join(backup_dir, filename)
            auto_backups.append((os.stat(filepath).st_mtime, filename, filepath))

    auto_backups.sort(reverse=True)
    for _, filename, filepath in auto_backups[keep_count:]:
        try:
            os.remove(filepath)
            logger.info(f"Removed old backup: {filename}")
        except OSError as e:
            logger.warning(f"Could not remove old backup {filename}: {e}")


def init_scheduler():
    """Start the scheduler with the daily backup job"""
    global scheduler

    if not settings.AUTO_BACKUP_ENABLED:
        logger.info("Automatic backup disabled")
        return

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        auto_backup,
        trigger=CronTrigger(
            hour=settings.AUTO_BACKUP_HOUR,
            minute=settings.AUTO_BACKUP_MINUTE
        ),
        id="auto_backup",
        name="Automatic database backup",
        replace_existing=True
    )
    scheduler.start()
    logger.info(f"Scheduler started - daily backup at {settings.AUTO_BACKUP_HOUR:02d}:{settings.AUTO_BACKUP_MINUTE:02d}")


def shutdown_scheduler():
    global scheduler
    if scheduler:
        scheduler.shutdown()
        scheduler = None
        logger.info("Scheduler stopped")


def get_scheduler_status() -> dict:
    if not scheduler:
        return {
            "enabled": settings.AUTO_BACKUP_ENABLED,
            "running": False,
            "jobs": []
        }

    jobs = []
    for job in scheduler.get_jobs():
        jobs.append({
            "id": job.id,
            "name": job.name,
            "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None
        })

    return {
        "enabled": settings.AUTO_BACKUP_ENABLED,
        "running": scheduler.running,
        "jobs": jobs
    }
