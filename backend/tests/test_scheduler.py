import os

import pytest

from procurement.services import scheduler


@pytest.fixture
def db_file(tmp_path):
    path = tmp_path / "procurement.db"
    path.write_bytes(b"SQLite format 3\x00")
    return str(path)


def test_db_path_from_uri():
    assert scheduler.get_db_path("sqlite:///./data/procurement.db") == "./data/procurement.db"
    assert scheduler.get_db_path("sqlite+aiosqlite:////srv/p.db") == "/srv/p.db"


def test_db_path_rejects_other_databases():
    with pytest.raises(ValueError):
        scheduler.get_db_path("postgresql://localhost/procurement")


def test_backup_copies_the_file(db_file):
    info = scheduler.backup_database(db_path=db_file)

    backup_dir = scheduler.get_backup_dir(db_file)
    assert info["filename"].startswith("backup_")
    assert os.path.exists(os.path.join(backup_dir, info["filename"]))
    assert [b["filename"] for b in scheduler.list_backups(db_file)] == [info["filename"]]


def test_backup_of_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        scheduler.backup_database(db_path=str(tmp_path / "missing.db"))


def test_cleanup_keeps_newest_automatic_backups(tmp_path):
    for i in range(5):
        path = tmp_path / f"{scheduler.AUTO_BACKUP_PREFIX}2024010{i}_000000.db"
        path.write_bytes(b"")
        os.utime(path, (1_700_000_000 + i, 1_700_000_000 + i))
    manual = tmp_path / "backup_manual.db"
    manual.write_bytes(b"")

    scheduler.cleanup_old_backups(str(tmp_path), keep_count=2)

    remaining = sorted(os.listdir(tmp_path))
    assert remaining == [
        f"{scheduler.AUTO_BACKUP_PREFIX}20240103_000000.db",
        f"{scheduler.AUTO_BACKUP_PREFIX}20240104_000000.db",
        "backup_manual.db",
    ]


def test_status_without_scheduler():
    status = scheduler.get_scheduler_status()
    assert status["running"] is False
    assert status["jobs"] == []
