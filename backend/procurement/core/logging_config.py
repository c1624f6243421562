"""
Logging setup.

Console output is colored by level when attached to a terminal; every
record at INFO and above also goes to logs/app_<date>.log, errors are
repeated in logs/error_<date>.log.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

LOG_DIR = Path("logs")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty libraries only report warnings and above
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx", "httpcore", "apscheduler")


class ColoredFormatter(logging.Formatter):
    """Level name in color; the record itself is left untouched"""

    COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{self.COLORS.get(record.levelno, '')}{record.levelname}{self.RESET}"
        return super().format(colored)


def _daily_file_handler(log_dir: Path, kind: str, level: int) -> logging.Handler:
    today = datetime.now().strftime("%Y-%m-%d")
    handler = logging.FileHandler(log_dir / f"{kind}_{today}.log", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return handler


def setup_logging(log_level: str = "INFO", log_dir: Path = LOG_DIR):
    """
    Configure the root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_dir: where the daily log files are written
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    if sys.stdout.isatty():
        console.setFormatter(ColoredFormatter(LOG_FORMAT, DATE_FORMAT))
    else:
        console.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console)

    root_logger.addHandler(_daily_file_handler(log_dir, "app", logging.INFO))
    root_logger.addHandler(_daily_file_handler(log_dir, "error", logging.ERROR))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"Logging initialised at {log_level.upper()} ({log_dir.resolve()})")


def get_logger(name: str) -> logging.Logger:
    """Named logger, e.g. get_logger(__name__)"""
    return logging.getLogger(name)
