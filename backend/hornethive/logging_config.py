"""
Logging Configuration
Console logging always; a rotating file under `log_dir` when it is writable.
"""

import logging
import logging.config
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "hornethive.log"


def _file_handler(log_dir: str, level: str):
    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": str(Path(log_dir) / LOG_FILE),
        "maxBytes": 10 * 1024 * 1024,
        "backupCount": 5,
        "formatter": "default",
        "level": level,
        "encoding": "utf8",
    }


def setup_logging(log_dir: str = "/var/log/hornethive", log_level: str = "INFO"):
    """
    Configure the root, uvicorn and `hornethive` loggers.

    Args:
        log_dir: Directory for the rotating log file.
        log_level: Level for application loggers. Server loggers stay at INFO.
    """
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": sys.stdout,
            "formatter": "default",
            "level": log_level,
        },
    }
    file_handler = _file_handler(log_dir, log_level)
    if file_handler:
        handlers["file"] = file_handler
    names = list(handlers)

    def logger_at(level):
        return {"handlers": names, "level": level, "propagate": False}

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": handlers,
        "root": {"handlers": names, "level": log_level},
        "loggers": {
            "uvicorn": logger_at("INFO"),
            "uvicorn.error": logger_at("INFO"),
            "uvicorn.access": logger_at("INFO"),
            "hornethive": logger_at(log_level),
        },
    })

    logger = logging.getLogger("hornethive")
    if file_handler:
        logger.info(f"Logging initialized. Writing logs to {file_handler['filename']}")
    else:
        logger.warning(f"Log directory {log_dir} is not writable, logging to console only")
