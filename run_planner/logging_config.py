"""Central logging configuration for the running planner."""

import logging
from logging.config import dictConfig
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from run_planner.config import get_settings

_configured = False

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _default_config(level: str, log_dir: Optional[Path]) -> dict:
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": level,
        },
    }
    if log_dir is not None:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": str(log_dir / "run_planner.log"),
            "encoding": "utf-8",
            "formatter": "standard",
            "level": level,
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": handlers,
        "root": {
            "level": level,
            "handlers": list(handlers),
        },
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Configure package logging once per process."""

    global _configured
    if _configured:
        return

    try:
        settings = get_settings()
        log_dir = settings.log_dir
        default_level = settings.log_level
    except ValidationError:
        # Malformed environment; fall back to console logging.
        log_dir = None
        default_level = "INFO"
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

    dictConfig(_default_config((level or default_level).upper(), log_dir))
    _configured = True
    logging.getLogger(__name__).debug("Logging configured")
