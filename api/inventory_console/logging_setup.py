# -*- coding: utf-8 -*-
from __future__ import annotations
import logging, logging.handlers
from pathlib import Path

LOG_NAME = "inventory_console.log"


def setup_logging(settings) -> Path:
    """Configure rotating file logging under INVENTORY_DATA_ROOT/logs/inventory_console.log"""
    root = Path(settings.INVENTORY_DATA_ROOT).expanduser()
    log_dir = root / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_NAME
    level = logging.getLevelName(str(settings.LOG_LEVEL).upper())
    if not isinstance(level, int):
        level = logging.INFO

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler = logging.handlers.RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
    handler.setFormatter(fmt)
    handler.setLevel(level)

    def _has_ours(lg: logging.Logger) -> bool:
        return any(getattr(h, "baseFilename", "").endswith(LOG_NAME) for h in lg.handlers)

    logger = logging.getLogger()  # root
    logger.setLevel(level)
    # avoid duplicate handlers when the app module is imported twice
    if not _has_ours(logger):
        logger.addHandler(handler)

    # also wire uvicorn loggers (if present)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        lg = logging.getLogger(name)
        lg.setLevel(level)
        if not _has_ours(lg):
            lg.addHandler(handler)

    return log_path
