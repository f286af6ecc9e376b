"""Logging utilities for SoundMeter."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from soundmeter.config import CONFIG_DIR


LOG_PATH = CONFIG_DIR / "soundmeter.log"
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records (PyQt, sounddevice) into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.bind(name=record.name).opt(depth=6, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = "INFO", log_path: Path = LOG_PATH) -> None:
    """Install a rotating file sink and a console sink, then route stdlib logging here.

    Records that were not logged through ``get_logger`` are tagged ``soundmeter``.
    """
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.configure(extra={"name": "soundmeter"})
    logger.add(
        log_path,
        rotation="1 MB",
        retention=5,
        enqueue=True,
        encoding="utf-8",
        level=level,
        backtrace=False,
        diagnose=False,
    )
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    logging.basicConfig(handlers=[InterceptHandler()], level=level, force=True)


def get_logger(name: Optional[str] = None):
    """Return a module scoped logger bound to Loguru."""
    return logger.bind(name=name or "soundmeter")
