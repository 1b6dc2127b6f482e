"""Loguru setup with per-request correlation ids and secret scrubbing."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger

from .sensitive_filter import sanitize_message

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)
_FILE_ROTATION = "10 MB"
_FILE_RETENTION = 5

_correlation_id: ContextVar[str] = ContextVar("filegate_correlation_id", default="-")


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or "-")


def get_correlation_id() -> str:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("-")


def _patch_record(record: dict[str, Any]) -> None:
    record["extra"]["correlation_id"] = _correlation_id.get()
    record["message"] = sanitize_message(record["message"])


class _StdlibBridge(logging.Handler):
    """Route werkzeug and SQLAlchemy records through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str | None = None, *, log_file: Path | None = None) -> None:
    level = (level or "INFO").upper()

    logger.remove()
    logger.configure(extra={"correlation_id": "-"}, patcher=_patch_record)
    logger.add(
        sys.stderr,
        level=level,
        format=_FORMAT,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level,
            format=_FORMAT,
            colorize=False,
            rotation=_FILE_ROTATION,
            retention=_FILE_RETENTION,
            enqueue=True,
            encoding="utf-8",
            backtrace=False,
            diagnose=False,
        )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
