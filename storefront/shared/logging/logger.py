"""Loguru setup shared by the API process and its tests."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_NO_REQUEST = "-"
_DEFAULT_LOG_FILE = Path(__file__).resolve().parents[2] / "instance" / "storefront.log"

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<lvl>{level:<7}</lvl> "
    "[<magenta>{extra[correlation_id]}</magenta>] "
    "<cyan>{name}:{line}</cyan> {message}"
)
_FILE_FORMAT = (
    "{time:YYYY-MM-DD[T]HH:mm:ss.SSSZZ} {level:<7} [{extra[correlation_id]}] "
    "{name}:{function}:{line} {message}"
)

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default=_NO_REQUEST)


def _attach_correlation_id(record: dict[str, Any]) -> None:
    record["extra"]["correlation_id"] = _correlation_id.get()


logger = _logger.patch(_attach_correlation_id)


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or _NO_REQUEST)


def clear_correlation_id() -> None:
    _correlation_id.set(_NO_REQUEST)


class _StdlibBridge(logging.Handler):
    """Forwards werkzeug / sqlalchemy records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str | int
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _sink_options(level: str, fmt: str) -> dict[str, Any]:
    return {
        "level": level,
        "format": fmt,
        "filter": sanitize_record,
        "backtrace": False,
        "diagnose": False,
    }


def setup_logging(
    level: str | None = None,
    *,
    debug_mode: bool = False,
    log_file: str | None = None,
) -> None:
    level = (level or ("DEBUG" if debug_mode else "INFO")).upper()
    path = Path(log_file) if log_file else _DEFAULT_LOG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    _logger.configure(extra={"correlation_id": _NO_REQUEST})
    _logger.add(sys.stderr, colorize=True, **_sink_options(level, _CONSOLE_FORMAT))
    _logger.add(
        str(path),
        enqueue=True,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        **_sink_options(level, _FILE_FORMAT),
    )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
]
