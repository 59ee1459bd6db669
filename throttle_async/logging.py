"""Logging configuration for throttle_async.

Logging goes through loguru and is disabled by default (library behavior).
Enable it to trace window decisions of throttled entry points.

Example:
    from throttle_async import LogConfig, setup_logging, teardown_logging

    # Console output at debug level
    ids = setup_logging(LogConfig(level="DEBUG", console=True))
    ...
    teardown_logging(ids)

    # File output
    ids = setup_logging(LogConfig(level="TRACE", file=".throttle/throttle.log"))
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from loguru import logger

type LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "TRACE"]

_CONTEXT_KEYS = ("component", "name")


def _format_context(record: Any) -> str:
    extra = record.get("extra", {})
    parts = [f"{k}={extra[k]}" for k in _CONTEXT_KEYS if k in extra]
    return f" [{' '.join(parts)}]" if parts else ""


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
    "<dim>{extra[_ctx]}</dim> - "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line}{extra[_ctx]} - {message}"
)


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Logging configuration.

    Attributes:
        level: Minimum log level (TRACE, DEBUG, INFO, WARNING, ERROR).
        file: Path to log file. None disables file output.
        console: Whether to log to stderr. Defaults to False.
        rotation: File rotation policy (e.g., "50 MB", "1 day"). Defaults to "50 MB".
        retention: Number of old log files to keep. Defaults to 10.
    """

    level: LogLevel = "INFO"
    file: str | None = None
    console: bool = False
    rotation: str = "50 MB"
    retention: int = 10


def _own_records(record: Any) -> bool:
    if not record["name"].startswith("throttle_async"):
        return False
    record["extra"]["_ctx"] = _format_context(record)
    return True


def setup_logging(config: LogConfig) -> list[int]:
    """Enable throttle_async logging and return handler IDs for cleanup.

    Only adds sinks filtered to this package. Existing sinks and the global
    patcher are left alone, so a host application's own loguru setup (the
    default stderr handler included) keeps receiving whatever it accepts.
    """
    logger.enable("throttle_async")

    handler_ids: list[int] = []

    if config.console:
        hid = logger.add(
            sys.stderr,
            level=config.level,
            format=CONSOLE_FORMAT,
            colorize=True,
            filter=_own_records,
        )
        handler_ids.append(hid)

    if config.file:
        Path(config.file).parent.mkdir(parents=True, exist_ok=True)
        hid = logger.add(
            config.file,
            level=config.level,
            format=FILE_FORMAT,
            filter=_own_records,
            rotation=config.rotation,
            retention=config.retention,
            compression="zip",
            diagnose=False,
            enqueue=False,
        )
        handler_ids.append(hid)

    return handler_ids


def teardown_logging(handler_ids: list[int]) -> None:
    """Remove handlers and disable logging again."""
    for hid in handler_ids:
        logger.remove(hid)
    logger.disable("throttle_async")
