"""Logging setup for the contentref CLI.

Two handlers hang off the root logger:

- a Rich console handler on stderr whose level follows ``-v``/``-q``.
  Records from libraries get a ``[name]`` prefix so they stand out from
  contentref's own messages.
- an optional flight recorder: a `MemoryHandler` that keeps the last records
  at DEBUG granularity and writes them to a file when a WARNING arrives, so
  a failed query can be investigated after the fact.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "contentref"

CONSOLE_FORMAT = "%(prefix)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d] %(levelname)s %(name)s:%(lineno)d: %(message)s"
)

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Store a console prefix on each record as `record.prefix`.

    ``sqlalchemy.engine.Engine`` becomes ``[sqlalchemy]``; contentref's own
    loggers get an empty prefix. Records are never dropped.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        top_level = record.name.partition(".")[0]
        record.prefix = "" if top_level == PROJECT_PREFIX else f"[{top_level}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Console threshold. Ignored in debug mode, which shows DEBUG.
        debug_mode: Add timestamps, logger names and source locations.
        color: Let Rich pick a color system; False disables colors.

    Returns:
        The configured `RichHandler`.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter(DEBUG_CONSOLE_FORMAT))
    else:
        handler.addFilter(ThirdPartyPrefixFilter())
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder writing to `path`.

    The file is truncated when the recorder is built, so it only ever holds
    records of the latest run.

    Args:
        path: Log file written on flush.
        capacity: Records kept in memory before a forced flush.
        flush_level: Records at or above this level trigger a flush.
        flush_on_close: Also flush what is left when logging shuts down.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def _find_recorder(handlers: list[logging.Handler]) -> MemoryHandler | None:
    return next((h for h in handlers if isinstance(h, MemoryHandler)), None)


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    locale: str,
    handlers: list[logging.Handler],
    log_path: Path | None,
    logger_levels: dict[str, int],
) -> None:
    """Log what this run is configured with.

    One INFO line summarizes version, locale, console level and whether the
    flight recorder is on. The DEBUG lines after it (interpreter, platform,
    library versions, handlers, overrides) mostly end up in the flight
    recorder file.

    Args:
        logger: Logger to write to.
        app_version: contentref version.
        level: Console threshold.
        locale: Locale queries run in, as given on the command line.
        handlers: Handlers installed on the root logger.
        log_path: Flight recorder file, if a recorder is among `handlers`.
        logger_levels: Per-logger threshold overrides.
    """
    recorder = _find_recorder(handlers)
    logger.info(
        "contentref %s (locale=%s, console=%s, flight-recorder=%s)",
        app_version,
        locale,
        logging.getLevelName(level),
        "ON" if recorder else "OFF",
    )

    logger.debug("Python: %s", platform.python_version())
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %d", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Executable: %s", sys.executable)
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Handlers: %s", ", ".join(type(h).__name__ for h in handlers))
    if recorder is not None:
        logger.debug(
            "Flight recorder: path=%s, capacity=%d, flush_on_close=%s",
            log_path,
            recorder.capacity,
            recorder.flushOnClose,
        )
    if logger_levels:
        logger.debug(
            "Per-logger overrides: %s",
            {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()},
        )
