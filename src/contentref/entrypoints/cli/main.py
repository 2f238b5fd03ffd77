"""contentref CLI entry point.

Defines the top-level ``contentref`` command (via Click-Extra) and registers
its subcommands.

Commands
- ``contentref field|ref|labels|translate|ancestor``: read queries.
- ``contentref entities load``: seed the entity store from JSON.
- ``contentref db``: forward-only database management.

Examples
    $ contentref --version
    $ contentref db upgrade
    $ contentref entities load content.json
    $ contentref ref node:7 featured_story --langcode fr
    $ contentref ancestor paragraph:12 --type node
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from contentref import __version__
from contentref.config import LOCALE_ENV
from contentref.logging import config_console_handler, config_flight_recorder, log_startup

from .db import db as db_group
from .entities import entities as entities_group
from .helpers import LOCALE
from .helpers.app import LOCALE_META_KEY
from .helpers.log_level_parser import parse_log_level
from .query import ancestor, field, labels, ref, translate

if TYPE_CHECKING:
    from logging import Handler

    from contentref.domain.value_objects import Locale

logger = logging.getLogger(__name__)


HELP = """contentref command-line interface.

    Read fields of stored content entities, follow their entity reference
    fields into the right language, and find the node a paragraph belongs to.
    """

EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('Environment:', fg='blue', bold=True, underline=True)}",
        "  CONTENTREF_DB_URL               SQLAlchemy URL of the entity database",
        "  CONTENTREF_LOCALE               current locale (default: en)",
        "  CONTENTREF_MAX_TRAVERSAL_DEPTH  parent-walk depth cap (default: 50)",
    ]
)


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--locale",
    type=LOCALE,
    default=None,
    envvar=LOCALE_ENV,
    show_envvar=True,
    help="Current locale used when no explicit language is given (default: en).",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Show one more level below WARNING per repetition (-v INFO, -vv DEBUG).",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Hide one more level above WARNING per repetition (-q ERROR, -qq CRITICAL).",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (timestamps, logger names and source paths).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path of the flight recorder log file.",
    default=Path(user_log_dir("contentref", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="CONTENTREF_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="CONTENTREF_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records the flight recorder keeps in memory.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N log records in memory at DEBUG granularity "
        "(unaffected by -v/-q) and write them to --log-path when a WARNING "
        "or ERROR occurs, or on exit if --force-flush is set."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Write the flight recorder buffer to --log-path on exit.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the minimum LEVEL of a logger (NAME=LEVEL). Applies to both the "
        "console and the flight recorder. Repeatable (e.g. -L sqlalchemy=INFO "
        "-L contentref.service_layer=DEBUG)."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def contentref(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    locale: "Locale | None",
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """contentref command-line interface."""

    # 0) effective console verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    # 1) console
    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]

    # 2) flight recorder
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # 3) root logger captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 4) per-logger levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    # 5) remember the locale for subcommands
    ctx.meta[LOCALE_META_KEY] = locale

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        locale=str(locale) if locale else "<default>",
        handlers=handlers,
        log_path=log_path if flight_recorder else None,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


contentref.add_command(field)
contentref.add_command(ref)
contentref.add_command(labels)
contentref.add_command(translate)
contentref.add_command(ancestor)
contentref.add_command(entities_group)
contentref.add_command(db_group)
