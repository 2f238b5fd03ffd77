"""``contentref db``: schema management for the entity database.

The entity tables are created and evolved by the Alembic revisions shipped
in `contentref.adapters.db.alembic`. These commands only move forward;
there is no ``downgrade`` or ``stamp``. Alembic's own output goes to stdout
and notices go to stderr, so ``contentref db upgrade --sql > schema.sql``
captures plain SQL.

``heads`` and plain ``history`` read the packaged revisions only. The other
commands need ``CONTENTREF_DB_URL`` and check that the database answers
before handing over to Alembic.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import text
from sqlalchemy.exc import ArgumentError, OperationalError

from contentref import config
from contentref.adapters.db.engine import make_engine

from .helpers import error, sanitize_url, success, warn
from .helpers.app import MISSING_DB_URL_MSG

if TYPE_CHECKING:
    from alembic.config import Config
    from sqlalchemy.engine import Engine

INVALID_URL_FORMAT_MSG = (
    "CONTENTREF_DB_URL does not parse as a SQLAlchemy URL "
    "(expected e.g. 'sqlite+pysqlite:///content.db')."
)

CANNOT_CONNECT_MSG = (
    "CONTENTREF_DB_URL is set, but nothing answers there.\n"
    "Check that the database server is up and that the URL points at it."
)

UPGRADE_SCHEMA_WARNING = (
    "The entity tables are about to be migrated to the newest revision.\n"
    "Take a backup of the database first if it holds content you care about."
)

UPGRADE_SCHEMA_INSTRUCTIONS = "Run 'contentref db upgrade' to update the schema."


class SchemaState(Enum):
    """Where the database schema stands relative to the packaged revisions."""

    UP_TO_DATE = "up to date"
    BEHIND = "behind head"
    NOT_INITIALIZED = "not initialized"


def schema_state(current: str | None, head: str | None) -> SchemaState:
    """Compare the database's revision with the newest packaged one."""
    if current is None:
        return SchemaState.NOT_INITIALIZED
    return SchemaState.UP_TO_DATE if current == head else SchemaState.BEHIND


def _require_url() -> str:
    """Return ``CONTENTREF_DB_URL`` once the database behind it has answered.

    Raises:
        click.ClickException: If the URL is unset, malformed or unreachable.
    """
    try:
        url = config.get_db_url()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e

    try:
        engine = make_engine(url)
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))  # pragma: no mutate
    except OperationalError as e:
        raise click.ClickException(CANNOT_CONNECT_MSG) from e
    finally:
        engine.dispose()
    return url


def _alembic(url: str | None = None) -> Config:
    return config.build_alembic_config(db_url=url, stdout=sys.stdout)


def _database_revision(engine: Engine) -> str | None:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def _packaged_head(cfg: Config) -> str | None:
    return ScriptDirectory.from_config(cfg).get_current_head()


verbose_option = click.option(
    "--verbose", "-v", is_flag=True, help="Pass --verbose through to Alembic."
)


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Manage the schema of the entity database."""


@db.command()
@verbose_option
def current(verbose: bool) -> None:
    """Print the revision the database is at."""
    command.current(_alembic(_require_url()), verbose=verbose)


@db.command()
@verbose_option
def heads(verbose: bool) -> None:
    """Print the newest packaged revision."""
    command.heads(_alembic(), verbose=verbose)


@db.command()
@verbose_option
@click.option(
    "--indicate-current",
    "-i",
    is_flag=True,
    help="Mark the revision the database is at (needs CONTENTREF_DB_URL).",
)
def history(verbose: bool, indicate_current: bool) -> None:
    """List the packaged revisions, newest first."""
    cfg = _alembic(_require_url() if indicate_current else None)
    command.history(cfg, verbose=verbose, indicate_current=indicate_current)


@db.command()
@click.option(
    "--sql", is_flag=True, help="Print the migration SQL instead of running it."
)
@click.option("--force", is_flag=True, help="Do not ask for confirmation.")
def upgrade(sql: bool, force: bool) -> None:
    """Migrate the database to the newest packaged revision."""
    url = _require_url()
    if not (force or sql):
        warn(UPGRADE_SCHEMA_WARNING)
        target = click.style(sanitize_url(url), underline=True)
        click.secho(f"Database: {target}", err=True)
        click.confirm("Migrate now?", abort=True, err=True)
    command.upgrade(_alembic(url), revision="head", sql=sql)
    if not sql:
        success("Schema is at the newest revision.")


@db.command()
def status() -> None:
    """Report whether the database answers and how current its schema is."""
    try:
        url = _require_url()
    except click.ClickException as e:
        error("Database unreachable")
        click.echo(e.format_message())
        return

    engine = make_engine(url)
    try:
        revision = _database_revision(engine)
    finally:
        engine.dispose()
    state = schema_state(revision, _packaged_head(_alembic(url)))

    success("Database reachable")
    click.echo(f"backend:  {engine.dialect.name}")
    click.echo(f"url:      {sanitize_url(url)}")
    click.echo(f"revision: {revision or '-'} ({state.value})")
    if state is not SchemaState.UP_TO_DATE:
        warn(UPGRADE_SCHEMA_INSTRUCTIONS)
