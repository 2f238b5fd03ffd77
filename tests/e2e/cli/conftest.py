"""Fixtures for end-to-end CLI tests.

Provides a test-only `log-demo` command that emits log records at every
level, a CliRunner, an isolated filesystem, and a migrated SQLite database
holding the shared test site.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
import pytest
from alembic import command
from click.testing import CliRunner
from sqlalchemy.engine import URL

from contentref import config
from contentref.adapters.db.engine import make_engine
from contentref.adapters.unit_of_work import SqlAlchemyUnitOfWork
from contentref.entrypoints.cli.main import contentref
from contentref.service_layer.seeding import load_entities

# pylint: disable=redefined-outer-name


DEMO_MESSAGES = {
    "debug": "demo: walking up from paragraph:12",
    "info": "demo: resolved node:7 into fr",
    "warning": "demo: node:404 is missing",
    "error": "demo: entity store unavailable",
    "critical": "demo: giving up",
    "lib_debug": "lib: opening a connection",
    "lib_info": "lib: connection ready",
    "lib_warning": "lib: slow statement",
    "final_debug": "demo: finished",
}


@click.command()
def log_demo():
    """Log every DEMO_MESSAGES entry on a project and a library logger."""
    project = logging.getLogger("contentref.demo")
    library = logging.getLogger("some.thirdparty")
    project.debug(DEMO_MESSAGES["debug"])
    project.info(DEMO_MESSAGES["info"])
    project.warning(DEMO_MESSAGES["warning"])
    project.error(DEMO_MESSAGES["error"])
    project.critical(DEMO_MESSAGES["critical"])
    library.debug(DEMO_MESSAGES["lib_debug"])
    library.info(DEMO_MESSAGES["lib_info"])
    library.warning(DEMO_MESSAGES["lib_warning"])
    project.debug(DEMO_MESSAGES["final_debug"])


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command on `contentref` for one test."""
    contentref.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        contentref.commands.pop("log-demo", None)
        contentref._default_section.commands.pop("log-demo", None)  # pylint: disable=protected-access


@pytest.fixture
def runner():
    """Return a Click CliRunner."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def empty_db_url(tmp_path: Path) -> str:
    """URL of a migrated but empty SQLite database, apart from `site_db_url`."""
    url = str(URL.create("sqlite+pysqlite", database=str(tmp_path / "empty.db")))
    command.upgrade(config.build_alembic_config(url), "head")
    return url


@pytest.fixture
def site_db_url(sqlite_url_file, content_records) -> str:
    """URL of a migrated SQLite database holding the shared test site."""
    engine = make_engine(sqlite_url_file)
    try:
        load_entities(SqlAlchemyUnitOfWork(engine), content_records)
    finally:
        engine.dispose()
    return sqlite_url_file


@pytest.fixture
def cli_env(site_db_url) -> dict[str, str | None]:
    """Environment for query commands: the test site, no flight recorder."""
    return {
        "CONTENTREF_DB_URL": site_db_url,
        "CONTENTREF_FLIGHT_RECORDER": "0",
        "CONTENTREF_LOCALE": None,
        "CONTENTREF_MAX_TRAVERSAL_DEPTH": None,
    }


@pytest.fixture
def invoke(runner, cli_env):
    """Invoke `contentref` with `cli_env` merged under per-call overrides."""

    def _invoke(*args: str, env: dict[str, str | None] | None = None):
        return runner.invoke(contentref, list(args), env={**cli_env, **(env or {})})

    return _invoke
