"""PostgreSQL fixtures backed by Testcontainers.

One Postgres container is started per session and migrated to Alembic head;
each test gets its own engine and the entity tables are truncated after it.
Without a reachable Docker daemon, every test that would need the container
(by fixture name or by a ``postgres`` parameter id) is skipped instead.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING

import docker
import pytest
from alembic import command
from sqlalchemy import text
from testcontainers.postgres import PostgresContainer

from contentref import config
from contentref.adapters.db.engine import make_engine

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# pylint: disable=redefined-outer-name

POSTGRES_IMAGE = "postgres:17"
POSTGRES_FIXTURES = frozenset({"pg_url", "postgres_engine"})


def _docker_reachable() -> bool:
    try:
        docker.from_env().ping()
    except Exception:  # pylint: disable=broad-except
        return False
    return True


DOCKER_REACHABLE = _docker_reachable()


def _needs_postgres(item: pytest.Item) -> bool:
    uses_fixture = POSTGRES_FIXTURES.intersection(getattr(item, "fixturenames", ()))
    return bool(uses_fixture) or "postgres" in item.nodeid


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Skip the Postgres-backed tests when Docker cannot be reached."""
    if DOCKER_REACHABLE:
        return
    skip = pytest.mark.skip(
        reason=f"Docker is not reachable; {POSTGRES_IMAGE} unavailable"
    )
    for item in filter(_needs_postgres, items):
        item.add_marker(skip)


@pytest.fixture(scope="session")
def pg_url() -> Iterator[str]:
    """URL of the session container, with the entity schema at head."""
    with PostgresContainer(
        image=POSTGRES_IMAGE,
        username="contentref",
        password="contentref",
        dbname="content",
    ) as container:
        # the default driver in the URL is psycopg2; the test extra ships psycopg 3
        url = re.sub(r"\+psycopg2\b", "+psycopg", container.get_connection_url())
        command.upgrade(config.build_alembic_config(url), "head")
        yield url


@pytest.fixture
def postgres_engine(pg_url: str) -> Iterator[Engine]:
    """Engine on the session container; entity rows are removed afterwards."""
    test_engine = make_engine(pg_url)
    try:
        yield test_engine
    finally:
        with test_engine.begin() as conn:
            # translations, fields and items cascade from entity
            conn.execute(text("TRUNCATE TABLE entity CASCADE"))
        test_engine.dispose()
