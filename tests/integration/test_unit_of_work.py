"""SqlAlchemyUnitOfWork against a migrated SQLite file."""

from __future__ import annotations

import pytest

from contentref.adapters.entity_store import SqlAlchemyEntityStore
from contentref.adapters.unit_of_work import SqlAlchemyUnitOfWork
from contentref.domain.value_objects import EntityRef
from contentref.interfaces.entity_store import DuplicateEntityError
from contentref.service_layer.seeding import load_entities

NODE_1 = EntityRef.parse("node:1")


def test_exposes_sql_store(sqlite_engine_file):
    """Entering the unit binds a SqlAlchemyEntityStore to a connection."""
    with SqlAlchemyUnitOfWork(sqlite_engine_file) as uow:
        assert isinstance(uow.entities, SqlAlchemyEntityStore)


def test_commit_persists(sqlite_engine_file, make_record):
    """Committed entities are visible to a later unit."""
    with SqlAlchemyUnitOfWork(sqlite_engine_file) as uow:
        uow.entities.add(make_record("node:1", "Home"))
        uow.commit()

    with SqlAlchemyUnitOfWork(sqlite_engine_file) as uow:
        assert uow.entities.get(NODE_1).label == "Home"


def test_exit_without_commit_rolls_back(sqlite_engine_file, make_record):
    """Uncommitted work is discarded on exit."""
    with SqlAlchemyUnitOfWork(sqlite_engine_file) as uow:
        uow.entities.add(make_record("node:1", "Home"))

    with SqlAlchemyUnitOfWork(sqlite_engine_file) as uow:
        assert uow.entities.get(NODE_1) is None


def test_failed_load_commits_nothing(sqlite_engine_file, make_record):
    """A duplicate in a batch leaves the database untouched."""
    uow = SqlAlchemyUnitOfWork(sqlite_engine_file)
    with pytest.raises(DuplicateEntityError):
        load_entities(
            uow,
            [make_record("node:1", "Home"), make_record("node:1", "Again")],
        )

    with SqlAlchemyUnitOfWork(sqlite_engine_file) as check:
        assert check.entities.get(NODE_1) is None


def test_load_content_graph(sqlite_engine_file, content_records):
    """The whole test site loads in one transaction."""
    uow = SqlAlchemyUnitOfWork(sqlite_engine_file)
    assert load_entities(uow, content_records) == len(content_records)

    with SqlAlchemyUnitOfWork(sqlite_engine_file) as check:
        assert check.entities.get(EntityRef.parse("paragraph:31")) is not None


def test_commit_outside_block_raises(sqlite_engine_file):
    """The connection only exists inside a ``with`` block."""
    uow = SqlAlchemyUnitOfWork(sqlite_engine_file)
    with pytest.raises(RuntimeError, match="outside a 'with' block"):
        uow.commit()

    with uow:
        pass
    with pytest.raises(RuntimeError):
        uow.rollback()
