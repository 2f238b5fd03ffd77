"""End-to-end tests for the `contentref db` commands on SQLite files."""

from pathlib import Path

import pytest
from sqlalchemy.engine import URL

from contentref.entrypoints.cli.db import (
    CANNOT_CONNECT_MSG,
    INVALID_URL_FORMAT_MSG,
    UPGRADE_SCHEMA_INSTRUCTIONS,
)
from contentref.entrypoints.cli.main import contentref

# pylint: disable=redefined-outer-name

HEAD = "3f2a9c1d7b40"


@pytest.fixture
def fresh_db_url(tmp_path: Path) -> str:
    """URL of an SQLite file that has never been migrated."""
    return str(URL.create("sqlite+pysqlite", database=str(tmp_path / "fresh.db")))


@pytest.fixture
def db(runner):
    """Invoke ``contentref db ...`` against a given URL (None unsets it)."""

    def _db(url, *args: str, user_input: str | None = None):
        env = {"CONTENTREF_DB_URL": url, "CONTENTREF_FLIGHT_RECORDER": "0"}
        return runner.invoke(contentref, ["db", *args], env=env, input=user_input)

    return _db


class TestReadOnlyCommands:
    """heads, history and current."""

    @staticmethod
    def test_heads_needs_no_database(db):
        result = db(None, "heads")
        assert result.exit_code == 0
        assert f"{HEAD} (head)" in result.stdout

    @staticmethod
    def test_history_lists_the_initial_revision(db):
        result = db(None, "history")
        assert result.exit_code == 0
        assert HEAD in result.stdout

    @staticmethod
    def test_history_indicate_current_needs_url(db):
        result = db(None, "history", "--indicate-current")
        assert result.exit_code == 1
        assert "CONTENTREF_DB_URL is not set" in result.stderr

    @staticmethod
    def test_current_on_migrated_database(db, empty_db_url):
        result = db(empty_db_url, "current")
        assert result.exit_code == 0
        assert HEAD in result.stdout


class TestUpgrade:
    """contentref db upgrade"""

    @staticmethod
    def test_force_upgrades_without_prompt(db, fresh_db_url):
        result = db(fresh_db_url, "upgrade", "--force")
        assert result.exit_code == 0
        assert "Schema is at the newest revision." in result.stderr
        assert HEAD in db(fresh_db_url, "current").stdout

    @staticmethod
    def test_confirmation_accepted(db, fresh_db_url):
        result = db(fresh_db_url, "upgrade", user_input="y\n")
        assert result.exit_code == 0
        assert "backup" in result.stderr
        assert "Schema is at the newest revision." in result.stderr

    @staticmethod
    def test_confirmation_declined(db, fresh_db_url):
        result = db(fresh_db_url, "upgrade", user_input="n\n")
        assert result.exit_code == 1
        assert "Schema is at the newest revision." not in result.stderr
        assert HEAD not in db(fresh_db_url, "current").stdout

    @staticmethod
    def test_sql_prints_ddl_without_prompt(db, fresh_db_url):
        result = db(fresh_db_url, "upgrade", "--sql")
        assert result.exit_code == 0
        assert "CREATE TABLE entity" in result.stdout
        assert "Migrate now?" not in result.output

    @staticmethod
    def test_missing_url(db):
        result = db(None, "upgrade", "--force")
        assert result.exit_code == 1
        assert "CONTENTREF_DB_URL is not set" in result.stderr


class TestStatus:
    """contentref db status"""

    @staticmethod
    def test_up_to_date(db, empty_db_url):
        result = db(empty_db_url, "status")
        assert result.exit_code == 0
        assert "Database reachable" in result.stderr
        assert "backend:  sqlite" in result.stdout
        assert f"revision: {HEAD} (up to date)" in result.stdout
        assert UPGRADE_SCHEMA_INSTRUCTIONS not in result.stderr

    @staticmethod
    def test_uninitialized(db, fresh_db_url):
        result = db(fresh_db_url, "status")
        assert result.exit_code == 0
        assert "revision: - (not initialized)" in result.stdout
        assert UPGRADE_SCHEMA_INSTRUCTIONS in result.stderr

    @staticmethod
    def test_shows_backend_url(db, empty_db_url):
        result = db(empty_db_url, "status")
        assert "url:      sqlite+pysqlite:///" in result.stdout

    @staticmethod
    @pytest.mark.parametrize(
        "url, message",
        [
            (None, "CONTENTREF_DB_URL is not set"),
            ("not a url", INVALID_URL_FORMAT_MSG),
            ("sqlite+pysqlite:////nonexistent-dir/sub/content.db", CANNOT_CONNECT_MSG),
        ],
        ids=["missing", "malformed", "unreachable"],
    )
    def test_cannot_connect(db, url, message):
        result = db(url, "status")
        assert result.exit_code == 0
        assert "Database unreachable" in result.stderr
        assert message in result.stdout
