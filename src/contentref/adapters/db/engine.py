"""Engine factory for the entity database.

`make_engine` is the only place engines are built, so every connection to a
SQLite file gets the same PRAGMAs:

- ``foreign_keys``: translations, declared fields and field items are
  deleted with their entity.
- ``journal_mode=WAL``: CLI readers are not blocked by a running load.
- ``synchronous=NORMAL`` and ``temp_store=MEMORY``.

PostgreSQL engines are returned untouched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url

if TYPE_CHECKING:
    from sqlalchemy.engine import URL, Engine

logger = logging.getLogger(__name__)

SQLITE_PRAGMAS = (
    "foreign_keys=ON",
    "journal_mode=WAL",
    "synchronous=NORMAL",
    "temp_store=MEMORY",
)


def is_sqlite(url: str | URL) -> bool:
    """Return True if `url` points at a SQLite database, whatever the driver."""
    return make_url(str(url)).get_backend_name() == "sqlite"


def _apply_sqlite_pragmas(dbapi_conn, _conn_record) -> None:
    cursor = dbapi_conn.cursor()
    try:
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(f"PRAGMA {pragma};")
    finally:
        cursor.close()


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create an Engine for the entity database at `url`.

    Args:
        url: SQLAlchemy database URL.
        echo: Log every SQL statement (through the ``sqlalchemy.engine``
            logger).

    Returns:
        The configured engine.

    Raises:
        sqlalchemy.exc.ArgumentError: If `url` cannot be parsed.
    """
    engine = create_engine(url, echo=echo)
    if is_sqlite(url):
        event.listen(engine, "connect", _apply_sqlite_pragmas)
    logger.debug("Engine ready for %s", engine.dialect.name)
    return engine
