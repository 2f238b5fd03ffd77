"""`AbstractUnitOfWork` on a SQLAlchemy engine.

Each ``with`` block checks out one connection, binds a
`SqlAlchemyEntityStore` to it and hands the connection back to the pool on
exit.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contentref.adapters.entity_store.sqlalchemy_store import SqlAlchemyEntityStore
from contentref.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """Unit of work holding one engine connection per ``with`` block.

    Args:
        engine: Engine the connections are drawn from.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._connection: Connection | None = None

    @property
    def connection(self) -> Connection:
        """The connection of the current block.

        Raises:
            RuntimeError: Outside a ``with`` block.
        """
        if self._connection is None:
            raise RuntimeError("SqlAlchemyUnitOfWork used outside a 'with' block")
        return self._connection

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._connection = self.engine.connect()
        self.entities = SqlAlchemyEntityStore(self._connection)
        return self

    def __exit__(self, *exc_info) -> None:
        try:
            super().__exit__(*exc_info)
        finally:
            self.connection.close()
            self._connection = None

    def commit(self) -> None:
        self.connection.commit()
        logger.debug("Committed entity store transaction")

    def rollback(self) -> None:
        self.connection.rollback()
