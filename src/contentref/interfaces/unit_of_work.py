"""Transaction boundary over the entity store.

Queries open a unit only to read from one consistent connection and never
commit; `service_layer.seeding.load_entities` commits once per batch.
Leaving the ``with`` block discards whatever was not committed.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from .entity_store import EntityStore

if TYPE_CHECKING:
    from types import TracebackType


class AbstractUnitOfWork(abc.ABC):
    """A scope owning one transaction on `entities`.

    Usage:
        with uow:
            uow.entities.add(record)
            uow.commit()
    """

    entities: EntityStore

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # no-op after a commit
        self.rollback()

    @abc.abstractmethod
    def commit(self) -> None:
        """Make the records added since entering durable."""

    @abc.abstractmethod
    def rollback(self) -> None:
        """Discard the records added since the last commit."""
