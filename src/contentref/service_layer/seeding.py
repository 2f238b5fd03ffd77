"""Bulk loading of entity records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contentref.interfaces.entity_store import EntityRecord
    from contentref.interfaces.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


def load_entities(uow: AbstractUnitOfWork, records: Iterable[EntityRecord]) -> int:
    """Add every record to the store and commit once.

    Nothing is committed if any record is rejected.

    Args:
        uow: The unit of work to load into.
        records: The records to add.

    Returns:
        The number of records added.

    Raises:
        DuplicateEntityError: If a record's reference is already stored.
        InvalidEntityRecordError: If the store rejects a record.
    """
    count = 0
    with uow:
        for record in records:
            uow.entities.add(record)
            count += 1
        uow.commit()
    logger.info("Loaded %d entit%s", count, "y" if count == 1 else "ies")
    return count
