"""In-memory EntityStore implementation.

All entities are kept in a shared `InMemoryEntityData` and lost when it is
discarded. Use for unit tests, prototyping, or scenarios where durability is
not required.

This implementation passes all contract tests for the EntityStore interface.
"""

from dataclasses import dataclass, field

from contentref.domain.value_objects import Capability, EntityRef, Locale
from contentref.interfaces.entity_store import (
    DuplicateEntityError,
    EntityRecord,
    EntitySnapshot,
    EntityStore,
    FieldItemList,
)

# pylint: disable=consider-using-assignment-expr


@dataclass(slots=True)
class InMemoryEntityData:
    """Shared in-memory backing store for `InMemoryEntityStore`.

    A single instance can be passed to several stores so they operate on a
    common data source. Records are keyed by their `EntityRef`.
    """

    records: dict[EntityRef, EntityRecord] = field(default_factory=dict)


class InMemoryEntityStore(EntityStore):
    """In-memory EntityStore for testing and non-durable use cases.

    Note: This implementation is not thread-safe and is intended
    solely for use in single-threaded scenarios.
    """

    def __init__(self, data: InMemoryEntityData | None = None) -> None:
        self._data = data if data is not None else InMemoryEntityData()

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def get(
        self, ref: EntityRef, langcode: str | Locale | None = None
    ) -> EntitySnapshot | None:
        record = self._data.records.get(ref)
        if record is None:
            return None
        locale = record.default_langcode if langcode is None else Locale.of(langcode)
        return self._snapshot(record, locale)

    def has_field(self, entity: EntitySnapshot, name: str) -> bool:
        if not entity.supports(Capability.FIELDABLE):
            return False
        record = self._data.records.get(entity.ref)
        return record is not None and name in record.field_names

    def get_field(self, entity: EntitySnapshot, name: str) -> FieldItemList | None:
        if not self.has_field(entity, name):
            return None
        record = self._data.records[entity.ref]
        return FieldItemList(name=name, items=record.items(entity.langcode, name))

    def has_translation(self, entity: EntitySnapshot, langcode: str | Locale) -> bool:
        record = self._data.records.get(entity.ref)
        return record is not None and record.translation(langcode) is not None

    def get_parent(self, entity: EntitySnapshot) -> EntitySnapshot | None:
        record = self._data.records.get(entity.ref)
        if record is None or record.parent is None:
            return None
        return self.get(record.parent)

    def add(self, record: EntityRecord) -> None:
        if record.ref in self._data.records:
            raise DuplicateEntityError(str(record.ref))
        self._data.records[record.ref] = record

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    @staticmethod
    def _snapshot(record: EntityRecord, locale: Locale) -> EntitySnapshot | None:
        """Build the snapshot of `record` in `locale`, or None if not translated."""
        translation = record.translation(locale)
        if translation is None:
            return None
        return EntitySnapshot(
            ref=record.ref,
            langcode=translation.langcode,
            label=translation.label,
            is_default_translation=translation.langcode == record.default_langcode,
        )
