"""SQLAlchemy-backed EntityStore adapter for contentref.

This module provides a SQLAlchemy-backed implementation of the EntityStore
interface over the tables defined in `adapters.entity_store.schema`. It works
on PostgreSQL and SQLite and maps database errors to entity store exceptions.

Usage:
    Instantiate SqlAlchemyEntityStore with a SQLAlchemy Connection object.
    The caller (usually `SqlAlchemyUnitOfWork`) owns the transaction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import exists, insert, select
from sqlalchemy.exc import DBAPIError, IntegrityError

from contentref.domain.value_objects import Capability, EntityKind, EntityRef, Locale
from contentref.interfaces.entity_store import (
    DuplicateEntityError,
    EntityRecord,
    EntitySnapshot,
    EntityStore,
    FieldItem,
    FieldItemList,
    InvalidEntityRecordError,
    StoreUnavailableError,
)

from . import schema

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Row

logger = logging.getLogger(__name__)


class SqlAlchemyEntityStore(EntityStore):
    """SQLAlchemy-backed EntityStore.

    - Uses the `entity*` / `field_item` tables (see adapters.entity_store.schema).
    - Field items are returned ordered by their `delta`.
    - A translation without rows for a declared field reads the default
      translation's rows.
    """

    def __init__(self, connection: Connection):
        self.connection = connection

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def get(
        self, ref: EntityRef, langcode: str | Locale | None = None
    ) -> EntitySnapshot | None:
        if not (row := self._fetch_entity_row(ref)):
            return None
        locale = (
            Locale(row.default_langcode) if langcode is None else Locale.of(langcode)
        )
        stmt = select(schema.entity_translation.c.label).where(
            schema.entity_translation.c.kind == ref.kind.value,
            schema.entity_translation.c.entity_id == ref.entity_id,
            schema.entity_translation.c.langcode == locale.code,
        )
        label = self._execute(stmt).scalar_one_or_none()
        if label is None:
            return None
        return EntitySnapshot(
            ref=ref,
            langcode=locale,
            label=label,
            is_default_translation=locale.code == row.default_langcode,
        )

    def has_field(self, entity: EntitySnapshot, name: str) -> bool:
        if not entity.supports(Capability.FIELDABLE):
            return False
        stmt = select(
            exists().where(
                schema.entity_field.c.kind == entity.kind.value,
                schema.entity_field.c.entity_id == entity.entity_id,
                schema.entity_field.c.field_name == name,
            )
        )
        return bool(self._execute(stmt).scalar())

    def get_field(self, entity: EntitySnapshot, name: str) -> FieldItemList | None:
        if not self.has_field(entity, name):
            return None

        items = self._fetch_items(entity.ref, entity.langcode.code, name)
        if not items and not entity.is_default_translation:
            if row := self._fetch_entity_row(entity.ref):
                items = self._fetch_items(entity.ref, row.default_langcode, name)
        return FieldItemList(name=name, items=items)

    def has_translation(self, entity: EntitySnapshot, langcode: str | Locale) -> bool:
        stmt = select(
            exists().where(
                schema.entity_translation.c.kind == entity.kind.value,
                schema.entity_translation.c.entity_id == entity.entity_id,
                schema.entity_translation.c.langcode == Locale.of(langcode).code,
            )
        )
        return bool(self._execute(stmt).scalar())

    def get_parent(self, entity: EntitySnapshot) -> EntitySnapshot | None:
        row = self._fetch_entity_row(entity.ref)
        if row is None or row.parent_kind is None or row.parent_id is None:
            return None
        return self.get(EntityRef(EntityKind.from_string(row.parent_kind), row.parent_id))

    def add(self, record: EntityRecord) -> None:
        if self._fetch_entity_row(record.ref) is not None:
            raise DuplicateEntityError(str(record.ref))

        try:
            self._insert_record(record)
        except IntegrityError as e:
            raise InvalidEntityRecordError(str(record.ref), str(e.orig)) from e
        except DBAPIError as e:  # OperationalError, InterfaceError, etc.
            raise StoreUnavailableError(str(e)) from e
        logger.debug(
            "Stored %s with %d translation(s)", record.ref, len(record.translations)
        )

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _execute(self, stmt):
        """Execute a read statement, mapping driver failures to store errors."""
        try:
            return self.connection.execute(stmt)
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

    def _fetch_entity_row(self, ref: EntityRef) -> Row | None:
        table = schema.entity
        stmt = select(
            table.c.default_langcode, table.c.parent_kind, table.c.parent_id
        ).where(table.c.kind == ref.kind.value, table.c.entity_id == ref.entity_id)
        return self._execute(stmt).fetchone()

    def _fetch_items(
        self, ref: EntityRef, langcode: str, name: str
    ) -> tuple[FieldItem, ...]:
        table = schema.field_item
        stmt = (
            select(table.c.value, table.c.target_kind, table.c.target_id)
            .where(
                table.c.kind == ref.kind.value,
                table.c.entity_id == ref.entity_id,
                table.c.langcode == langcode,
                table.c.field_name == name,
            )
            .order_by(table.c.delta.asc())
        )
        return tuple(
            FieldItem(
                value=row.value,
                target=(
                    EntityRef(EntityKind.from_string(row.target_kind), row.target_id)
                    if row.target_kind is not None and row.target_id is not None
                    else None
                ),
            )
            for row in self._execute(stmt)
        )

    def _insert_record(self, record: EntityRecord) -> None:
        """Insert the entity, its translations, declared fields and items."""
        ref = record.ref
        self.connection.execute(
            insert(schema.entity).values(
                kind=ref.kind.value,
                entity_id=ref.entity_id,
                default_langcode=record.default_langcode.code,
                parent_kind=record.parent.kind.value if record.parent else None,
                parent_id=record.parent.entity_id if record.parent else None,
            )
        )
        self.connection.execute(
            insert(schema.entity_translation),
            [
                {
                    "kind": ref.kind.value,
                    "entity_id": ref.entity_id,
                    "langcode": t.langcode.code,
                    "label": t.label,
                }
                for t in record.translations
            ],
        )
        if record.field_names:
            self.connection.execute(
                insert(schema.entity_field),
                [
                    {"kind": ref.kind.value, "entity_id": ref.entity_id, "field_name": n}
                    for n in sorted(record.field_names)
                ],
            )
        if item_rows := [
            {
                "kind": ref.kind.value,
                "entity_id": ref.entity_id,
                "langcode": t.langcode.code,
                "field_name": name,
                "delta": delta,
                "value": item.value,
                "target_kind": item.target.kind.value if item.target else None,
                "target_id": item.target.entity_id if item.target else None,
            }
            for t in record.translations
            for name, items in t.fields.items()
            for delta, item in enumerate(items)
        ]:
            self.connection.execute(insert(schema.field_item), item_rows)
