"""Reference resolution over an entity store.

`ReferenceResolver` is the service most callers need: it reads field values,
dereferences entity reference fields (optionally translating the targets into
the language of the source entity), and finds the owning parent of composed
entities. It holds no mutable state; an instance can be shared across
requests as long as its store is.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from contentref.domain.value_objects import EntityKind, Locale

from . import ancestry, translation

if TYPE_CHECKING:
    from contentref.interfaces.entity_store import (
        EntitySnapshot,
        EntityStore,
        FieldItem,
        FieldItemList,
    )
    from contentref.interfaces.locale_provider import LocaleProvider

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Field and reference accessors with locale fallback.

    Args:
        entities: The entity store to read from.
        locale_provider: Supplies the current locale when a caller does not
            pass one explicitly.
        max_depth: Depth cap for parent walks.
    """

    def __init__(
        self,
        entities: EntityStore,
        locale_provider: LocaleProvider,
        max_depth: int = ancestry.DEFAULT_MAX_DEPTH,
    ) -> None:
        self.entities = entities
        self.locale_provider = locale_provider
        self.max_depth = max_depth

    # --- fields ---

    def get_field_list(self, entity: EntitySnapshot, field: str) -> FieldItemList | None:
        """Return the field's items, or None if the field is missing or empty."""
        if not self.entities.has_field(entity, field):
            return None
        items = self.entities.get_field(entity, field)
        if items is None or items.is_empty():
            return None
        return items

    def get_first_field_item(self, entity: EntitySnapshot, field: str) -> FieldItem | None:
        """Return the first item of the field, or None."""
        if (items := self.get_field_list(entity, field)) is None:
            return None
        return items.first()

    def get_field_value(self, entity: EntitySnapshot, field: str) -> str | None:
        """Return the first scalar value of the field, or None.

        None also covers a first item without a value (e.g. a pure reference).
        """
        if (item := self.get_first_field_item(entity, field)) is None:
            return None
        return item.value or None

    def get_field_values(self, entity: EntitySnapshot, field: str) -> list[str]:
        """Return every non-empty scalar value of the field, in field order."""
        if (items := self.get_field_list(entity, field)) is None:
            return []
        return [item.value for item in items if item.value]

    # --- references ---

    def get_referenced_entity(
        self,
        entity: EntitySnapshot,
        field: str,
        translated: bool = True,
        remove_untranslated: bool = False,
    ) -> EntitySnapshot | None:
        """Return the entity referenced by the first item of `field`.

        Args:
            entity: The source entity.
            field: The entity reference field.
            translated: Translate the target into the source entity's language.
            remove_untranslated: Return None when the target has no variant in
                that language (only used when `translated`).

        Returns:
            The referenced entity, or None.
        """
        if (item := self.get_first_field_item(entity, field)) is None:
            return None
        if (referenced := self._dereference(entity, field, item)) is None:
            return None
        if not translated:
            return referenced
        return translation.translate_entity(
            self.entities, referenced, entity.langcode, required=remove_untranslated
        )

    def get_referenced_entities(
        self,
        entity: EntitySnapshot,
        field: str,
        translated: bool = True,
        remove_untranslated: bool = False,
    ) -> list[EntitySnapshot]:
        """Return every entity referenced by `field`, in field order.

        Dangling references are skipped. With `remove_untranslated`, targets
        lacking a variant in the source entity's language are dropped.
        """
        if (items := self.get_field_list(entity, field)) is None:
            return []

        referenced: list[EntitySnapshot] = []
        for item in items:
            if (target := self._dereference(entity, field, item)) is None:
                continue
            referenced.append(target)

        if not translated:
            return referenced
        return translation.translate_entities(
            self.entities,
            referenced,
            entity.langcode,
            remove_untranslated=remove_untranslated,
        )

    def get_referenced_entity_label(
        self,
        entity: EntitySnapshot,
        field: str,
        translated: bool = True,
        remove_untranslated: bool = False,
    ) -> str | None:
        """Return the label of the entity referenced by `field`, or None."""
        referenced = self.get_referenced_entity(
            entity, field, translated, remove_untranslated
        )
        return self.entities.label(referenced) if referenced is not None else None

    def get_referenced_entity_labels(
        self,
        entity: EntitySnapshot,
        field: str,
        translated: bool = True,
        remove_untranslated: bool = False,
    ) -> dict[str, str]:
        """Return ``{entity id: label}`` for every entity referenced by `field`.

        When two targets share an id, the later one's label wins.
        """
        return {
            self.entities.entity_id(referenced): self.entities.label(referenced)
            for referenced in self.get_referenced_entities(
                entity, field, translated, remove_untranslated
            )
        }

    # --- translations ---

    def translate_entity(
        self,
        entity: EntitySnapshot,
        langcode: str | Locale | None = None,
        required: bool = False,
    ) -> EntitySnapshot | None:
        """Translate an entity; `langcode` defaults to the current locale."""
        return translation.translate_entity(
            self.entities, entity, self._resolve_locale(langcode), required
        )

    def translate_entities(
        self,
        entities: Iterable[EntitySnapshot],
        langcode: str | Locale | None = None,
        remove_untranslated: bool = False,
    ) -> list[EntitySnapshot]:
        """Translate several entities; `langcode` defaults to the current locale."""
        return translation.translate_entities(
            self.entities, entities, self._resolve_locale(langcode), remove_untranslated
        )

    # --- parents ---

    def get_parent_of_type(
        self, entity: EntitySnapshot, kind: str | EntityKind
    ) -> EntitySnapshot | None:
        """Return the closest ancestor of the given kind, or None.

        Raises:
            TraversalLimitExceededError: If the parent chain is deeper than
                `max_depth` (or cyclic).
        """
        return ancestry.find_parent_of_type(self.entities, entity, kind, self.max_depth)

    def get_node_parent(self, entity: EntitySnapshot) -> EntitySnapshot | None:
        """Return the node a paragraph belongs to, or None."""
        return ancestry.find_node_parent(self.entities, entity, self.max_depth)

    # --- internals ---

    def _dereference(
        self, entity: EntitySnapshot, field: str, item: FieldItem
    ) -> EntitySnapshot | None:
        target = self.entities.dereference(item)
        if target is None and item.target is not None:
            logger.debug("%s.%s points to missing entity %s", entity.ref, field, item.target)
        return target

    def _resolve_locale(self, langcode: str | Locale | None) -> Locale:
        if langcode:
            return Locale.of(langcode)
        return self.locale_provider.current_locale()
