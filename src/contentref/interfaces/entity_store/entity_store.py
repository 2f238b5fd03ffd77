"""Interfaces for reading entities, their fields and their translations.

Defines the `EntityStore` abstraction consumed by the reference resolver,
the read models it hands out (`EntitySnapshot`, `FieldItemList`,
`FieldItem`) and the write models used to seed a store (`EntityRecord`,
`TranslationRecord`).

A store owns its entities. Everything it returns is an immutable view; the
service layer never creates, mutates or destroys an entity.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from contentref.domain.value_objects import Capability, EntityKind, EntityRef, Locale

from .errors import InvalidEntityRecordError, TranslationNotFoundError

# pylint: disable=too-many-instance-attributes

# --- Read Models ---


@dataclass(frozen=True, slots=True)
class FieldItem:
    """One value of a field: a scalar value, a reference target, or both."""

    value: str | None = None
    target: EntityRef | None = None


@dataclass(frozen=True, slots=True)
class FieldItemList:
    """Ordered, immutable list of the items stored in one field."""

    name: str
    items: tuple[FieldItem, ...] = ()

    def __iter__(self) -> Iterator[FieldItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        """Return True if the field holds no items."""
        return not self.items

    def first(self) -> FieldItem | None:
        """Return the first item, or None if the field is empty."""
        return self.items[0] if self.items else None


@dataclass(frozen=True, slots=True)
class EntitySnapshot:
    """Immutable read model for one translation of an entity.

    Conventions:
      - `langcode` is the language of this variant.
      - `is_default_translation` is True for the entity's original language.
    """

    ref: EntityRef
    langcode: Locale
    label: str
    is_default_translation: bool = True

    @property
    def kind(self) -> EntityKind:
        """The entity kind (shortcut for ``ref.kind``)."""
        return self.ref.kind

    @property
    def entity_id(self) -> str:
        """The entity id (shortcut for ``ref.entity_id``)."""
        return self.ref.entity_id

    def supports(self, capability: Capability) -> bool:
        """Return True if this entity's kind has the given capability."""
        return self.ref.kind.supports(capability)

    def __str__(self) -> str:
        return f"{self.ref} [{self.langcode}]"


# --- Write Models ---


def _coerce_target(ref: EntityRef, name: str, target: Any) -> EntityRef | None:
    if target is None or isinstance(target, EntityRef):
        return target
    if isinstance(target, str):
        return EntityRef.parse(target)
    raise InvalidEntityRecordError(
        str(ref), f"field '{name}' has a target that is not a 'kind:id' string: {target!r}"
    )


def _coerce_items(ref: EntityRef, name: str, raw: Any) -> tuple[FieldItem, ...]:
    if isinstance(raw, (str, Mapping)) or not isinstance(raw, Iterable):
        raise InvalidEntityRecordError(str(ref), f"field '{name}' must be a list of items")
    items: list[FieldItem] = []
    for item in raw:
        if isinstance(item, FieldItem):
            items.append(item)
        elif isinstance(item, str):
            items.append(FieldItem(value=item))
        elif isinstance(item, Mapping):
            value = item.get("value")
            if value is not None and not isinstance(value, str):
                raise InvalidEntityRecordError(
                    str(ref), f"field '{name}' has a non-string value {value!r}"
                )
            items.append(
                FieldItem(value=value, target=_coerce_target(ref, name, item.get("target")))
            )
        else:
            raise InvalidEntityRecordError(
                str(ref), f"field '{name}' has an unsupported item {item!r}"
            )
    return tuple(items)


@dataclass(frozen=True, slots=True)
class TranslationRecord:
    """Write model for one language variant of an entity."""

    langcode: Locale
    label: str
    fields: Mapping[str, tuple[FieldItem, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "langcode", Locale.of(self.langcode))
        object.__setattr__(
            self, "fields", {name: tuple(items) for name, items in self.fields.items()}
        )


@dataclass(frozen=True, slots=True)
class EntityRecord:
    """Immutable write model for an entity to be added to a store.

    Conventions:
      - `translations` includes the default translation.
      - `field_names` are the fields the entity declares; a declared field
        may still be empty.
      - A translation without items for a declared field shares the default
        translation's items for that field.
    """

    ref: EntityRef
    default_langcode: Locale
    translations: tuple[TranslationRecord, ...]
    field_names: frozenset[str] = frozenset()
    parent: EntityRef | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_langcode", Locale.of(self.default_langcode))
        object.__setattr__(self, "translations", tuple(self.translations))
        object.__setattr__(self, "field_names", frozenset(self.field_names))
        self._validate()

    def _validate(self) -> None:
        key = str(self.ref)
        langcodes = [t.langcode for t in self.translations]
        if len(set(langcodes)) != len(langcodes):
            raise InvalidEntityRecordError(key, "translation langcodes must be unique")
        if self.default_langcode not in langcodes:
            raise InvalidEntityRecordError(
                key, f"default translation '{self.default_langcode}' is missing"
            )
        if len(langcodes) > 1 and not self.ref.kind.supports(Capability.TRANSLATABLE):
            raise InvalidEntityRecordError(
                key, f"kind '{self.ref.kind.value}' is not translatable"
            )
        if self.field_names and not self.ref.kind.supports(Capability.FIELDABLE):
            raise InvalidEntityRecordError(
                key, f"kind '{self.ref.kind.value}' does not support fields"
            )
        if self.parent is not None and not self.ref.kind.supports(Capability.COMPOSED):
            raise InvalidEntityRecordError(
                key, f"kind '{self.ref.kind.value}' cannot have a parent entity"
            )
        for translation in self.translations:
            for name, items in translation.fields.items():
                if name not in self.field_names:
                    raise InvalidEntityRecordError(
                        key, f"field '{name}' is not declared"
                    )
                if any(i.value is None and i.target is None for i in items):
                    raise InvalidEntityRecordError(
                        key, f"field '{name}' has an item with neither value nor target"
                    )
                if any(
                    i.target is not None and not isinstance(i.target, EntityRef)
                    for i in items
                ):
                    raise InvalidEntityRecordError(
                        key, f"field '{name}' has a target that is not an EntityRef"
                    )

    def translation(self, langcode: str | Locale) -> TranslationRecord | None:
        """Return the translation for `langcode`, or None if there is none."""
        locale = Locale.of(langcode)
        for translation in self.translations:
            if translation.langcode == locale:
                return translation
        return None

    def items(self, langcode: str | Locale, name: str) -> tuple[FieldItem, ...]:
        """Return the items of field `name` as seen from translation `langcode`.

        Falls back to the default translation's items when the requested
        translation carries none for that field.
        """
        translation = self.translation(langcode)
        if translation is not None and (items := translation.fields.get(name)):
            return items
        default = self.translation(self.default_langcode)
        return default.fields.get(name, ()) if default is not None else ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EntityRecord:
        """Build a record from its JSON-friendly form.

        Expected shape::

            {
              "ref": "node:7",
              "default_langcode": "en",
              "fields": ["featured_story", "subtitle"],
              "parent": null,
              "translations": {
                "en": {"label": "Article", "fields": {
                  "featured_story": [{"target": "node:3"}],
                  "subtitle": ["plain value", {"value": "another"}]
                }}
              }
            }

        Raises:
            InvalidEntityRecordError: if the mapping is malformed.
        """
        if not isinstance(data, Mapping):
            raise InvalidEntityRecordError(repr(data), "a record must be a mapping")
        raw_ref = data.get("ref")
        if not isinstance(raw_ref, str):
            raise InvalidEntityRecordError(str(raw_ref), "'ref' must be a 'kind:id' string")
        ref = EntityRef.parse(raw_ref)

        raw_translations = data.get("translations")
        if not isinstance(raw_translations, Mapping) or not raw_translations:
            raise InvalidEntityRecordError(
                raw_ref, "'translations' must be a non-empty mapping"
            )

        translations = []
        for langcode, body in raw_translations.items():
            if not isinstance(body, Mapping) or not isinstance(body.get("label"), str):
                raise InvalidEntityRecordError(
                    raw_ref, f"translation '{langcode}' needs a string 'label'"
                )
            raw_fields = body.get("fields") or {}
            if not isinstance(raw_fields, Mapping):
                raise InvalidEntityRecordError(
                    raw_ref, f"'fields' of translation '{langcode}' must be a mapping"
                )
            translations.append(
                TranslationRecord(
                    langcode=Locale.of(langcode),
                    label=body["label"],
                    fields={
                        name: _coerce_items(ref, name, items)
                        for name, items in raw_fields.items()
                    },
                )
            )

        field_names = data.get("fields") or []
        if not isinstance(field_names, (list, tuple)) or not all(
            isinstance(name, str) for name in field_names
        ):
            raise InvalidEntityRecordError(raw_ref, "'fields' must be a list of field names")
        parent = data.get("parent")
        if parent is not None and not isinstance(parent, str):
            raise InvalidEntityRecordError(raw_ref, "'parent' must be a 'kind:id' string")
        return cls(
            ref=ref,
            default_langcode=Locale.of(
                data.get("default_langcode") or next(iter(raw_translations))
            ),
            translations=tuple(translations),
            field_names=frozenset(field_names),
            parent=EntityRef.parse(parent) if parent else None,
        )


# --- Interface ---


class EntityStore(abc.ABC):
    """Read access to entities, their fields, translations and parents."""

    @abc.abstractmethod
    def get(
        self, ref: EntityRef, langcode: str | Locale | None = None
    ) -> EntitySnapshot | None:
        """Load an entity.

        Args:
            ref: The entity reference.
            langcode: The translation to load. If None, loads the default
                translation.

        Returns:
            The entity snapshot if the entity (and translation) exists,
            otherwise None.
        """

    @abc.abstractmethod
    def has_field(self, entity: EntitySnapshot, name: str) -> bool:
        """Return True if the entity supports fields and declares `name`."""

    @abc.abstractmethod
    def get_field(self, entity: EntitySnapshot, name: str) -> FieldItemList | None:
        """Return the items of field `name` for the entity's translation.

        Args:
            entity: The entity (a specific translation) to read from.
            name: The field name.

        Returns:
            The field item list (possibly empty) when the field is declared,
            otherwise None.
        """

    @abc.abstractmethod
    def has_translation(self, entity: EntitySnapshot, langcode: str | Locale) -> bool:
        """Return True if the entity has a translation for `langcode`."""

    @abc.abstractmethod
    def get_parent(self, entity: EntitySnapshot) -> EntitySnapshot | None:
        """Return the default translation of the entity's parent, if any."""

    @abc.abstractmethod
    def add(self, record: EntityRecord) -> None:
        """Add a new entity to the store.

        Raises:
            DuplicateEntityError: If an entity with the same reference exists.
        """

    # --- helpers shared by all implementations ---

    def dereference(self, item: FieldItem) -> EntitySnapshot | None:
        """Return the default translation of the entity `item` points to.

        Returns None if the item is not a reference or its target is missing.
        """
        if item.target is None:
            return None
        return self.get(item.target)

    def get_translation(
        self, entity: EntitySnapshot, langcode: str | Locale
    ) -> EntitySnapshot:
        """Return the `langcode` variant of the entity.

        Raises:
            TranslationNotFoundError: If the entity has no such translation.
        """
        locale = Locale.of(langcode)
        if (translation := self.get(entity.ref, locale)) is None:
            raise TranslationNotFoundError(str(entity.ref), locale.code)
        return translation

    @staticmethod
    def label(entity: EntitySnapshot) -> str:
        """Return the display label of the entity."""
        return entity.label

    @staticmethod
    def entity_id(entity: EntitySnapshot) -> str:
        """Return the id of the entity."""
        return entity.entity_id
