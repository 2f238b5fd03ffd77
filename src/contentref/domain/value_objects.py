"""Module including value objects used across the domain layer.

Entity kinds form a closed enumeration. What a kind can do (carry fields,
carry translations, belong to a parent) is looked up in a fixed capability
table instead of being inferred from the runtime type of an entity object.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidEntityRefError, InvalidLocaleError, UnknownEntityKindError

REF_SEPARATOR = ":"  # pragma: no mutate

# e.g. "en", "fr", "pt-br", "zh-hant", "und"
_LOCALE_PATTERN = re.compile(r"^[a-z]{2,3}(-[a-z0-9]{2,8})*$")


class Capability(Enum):
    """What an entity kind supports."""

    FIELDABLE = "fieldable"
    TRANSLATABLE = "translatable"
    COMPOSED = "composed"  # lives inside a parent entity (e.g. a paragraph)


class EntityKind(str, Enum):
    """Enumeration of entity kinds known to the entity store."""

    NODE = "node"
    PARAGRAPH = "paragraph"
    TAXONOMY_TERM = "taxonomy_term"
    MEDIA = "media"
    BLOCK_CONTENT = "block_content"
    FILE = "file"
    USER = "user"
    MENU = "menu"

    @classmethod
    def from_string(cls, kind: str | EntityKind) -> EntityKind:
        """Normalize and convert a raw kind string to an EntityKind.

        Args:
            kind: a raw kind string (case-insensitive, surrounding blanks ignored)
                or an EntityKind, which is returned as-is.

        Returns:
            The corresponding EntityKind member.

        Raises:
            UnknownEntityKindError: if the kind is not recognized.
        """
        if isinstance(kind, EntityKind):
            return kind
        raw = (kind or "").strip().lower()
        try:
            return cls(raw)
        except ValueError as e:
            raise UnknownEntityKindError(kind) from e

    @property
    def capabilities(self) -> frozenset[Capability]:
        """Capabilities of this kind, from the capability table."""
        return KIND_CAPABILITIES[self]

    def supports(self, capability: Capability) -> bool:
        """Return True if this kind has the given capability."""
        return capability in KIND_CAPABILITIES[self]


_CONTENT = frozenset({Capability.FIELDABLE, Capability.TRANSLATABLE})

KIND_CAPABILITIES: dict[EntityKind, frozenset[Capability]] = {
    EntityKind.NODE: _CONTENT,
    EntityKind.PARAGRAPH: _CONTENT | {Capability.COMPOSED},
    EntityKind.TAXONOMY_TERM: _CONTENT,
    EntityKind.MEDIA: _CONTENT,
    EntityKind.BLOCK_CONTENT: _CONTENT,
    EntityKind.FILE: frozenset({Capability.FIELDABLE}),
    EntityKind.USER: frozenset({Capability.FIELDABLE}),
    EntityKind.MENU: frozenset(),
}


@dataclass(frozen=True, slots=True)
class Locale:
    """A language code used to select a translation variant of an entity.

    Conventions:
      - `code` is canonical lowercase with `-` as the subtag separator
        (``"pt_BR"`` becomes ``"pt-br"``).
    """

    code: str

    def __post_init__(self) -> None:
        normalized = (self.code or "").strip().lower().replace("_", "-")
        if not _LOCALE_PATTERN.match(normalized):
            raise InvalidLocaleError(self.code)
        object.__setattr__(self, "code", normalized)

    @classmethod
    def of(cls, value: str | Locale) -> Locale:
        """Coerce a string or Locale into a Locale."""
        return value if isinstance(value, Locale) else cls(value)

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True, slots=True)
class EntityRef:
    """Identity of an entity: its kind plus its id within that kind."""

    kind: EntityKind
    entity_id: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", EntityKind.from_string(self.kind))
        object.__setattr__(self, "entity_id", str(self.entity_id).strip())
        if not self.entity_id:
            raise InvalidEntityRefError(f"{self.kind.value}{REF_SEPARATOR}")

    @classmethod
    def parse(cls, value: str) -> EntityRef:
        """Parse a ``kind:id`` string (e.g. ``"node:7"``).

        Raises:
            InvalidEntityRefError: if the string is not of the form ``kind:id``.
            UnknownEntityKindError: if the kind is not recognized.
        """
        kind, sep, entity_id = (value or "").partition(REF_SEPARATOR)
        if not sep or not kind.strip() or not entity_id.strip():
            raise InvalidEntityRefError(value)
        return cls(EntityKind.from_string(kind), entity_id)

    def __str__(self) -> str:
        return f"{self.kind.value}{REF_SEPARATOR}{self.entity_id}"
