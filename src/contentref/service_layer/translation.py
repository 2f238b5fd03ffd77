"""Translation fallback for entities.

Pure functions: the locale is always passed in explicitly. Reading the
"current locale" is the caller's job (see `ReferenceResolver`), done once per
operation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from contentref.domain.value_objects import Capability, Locale

if TYPE_CHECKING:
    from contentref.interfaces.entity_store import EntitySnapshot, EntityStore

logger = logging.getLogger(__name__)


def translate_entity(
    entities: EntityStore,
    entity: EntitySnapshot,
    locale: str | Locale,
    required: bool = False,
) -> EntitySnapshot | None:
    """Return the `locale` variant of an entity, applying the fallback rule.

    Args:
        entities: The store the entity comes from.
        entity: Any translation of the entity.
        locale: The locale to translate into.
        required: If True, an entity that cannot be translated yields None
            instead of being returned unchanged.

    Returns:
        The translated entity; the entity itself when it cannot be translated
        and `required` is False; otherwise None.
    """
    locale = Locale.of(locale)
    fallback = None if required else entity

    if not entity.supports(Capability.TRANSLATABLE):
        return fallback

    if not entities.has_translation(entity, locale):
        return fallback

    if entity.langcode == locale:
        return entity

    return entities.get_translation(entity, locale)


def translate_entities(
    entities: EntityStore,
    items: Iterable[EntitySnapshot],
    locale: str | Locale,
    remove_untranslated: bool = False,
) -> list[EntitySnapshot]:
    """Translate every entity in `items`; order is preserved.

    Args:
        entities: The store the entities come from.
        items: The entities to translate.
        locale: The locale to translate into.
        remove_untranslated: Drop entities that have no `locale` variant
            (instead of keeping them untranslated).

    Returns:
        The translated entities.
    """
    locale = Locale.of(locale)
    translated: list[EntitySnapshot] = []
    for entity in items:
        result = translate_entity(entities, entity, locale, required=remove_untranslated)
        if result is None:
            logger.debug("Dropping %s: no '%s' translation", entity.ref, locale)
            continue
        translated.append(result)
    return translated
