"""Upward walks over composed entities.

Composed entities (paragraphs) live inside a parent entity, which may itself
be composed. These helpers follow the parent chain until they reach an
entity of the requested kind.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contentref.domain.errors import TraversalLimitExceededError
from contentref.domain.value_objects import Capability, EntityKind

if TYPE_CHECKING:
    from contentref.interfaces.entity_store import EntitySnapshot, EntityStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 50


def find_parent_of_type(
    entities: EntityStore,
    entity: EntitySnapshot,
    kind: str | EntityKind,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> EntitySnapshot | None:
    """Find the closest ancestor of `entity` whose kind is `kind`.

    The walk stops with None as soon as it reaches an entity that is not
    composed, or one without a parent.

    Args:
        entities: The store the entity comes from.
        entity: The entity to start from (not itself a candidate).
        kind: The kind of ancestor to look for.
        max_depth: Maximum number of parent hops.

    Returns:
        The matching ancestor (default translation), or None.

    Raises:
        TraversalLimitExceededError: If the chain still goes on after
            `max_depth` hops (cyclic or pathologically deep parent chain).
        ValueError: If `max_depth` is smaller than 1.
    """
    if max_depth < 1:
        raise ValueError("max_depth must be >= 1")
    target = EntityKind.from_string(kind)

    current = entity
    for depth in range(1, max_depth + 1):
        if not current.supports(Capability.COMPOSED):
            return None
        if (parent := entities.get_parent(current)) is None:
            return None
        logger.debug("Hop %d: %s -> %s", depth, current.ref, parent.ref)
        if parent.kind is target:
            return parent
        current = parent

    # The last allowed hop may have reached the top of the chain.
    if not current.supports(Capability.COMPOSED) or entities.get_parent(current) is None:
        return None
    logger.warning(
        "Parent walk from %s looking for '%s' hit the limit of %d hops",
        entity.ref,
        target.value,
        max_depth,
    )
    raise TraversalLimitExceededError(str(entity.ref), target.value, max_depth)


def find_node_parent(
    entities: EntityStore,
    entity: EntitySnapshot,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> EntitySnapshot | None:
    """Find the node an entity (typically a paragraph) ultimately belongs to."""
    return find_parent_of_type(entities, entity, EntityKind.NODE, max_depth)
