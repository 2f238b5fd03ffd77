"""contentref Entity Store Interface Package"""

from .entity_store import (
    EntityRecord,
    EntitySnapshot,
    EntityStore,
    FieldItem,
    FieldItemList,
    TranslationRecord,
)
from .errors import (
    DuplicateEntityError,
    EntityStoreError,
    InvalidEntityRecordError,
    StoreUnavailableError,
    TranslationNotFoundError,
)

__all__ = [
    "DuplicateEntityError",
    "EntityRecord",
    "EntitySnapshot",
    "EntityStore",
    "EntityStoreError",
    "FieldItem",
    "FieldItemList",
    "InvalidEntityRecordError",
    "StoreUnavailableError",
    "TranslationNotFoundError",
    "TranslationRecord",
]
