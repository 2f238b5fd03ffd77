"""Exceptions for entity store operations."""


class EntityStoreError(Exception):
    """Base class for entity store errors."""


class InvalidEntityRecordError(EntityStoreError):
    """Raised when an entity record is malformed or violates store invariants.

    Attributes:
        ref (str): Textual reference of the offending entity (e.g. "node:7").
        reason (str): Why the record was rejected.
    """

    def __init__(self, ref: str, reason: str) -> None:
        super().__init__(f"Invalid entity record ({ref}): {reason}")
        self.ref = ref
        self.reason = reason


class DuplicateEntityError(EntityStoreError):
    """Raised when adding an entity whose reference is already stored.

    Attributes:
        ref (str): Textual reference of the entity (e.g. "node:7").
    """

    def __init__(self, ref: str) -> None:
        super().__init__(f"Entity ({ref}) already exists in store")
        self.ref = ref


class TranslationNotFoundError(EntityStoreError):
    """Raised when a translation is requested that the entity does not have.

    Callers that want fallback behaviour should check `has_translation()`
    first; this error marks a programming mistake, not an expected absence.

    Attributes:
        ref (str): Textual reference of the entity.
        langcode (str): The requested language code.
    """

    def __init__(self, ref: str, langcode: str) -> None:
        super().__init__(f"Entity ({ref}) has no '{langcode}' translation")
        self.ref = ref
        self.langcode = langcode


class StoreUnavailableError(EntityStoreError):
    """Raised when the backing store cannot be reached or fails unexpectedly."""
