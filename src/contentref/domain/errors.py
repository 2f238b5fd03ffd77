"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


# ============================================================================
#                       Value object parsing errors
# ============================================================================


class InvalidLocaleError(DomainError, ValueError):
    """Raised when a language code cannot be normalized into a Locale."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Invalid locale code: {code!r}")
        self.code = code


class UnknownEntityKindError(DomainError, ValueError):
    """Raised when an entity kind is not part of the known enumeration."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown entity kind: {kind!r}")
        self.kind = kind


class InvalidEntityRefError(DomainError, ValueError):
    """Raised when an entity reference string is not of the form ``kind:id``."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid entity reference {value!r}; expected 'kind:id'.")
        self.value = value


# ============================================================================
#                           Traversal errors
# ============================================================================


class TraversalLimitExceededError(DomainError):
    """Raised when a parent walk exceeds its depth cap.

    Distinguishes malformed (cyclic or pathologically deep) parent chains from
    the ordinary "no such ancestor" outcome, which is reported as ``None``.

    Attributes:
        start (str): Textual reference of the entity the walk started from.
        target_kind (str): The kind the walk was looking for.
        max_depth (int): The depth cap that was reached.
    """

    def __init__(self, start: str, target_kind: str, max_depth: int) -> None:
        super().__init__(
            f"Parent walk from {start} looking for '{target_kind}' "
            f"exceeded the traversal limit of {max_depth}."
        )
        self.start = start
        self.target_kind = target_kind
        self.max_depth = max_depth
