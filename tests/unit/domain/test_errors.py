"""Unit tests for domain errors."""

from contentref.domain import errors


class TestTraversalLimitExceededError:
    """Tests for the TraversalLimitExceededError domain error."""

    @staticmethod
    def test_attributes() -> None:
        """Test that the error carries the walk's start, target and cap."""
        error = errors.TraversalLimitExceededError("paragraph:30", "node", 50)
        assert error.start == "paragraph:30"
        assert error.target_kind == "node"
        assert error.max_depth == 50  # pylint: disable=magic-value-comparison

    @staticmethod
    def test_error_message() -> None:
        """Test that the error message is formatted correctly."""
        error = errors.TraversalLimitExceededError("paragraph:30", "node", 50)
        assert str(error) == (
            "Parent walk from paragraph:30 looking for 'node' "
            "exceeded the traversal limit of 50."
        )

    @staticmethod
    def test_is_domain_error() -> None:
        """Test that the error derives from DomainError but not ValueError."""
        error = errors.TraversalLimitExceededError("paragraph:30", "node", 50)
        assert isinstance(error, errors.DomainError)
        assert not isinstance(error, ValueError)


class TestParseErrors:
    """Tests for the value-object parse errors."""

    @staticmethod
    def test_invalid_locale_message() -> None:
        """Test the InvalidLocaleError message and attribute."""
        error = errors.InvalidLocaleError("e n")
        assert error.code == "e n"
        assert str(error) == "Invalid locale code: 'e n'"

    @staticmethod
    def test_unknown_kind_message() -> None:
        """Test the UnknownEntityKindError message and attribute."""
        error = errors.UnknownEntityKindError("widget")
        assert error.kind == "widget"
        assert str(error) == "Unknown entity kind: 'widget'"

    @staticmethod
    def test_invalid_ref_message() -> None:
        """Test the InvalidEntityRefError message and attribute."""
        error = errors.InvalidEntityRefError("node")
        assert error.value == "node"
        assert str(error) == "Invalid entity reference 'node'; expected 'kind:id'."
