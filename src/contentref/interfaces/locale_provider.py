"""Interface for the ambient "current locale" setting.

The current locale is read once per operation by the service layer and then
passed down explicitly; providers are never mutated by the service layer.
"""

from __future__ import annotations

import abc

from contentref.domain.value_objects import Locale


class LocaleProvider(abc.ABC):
    """Supplies the locale of the current request or process."""

    @abc.abstractmethod
    def current_locale(self) -> Locale:
        """Return the currently active locale."""
