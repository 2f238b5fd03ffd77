"""Locale provider adapters."""

from contentref.domain.value_objects import Locale
from contentref.interfaces.locale_provider import LocaleProvider

# pylint: disable=too-few-public-methods


class StaticLocaleProvider(LocaleProvider):
    """Locale provider that always reports the locale it was built with.

    Built once per process (CLI invocation) or per request from configuration.
    """

    def __init__(self, locale: str | Locale) -> None:
        self._locale = Locale.of(locale)

    def current_locale(self) -> Locale:
        return self._locale
