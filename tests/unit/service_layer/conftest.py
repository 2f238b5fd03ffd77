"""Fixtures for service-layer tests: the shared site in an in-memory store."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from contentref.adapters.entity_store import InMemoryEntityStore
from contentref.adapters.locale_provider import StaticLocaleProvider
from contentref.domain.value_objects import EntityRef, Locale
from contentref.interfaces.entity_store import EntitySnapshot
from contentref.interfaces.locale_provider import LocaleProvider
from contentref.service_layer.resolver import ReferenceResolver
from tests.fixtures.datagen import seed

# pylint: disable=redefined-outer-name


class CountingLocaleProvider(LocaleProvider):
    """Locale provider that counts how often it is asked."""

    def __init__(self, locale: str) -> None:
        self.locale = Locale(locale)
        self.calls = 0

    def current_locale(self) -> Locale:
        self.calls += 1
        return self.locale


@pytest.fixture
def store(content_records) -> InMemoryEntityStore:
    """In-memory store seeded with the shared site."""
    return seed(InMemoryEntityStore(), content_records)


@pytest.fixture
def load(store) -> Callable[..., EntitySnapshot]:
    """Load an entity by ``"kind:id"`` (and optional langcode); fails if missing."""

    def _load(ref: str, langcode: str | None = None) -> EntitySnapshot:
        entity = store.get(EntityRef.parse(ref), langcode)
        assert entity is not None, f"{ref} [{langcode}] missing from test site"
        return entity

    return _load


@pytest.fixture
def locale_provider() -> CountingLocaleProvider:
    """Counting provider reporting ``en``."""
    return CountingLocaleProvider("en")


@pytest.fixture
def resolver(store, locale_provider) -> ReferenceResolver:
    """Resolver over the seeded store with the counting provider."""
    return ReferenceResolver(store, locale_provider)


@pytest.fixture
def fr_resolver(store) -> ReferenceResolver:
    """Resolver whose current locale is ``fr``."""
    return ReferenceResolver(store, StaticLocaleProvider("fr"))
