"""Wire the unit of work, the locale provider and the resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from contentref import config
from contentref.adapters.db.engine import make_engine
from contentref.adapters.locale_provider import StaticLocaleProvider
from contentref.adapters.unit_of_work import SqlAlchemyUnitOfWork
from contentref.domain.value_objects import Locale
from contentref.service_layer.resolver import ReferenceResolver

if TYPE_CHECKING:
    from contentref.interfaces.entity_store import EntityStore
    from contentref.interfaces.locale_provider import LocaleProvider
    from contentref.interfaces.unit_of_work import AbstractUnitOfWork


@dataclass(frozen=True)
class AppContainer:
    """Application wiring for one process."""

    uow: AbstractUnitOfWork
    locale_provider: LocaleProvider
    max_depth: int = config.DEFAULT_MAX_TRAVERSAL_DEPTH

    def resolver(
        self, entities: EntityStore, max_depth: int | None = None
    ) -> ReferenceResolver:
        """Build a resolver over `entities` (usually ``uow.entities``).

        `max_depth` overrides the container's depth cap for this resolver.
        """
        return ReferenceResolver(
            entities, self.locale_provider, max_depth or self.max_depth
        )


def build_uow(url: str) -> AbstractUnitOfWork:
    """Build a new SQLAlchemy unit of work for the database at `url`."""
    engine = make_engine(url)
    return SqlAlchemyUnitOfWork(engine)


def build_locale_provider(locale: str | Locale | None = None) -> LocaleProvider:
    """Build a locale provider; falls back to `CONTENTREF_LOCALE`."""
    return StaticLocaleProvider(locale or config.get_default_locale())


def bootstrap(locale: str | Locale | None = None) -> AppContainer:
    """Build the application container from the environment.

    Args:
        locale: Override for the current locale.

    Raises:
        DatabaseUrlNotSetError: If `CONTENTREF_DB_URL` is not set.
        InvalidConfigError: If `CONTENTREF_MAX_TRAVERSAL_DEPTH` is malformed.
    """
    return AppContainer(
        uow=build_uow(config.get_db_url()),
        locale_provider=build_locale_provider(locale),
        max_depth=config.get_max_traversal_depth(),
    )
