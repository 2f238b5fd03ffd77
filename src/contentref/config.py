"""Configuration utilities for contentref.

Settings come from the environment:

- ``CONTENTREF_DB_URL``: SQLAlchemy URL of the entity database.
- ``CONTENTREF_LOCALE``: default locale (``en`` when unset).
- ``CONTENTREF_MAX_TRAVERSAL_DEPTH``: parent-walk depth cap (``50`` when unset).
"""

import os
import sys
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

from contentref.domain.value_objects import Locale

DB_URL_ENV = "CONTENTREF_DB_URL"  # pragma: no mutate
LOCALE_ENV = "CONTENTREF_LOCALE"  # pragma: no mutate
MAX_DEPTH_ENV = "CONTENTREF_MAX_TRAVERSAL_DEPTH"  # pragma: no mutate

DEFAULT_LOCALE = "en"
DEFAULT_MAX_TRAVERSAL_DEPTH = 50

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate


class DatabaseUrlNotSetError(Exception):
    """Raised when the CONTENTREF_DB_URL environment variable is not set."""


class InvalidConfigError(ValueError):
    """Raised when an environment setting cannot be parsed."""


def get_db_url() -> str:
    """Get the database URL from the environment.

    Returns:
        The value of the `CONTENTREF_DB_URL` environment variable.

    Raises:
        DatabaseUrlNotSetError: If `CONTENTREF_DB_URL` is not set.
    """
    if not (url := os.environ.get(DB_URL_ENV)):
        raise DatabaseUrlNotSetError
    return url


def get_default_locale() -> Locale:
    """Return the locale named by `CONTENTREF_LOCALE`, or ``en``.

    Raises:
        InvalidLocaleError: If the variable holds a malformed code.
    """
    return Locale(os.environ.get(LOCALE_ENV) or DEFAULT_LOCALE)


def get_max_traversal_depth() -> int:
    """Return the parent-walk depth cap from `CONTENTREF_MAX_TRAVERSAL_DEPTH`.

    Raises:
        InvalidConfigError: If the value is not a positive integer.
    """
    raw = os.environ.get(MAX_DEPTH_ENV)
    if not raw:
        return DEFAULT_MAX_TRAVERSAL_DEPTH
    try:
        depth = int(raw)
    except ValueError as e:
        raise InvalidConfigError(
            f"{MAX_DEPTH_ENV} must be a positive integer, got {raw!r}"
        ) from e
    if depth < 1:
        raise InvalidConfigError(
            f"{MAX_DEPTH_ENV} must be a positive integer, got {raw!r}"
        )
    return depth


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build an Alembic `Config` object for contentref's migrations.

    Args:
        db_url: SQLAlchemy database URL. Can be `None` (default) only in
            contexts where Alembic won't need to connect to the DB.
        stdout: Text stream Alembic will write status lines to.

    Returns:
        An `alembic.config.Config` pointing to the packaged migration scripts.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY,
        str(files("contentref.adapters.db.alembic")),
    )
    return cfg
