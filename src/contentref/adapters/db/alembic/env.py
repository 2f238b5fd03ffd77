"""Alembic environment for the contentref entity schema.

The database URL comes from, in order: ``-x url=...`` on the alembic command
line, ``sqlalchemy.url`` in the Alembic config (set by
`contentref.config.build_alembic_config`), then ``CONTENTREF_DB_URL``.
Autogenerate compares column types and server defaults; SQLite migrations
run in batch mode.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from contentref import config as app_config
from contentref.adapters.db.metadata import metadata

# registers the entity tables on `metadata`
from contentref.adapters.entity_store import schema  # noqa: F401 # pylint: disable=unused-import

# pylint: disable=no-member

alembic_config = context.config
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def resolve_url() -> str:
    """Return the URL to migrate.

    Raises:
        RuntimeError: If no source provides a URL.
    """
    if x_url := context.get_x_argument(as_dictionary=True).get("url"):
        return x_url
    configured = alembic_config.get_main_option(app_config.ALEMBIC_URL_KEY)
    if configured and "%(" not in configured:  # unexpanded ini placeholder
        return configured
    try:
        return app_config.get_db_url()
    except app_config.DatabaseUrlNotSetError as e:
        raise RuntimeError(
            f"Set {app_config.DB_URL_ENV} to the entity database URL."
        ) from e


def run_offline(url: str) -> None:
    """Emit the migration SQL for the dialect of `url` without connecting."""
    context.configure(
        url=url,
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online(url: str) -> None:
    """Apply the migrations over a live, unpooled connection."""
    engine = engine_from_config(
        {app_config.ALEMBIC_URL_KEY: url},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=metadata,
            render_as_batch=connection.dialect.name == "sqlite",
            **COMPARE_OPTIONS,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline(resolve_url())
else:
    run_online(resolve_url())
