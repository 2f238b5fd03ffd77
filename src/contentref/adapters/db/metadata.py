"""The `MetaData` every entity table attaches to.

Constraint and index names are derived from `NAMING_CONVENTION`, so the
names created by `metadata.create_all()` in tests match the ones written in
the Alembic revisions and autogenerate reports no drift. For example, the
index on ``entity(parent_kind, parent_id)`` is
``ix_entity_parent_kind_parent_id``.
"""

from sqlalchemy import MetaData

NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
