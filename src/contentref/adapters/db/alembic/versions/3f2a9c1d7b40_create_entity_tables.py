"""create entity tables

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-19 09:12:41.508311

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "entity",
        sa.Column("kind", sa.String(length=64), nullable=False, comment="Entity kind."),
        sa.Column(
            "entity_id",
            sa.String(length=128),
            nullable=False,
            comment="Entity id, unique within its kind.",
        ),
        sa.Column(
            "default_langcode",
            sa.String(length=32),
            nullable=False,
            comment="Language of the original (default) translation.",
        ),
        sa.Column(
            "parent_kind",
            sa.String(length=64),
            nullable=True,
            comment="Kind of the owning entity (composed kinds only).",
        ),
        sa.Column(
            "parent_id",
            sa.String(length=128),
            nullable=True,
            comment="Id of the owning entity (composed kinds only).",
        ),
        sa.PrimaryKeyConstraint("kind", "entity_id", name=op.f("pk_entity")),
        comment="One row per entity.",
    )
    op.create_index(
        op.f("ix_entity_parent_kind_parent_id"),
        "entity",
        ["parent_kind", "parent_id"],
        unique=False,
    )

    op.create_table(
        "entity_translation",
        sa.Column("kind", sa.String(length=64), nullable=False),
        sa.Column("entity_id", sa.String(length=128), nullable=False),
        sa.Column(
            "langcode",
            sa.String(length=32),
            nullable=False,
            comment="Language of this variant.",
        ),
        sa.Column(
            "label", sa.Text(), nullable=False, comment="Display label of this variant."
        ),
        sa.ForeignKeyConstraint(
            ["kind", "entity_id"],
            ["entity.kind", "entity.entity_id"],
            name=op.f("fk_entity_translation_kind_entity_id_entity"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "kind", "entity_id", "langcode", name=op.f("pk_entity_translation")
        ),
        comment="One row per language variant of an entity.",
    )

    op.create_table(
        "entity_field",
        sa.Column("kind", sa.String(length=64), nullable=False),
        sa.Column("entity_id", sa.String(length=128), nullable=False),
        sa.Column("field_name", sa.String(length=128), nullable=False),
        sa.ForeignKeyConstraint(
            ["kind", "entity_id"],
            ["entity.kind", "entity.entity_id"],
            name=op.f("fk_entity_field_kind_entity_id_entity"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "kind", "entity_id", "field_name", name=op.f("pk_entity_field")
        ),
        comment="Fields declared by an entity.",
    )

    op.create_table(
        "field_item",
        sa.Column("kind", sa.String(length=64), nullable=False),
        sa.Column("entity_id", sa.String(length=128), nullable=False),
        sa.Column("langcode", sa.String(length=32), nullable=False),
        sa.Column("field_name", sa.String(length=128), nullable=False),
        sa.Column(
            "delta", sa.Integer(), nullable=False, comment="Position within the field."
        ),
        sa.Column("value", sa.Text(), nullable=True, comment="Scalar value, if any."),
        sa.Column(
            "target_kind",
            sa.String(length=64),
            nullable=True,
            comment="Kind of the referenced entity, if any.",
        ),
        sa.Column(
            "target_id",
            sa.String(length=128),
            nullable=True,
            comment="Id of the referenced entity, if any.",
        ),
        sa.CheckConstraint(
            "delta >= 0", name=op.f("ck_field_item_non_negative_delta")
        ),
        sa.ForeignKeyConstraint(
            ["kind", "entity_id", "langcode"],
            [
                "entity_translation.kind",
                "entity_translation.entity_id",
                "entity_translation.langcode",
            ],
            name=op.f("fk_field_item_kind_entity_id_langcode_entity_translation"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "kind",
            "entity_id",
            "langcode",
            "field_name",
            "delta",
            name=op.f("pk_field_item"),
        ),
        comment="Ordered field values per translation.",
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("field_item")
    op.drop_table("entity_field")
    op.drop_table("entity_translation")
    op.drop_index(op.f("ix_entity_parent_kind_parent_id"), table_name="entity")
    op.drop_table("entity")
