"""Entity store schema.

Defines the four tables backing `SqlAlchemyEntityStore`:

- ``entity``: one row per entity (kind, id, default language, parent).
- ``entity_translation``: one row per language variant, with its label.
- ``entity_field``: the fields an entity declares (declared may still be empty).
- ``field_item``: ordered field values per translation.

Constraints (enforced here):

| Constraint                                   | Purpose                          |
|----------------------------------------------|----------------------------------|
| PK(kind, entity_id)                          | one entity per reference         |
| PK(kind, entity_id, langcode)                | one variant per language         |
| FK entity_translation -> entity              | variants belong to an entity     |
| FK field_item -> entity_translation          | items belong to a variant        |
| CHECK(delta >= 0)                            | item positions start at 0        |

The parent columns carry no foreign key; a parent may be stored after its
children.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKeyConstraint,
    Index,
    Integer,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)

from contentref.adapters.db.metadata import metadata

__all__ = ["entity", "entity_field", "entity_translation", "field_item"]

KIND_LENGTH = 64
ID_LENGTH = 128
LANGCODE_LENGTH = 32
FIELD_NAME_LENGTH = 128

entity = Table(
    "entity",
    metadata,
    Column("kind", String(KIND_LENGTH), nullable=False, comment="Entity kind."),
    Column(
        "entity_id",
        String(ID_LENGTH),
        nullable=False,
        comment="Entity id, unique within its kind.",
    ),
    Column(
        "default_langcode",
        String(LANGCODE_LENGTH),
        nullable=False,
        comment="Language of the original (default) translation.",
    ),
    Column(
        "parent_kind",
        String(KIND_LENGTH),
        nullable=True,
        comment="Kind of the owning entity (composed kinds only).",
    ),
    Column(
        "parent_id",
        String(ID_LENGTH),
        nullable=True,
        comment="Id of the owning entity (composed kinds only).",
    ),
    PrimaryKeyConstraint("kind", "entity_id"),
    Index(None, "parent_kind", "parent_id"),
    comment="One row per entity.",
)

entity_translation = Table(
    "entity_translation",
    metadata,
    Column("kind", String(KIND_LENGTH), nullable=False),
    Column("entity_id", String(ID_LENGTH), nullable=False),
    Column(
        "langcode",
        String(LANGCODE_LENGTH),
        nullable=False,
        comment="Language of this variant.",
    ),
    Column("label", Text, nullable=False, comment="Display label of this variant."),
    PrimaryKeyConstraint("kind", "entity_id", "langcode"),
    ForeignKeyConstraint(
        ["kind", "entity_id"],
        [entity.c.kind, entity.c.entity_id],
        ondelete="CASCADE",
    ),
    comment="One row per language variant of an entity.",
)

entity_field = Table(
    "entity_field",
    metadata,
    Column("kind", String(KIND_LENGTH), nullable=False),
    Column("entity_id", String(ID_LENGTH), nullable=False),
    Column("field_name", String(FIELD_NAME_LENGTH), nullable=False),
    PrimaryKeyConstraint("kind", "entity_id", "field_name"),
    ForeignKeyConstraint(
        ["kind", "entity_id"],
        [entity.c.kind, entity.c.entity_id],
        ondelete="CASCADE",
    ),
    comment="Fields declared by an entity.",
)

field_item = Table(
    "field_item",
    metadata,
    Column("kind", String(KIND_LENGTH), nullable=False),
    Column("entity_id", String(ID_LENGTH), nullable=False),
    Column("langcode", String(LANGCODE_LENGTH), nullable=False),
    Column("field_name", String(FIELD_NAME_LENGTH), nullable=False),
    Column("delta", Integer, nullable=False, comment="Position within the field."),
    Column("value", Text, nullable=True, comment="Scalar value, if any."),
    Column(
        "target_kind",
        String(KIND_LENGTH),
        nullable=True,
        comment="Kind of the referenced entity, if any.",
    ),
    Column(
        "target_id",
        String(ID_LENGTH),
        nullable=True,
        comment="Id of the referenced entity, if any.",
    ),
    PrimaryKeyConstraint("kind", "entity_id", "langcode", "field_name", "delta"),
    ForeignKeyConstraint(
        ["kind", "entity_id", "langcode"],
        [
            entity_translation.c.kind,
            entity_translation.c.entity_id,
            entity_translation.c.langcode,
        ],
        ondelete="CASCADE",
    ),
    CheckConstraint("delta >= 0", name="non_negative_delta"),
    comment="Ordered field values per translation.",
)
