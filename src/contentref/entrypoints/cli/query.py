"""Read commands: fields, references, translations and ancestors.

Results go to stdout, one per line. Entities print as
``kind:id [langcode]<TAB>label``. An absent result prints a warning on
stderr and still exits 0; a missing source entity or a parent walk that
hits the depth limit exits non-zero.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from contentref.domain.errors import TraversalLimitExceededError
from contentref.domain.value_objects import EntityKind

from .helpers import (
    ENTITY_KIND,
    ENTITY_REF,
    LOCALE,
    describe,
    load_app,
    load_entity,
    store_errors,
    warn,
)

if TYPE_CHECKING:
    from contentref.domain.value_objects import EntityRef, Locale

langcode_option = click.option(
    "--langcode",
    "-l",
    type=LOCALE,
    default=None,
    help="Translation of the source entity to read (default: its original language).",
)
raw_option = click.option(
    "--raw",
    is_flag=True,
    help="Do not translate referenced entities into the source entity's language.",
)
strict_option = click.option(
    "--strict",
    is_flag=True,
    help="Drop referenced entities that have no translation in the source entity's language.",
)
all_option = click.option(
    "--all", "all_items", is_flag=True, help="Print every item instead of the first."
)


@click.command()
@click.argument("ref", type=ENTITY_REF)
@click.argument("field")
@langcode_option
@all_option
@click.pass_context
def field(
    ctx: click.Context,
    ref: EntityRef,  # pylint: disable=redefined-outer-name
    field: str,  # pylint: disable=redefined-outer-name
    langcode: Locale | None,
    all_items: bool,
) -> None:
    """Print the value of FIELD on entity REF."""
    app = load_app(ctx)
    with app.uow as uow, store_errors():
        entity = load_entity(uow.entities, ref, langcode)
        resolver = app.resolver(uow.entities)
        if all_items:
            values = resolver.get_field_values(entity, field)
        elif (value := resolver.get_field_value(entity, field)) is not None:
            values = [value]
        else:
            values = []

    if not values:
        warn(f"{entity} has no value in field '{field}'.")
    for value in values:
        click.echo(value)


@click.command()
@click.argument("ref", type=ENTITY_REF)
@click.argument("field")
@langcode_option
@raw_option
@strict_option
@all_option
@click.pass_context
def ref(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    ref: EntityRef,  # pylint: disable=redefined-outer-name
    field: str,  # pylint: disable=redefined-outer-name
    langcode: Locale | None,
    raw: bool,
    strict: bool,
    all_items: bool,
) -> None:
    """Print the entity (or entities) referenced by FIELD on entity REF."""
    app = load_app(ctx)
    with app.uow as uow, store_errors():
        entity = load_entity(uow.entities, ref, langcode)
        resolver = app.resolver(uow.entities)
        if all_items:
            targets = resolver.get_referenced_entities(
                entity, field, translated=not raw, remove_untranslated=strict
            )
        elif target := resolver.get_referenced_entity(
            entity, field, translated=not raw, remove_untranslated=strict
        ):
            targets = [target]
        else:
            targets = []

    if not targets:
        warn(f"{entity} references nothing through '{field}'.")
    for target in targets:
        click.echo(describe(target))


@click.command()
@click.argument("ref", type=ENTITY_REF)
@click.argument("field")
@langcode_option
@raw_option
@strict_option
@click.pass_context
def labels(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    ref: EntityRef,  # pylint: disable=redefined-outer-name
    field: str,  # pylint: disable=redefined-outer-name
    langcode: Locale | None,
    raw: bool,
    strict: bool,
) -> None:
    """Print ``id<TAB>label`` for every entity referenced by FIELD on REF."""
    app = load_app(ctx)
    with app.uow as uow, store_errors():
        entity = load_entity(uow.entities, ref, langcode)
        found = app.resolver(uow.entities).get_referenced_entity_labels(
            entity, field, translated=not raw, remove_untranslated=strict
        )

    if not found:
        warn(f"{entity} references nothing through '{field}'.")
    for entity_id, label in found.items():
        click.echo(f"{entity_id}\t{label}")


@click.command()
@click.argument("ref", type=ENTITY_REF)
@click.option(
    "--to",
    "target_locale",
    type=LOCALE,
    default=None,
    help="Locale to translate into (default: --locale / CONTENTREF_LOCALE).",
)
@click.option(
    "--required",
    is_flag=True,
    help="Print nothing when the translation is missing instead of the original.",
)
@click.pass_context
def translate(
    ctx: click.Context,
    ref: EntityRef,  # pylint: disable=redefined-outer-name
    target_locale: Locale | None,
    required: bool,
) -> None:
    """Print entity REF in another language, falling back to the original."""
    app = load_app(ctx)
    with app.uow as uow, store_errors():
        entity = load_entity(uow.entities, ref)
        resolver = app.resolver(uow.entities)
        locale = target_locale or resolver.locale_provider.current_locale()
        translated = resolver.translate_entity(entity, locale, required=required)

    if translated is None:
        warn(f"{ref} has no '{locale}' translation.")
        return
    click.echo(describe(translated))


@click.command()
@click.argument("ref", type=ENTITY_REF)
@click.option(
    "--type",
    "kind",
    type=ENTITY_KIND,
    default=EntityKind.NODE.value,
    show_default=True,
    help="Kind of ancestor to look for.",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of parent hops (default: CONTENTREF_MAX_TRAVERSAL_DEPTH).",
)
@click.pass_context
def ancestor(
    ctx: click.Context,
    ref: EntityRef,  # pylint: disable=redefined-outer-name
    kind: EntityKind,
    max_depth: int | None,
) -> None:
    """Print the closest ancestor of entity REF of the given kind."""
    app = load_app(ctx)
    with app.uow as uow, store_errors():
        entity = load_entity(uow.entities, ref)
        resolver = app.resolver(uow.entities, max_depth)
        try:
            parent = resolver.get_parent_of_type(entity, kind)
        except TraversalLimitExceededError as e:
            raise click.ClickException(
                f"{e}\nThe parent chain may contain a cycle; "
                "raise --max-depth if it is legitimately this deep."
            ) from e

    if parent is None:
        warn(f"{ref} has no '{kind.value}' ancestor.")
        return
    click.echo(describe(parent))
