"""Click parameter types for entity references, kinds and locales."""

from __future__ import annotations

from typing import Any

import click

from contentref.domain.errors import DomainError
from contentref.domain.value_objects import EntityKind, EntityRef, Locale


class EntityRefType(click.ParamType):
    """``kind:id`` argument, converted to an `EntityRef`."""

    name = "kind:id"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> EntityRef:
        if isinstance(value, EntityRef):
            return value
        try:
            return EntityRef.parse(value)
        except DomainError as e:
            self.fail(str(e), param, ctx)


class EntityKindType(click.ParamType):
    """Entity kind name, converted to an `EntityKind`."""

    name = "kind"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> EntityKind:
        try:
            return EntityKind.from_string(value)
        except DomainError as e:
            self.fail(str(e), param, ctx)


class LocaleType(click.ParamType):
    """Language code such as ``fr`` or ``pt-BR``, converted to a `Locale`."""

    name = "langcode"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> Locale:
        try:
            return Locale.of(value)
        except DomainError as e:
            self.fail(str(e), param, ctx)


ENTITY_REF = EntityRefType()
ENTITY_KIND = EntityKindType()
LOCALE = LocaleType()
