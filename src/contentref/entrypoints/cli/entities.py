"""``contentref entities``: seed the entity store from JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
import click_extra as clickx

from contentref.interfaces.entity_store import EntityRecord
from contentref.service_layer.seeding import load_entities

from .helpers import load_app, store_errors, success

logger = logging.getLogger(__name__)


def read_records(path: Path) -> list[EntityRecord]:
    """Parse a JSON file holding a list of entity records.

    Raises:
        click.ClickException: If the file is not valid JSON or not a list.
        InvalidEntityRecordError: If a record is malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise click.ClickException(f"{path} must contain a JSON list of entity records.")
    logger.debug("Read %d record(s) from %s", len(data), path)
    return [EntityRecord.from_dict(item) for item in data]


@click.group(cls=clickx.ExtraGroup)
def entities() -> None:
    """Entity store commands."""


@entities.command()
@click.argument(
    "path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.pass_context
def load(ctx: click.Context, path: Path) -> None:
    """Load the entity records in PATH (a JSON list) in a single transaction."""
    app = load_app(ctx)
    with store_errors():
        count = load_entities(app.uow, read_records(path))
    success(f"Loaded {count} entit{'y' if count == 1 else 'ies'} from {path.name}")
