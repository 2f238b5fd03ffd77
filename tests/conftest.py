"""Shared fixture plugins and folder-based markers for the contentref suite.

Every test is marked after the top-level folder it lives in (``unit``,
``contract``, ``integration`` or ``e2e``), so ``pytest -m unit`` selects the
fast tests without per-folder conftest files.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.postgres",
    "tests.fixtures.datagen",
]

TESTS_ROOT = Path(__file__).parent.resolve()
LAYER_FOLDERS = frozenset({"unit", "contract", "integration", "e2e"})


def _layer_of(item: pytest.Item) -> str | None:
    try:
        parts = item.path.resolve().relative_to(TESTS_ROOT).parts
    except ValueError:
        return None
    return parts[0] if parts and parts[0] in LAYER_FOLDERS else None


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Add the layer marker to every test collected under a layer folder."""
    for item in items:
        if (layer := _layer_of(item)) and item.get_closest_marker(layer) is None:
            item.add_marker(getattr(pytest.mark, layer))


@pytest.fixture
def engine(request: pytest.FixtureRequest) -> Engine:
    """The engine fixture named by the indirect parameter.

    Example:
        @pytest.mark.parametrize(
            "engine", ["sqlite_engine_file", "postgres_engine"], indirect=True
        )
        def test_schema(engine): ...
    """
    return request.getfixturevalue(request.param)
