"""End-to-end tests for `contentref entities load`."""

import json
from pathlib import Path

import pytest

from tests.fixtures.datagen import content_graph_json

# pylint: disable=redefined-outer-name,unused-argument


@pytest.fixture
def load_env(empty_db_url) -> dict[str, str | None]:
    return {"CONTENTREF_DB_URL": empty_db_url, "CONTENTREF_FLIGHT_RECORDER": "0"}


@pytest.fixture
def site_json(fs) -> str:
    path = Path("content.json")
    path.write_text(json.dumps(content_graph_json()), encoding="utf-8")
    return str(path)


def test_load_then_query(invoke, load_env, site_json):
    result = invoke("entities", "load", site_json, env=load_env)
    assert result.exit_code == 0, result.output
    assert f"Loaded {len(content_graph_json())} entities from content.json" in result.stderr

    result = invoke("ref", "node:7", "featured_story", "--langcode", "fr", env=load_env)
    assert result.exit_code == 0
    assert result.stdout == "node:3 [fr]\tHistoire\n"


def test_single_record_message(invoke, load_env, fs):
    Path("one.json").write_text(json.dumps(content_graph_json()[:1]), encoding="utf-8")
    result = invoke("entities", "load", "one.json", env=load_env)
    assert result.exit_code == 0
    assert "Loaded 1 entity from one.json" in result.stderr


def test_duplicate_load_is_rejected_atomically(invoke, load_env, site_json):
    assert invoke("entities", "load", site_json, env=load_env).exit_code == 0

    # a fresh record followed by an already stored one
    records = [
        {
            "ref": "node:100",
            "default_langcode": "en",
            "translations": {"en": {"label": "New"}},
        },
        content_graph_json()[0],
    ]
    Path("again.json").write_text(json.dumps(records), encoding="utf-8")
    result = invoke("entities", "load", "again.json", env=load_env)
    assert result.exit_code == 1
    assert "already exists" in result.stderr

    result = invoke("translate", "node:100", env=load_env)
    assert result.exit_code == 1
    assert "Entity node:100 not found." in result.stderr


@pytest.mark.parametrize(
    "payload, message",
    [
        ("{not json", "is not valid JSON"),
        ('{"ref": "node:1"}', "must contain a JSON list"),
        ('[{"ref": "node:1", "translations": {}}]', "'translations' must be a non-empty"),
        ('[{"ref": "gadget:1", "translations": {"en": {"label": "x"}}}]', "gadget"),
        ('["node:1"]', "a record must be a mapping"),
        (
            '[{"ref": "node:1", "fields": ["body"], '
            '"translations": {"en": {"label": "x", "fields": {"body": [{"target": 5}]}}}}]',
            "not a 'kind:id' string",
        ),
    ],
    ids=[
        "bad-json",
        "not-a-list",
        "no-translations",
        "unknown-kind",
        "record-not-a-mapping",
        "numeric-target",
    ],
)
def test_malformed_input(invoke, load_env, fs, payload, message):
    Path("bad.json").write_text(payload, encoding="utf-8")
    result = invoke("entities", "load", "bad.json", env=load_env)
    assert result.exit_code == 1
    assert message in result.stderr


def test_missing_file_is_a_usage_error(invoke, load_env, fs):
    result = invoke("entities", "load", "nowhere.json", env=load_env)
    assert result.exit_code == 2
