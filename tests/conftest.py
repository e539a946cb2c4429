"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep DOCBOT_* variables from the host out of the tests."""
    for name in ("DOCBOT_NICK", "DOCBOT_TYPES", "DOCBOT_BOT_PATH", "DOCBOT_INDEX_PATH", "DOCBOT_TEST"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_source() -> dict[str, Any]:
    """A small documentation dump in yii2-apidoc's shape."""
    return {
        "yii\\db\\Query": {
            "name": "yii\\db\\Query",
            "shortDescription": "Query represents a SELECT SQL statement.",
            "methods": {
                "all": {
                    "name": "all",
                    "shortDescription": "Executes the query and returns all results as an array.",
                    "definedBy": "yii\\db\\Query",
                },
                "where": {
                    "name": "where",
                    "shortDescription": "Sets the WHERE part of the query.",
                    "definedBy": "yii\\db\\QueryTrait",
                },
            },
            "properties": {
                "$where": {
                    "name": "$where",
                    "shortDescription": "Query condition.",
                    "definedBy": "yii\\db\\QueryTrait",
                },
            },
            "constants": None,
        },
        "yii\\data\\ActiveDataProvider": {
            "name": "yii\\data\\ActiveDataProvider",
            "shortDescription": "ActiveDataProvider implements a data provider based on Query.",
            "properties": {
                "$query": {
                    "name": "$query",
                    "shortDescription": "The query that is used to fetch data models.",
                    "definedBy": "yii\\data\\ActiveDataProvider",
                },
                "$totalCount": {
                    "name": "$totalCount",
                    "shortDescription": "Total number of data models.",
                    "definedBy": "yii\\data\\BaseDataProvider",
                },
            },
        },
        "yii\\db\\Command": {
            "name": "yii\\db\\Command",
            "shortDescription": "Command represents a SQL statement to be executed against a database.",
            "methods": {
                "query": {
                    "name": "query",
                    "shortDescription": "Executes the SQL statement and returns query result.",
                    "definedBy": "yii\\db\\Command",
                },
            },
            "constants": {
                "FETCH_MODE": {
                    "name": "FETCH_MODE",
                    "shortDescription": "Default fetch mode.",
                    "definedBy": "yii\\db\\Command",
                },
            },
        },
    }


@pytest.fixture
def types_file(tmp_path: Path, sample_source: dict[str, Any]) -> Path:
    """sample_source written to disk as a JSON types file."""
    path = tmp_path / "types.json"
    path.write_text(json.dumps(sample_source), encoding="utf-8")
    return path


@pytest.fixture
def bot_file(tmp_path: Path) -> Path:
    """A minimal bot module that echoes its input."""
    path = tmp_path / "echo_bot.py"
    path.write_text(
        "def bot(nick, message):\n"
        "    return [nick + ': ' + message]\n",
        encoding="utf-8",
    )
    return path
