"""Built-in documentation bot.

Answers messages containing ``!keyword`` tokens with the API items the
keyword names. The loader calls :func:`configure` with the index location
before the first message; without it the bot reads ``docs.json`` from the
working directory.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

from docbot.indexer.index import DocIndex, IndexEntry
from docbot.indexer.store import DEFAULT_INDEX_PATH, IndexStore
from docbot.lookup import IndexConsumer

_COMMAND: Final[re.Pattern[str]] = re.compile(r"!([\w\\:$]+)")
MAX_CANDIDATES: Final[int] = 5

_index_path: Path = DEFAULT_INDEX_PATH
_consumer: IndexConsumer | None = None


def configure(index_path: Path) -> None:
    """Point the bot at an index file; it is read on the next message."""
    global _index_path, _consumer
    _index_path = index_path
    _consumer = None


def _get_consumer() -> IndexConsumer:
    global _consumer
    if _consumer is None:
        index = IndexStore(_index_path).load()
        _consumer = IndexConsumer(index if index is not None else DocIndex())
    return _consumer


def format_entry(entry: IndexEntry) -> str:
    if entry.desc:
        return f"{entry.name} - {entry.desc}"
    return entry.name


def bot(nick: str, message: str) -> list[str]:
    """Return answer lines for every ``!token`` in message."""
    answers: list[str] = []
    for token in _COMMAND.findall(message):
        result = _get_consumer().lookup(token)
        if not result.is_match:
            answers.append(f"{nick}: No match for {token}")
            continue
        shown = result.entries[:MAX_CANDIDATES]
        answers.extend(format_entry(entry) for entry in shown)
        if len(result.entries) > len(shown):
            answers.append(f"... and {len(result.entries) - len(shown)} more for {token}")
    return answers
