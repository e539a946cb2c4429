"""Documentation indexer: source loading, index building, and persistence."""

from __future__ import annotations

from docbot.indexer.index import (
    BuildReport,
    DocIndex,
    IndexBuilder,
    IndexEntry,
    MemberKind,
    build_index,
    normalize_keyword,
)
from docbot.indexer.source import load_source
from docbot.indexer.store import DEFAULT_INDEX_PATH, IndexStore

__all__ = [
    "DEFAULT_INDEX_PATH",
    "BuildReport",
    "DocIndex",
    "IndexBuilder",
    "IndexEntry",
    "IndexStore",
    "MemberKind",
    "build_index",
    "load_source",
    "normalize_keyword",
]
