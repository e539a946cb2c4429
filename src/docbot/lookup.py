"""Keyword lookup over a built index."""

from __future__ import annotations

from dataclasses import dataclass

from docbot.exceptions import MalformedRecordError
from docbot.indexer.index import DocIndex, IndexEntry, normalize_keyword


@dataclass(frozen=True, slots=True)
class LookupResult:
    """Outcome of looking up one query token.

    Attributes:
        token: The token as given.
        keyword: Normalized keyword, or "" if the token has none.
        entries: Matching entries in index order.
    """

    token: str
    keyword: str
    entries: tuple[IndexEntry, ...] = ()

    @property
    def is_match(self) -> bool:
        return bool(self.entries)

    @property
    def is_ambiguous(self) -> bool:
        """True when more than one API item answers to the keyword."""
        return len(self.entries) > 1


class IndexConsumer:
    """Answers keyword lookups against a DocIndex."""

    def __init__(self, index: DocIndex) -> None:
        self._index = index

    @property
    def index(self) -> DocIndex:
        return self._index

    def lookup(self, token: str) -> LookupResult:
        """Look up a query token using the index's keyword normalization.

        A token with no word characters is reported as no match.
        """
        try:
            keyword = normalize_keyword(token)
        except MalformedRecordError:
            return LookupResult(token=token, keyword="")
        return LookupResult(token=token, keyword=keyword, entries=self._index.get(keyword, ()))
