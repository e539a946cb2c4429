"""Keyword index builder for yii2-apidoc documentation dumps.

The index maps a search keyword to every API item that answers to it.
The keyword is the item's bare name (the type name for a class, trait or
interface; the member name for a method, property or constant) with
underscores removed and lower-cased. Several items may share a keyword,
for example::

    "query": [
        {"name": "yii\\db\\Query",
         "desc": "Query represents a SELECT SQL statement ..."},
        {"name": "yii\\data\\ActiveDataProvider::$query",
         "desc": "The query that is used to fetch data models ...",
         "definedBy": "yii\\data\\ActiveDataProvider"},
        {"name": "yii\\db\\Command::query()",
         "desc": "Executes the SQL statement and returns query result.",
         "definedBy": "yii\\db\\Command"}
    ]
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

from docbot.exceptions import InvalidInputError, MalformedRecordError

_TRAILING_WORD: Final[re.Pattern[str]] = re.compile(r"\w+\Z", re.ASCII)


def normalize_keyword(name: str) -> str:
    """Derive the search keyword for an API item name.

    Takes the trailing run of word characters (so ``yii\\db\\Query`` gives
    ``Query`` and ``$query`` gives ``query``), strips underscores and
    lower-cases the result.

    Raises:
        MalformedRecordError: If the name does not end in a word character
            or consists only of underscores.
    """
    if not isinstance(name, str):
        raise MalformedRecordError(f"Name must be a string, got {type(name).__name__}", name)
    match = _TRAILING_WORD.search(name)
    keyword = match.group(0).replace("_", "").lower() if match else ""
    if not keyword:
        raise MalformedRecordError(f"Cannot derive a keyword from name {name!r}", name)
    return keyword


class MemberKind(Enum):
    """The three kinds of type member found in a documentation dump.

    Each value is the record field the members are listed under.
    """

    METHOD = "methods"
    PROPERTY = "properties"
    CONSTANT = "constants"

    @property
    def field_name(self) -> str:
        return self.value

    def display_name(self, member_name: str) -> str:
        """Member name as shown after ``Type::``.

        Methods get a ``()`` suffix. Property names come from the generator
        with their ``$`` already attached and constants are bare.
        """
        if self is MemberKind.METHOD:
            return f"{member_name}()"
        return member_name


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """A single indexed API item.

    Attributes:
        name: Fully-qualified display name (``Type`` or ``Type::member``).
        desc: Short description from the doc block.
        defined_by: Fully-qualified name of the defining type, members only.
    """

    name: str
    desc: str
    defined_by: str | None = None

    @property
    def is_member(self) -> bool:
        return self.defined_by is not None

    def to_dict(self) -> dict[str, str]:
        data = {"name": self.name, "desc": self.desc}
        if self.defined_by is not None:
            data["definedBy"] = self.defined_by
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IndexEntry:
        return cls(
            name=str(data["name"]),
            desc=str(data.get("desc") or ""),
            defined_by=_defined_by(data),
        )


class DocIndex(Mapping[str, tuple[IndexEntry, ...]]):
    """Read-only keyword -> entries multi-map.

    Keyword order and per-keyword entry order are the order in which the
    builder discovered them.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, tuple[IndexEntry, ...]] | None = None) -> None:
        self._entries: dict[str, tuple[IndexEntry, ...]] = {
            keyword: tuple(leaves) for keyword, leaves in (entries or {}).items()
        }

    def __getitem__(self, keyword: str) -> tuple[IndexEntry, ...]:
        return self._entries[keyword]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DocIndex(keywords={len(self)}, entries={self.entry_count})"

    @property
    def entry_count(self) -> int:
        """Total number of entries across all keywords."""
        return sum(len(leaves) for leaves in self._entries.values())

    def to_dict(self) -> dict[str, list[dict[str, str]]]:
        """JSON-serializable form, as written to docs.json."""
        return {
            keyword: [entry.to_dict() for entry in leaves]
            for keyword, leaves in self._entries.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DocIndex:
        return cls({
            str(keyword): tuple(IndexEntry.from_dict(leaf) for leaf in leaves)
            for keyword, leaves in data.items()
        })


@dataclass
class BuildReport:
    """Counters for the most recent build.

    Attributes:
        types: Number of type records read.
        entries: Number of entries emitted.
        keywords: Number of distinct keywords.
        skipped: ``(name, reason)`` for each record dropped in skip mode.
    """

    types: int = 0
    entries: int = 0
    keywords: int = 0
    skipped: list[tuple[str, str]] = field(default_factory=list)


class IndexBuilder:
    """Turns a documentation source into a :class:`DocIndex`.

    The build is a pure function of its input. By default any malformed
    record aborts the whole build; with ``skip_malformed=True`` bad records
    are dropped and listed in :attr:`report`.
    """

    def __init__(self, skip_malformed: bool = False) -> None:
        self._skip_malformed = skip_malformed
        self.report = BuildReport()

    def build(self, source: Mapping[str, Any] | None) -> DocIndex:
        """Build the keyword index.

        Args:
            source: Mapping of fully-qualified type name to type record, in
                the shape written by yii2-apidoc.

        Returns:
            The completed index.

        Raises:
            InvalidInputError: If source is not a mapping of type records.
            MalformedRecordError: If a name yields no keyword and skip mode
                is off.
        """
        self._check_source(source)
        report = BuildReport()
        index: dict[str, list[IndexEntry]] = {}

        for type_record in source.values():
            report.types += 1
            type_name = type_record.get("name")
            if not self._add(index, report, type_name, IndexEntry(
                name=str(type_name),
                desc=_description(type_record),
            )):
                self._skip_members(report, type_name, type_record)
                continue

            for kind in MemberKind:
                members = type_record.get(kind.field_name)
                if not members:
                    continue
                if not isinstance(members, Mapping):
                    raise InvalidInputError(
                        f"{type_name}: '{kind.field_name}' must be a mapping of member records"
                    )
                for member in members.values():
                    if not isinstance(member, Mapping):
                        raise InvalidInputError(
                            f"{type_name}: {kind.field_name} entries must be member records"
                        )
                    member_name = member.get("name")
                    self._add(index, report, member_name, IndexEntry(
                        name=f"{type_name}::{kind.display_name(str(member_name))}",
                        desc=_description(member),
                        defined_by=_defined_by(member),
                    ))

        report.keywords = len(index)
        self.report = report
        return DocIndex({keyword: tuple(leaves) for keyword, leaves in index.items()})

    def _add(
        self,
        index: dict[str, list[IndexEntry]],
        report: BuildReport,
        raw_name: Any,
        entry: IndexEntry,
    ) -> bool:
        """Append entry under the keyword of raw_name; False if it was skipped."""
        try:
            keyword = normalize_keyword(raw_name)
        except MalformedRecordError as exc:
            if not self._skip_malformed:
                raise
            report.skipped.append((entry.name, str(exc)))
            return False
        index.setdefault(keyword, []).append(entry)
        report.entries += 1
        return True

    @staticmethod
    def _skip_members(report: BuildReport, type_name: Any, type_record: Mapping[str, Any]) -> None:
        """Report every member of a type whose own name was rejected."""
        for kind in MemberKind:
            members = type_record.get(kind.field_name)
            if not isinstance(members, Mapping):
                continue
            for member in members.values():
                member_name = member.get("name") if isinstance(member, Mapping) else None
                report.skipped.append((
                    f"{type_name}::{kind.display_name(str(member_name))}",
                    f"Type name {type_name!r} is malformed",
                ))

    @staticmethod
    def _check_source(source: Any) -> None:
        if source is None:
            raise InvalidInputError("No documentation source given")
        if not isinstance(source, Mapping):
            raise InvalidInputError(
                f"Documentation source must be a mapping of type records, "
                f"got {type(source).__name__}"
            )
        for fqn, record in source.items():
            if not isinstance(record, Mapping):
                raise InvalidInputError(f"Type record for {fqn!r} is not a mapping")


def build_index(source: Mapping[str, Any] | None) -> DocIndex:
    """Build an index in fail-fast mode."""
    return IndexBuilder().build(source)


def _description(record: Mapping[str, Any]) -> str:
    return str(record.get("shortDescription") or "")


def _defined_by(record: Mapping[str, Any]) -> str | None:
    defined_by = record.get("definedBy")
    return str(defined_by) if defined_by is not None else None
