"""Ordered storage of dictionary entries and the text dictionary format."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from itertools import pairwise
from typing import IO, overload

from .entry import DictEntry

_LINE_END = re.compile(r"[\r\n\x00]")
_BOM = "\ufeff"


class InvalidFormat(ValueError):
    """Raised when dictionary or configuration data is malformed."""


class InvalidTextDictionary(InvalidFormat):
    """Raised when a line of a text dictionary cannot be parsed."""

    def __init__(self, reason: str, line_number: int) -> None:
        super().__init__(f"Invalid text dictionary at line {line_number}: {reason}")
        self.reason = reason
        self.line_number = line_number


def _parse_line(line: str, line_number: int) -> DictEntry | None:
    line = _LINE_END.split(line, maxsplit=1)[0]
    if not line:
        return None
    if "\t" not in line:
        raise InvalidTextDictionary(f"Tabular not found {line}", line_number)
    key, rest = line.split("\t", 1)
    return DictEntry(key, rest.split(" "))


class Lexicon:
    """A list of dictionary entries."""

    def __init__(self, entries: Iterable[DictEntry] = ()) -> None:
        self._entries: list[DictEntry] = list(entries)

    def add(self, entry: DictEntry) -> None:
        """Append an entry."""
        self._entries.append(entry)

    def sort(self) -> None:
        """Sort the entries by key."""
        self._entries.sort()

    def is_sorted(self) -> bool:
        """Whether the entries are in key order."""
        return all(not later < earlier for earlier, later in pairwise(self._entries))

    def duplicate_key(self) -> str | None:
        """The first key repeated by neighbouring entries, if any."""
        for earlier, later in pairwise(self._entries):
            if earlier.key == later.key:
                return later.key
        return None

    def is_unique(self) -> bool:
        """Whether no two neighbouring entries share a key (check after sorting)."""
        return self.duplicate_key() is None

    @classmethod
    def parse(cls, stream: Iterable[str] | Iterable[bytes]) -> Lexicon:
        """Read a text dictionary: one ``key<TAB>value value ...`` per line.

        Lines may be text or UTF-8 bytes; a leading byte-order mark is
        skipped and empty lines are ignored.
        """
        lexicon = cls()
        for line_number, raw in enumerate(stream, start=1):
            line = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            if line_number == 1:
                line = line.removeprefix(_BOM)
            entry = _parse_line(line, line_number)
            if entry is not None:
                lexicon.add(entry)
        return lexicon

    def write(self, stream: IO[str]) -> None:
        """Write the entries as a text dictionary."""
        for entry in self._entries:
            stream.write(entry.to_string() + "\n")

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DictEntry]:
        return iter(self._entries)

    @overload
    def __getitem__(self, index: int) -> DictEntry: ...

    @overload
    def __getitem__(self, index: slice) -> list[DictEntry]: ...

    def __getitem__(self, index):
        return self._entries[index]

    def __repr__(self) -> str:
        return f"Lexicon({self._entries!r})"