"""Dictionaries: exact and longest-prefix lookup, and groups of dictionaries.

Lengths are counted in characters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from .entry import DictEntry
from .lexicon import Lexicon


class Dict(ABC):
    """Abstract dictionary."""

    @abstractmethod
    def match(self, word: str) -> DictEntry | None:
        """The entry whose key is exactly ``word``, or None."""

    @property
    @abstractmethod
    def key_max_length(self) -> int:
        """Length of the longest key."""

    @property
    @abstractmethod
    def lexicon(self) -> Lexicon:
        """All entries of the dictionary."""

    def _prefix_lengths(self, word: str, length: int | None) -> range:
        limit = len(word) if length is None else min(length, len(word))
        return range(min(self.key_max_length, limit), 0, -1)

    def match_prefix(self, word: str, length: int | None = None) -> DictEntry | None:
        """The entry for the longest prefix of ``word`` that is a key.

        Only the first ``length`` characters are considered when given.
        With keys "a", "an", "b", "ba", "ban", "bana", the longest prefix
        of "banana" matched is "bana".
        """
        for size in self._prefix_lengths(word, length):
            entry = self.match(word[:size])
            if entry is not None:
                return entry
        return None

    def match_all_prefixes(
        self, word: str, length: int | None = None
    ) -> list[DictEntry]:
        """Entries for every prefix of ``word`` that is a key, longest first."""
        matches = []
        for size in self._prefix_lengths(word, length):
            entry = self.match(word[:size])
            if entry is not None:
                matches.append(entry)
        return matches


class LexiconDict(Dict):
    """An in-memory dictionary over a lexicon.

    When keys repeat, the first entry with the key is the one matched.
    """

    def __init__(self, lexicon: Lexicon | Iterable[DictEntry]) -> None:
        self._lexicon = lexicon if isinstance(lexicon, Lexicon) else Lexicon(lexicon)
        self._index: dict[str, DictEntry] = {}
        for entry in self._lexicon:
            self._index.setdefault(entry.key, entry)
        self._key_max_length = max((len(key) for key in self._index), default=0)

    @classmethod
    def from_dict(cls, other: Dict) -> LexiconDict:
        """A sorted copy of another dictionary's entries."""
        lexicon = Lexicon(other.lexicon)
        lexicon.sort()
        return cls(lexicon)

    def match(self, word: str) -> DictEntry | None:
        if len(word) > self._key_max_length:
            return None
        return self._index.get(word)

    @property
    def key_max_length(self) -> int:
        return self._key_max_length

    @property
    def lexicon(self) -> Lexicon:
        return self._lexicon


class DictGroup(Dict):
    """Dictionaries consulted in order; earlier ones take priority."""

    def __init__(self, dicts: Iterable[Dict]) -> None:
        self._dicts = tuple(dicts)
        self._key_max_length = max(
            (member.key_max_length for member in self._dicts), default=0
        )

    @classmethod
    def from_dict(cls, other: Dict) -> DictGroup:
        """A group holding a single copy of another dictionary."""
        return cls([LexiconDict.from_dict(other)])

    @property
    def dicts(self) -> tuple[Dict, ...]:
        """The member dictionaries in priority order."""
        return self._dicts

    @property
    def key_max_length(self) -> int:
        return self._key_max_length

    def match(self, word: str) -> DictEntry | None:
        for member in self._dicts:
            entry = member.match(word)
            if entry is not None:
                return entry
        return None

    def match_prefix(self, word: str, length: int | None = None) -> DictEntry | None:
        """The first member's longest prefix match, trying members in order."""
        for member in self._dicts:
            entry = member.match_prefix(word, length)
            if entry is not None:
                return entry
        return None

    def match_all_prefixes(
        self, word: str, length: int | None = None
    ) -> list[DictEntry]:
        """One entry per matched prefix length, longest first.

        For each length the entry from the earliest member wins.
        """
        by_length: dict[int, DictEntry] = {}
        for member in self._dicts:
            for entry in member.match_all_prefixes(word, length):
                by_length.setdefault(entry.key_length, entry)
        return [by_length[size] for size in sorted(by_length, reverse=True)]

    @property
    def lexicon(self) -> Lexicon:
        """Entries of all members, sorted by key."""
        combined = Lexicon(
            entry for member in self._dicts for entry in member.lexicon
        )
        combined.sort()
        return combined