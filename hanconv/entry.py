"""Dictionary entries: a key together with its conversion candidates."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import total_ordering


@total_ordering
@dataclass(frozen=True, eq=False)
class DictEntry:
    """A key with zero or more candidate values.

    Entries compare and hash by key alone, so a lexicon can be sorted and
    checked for duplicate keys whatever values the entries carry.
    """

    key: str
    values: tuple[str, ...] = ()

    def __init__(self, key: str, values: str | Iterable[str] = ()) -> None:
        object.__setattr__(self, "key", key)
        if isinstance(values, str):
            object.__setattr__(self, "values", (values,))
        else:
            object.__setattr__(self, "values", tuple(values))

    @property
    def default(self) -> str:
        """The preferred value, or the key itself when there are no values."""
        return self.values[0] if self.values else self.key

    @property
    def num_values(self) -> int:
        """How many candidate values the entry has."""
        return len(self.values)

    @property
    def key_length(self) -> int:
        """Length of the key in characters."""
        return len(self.key)

    def to_string(self) -> str:
        """The entry as one line of a text dictionary, without the newline."""
        if not self.values:
            return self.key
        return f"{self.key}\t{' '.join(self.values)}"

    def __str__(self) -> str:
        return self.to_string()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DictEntry):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DictEntry):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)