"""A binary form holding only the values of a lexicon.

Layout, little-endian:

* number of entries (uint32)
* total length of the value buffer (uint32), then the buffer of
  NUL-terminated values
* for each entry: its number of values (uint16), then for each value the
  number of bytes it takes in the buffer, terminator included (uint16)

Keys are not stored; loaded entries have empty keys.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable
from typing import BinaryIO

from .entry import DictEntry
from .lexicon import InvalidFormat, Lexicon

_U32 = struct.Struct("<I")
_U16 = struct.Struct("<H")


def _read_integer(stream: BinaryIO, layout: struct.Struct) -> int:
    data = stream.read(layout.size)
    if data is None or len(data) != layout.size:
        raise InvalidFormat("Invalid binary dictionary.")
    return layout.unpack(data)[0]


def _pack(layout: struct.Struct, number: int) -> bytes:
    try:
        return layout.pack(number)
    except struct.error as exc:
        raise InvalidFormat("Cannot write binary dictionary.") from exc


class SerializedValues:
    """The values of a lexicon, in entry order."""

    def __init__(self, lexicon: Lexicon | Iterable[DictEntry]) -> None:
        self._lexicon = lexicon if isinstance(lexicon, Lexicon) else Lexicon(lexicon)

    @property
    def lexicon(self) -> Lexicon:
        """The entries held."""
        return self._lexicon

    @property
    def key_max_length(self) -> int:
        """Always 0: no keys are stored."""
        return 0

    def serialize(self, stream: BinaryIO) -> None:
        """Write the values to a binary stream."""
        buffer = bytearray()
        records: list[list[int]] = []
        for entry in self._lexicon:
            sizes = []
            for value in entry.values:
                data = value.encode("utf-8")
                if b"\0" in data:
                    raise InvalidFormat(f"Values must not contain NUL: {value!r}")
                buffer += data + b"\0"
                sizes.append(len(data) + 1)
            records.append(sizes)

        stream.write(_pack(_U32, len(records)))
        stream.write(_pack(_U32, len(buffer)))
        stream.write(bytes(buffer))
        for sizes in records:
            stream.write(_pack(_U16, len(sizes)))
            for size in sizes:
                stream.write(_pack(_U16, size))

    @classmethod
    def load(cls, stream: BinaryIO) -> SerializedValues:
        """Read values written by :meth:`serialize`."""
        num_items = _read_integer(stream, _U32)
        total = _read_integer(stream, _U32)
        buffer = stream.read(total)
        if buffer is None or len(buffer) != total:
            raise InvalidFormat("Invalid binary dictionary (valueBuffer)")

        lexicon = Lexicon()
        cursor = 0
        for _ in range(num_items):
            num_values = _read_integer(stream, _U16)
            values = []
            for _ in range(num_values):
                if cursor >= len(buffer):
                    raise InvalidFormat("Invalid binary dictionary (valueBuffer)")
                end = buffer.find(b"\0", cursor)
                if end < 0:
                    end = len(buffer)
                try:
                    values.append(buffer[cursor:end].decode("utf-8"))
                except UnicodeDecodeError as exc:
                    raise InvalidFormat(
                        "Invalid binary dictionary (valueBuffer)"
                    ) from exc
                cursor += _read_integer(stream, _U16)
            lexicon.add(DictEntry("", values))
        return cls(lexicon)