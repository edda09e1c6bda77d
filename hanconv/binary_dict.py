"""A compact binary form of a lexicon that loads without parsing text.

Layout, all integers unsigned 64-bit little-endian:

* number of entries
* total length of the key buffer, then the buffer of NUL-terminated keys
* total length of the value buffer, then the buffer of NUL-terminated values
* for each entry: its number of values, the offset of its key, and the
  offset of each of its values
"""

from __future__ import annotations

import struct
from collections.abc import Iterable
from typing import BinaryIO

from .entry import DictEntry
from .lexicon import InvalidFormat, Lexicon

_SIZE = struct.Struct("<Q")


def _encode(text: str) -> bytes:
    data = text.encode("utf-8")
    if b"\0" in data:
        raise InvalidFormat(f"Keys and values must not contain NUL: {text!r}")
    return data + b"\0"


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise InvalidFormat(f"Invalid binary dictionary ({what})")
    return data


def _read_size(stream: BinaryIO, what: str) -> int:
    return _SIZE.unpack(_read_exact(stream, _SIZE.size, what))[0]


def _string_at(buffer: bytes, offset: int, what: str) -> str:
    if offset >= len(buffer):
        raise InvalidFormat(f"Invalid binary dictionary ({what})")
    end = buffer.find(b"\0", offset)
    if end < 0:
        end = len(buffer)
    try:
        return buffer[offset:end].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidFormat(f"Invalid binary dictionary ({what})") from exc


class BinaryDict:
    """A lexicon that can be written to and read from the binary layout."""

    def __init__(self, lexicon: Lexicon | Iterable[DictEntry]) -> None:
        self._lexicon = lexicon if isinstance(lexicon, Lexicon) else Lexicon(lexicon)

    @property
    def lexicon(self) -> Lexicon:
        """The entries held."""
        return self._lexicon

    @property
    def key_max_length(self) -> int:
        """Length of the longest key in characters."""
        return max((entry.key_length for entry in self._lexicon), default=0)

    def serialize(self, stream: BinaryIO) -> None:
        """Write the lexicon to a binary stream."""
        key_buffer = bytearray()
        value_buffer = bytearray()
        records: list[tuple[int, int, list[int]]] = []
        for entry in self._lexicon:
            key_offset = len(key_buffer)
            key_buffer += _encode(entry.key)
            value_offsets = []
            for value in entry.values:
                value_offsets.append(len(value_buffer))
                value_buffer += _encode(value)
            records.append((entry.num_values, key_offset, value_offsets))

        stream.write(_SIZE.pack(len(records)))
        stream.write(_SIZE.pack(len(key_buffer)))
        stream.write(bytes(key_buffer))
        stream.write(_SIZE.pack(len(value_buffer)))
        stream.write(bytes(value_buffer))
        for num_values, key_offset, value_offsets in records:
            stream.write(_SIZE.pack(num_values))
            stream.write(_SIZE.pack(key_offset))
            for offset in value_offsets:
                stream.write(_SIZE.pack(offset))

    @classmethod
    def load(cls, stream: BinaryIO) -> BinaryDict:
        """Read a lexicon written by :meth:`serialize`."""
        num_items = _read_size(stream, "numItems")
        key_total = _read_size(stream, "keyTotalLength")
        key_buffer = _read_exact(stream, key_total, "keyBuffer")
        value_total = _read_size(stream, "valueTotalLength")
        value_buffer = _read_exact(stream, value_total, "valueBuffer")

        lexicon = Lexicon()
        for _ in range(num_items):
            num_values = _read_size(stream, "numValues")
            key = _string_at(key_buffer, _read_size(stream, "keyOffset"), "keyOffset")
            values = [
                _string_at(
                    value_buffer, _read_size(stream, "valueOffset"), "valueOffset"
                )
                for _ in range(num_values)
            ]
            lexicon.add(DictEntry(key, values))
        return cls(lexicon)