"""String chunks (plain and unicode)."""

from __future__ import annotations

import itertools
import struct
from dataclasses import dataclass

from .constants import ChunkId, RwConfig

_HEADER_SIZE = 12


def _decode(raw):
    return raw.split(b"\0", 1)[0].decode("latin-1")


@dataclass
class RwString:
    """A string stored as a STRING or UNICODESTRING chunk."""

    text: str | None = None
    is_unicode: bool = False

    @classmethod
    def read(cls, stream):
        """Read the next string chunk, skipping any other chunks before it."""
        header = stream.read_chunk_header()
        while header.type not in (ChunkId.STRING, ChunkId.UNICODESTRING):
            stream.skip(header.length)
            header = stream.read_chunk_header()
        data = stream.read(header.length)
        if header.type == ChunkId.UNICODESTRING:
            even = data[: len(data) // 2 * 2]
            units = (unit for (unit,) in struct.iter_unpack("<H", even))
            narrowed = bytes(unit & 0xFF for unit in itertools.takewhile(bool, units))
            return cls(_decode(narrowed), True)
        return cls(_decode(data), False)

    def _raw_bytes(self):
        return (self.text or "").split("\0", 1)[0].encode("latin-1")

    def _payload_length(self, count):
        if self.is_unicode:
            return (count * 2 + 4) & ~3
        return (count + 4) & ~3

    def write(self, stream, config=None):
        """Write the string as a chunk."""
        config = config or RwConfig()
        raw = self._raw_bytes()
        length = self._payload_length(len(raw))
        if self.is_unicode:
            chunk_type = ChunkId.UNICODESTRING
            # Characters are stored as signed bytes widened to 16 bits.
            body = b"".join(struct.pack("<H", b if b < 0x80 else 0xFF00 | b) for b in raw)
        else:
            chunk_type = ChunkId.STRING
            body = raw
        stream.write_chunk_header(chunk_type, length, config.version, config.build)
        stream.write(body.ljust(length, b"\0"))
        return stream

    def stream_size(self):
        """Size of the written chunk, header included."""
        return _HEADER_SIZE + self._payload_length(len(self._raw_bytes()))