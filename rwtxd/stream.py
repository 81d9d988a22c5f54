"""Binary stream access and chunk headers for RenderWare data."""

from __future__ import annotations

import enum
import io
import struct
from dataclasses import dataclass

from .constants import ChunkId

_HEADER = struct.Struct("<III")
_UINT32_MAX = 0xFFFFFFFF

_COMPLEX_CHUNKS = frozenset({
    ChunkId.CAMERA,
    ChunkId.TEXTURE,
    ChunkId.MATERIAL,
    ChunkId.MATLIST,
    ChunkId.ATOMICSECT,
    ChunkId.PLANESECT,
    ChunkId.WORLD,
    ChunkId.FRAMELIST,
    ChunkId.GEOMETRY,
    ChunkId.CLUMP,
    ChunkId.LIGHT,
    ChunkId.ATOMIC,
    ChunkId.GEOMETRYLIST,
})


class StreamError(Exception):
    """Raised when a stream cannot be read, written or opened."""


class EndOfStreamError(StreamError):
    """Raised when a stream ends before the requested data."""


class StreamAccess(enum.Enum):
    """How a file stream is opened."""

    READ = "rb"
    WRITE = "wb"
    APPEND = "ab"


def chunk_is_complex(chunk_type):
    """Return True for chunk types that contain other chunks."""
    return chunk_type in _COMPLEX_CHUNKS


def decode_library_version(raw):
    """Split the packed version field of a chunk header into (version, build)."""
    raw &= _UINT32_MAX
    if raw & 0xFFFF0000:
        version = ((raw >> 16) & 0x3F) | (((raw >> 14) & 0x3FF00) + 0x30000)
        return version, raw & 0xFFFF
    return raw << 8, 0


def encode_library_version(version, build):
    """Pack a library version and build number into a chunk header field."""
    packed = (build & 0xFFFF) | ((version & 0x3F) << 16) | (((version + 0x10000) << 14) & 0xFFC00000)
    return packed & _UINT32_MAX


@dataclass(frozen=True)
class ChunkHeader:
    """A decoded 12-byte chunk header."""

    type: int
    length: int
    version: int
    build: int

    @property
    def is_complex(self):
        return chunk_is_complex(self.type)


def _seekable(raw):
    checker = getattr(raw, "seekable", None)
    return bool(checker and checker())


class RwStream:
    """A binary stream of RenderWare chunks over a file-like object."""

    def __init__(self, raw):
        self.raw = raw
        self._owned = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Close the underlying file if this stream opened it."""
        if self._owned:
            self.raw.close()

    def read(self, size):
        """Read exactly ``size`` bytes."""
        if size < 0:
            raise ValueError("size must not be negative")
        data = self.raw.read(size) if size else b""
        if len(data) != size:
            raise EndOfStreamError(f"at the end of the stream: wanted {size} bytes, got {len(data)}")
        return bytes(data)

    def skip(self, offset):
        """Move forward ``offset`` bytes."""
        if offset < 0:
            raise ValueError("offset must not be negative")
        if not offset:
            return self
        if _seekable(self.raw):
            position = self.raw.tell()
            end = self.raw.seek(0, io.SEEK_END)
            if position + offset > end:
                self.raw.seek(position)
                raise EndOfStreamError("at the end of the stream")
            self.raw.seek(position + offset)
        else:
            self.read(offset)
        return self

    def write(self, data):
        """Write all of ``data``."""
        written = self.raw.write(data)
        if written is not None and written != len(data):
            raise StreamError("write error on stream")
        return self

    def read_chunk_header(self):
        """Read and decode one chunk header."""
        chunk_type, length, packed = _HEADER.unpack(self.read(_HEADER.size))
        version, build = decode_library_version(packed)
        return ChunkHeader(chunk_type, length, version, build)

    def find_chunk(self, chunk_type):
        """Skip chunks until one of ``chunk_type`` is found and return its header."""
        header = self.read_chunk_header()
        while header.type != chunk_type:
            self.skip(header.length)
            header = self.read_chunk_header()
        return header

    def write_chunk_header(self, chunk_type, size, version, build):
        """Write a chunk header."""
        if not 0 <= size <= _UINT32_MAX:
            raise ValueError(f"chunk size out of range: {size}")
        if not 0 <= chunk_type <= _UINT32_MAX:
            raise ValueError(f"chunk type out of range: {chunk_type}")
        return self.write(_HEADER.pack(chunk_type, size, encode_library_version(version, build)))


def open_file(path, access=StreamAccess.READ):
    """Open a file as an RwStream; the stream closes the file when closed."""
    access = StreamAccess(access)
    try:
        raw = open(path, access.value)
    except OSError as exc:
        raise StreamError(f"error opening the file {path}") from exc
    stream = RwStream(raw)
    stream._owned = True
    return stream