import io
import struct

import pytest

from rwtxd.constants import ChunkId
from rwtxd.stream import (
    ChunkHeader,
    EndOfStreamError,
    RwStream,
    StreamAccess,
    StreamError,
    chunk_is_complex,
    decode_library_version,
    encode_library_version,
    open_file,
)


class _Pipe(io.RawIOBase):
    def __init__(self, data):
        self._buf = io.BytesIO(data)

    def readable(self):
        return True

    def readinto(self, b):
        chunk = self._buf.read(len(b))
        b[: len(chunk)] = chunk
        return len(chunk)


def test_encode_known_version():
    assert encode_library_version(0x36003, 0xFFFF) == 0x1803FFFF


def test_decode_known_version():
    assert decode_library_version(0x1803FFFF) == (0x36003, 0xFFFF)


def test_decode_old_style_version():
    assert decode_library_version(0x310) == (0x31000, 0)


@pytest.mark.parametrize("version,build", [(0x34003, 0), (0x35000, 7), (0x36003, 0xFFFF), (0x33002, 0x1234)])
def test_version_round_trip(version, build):
    assert decode_library_version(encode_library_version(version, build)) == (version, build)


def test_header_wire_bytes():
    buf = io.BytesIO()
    RwStream(buf).write_chunk_header(ChunkId.TEXDICTIONARY, 4, 0x36003, 0xFFFF)
    assert buf.getvalue() == struct.pack("<III", 0x16, 4, encode_library_version(0x36003, 0xFFFF))


def test_header_round_trip():
    buf = io.BytesIO()
    RwStream(buf).write_chunk_header(ChunkId.TEXTURE, 40, 0x36003, 0xFFFF)
    buf.seek(0)
    header = RwStream(buf).read_chunk_header()
    assert header == ChunkHeader(ChunkId.TEXTURE, 40, 0x36003, 0xFFFF)
    assert header.is_complex


def test_write_header_rejects_negative_size():
    with pytest.raises(ValueError):
        RwStream(io.BytesIO()).write_chunk_header(ChunkId.STRUCT, -1, 0x36003, 0)


def test_read_exact_and_short():
    stream = RwStream(io.BytesIO(b"abcdef"))
    assert stream.read(4) == b"abcd"
    with pytest.raises(EndOfStreamError):
        stream.read(4)


def test_short_header_raises():
    with pytest.raises(EndOfStreamError):
        RwStream(io.BytesIO(b"\x01\x00")).read_chunk_header()


def test_skip_within_and_beyond_end():
    raw = io.BytesIO(b"0123456789")
    stream = RwStream(raw)
    stream.skip(3)
    assert stream.read(2) == b"34"
    with pytest.raises(EndOfStreamError):
        stream.skip(100)
    assert stream.read(1) == b"5"


def test_skip_on_non_seekable():
    stream = RwStream(_Pipe(b"0123456789"))
    stream.skip(6)
    assert stream.read(2) == b"67"
    with pytest.raises(EndOfStreamError):
        stream.skip(5)


def test_find_chunk_skips_other_chunks():
    buf = io.BytesIO()
    writer = RwStream(buf)
    writer.write_chunk_header(ChunkId.STRING, 4, 0x36003, 0xFFFF)
    writer.write(b"xyz\x00")
    writer.write_chunk_header(ChunkId.STRUCT, 2, 0x36003, 0xFFFF)
    writer.write(b"ok")
    buf.seek(0)
    reader = RwStream(buf)
    header = reader.find_chunk(ChunkId.STRUCT)
    assert header.length == 2
    assert reader.read(2) == b"ok"


def test_find_missing_chunk_raises():
    buf = io.BytesIO()
    RwStream(buf).write_chunk_header(ChunkId.STRING, 0, 0x36003, 0xFFFF)
    buf.seek(0)
    with pytest.raises(EndOfStreamError):
        RwStream(buf).find_chunk(ChunkId.TEXDICTIONARY)


@pytest.mark.parametrize("chunk,expected", [
    (ChunkId.TEXTURE, True),
    (ChunkId.GEOMETRYLIST, True),
    (ChunkId.STRUCT, False),
    (ChunkId.TEXDICTIONARY, False),
])
def test_chunk_is_complex(chunk, expected):
    assert chunk_is_complex(chunk) is expected


def test_open_file_write_append_read(tmp_path):
    path = tmp_path / "data.bin"
    with open_file(path, StreamAccess.WRITE) as stream:
        stream.write_chunk_header(ChunkId.STRING, 4, 0x36003, 0xFFFF).write(b"abcd")
    assert stream.raw.closed
    with open_file(path, StreamAccess.APPEND) as stream:
        stream.write_chunk_header(ChunkId.STRUCT, 2, 0x36003, 0xFFFF).write(b"zz")
    with open_file(path) as stream:
        header = stream.find_chunk(ChunkId.STRUCT)
        assert header.length == 2
        assert stream.read(2) == b"zz"


def test_open_missing_file(tmp_path):
    with pytest.raises(StreamError):
        open_file(tmp_path / "missing.bin", StreamAccess.READ)


def test_open_invalid_access(tmp_path):
    with pytest.raises(ValueError):
        open_file(tmp_path / "x.bin", "bogus")