import io
import struct

import pytest

from rwtxd.constants import ChunkId, RwConfig
from rwtxd.rwstring import RwString
from rwtxd.stream import EndOfStreamError, RwStream, encode_library_version


def _written(value, config=None):
    buf = io.BytesIO()
    value.write(RwStream(buf), config)
    return buf.getvalue()


def _read(data):
    return RwString.read(RwStream(io.BytesIO(data)))


def test_ascii_wire_bytes():
    expected = struct.pack("<III", ChunkId.STRING, 4, encode_library_version(0x36003, 0xFFFF)) + b"abc\x00"
    assert _written(RwString("abc")) == expected


def test_unicode_payload_bytes():
    data = _written(RwString("ab", is_unicode=True))
    chunk_type, length, _ = struct.unpack("<III", data[:12])
    assert chunk_type == ChunkId.UNICODESTRING
    assert length == 8
    assert data[12:] == b"a\x00b\x00\x00\x00\x00\x00"


def test_none_writes_four_zero_bytes():
    data = _written(RwString(None))
    assert data[12:] == b"\x00" * 4
    assert _read(data) == RwString("", False)


@pytest.mark.parametrize("text", [None, "", "a", "abc", "abcd", "wheel_rim", "x" * 31])
@pytest.mark.parametrize("unicode", [False, True])
def test_stream_size_matches_written(text, unicode):
    value = RwString(text, unicode)
    data = _written(value)
    assert value.stream_size() == len(data)
    assert (len(data) - 12) % 4 == 0


@pytest.mark.parametrize("text", ["a", "abcd", "vehiclegeneric256", "caf\u00e9"])
@pytest.mark.parametrize("unicode", [False, True])
def test_round_trip(text, unicode):
    assert _read(_written(RwString(text, unicode))) == RwString(text, unicode)


def test_written_with_config_version():
    config = RwConfig(version=0x34003, build=0)
    data = _written(RwString("abc"), config)
    assert struct.unpack("<I", data[8:12])[0] == encode_library_version(0x34003, 0)


def test_read_skips_preceding_chunks():
    buf = io.BytesIO()
    stream = RwStream(buf)
    stream.write_chunk_header(ChunkId.STRUCT, 3, 0x36003, 0xFFFF)
    stream.write(b"\x01\x02\x03")
    RwString("name").write(stream)
    buf.seek(0)
    assert RwString.read(RwStream(buf)).text == "name"


def test_read_stops_at_embedded_nul():
    data = struct.pack("<III", ChunkId.STRING, 8, encode_library_version(0x36003, 0xFFFF)) + b"ab\x00cdef\x00"
    assert _read(data).text == "ab"


def test_read_unterminated_unicode():
    data = struct.pack("<III", ChunkId.UNICODESTRING, 4, encode_library_version(0x36003, 0xFFFF)) + b"h\x00i\x00"
    assert _read(data) == RwString("hi", True)


def test_read_without_string_chunk_raises():
    buf = io.BytesIO()
    RwStream(buf).write_chunk_header(ChunkId.STRUCT, 0, 0x36003, 0xFFFF)
    buf.seek(0)
    with pytest.raises(EndOfStreamError):
        RwString.read(RwStream(buf))


def test_truncated_payload_raises():
    data = _written(RwString("abcdefgh"))[:-3]
    with pytest.raises(EndOfStreamError):
        _read(data)