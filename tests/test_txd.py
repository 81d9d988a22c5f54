import io
import struct

import pytest

from rwtxd.constants import ChunkId, PlatformId, RasterFormat, RwConfig
from rwtxd.stream import EndOfStreamError, RwStream
from rwtxd.texture_native import RasterLevel, TextureNative
from rwtxd.txd import TexDictionary


def make_texture(name, fill):
    return TextureNative(
        platform_id=PlatformId.PCD3D9,
        filter_mode=2,
        u_addressing=1,
        v_addressing=1,
        name=name,
        raster_format=RasterFormat.F8888,
        d3d_format=21,
        width=2,
        height=2,
        depth=32,
        num_levels=1,
        raster_type=4,
        levels=[RasterLevel(bytes([fill]) * 16)],
    )


def written(dictionary):
    buffer = io.BytesIO()
    dictionary.write(RwStream(buffer), RwConfig())
    return buffer.getvalue()


def read_back(data):
    return TexDictionary.read(RwStream(io.BytesIO(data)))


def test_empty_dictionary_size():
    assert TexDictionary().stream_size() == 40


def test_round_trip_textures():
    dictionary = TexDictionary([make_texture("one", 1), make_texture("two", 2)])
    result = read_back(written(dictionary))
    assert result.textures == dictionary.textures
    assert result.device_id == dictionary.device_id
    assert result.num_textures == 2


def test_struct_payload_bytes():
    dictionary = TexDictionary([make_texture("a", 0), make_texture("b", 0)])
    data = written(dictionary)
    assert data[:4] == struct.pack("<I", ChunkId.TEXDICTIONARY)
    assert data[12:16] == struct.pack("<I", ChunkId.STRUCT)
    assert data[24:28] == struct.pack("<HBb", 2, dictionary.device_id, 0)


def test_version_and_build_come_from_header():
    result = read_back(written(TexDictionary([make_texture("a", 3)])))
    config = RwConfig()
    assert (result.version, result.build) == (config.version, config.build)


def test_stream_size_matches_written_length():
    dictionary = TexDictionary([make_texture("a", 1), make_texture("b", 2)])
    assert dictionary.stream_size() == len(written(dictionary))


def test_ends_with_empty_extension():
    data = written(TexDictionary([make_texture("a", 1)]))
    assert data[-12:-8] == struct.pack("<I", ChunkId.EXTENSION)
    assert data[-8:-4] == struct.pack("<I", 0)


def test_leading_chunk_is_skipped():
    dictionary = TexDictionary([make_texture("a", 5)])
    buffer = io.BytesIO()
    stream = RwStream(buffer)
    stream.write_chunk_header(ChunkId.STRING, 4, 0x36003, 0xFFFF)
    stream.write(b"abc\0")
    dictionary.write(stream)
    assert read_back(buffer.getvalue()).textures == dictionary.textures


def test_truncated_dictionary_raises():
    data = written(TexDictionary([make_texture("a", 1)]))
    with pytest.raises(EndOfStreamError):
        read_back(data[:40])


def test_too_many_textures_raises():
    texture = make_texture("a", 1)
    dictionary = TexDictionary([texture] * 0x10000)
    with pytest.raises(ValueError):
        dictionary.write(RwStream(io.BytesIO()))


def test_device_id_out_of_range_raises():
    with pytest.raises(ValueError):
        TexDictionary(device_id=300).write(RwStream(io.BytesIO()))