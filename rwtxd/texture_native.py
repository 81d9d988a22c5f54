"""Native (platform-specific) textures as stored in texture dictionaries."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .constants import ChunkId, PlatformId, RasterFormat, RwConfig
from .stream import StreamError

_HEADER_SIZE = 12
_NATIVE = struct.Struct("<II32s32sIIhhBBBB")
_UINT32 = struct.Struct("<I")
_NAME_SIZE = 32
_PAL4_SIZE = 128
_PAL8_SIZE = 1024
_CUBE_FACES = 6

_ALPHA_BIT = 0x01
_CUBE_BIT = 0x02
_AUTO_MIPMAPS_BIT = 0x04
_COMPRESSED_BIT = 0x08

_SUPPORTED = (PlatformId.PCD3D9, PlatformId.PCD3D8)


def _decode_name(raw):
    return raw.split(b"\0", 1)[0].decode("latin-1")


def _encode_name(name):
    encoded = name.encode("latin-1")
    if len(encoded) > _NAME_SIZE:
        raise ValueError(f"texture name longer than {_NAME_SIZE} bytes: {name!r}")
    return encoded


@dataclass
class RasterLevel:
    """Pixel data of one mipmap level (or one cube face level)."""

    pixels: bytes = b""

    @property
    def size(self):
        return len(self.pixels)


@dataclass
class TextureNative:
    """A native texture for the D3D8 or D3D9 platform.

    ``d3d_format`` holds the D3D format on D3D9; on D3D8 the same field is the
    has-alpha flag. ``compression`` is the DXT number on D3D8 and a set of flag
    bits (alpha, cube texture, auto mipmaps, compressed) on D3D9. The
    anisotropy extension is kept as its raw chunk payload.
    """

    platform_id: int = PlatformId.PCD3D9
    filter_mode: int = 0
    u_addressing: int = 0
    v_addressing: int = 0
    name: str = ""
    mask_name: str = ""
    raster_format: int = 0
    d3d_format: int = 0
    width: int = 0
    height: int = 0
    depth: int = 0
    num_levels: int = 0
    raster_type: int = 0
    compression: int = 0
    palette: bytes = b""
    levels: list = field(default_factory=list)
    anisot: bytes | None = None
    addressing_high: int = 0

    @property
    def has_alpha(self):
        """The D3D8 has-alpha flag (shares storage with ``d3d_format``)."""
        return bool(self.d3d_format)

    @property
    def alpha(self):
        return bool(self.compression & _ALPHA_BIT)

    @property
    def cube_texture(self):
        return bool(self.compression & _CUBE_BIT)

    @property
    def auto_mipmaps(self):
        return bool(self.compression & _AUTO_MIPMAPS_BIT)

    @property
    def compressed(self):
        return bool(self.compression & _COMPRESSED_BIT)

    def total_levels(self):
        """Number of raster levels stored: cube textures hold six faces on D3D9."""
        if self.platform_id == PlatformId.PCD3D9:
            return self.num_levels * (_CUBE_FACES if self.cube_texture else 1)
        if self.platform_id == PlatformId.PCD3D8:
            return self.num_levels
        raise ValueError(f"native texture: platform id {self.platform_id} is not supported")

    def _palette_size(self):
        if self.raster_format & RasterFormat.PAL4:
            return _PAL4_SIZE
        if self.raster_format & RasterFormat.PAL8:
            return _PAL8_SIZE
        return 0

    @classmethod
    def read(cls, stream):
        """Find the next TEXTURENATIVE chunk and read it."""
        stream.find_chunk(ChunkId.TEXTURENATIVE)
        stream.find_chunk(ChunkId.STRUCT)
        (
            platform_id, addressing, name, mask_name, raster_format, d3d_format,
            width, height, depth, num_levels, raster_type, compression,
        ) = _NATIVE.unpack(stream.read(_NATIVE.size))
        if platform_id not in _SUPPORTED:
            raise StreamError(f"reading native texture: platform id {platform_id} is not supported")
        texture = cls(
            platform_id=platform_id,
            filter_mode=addressing & 0xFF,
            u_addressing=(addressing >> 8) & 0xF,
            v_addressing=(addressing >> 12) & 0xF,
            name=_decode_name(name),
            mask_name=_decode_name(mask_name),
            raster_format=raster_format,
            d3d_format=d3d_format,
            width=width,
            height=height,
            depth=depth,
            num_levels=num_levels,
            raster_type=raster_type,
            compression=compression,
            addressing_high=addressing >> 16,
        )
        texture.palette = stream.read(texture._palette_size())
        levels = []
        for _ in range(texture.total_levels()):
            (size,) = _UINT32.unpack(stream.read(_UINT32.size))
            levels.append(RasterLevel(stream.read(size)))
        texture.levels = levels

        remaining = stream.find_chunk(ChunkId.EXTENSION).length
        while remaining > 0:
            entry = stream.read_chunk_header()
            if entry.type == ChunkId.ANISOT:
                texture.anisot = stream.read(entry.length)
            else:
                stream.skip(entry.length)
            remaining -= _HEADER_SIZE + entry.length
        return texture

    def _check(self):
        expected = self.total_levels()
        if len(self.levels) != expected:
            raise ValueError(f"expected {expected} raster levels, have {len(self.levels)}")
        palette_size = self._palette_size()
        if len(self.palette) != palette_size:
            raise ValueError(f"expected a palette of {palette_size} bytes, have {len(self.palette)}")

    def _header_bytes(self):
        if not 0 <= self.filter_mode <= 0xFF:
            raise ValueError(f"filter mode out of range: {self.filter_mode}")
        for label, value in (("u addressing", self.u_addressing), ("v addressing", self.v_addressing)):
            if not 0 <= value <= 0xF:
                raise ValueError(f"{label} out of range: {value}")
        addressing = (
            self.filter_mode
            | (self.u_addressing << 8)
            | (self.v_addressing << 12)
            | ((self.addressing_high & 0xFFFF) << 16)
        )
        try:
            return _NATIVE.pack(
                self.platform_id, addressing,
                _encode_name(self.name), _encode_name(self.mask_name),
                self.raster_format, self.d3d_format,
                self.width, self.height, self.depth,
                self.num_levels, self.raster_type, self.compression,
            )
        except struct.error as exc:
            raise ValueError(f"native texture field out of range: {exc}") from exc

    def _anisot_size(self):
        return _HEADER_SIZE + len(self.anisot) if self.anisot is not None else 0

    def _body(self):
        self._check()
        parts = [self._header_bytes(), bytes(self.palette)]
        for level in self.levels:
            parts.append(_UINT32.pack(level.size))
            parts.append(bytes(level.pixels))
        return b"".join(parts)

    def write(self, stream, config=None):
        """Write the TEXTURENATIVE chunk with its struct and extensions."""
        config = config or RwConfig()
        body = self._body()
        stream.write_chunk_header(
            ChunkId.TEXTURENATIVE, self.stream_size() - _HEADER_SIZE, config.version, config.build
        )
        stream.write_chunk_header(ChunkId.STRUCT, len(body), config.version, config.build)
        stream.write(body)
        stream.write_chunk_header(ChunkId.EXTENSION, self._anisot_size(), config.version, config.build)
        if self.anisot is not None:
            stream.write_chunk_header(ChunkId.ANISOT, len(self.anisot), config.version, config.build)
            stream.write(self.anisot)
        return stream

    def stream_size(self):
        """Size of the written chunk, header included."""
        self._check()
        size = 3 * _HEADER_SIZE + _NATIVE.size + self._palette_size() + self._anisot_size()
        return size + sum(_UINT32.size + level.size for level in self.levels)