"""Texture chunks referenced by materials."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import ChunkId, RwConfig, TextureAddressMode, TextureFilterMode
from .extensions import SkyMipmap
from .rwstring import RwString

_HEADER_SIZE = 12
_STRUCT_SIZE = 4
_SKY_MIPMAP_SIZE = 4


@dataclass
class Texture:
    """A texture reference: filtering, addressing, names and extensions.

    The anisotropy extension is kept as its raw chunk payload.
    """

    filtering: int = TextureFilterMode.NAFILTERMODE
    u_addressing: int = TextureAddressMode.NATEXTUREADDRESS
    v_addressing: int = TextureAddressMode.NATEXTUREADDRESS
    generate_mipmaps: bool = False
    padding: int = 0
    name: RwString = field(default_factory=RwString)
    mask_name: RwString = field(default_factory=RwString)
    sky_mipmap: SkyMipmap | None = None
    anisot: bytes | None = None

    def _struct_bytes(self):
        if not 0 <= self.filtering <= 0xFF:
            raise ValueError(f"filtering out of range: {self.filtering}")
        for label, value in (("u addressing", self.u_addressing), ("v addressing", self.v_addressing)):
            if not 0 <= value <= 0xF:
                raise ValueError(f"{label} out of range: {value}")
        if not 0 <= self.padding <= 0xFF:
            raise ValueError(f"padding out of range: {self.padding}")
        return bytes([
            self.filtering,
            self.u_addressing | (self.v_addressing << 4),
            int(bool(self.generate_mipmaps)),
            self.padding,
        ])

    @classmethod
    def read(cls, stream):
        """Find the next TEXTURE chunk and read it."""
        stream.find_chunk(ChunkId.TEXTURE)
        stream.find_chunk(ChunkId.STRUCT)
        raw = stream.read(_STRUCT_SIZE)
        texture = cls(
            filtering=raw[0],
            u_addressing=raw[1] & 0xF,
            v_addressing=raw[1] >> 4,
            generate_mipmaps=bool(raw[2] & 1),
            padding=raw[3],
        )
        texture.name = RwString.read(stream)
        texture.mask_name = RwString.read(stream)
        remaining = stream.find_chunk(ChunkId.EXTENSION).length
        while remaining > 0:
            entry = stream.read_chunk_header()
            if entry.type == ChunkId.ANISOT:
                texture.anisot = stream.read(entry.length)
            elif entry.type == ChunkId.SKYMIPMAP:
                texture.sky_mipmap = SkyMipmap.read(stream)
                if entry.length > _SKY_MIPMAP_SIZE:
                    stream.skip(entry.length - _SKY_MIPMAP_SIZE)
            else:
                stream.skip(entry.length)
            remaining -= _HEADER_SIZE + entry.length
        return texture

    def _sky_size(self, config):
        return self.sky_mipmap.stream_size(config) if self.sky_mipmap else 0

    def _anisot_size(self):
        return _HEADER_SIZE + len(self.anisot) if self.anisot is not None else 0

    def write(self, stream, config=None):
        """Write the texture chunk with its struct, names and extensions."""
        config = config or RwConfig()
        struct_bytes = self._struct_bytes()
        stream.write_chunk_header(
            ChunkId.TEXTURE, self.stream_size(config) - _HEADER_SIZE, config.version, config.build
        )
        stream.write_chunk_header(ChunkId.STRUCT, _STRUCT_SIZE, config.version, config.build)
        stream.write(struct_bytes)
        self.name.write(stream, config)
        self.mask_name.write(stream, config)
        stream.write_chunk_header(
            ChunkId.EXTENSION, self._sky_size(config) + self._anisot_size(), config.version, config.build
        )
        if self.sky_mipmap:
            self.sky_mipmap.write(stream, config)
        if self.anisot is not None:
            stream.write_chunk_header(ChunkId.ANISOT, len(self.anisot), config.version, config.build)
            stream.write(self.anisot)
        return stream

    def stream_size(self, config=None):
        """Size of the written chunk, header included."""
        config = config or RwConfig()
        return (
            3 * _HEADER_SIZE
            + _STRUCT_SIZE
            + self.name.stream_size()
            + self.mask_name.stream_size()
            + self._sky_size(config)
            + self._anisot_size()
        )