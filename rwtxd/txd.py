"""Texture dictionaries: lists of native textures."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .constants import ChunkId, RwConfig
from .texture_native import TextureNative

_HEADER_SIZE = 12
_DICT_STRUCT = struct.Struct("<HBb")
_MAX_TEXTURES = 0xFFFF


@dataclass
class TexDictionary:
    """A texture dictionary holding native textures."""

    textures: list = field(default_factory=list)
    device_id: int = 2
    zero: int = 0
    version: int = 0
    build: int = 0

    @property
    def num_textures(self):
        return len(self.textures)

    @classmethod
    def read(cls, stream):
        """Find the next TEXDICTIONARY chunk and read it with its textures."""
        header = stream.find_chunk(ChunkId.TEXDICTIONARY)
        stream.find_chunk(ChunkId.STRUCT)
        num_textures, device_id, zero = _DICT_STRUCT.unpack(stream.read(_DICT_STRUCT.size))
        textures = [TextureNative.read(stream) for _ in range(num_textures)]
        return cls(textures, device_id, zero, header.version, header.build)

    def write(self, stream, config=None):
        """Write the dictionary, its textures and an empty extension."""
        config = config or RwConfig()
        if self.num_textures > _MAX_TEXTURES:
            raise ValueError(f"too many textures: {self.num_textures}")
        try:
            struct_bytes = _DICT_STRUCT.pack(self.num_textures, self.device_id, self.zero)
        except struct.error as exc:
            raise ValueError(f"texture dictionary field out of range: {exc}") from exc
        stream.write_chunk_header(
            ChunkId.TEXDICTIONARY, self.stream_size() - _HEADER_SIZE, config.version, config.build
        )
        stream.write_chunk_header(ChunkId.STRUCT, _DICT_STRUCT.size, config.version, config.build)
        stream.write(struct_bytes)
        for texture in self.textures:
            texture.write(stream, config)
        stream.write_chunk_header(ChunkId.EXTENSION, 0, config.version, config.build)
        return stream

    def stream_size(self):
        """Size of the written chunk, header included."""
        return 3 * _HEADER_SIZE + _DICT_STRUCT.size + sum(t.stream_size() for t in self.textures)