"""Texture and material extension chunks: sky mipmap, specular map, UV animation."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .constants import ChunkId, Platform, RwConfig

_HEADER_SIZE = 12
_UINT32 = struct.Struct("<I")
_SPECMAP = struct.Struct("<f24s")

_K_MASK = 0xFFF
_L_SHIFT = 12
_L_MASK = 0x3 << _L_SHIFT
_K_MIN = -2048
_K_MAX = 2047
_L_MAX = 3

_SPEC_NAME_SIZE = 24
_ANIM_NAME_SIZE = 32
_MAX_ANIM_SLOTS = 8


def _decode_name(raw):
    return raw.split(b"\0", 1)[0].decode("latin-1")


def _pack_name(name, size):
    encoded = name.encode("latin-1")
    if len(encoded) > size:
        raise ValueError(f"name longer than {size} bytes: {name!r}")
    return encoded.ljust(size, b"\0")


@dataclass
class SkyMipmap:
    """PS2 mipmap K/L parameters packed into one 32-bit value."""

    raw: int = 0
    enabled: bool = True

    @classmethod
    def from_uncompressed(cls, k, l):
        """Create an extension from a real K value and an L value."""
        mipmap = cls()
        mipmap.set_k(k)
        mipmap.set_l(l)
        return mipmap

    @property
    def k_value(self):
        """The stored K value (signed 12-bit fixed point, 4 fraction bits)."""
        value = self.raw & _K_MASK
        return value - 0x1000 if value & 0x800 else value

    @property
    def l_value(self):
        """The stored L value (0 to 3)."""
        return (self.raw & _L_MASK) >> _L_SHIFT

    @property
    def k(self):
        """K as a real number; negative stored values read as 0."""
        value = self.k_value
        return 0.0 if value < 0 else value * 0.0625

    def set_k(self, k):
        """Store K, clamped to the range the field can hold."""
        value = max(_K_MIN, min(_K_MAX, int(k * 16.0)))
        self.raw = (self.raw & ~_K_MASK & 0xFFFFFFFF) | (value & _K_MASK)

    def set_l(self, l):
        """Store L, clamped to 3."""
        if l < 0:
            raise ValueError(f"L must not be negative: {l}")
        value = min(l, _L_MAX)
        self.raw = (self.raw & ~_L_MASK & 0xFFFFFFFF) | (value << _L_SHIFT)

    @classmethod
    def read(cls, stream):
        """Read the chunk body (the header has already been read)."""
        (raw,) = _UINT32.unpack(stream.read(_UINT32.size))
        return cls(raw, True)

    def write(self, stream, config=None):
        """Write the chunk; only written for the PS2 platform."""
        config = config or RwConfig()
        if self.enabled and config.platform is Platform.PS2:
            stream.write_chunk_header(ChunkId.SKYMIPMAP, _UINT32.size, config.version, config.build)
            stream.write(_UINT32.pack(self.raw & 0xFFFFFFFF))
        return stream

    def stream_size(self, config=None):
        """Size of the written chunk, header included."""
        config = config or RwConfig()
        if self.enabled and config.platform is Platform.PS2:
            return _HEADER_SIZE + _UINT32.size
        return 0


@dataclass
class SpecMap:
    """Material specular level and specular texture name."""

    specularity: float = 0.0
    texture_name: str = ""
    enabled: bool = True

    @classmethod
    def read(cls, stream):
        """Read the chunk body (the header has already been read)."""
        specularity, name = _SPECMAP.unpack(stream.read(_SPECMAP.size))
        return cls(specularity, _decode_name(name), True)

    def write(self, stream, config=None):
        """Write the chunk if enabled; the name is cut to 24 bytes."""
        config = config or RwConfig()
        if self.enabled:
            stream.write_chunk_header(
                ChunkId.SPECMAP, self.stream_size() - _HEADER_SIZE, config.version, config.build
            )
            name = self.texture_name.encode("latin-1")[:_SPEC_NAME_SIZE]
            stream.write(_SPECMAP.pack(self.specularity, name))
        return stream

    def stream_size(self):
        """Size of the written chunk, header included."""
        return _HEADER_SIZE + _SPECMAP.size if self.enabled else 0


@dataclass
class UVAnim:
    """Material UV animation slots and their animation names."""

    slots_map: int = 0
    anim_names: list = field(default_factory=list)
    enabled: bool = True
    current_slot: int = 0

    @classmethod
    def with_slots(cls, num_slots):
        """Create an extension with room for up to 8 animation names."""
        if num_slots < 0:
            raise ValueError(f"number of slots must not be negative: {num_slots}")
        return cls(anim_names=[""] * min(num_slots, _MAX_ANIM_SLOTS))

    def setup_anim(self, slot, anim_name):
        """Mark ``slot`` used and store ``anim_name`` in the next free name."""
        if not 0 <= slot < 32:
            raise ValueError(f"slot out of range: {slot}")
        if len(anim_name.encode("latin-1")) >= _ANIM_NAME_SIZE:
            raise ValueError(f"animation name too long: {anim_name!r}")
        if self.current_slot >= len(self.anim_names):
            raise IndexError("no free animation name slot")
        self.slots_map |= 1 << slot
        self.anim_names[self.current_slot] = anim_name
        self.current_slot += 1

    @classmethod
    def read(cls, stream):
        """Read the chunk body (the UVANIM header has already been read)."""
        stream.find_chunk(ChunkId.STRUCT)
        (slots_map,) = _UINT32.unpack(stream.read(_UINT32.size))
        count = bin(slots_map & 0xFF).count("1")
        data = stream.read(count * _ANIM_NAME_SIZE)
        names = [
            _decode_name(data[offset:offset + _ANIM_NAME_SIZE])
            for offset in range(0, len(data), _ANIM_NAME_SIZE)
        ]
        return cls(slots_map, names, True)

    def write(self, stream, config=None):
        """Write the chunk if enabled."""
        config = config or RwConfig()
        if self.enabled:
            size = self.stream_size()
            stream.write_chunk_header(ChunkId.UVANIM, size - _HEADER_SIZE, config.version, config.build)
            stream.write_chunk_header(ChunkId.STRUCT, size - 2 * _HEADER_SIZE, config.version, config.build)
            stream.write(_UINT32.pack(self.slots_map & 0xFFFFFFFF))
            stream.write(b"".join(_pack_name(name, _ANIM_NAME_SIZE) for name in self.anim_names))
        return stream

    def stream_size(self):
        """Size of the written chunk, header included."""
        if self.enabled:
            return 2 * _HEADER_SIZE + _UINT32.size + len(self.anim_names) * _ANIM_NAME_SIZE
        return 0