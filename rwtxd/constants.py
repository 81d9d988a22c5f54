"""Chunk identifiers, enumerations and writer settings for RenderWare streams."""

from __future__ import annotations

import enum
from dataclasses import dataclass


def make_chunk_id(vendor, chunk):
    """Combine a 24-bit vendor id and an 8-bit object id into a chunk id."""
    return ((vendor & 0xFFFFFF) << 8) | (chunk & 0xFF)


def object_id(chunk_id):
    """Return the object part (low byte) of a chunk id."""
    return chunk_id & 0xFF


def vendor_id(chunk_id):
    """Return the vendor part of a chunk id."""
    return (chunk_id >> 8) & 0xFFFFFF


class ChunkId(enum.IntEnum):
    """Chunk types found in RenderWare binary streams."""

    NAOBJECT = 0x00
    STRUCT = 0x01
    STRING = 0x02
    EXTENSION = 0x03
    CAMERA = 0x05
    TEXTURE = 0x06
    MATERIAL = 0x07
    MATLIST = 0x08
    ATOMICSECT = 0x09
    PLANESECT = 0x0A
    WORLD = 0x0B
    SPLINE = 0x0C
    MATRIX = 0x0D
    FRAMELIST = 0x0E
    GEOMETRY = 0x0F
    CLUMP = 0x10
    LIGHT = 0x12
    UNICODESTRING = 0x13
    ATOMIC = 0x14
    TEXTURENATIVE = 0x15
    TEXDICTIONARY = 0x16
    ANIMDATABASE = 0x17
    IMAGE = 0x18
    SKINANIMATION = 0x19
    GEOMETRYLIST = 0x1A
    ANIMANIMATION = 0x1B
    HANIMANIMATION = 0x1B
    TEAM = 0x1C
    CROWD = 0x1D
    DMORPHANIMATION = 0x1E
    RIGHTTORENDER = 0x1F
    MTEFFECTNATIVE = 0x20
    MTEFFECTDICT = 0x21
    TEAMDICTIONARY = 0x22
    PITEXDICTIONARY = 0x23
    TOC = 0x24
    PRTSTDGLOBALDATA = 0x25
    ALTPIPE = 0x26
    PIPEDS = 0x27
    PATCHMESH = 0x28
    CHUNKGROUPSTART = 0x29
    CHUNKGROUPEND = 0x2A
    UVANIMDICT = 0x2B
    COLLTREE = 0x2C
    ENVIRONMENT = 0x2D
    # Plugin chunks (toolkit vendor and game-specific).
    SKYMIPMAP = 0x110
    SKIN = 0x116
    ANISOT = 0x127
    UVANIM = 0x135
    SPECMAP = 0x253F2F6


class PlatformId(enum.IntEnum):
    """Platform identifiers stored inside native chunks."""

    PCD3D7 = 1
    PCOGL = 2
    MAC = 3
    PS2 = 4
    XBOX = 5
    GAMECUBE = 6
    SOFTRAS = 7
    PCD3D8 = 8
    PCD3D9 = 9


class Platform(enum.Enum):
    """Target platform used when writing native data."""

    D3D8 = "d3d8"
    D3D9 = "d3d9"
    OGL = "ogl"
    PS2 = "ps2"


class GameVersion(enum.Enum):
    """Game the data is meant for."""

    GTA3 = "gta3"
    GTAVC = "gtavc"
    GTASA = "gtasa"


class RasterFormat(enum.IntEnum):
    """Raster format flags and masks."""

    DEFAULT = 0x0000
    F1555 = 0x0100
    F565 = 0x0200
    F4444 = 0x0300
    LUM8 = 0x0400
    F8888 = 0x0500
    F888 = 0x0600
    F16 = 0x0700
    F24 = 0x0800
    F32 = 0x0900
    F555 = 0x0A00
    AUTOMIPMAP = 0x1000
    PAL8 = 0x2000
    PAL4 = 0x4000
    MIPMAP = 0x8000
    PIXELFORMATMASK = 0x0F00
    MASK = 0xFF00


class TextureFilterMode(enum.IntEnum):
    """Texture filtering modes."""

    NAFILTERMODE = 0
    NEAREST = 1
    LINEAR = 2
    MIPNEAREST = 3
    MIPLINEAR = 4
    LINEARMIPNEAREST = 5
    LINEARMIPLINEAR = 6


class TextureAddressMode(enum.IntEnum):
    """Texture addressing modes."""

    NATEXTUREADDRESS = 0
    WRAP = 1
    MIRROR = 2
    CLAMP = 3
    BORDER = 4


@dataclass(frozen=True)
class RwConfig:
    """Settings that affect how data is written and read."""

    game_version: GameVersion = GameVersion.GTASA
    platform: Platform = Platform.D3D9
    version: int = 0x36003
    build: int = 0xFFFF
    is_mobile: bool = True