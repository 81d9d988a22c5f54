"""Direct3D surface formats and helpers for describing native texture data."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

from .constants import PlatformId, RasterFormat


def _fourcc(code):
    return int.from_bytes(code.encode("ascii"), "little")


class D3DFormat(enum.IntEnum):
    """Direct3D 9 surface formats."""

    UNKNOWN0 = 0

    R8G8B8 = 20
    A8R8G8B8 = 21
    X8R8G8B8 = 22
    R5G6B5 = 23
    X1R5G5B5 = 24
    A1R5G5B5 = 25
    A4R4G4B4 = 26
    R3G3B2 = 27
    A8 = 28
    A8R3G3B2 = 29
    X4R4G4B4 = 30
    A2B10G10R10 = 31
    A8B8G8R8 = 32
    X8B8G8R8 = 33
    G16R16 = 34
    A2R10G10B10 = 35
    A16B16G16R16 = 36

    A8P8 = 40
    P8 = 41

    L8 = 50
    A8L8 = 51
    A4L4 = 52

    V8U8 = 60
    L6V5U5 = 61
    X8L8V8U8 = 62
    Q8W8V8U8 = 63
    V16U16 = 64
    A2W10V10U10 = 67

    UYVY = _fourcc("UYVY")
    R8G8_B8G8 = _fourcc("RGBG")
    YUY2 = _fourcc("YUY2")
    G8R8_G8B8 = _fourcc("GRGB")
    DXT1 = _fourcc("DXT1")
    DXT2 = _fourcc("DXT2")
    DXT3 = _fourcc("DXT3")
    DXT4 = _fourcc("DXT4")
    DXT5 = _fourcc("DXT5")
    ATI1 = _fourcc("ATI1")
    ATI2 = _fourcc("ATI2")

    D16_LOCKABLE = 70
    D32 = 71
    D15S1 = 73
    D24S8 = 75
    D24X8 = 77
    D24X4S4 = 79
    D16 = 80

    D32F_LOCKABLE = 82
    D24FS8 = 83

    D32_LOCKABLE = 84
    S8_LOCKABLE = 85

    L16 = 81

    VERTEXDATA = 100
    INDEX16 = 101
    INDEX32 = 102

    Q16W16V16U16 = 110

    MULTI2_ARGB8 = _fourcc("MET1")

    R16F = 111
    G16R16F = 112
    A16B16G16R16F = 113

    R32F = 114
    G32R32F = 115
    A32B32G32R32F = 116

    CxV8U8 = 117

    A1 = 118
    A2B10G10R10_XR_BIAS = 119
    BINARYBUFFER = 199


F = D3DFormat

# Formats that have a printable name; the rest print as UNKNOWN<n>.
_NAMED_FORMATS = {
    fmt.value: fmt.name
    for fmt in (
        F.UNKNOWN0,
        F.R8G8B8, F.A8R8G8B8, F.X8R8G8B8, F.R5G6B5, F.X1R5G5B5, F.A1R5G5B5,
        F.A4R4G4B4, F.R3G3B2, F.A8, F.A8R3G3B2, F.X4R4G4B4, F.A2B10G10R10,
        F.A8B8G8R8, F.X8B8G8R8, F.G16R16, F.A2R10G10B10, F.A16B16G16R16,
        F.A8P8, F.P8,
        F.L8, F.A8L8, F.A4L4,
        F.V8U8, F.L6V5U5, F.X8L8V8U8, F.Q8W8V8U8, F.V16U16, F.A2W10V10U10,
        F.UYVY, F.R8G8_B8G8, F.YUY2, F.G8R8_G8B8,
        F.DXT1, F.DXT2, F.DXT3, F.DXT4, F.DXT5,
        F.D16_LOCKABLE, F.D32, F.D15S1, F.D24S8, F.D24X8, F.D24X4S4, F.D16,
        F.D32F_LOCKABLE, F.D24FS8,
        F.L16,
        F.VERTEXDATA, F.INDEX16, F.INDEX32,
        F.Q16W16V16U16,
        F.MULTI2_ARGB8,
        F.R16F, F.G16R16F, F.A16B16G16R16F,
        F.R32F, F.G32R32F, F.A32B32G32R32F,
        F.CxV8U8,
    )
}

_RASTER_FORMAT_NAMES = (
    "FORMATDEFAULT",
    "FORMAT1555",
    "FORMAT565",
    "FORMAT4444",
    "FORMATLUM8",
    "FORMAT8888",
    "FORMAT888",
    "FORMAT16",
    "FORMAT24",
    "FORMAT32",
    "FORMAT555",
)

_D3D8_PIXEL_FORMATS = {
    RasterFormat.F8888: F.A8R8G8B8,
    RasterFormat.F1555: F.A1R5G5B5,
    RasterFormat.F565: F.R5G6B5,
    RasterFormat.F4444: F.A4R4G4B4,
    RasterFormat.LUM8: F.L8,
    RasterFormat.F888: F.X8R8G8B8,
    RasterFormat.F555: F.X1R5G5B5,
}

_DXT_BY_NUMBER = {1: F.DXT1, 2: F.DXT2, 3: F.DXT3, 4: F.DXT4, 5: F.DXT5}
_NUMBER_BY_DXT = {fmt: number for number, fmt in _DXT_BY_NUMBER.items()}

_DEPTHS = {}
for _depth, _formats in (
    (1, (F.A1,)),
    (8, (F.A4L4, F.A8, F.R3G3B2, F.P8, F.L8)),
    (16, (
        F.A8L8, F.A8P8, F.R16F, F.A4R4G4B4, F.X4R4G4B4, F.A1R5G5B5, F.R5G6B5,
        F.X1R5G5B5, F.A8R3G3B2, F.L16, F.DXT1, F.DXT2, F.DXT3, F.DXT4, F.DXT5,
        F.ATI1, F.ATI2,
    )),
    (24, (F.R8G8B8,)),
    (32, (
        F.A8B8G8R8, F.A2B10G10R10, F.A2R10G10B10, F.R32F, F.X8R8G8B8,
        F.A8R8G8B8, F.X8B8G8R8, F.X8L8V8U8, F.V16U16, F.Q8W8V8U8, F.G16R16,
        F.G16R16F,
    )),
    (64, (F.A16B16G16R16, F.A16B16G16R16F, F.G32R32F, F.Q16W16V16U16)),
    (128, (F.A32B32G32R32F,)),
):
    for _fmt in _formats:
        _DEPTHS[_fmt] = _depth

_ALPHA_FORMATS = frozenset({
    F.A1, F.A4L4, F.A8, F.A8L8, F.A8P8, F.A4R4G4B4, F.A1R5G5B5, F.A8R3G3B2,
    F.DXT2, F.DXT3, F.DXT4, F.DXT5, F.A8B8G8R8, F.A8R8G8B8, F.A2B10G10R10,
    F.A2R10G10B10, F.A16B16G16R16, F.A16B16G16R16F, F.A32B32G32R32F,
})

_RW_FORMATS = {}
for _rw, _formats in (
    (RasterFormat.F8888, (F.A8B8G8R8, F.A8R8G8B8)),
    (RasterFormat.F888, (F.X8R8G8B8, F.R8G8B8)),
    (RasterFormat.F565, (F.R5G6B5, F.DXT1)),
    (RasterFormat.F555, (F.X1R5G5B5,)),
    (RasterFormat.F1555, (F.A1R5G5B5,)),
    (RasterFormat.F4444, (
        F.A4R4G4B4, F.X4R4G4B4, F.DXT2, F.DXT3, F.DXT4, F.DXT5, F.ATI1, F.ATI2,
    )),
    (RasterFormat.PAL8, (F.P8,)),
    (RasterFormat.LUM8, (F.L8,)),
    (RasterFormat.F16, (F.D16, F.D16_LOCKABLE, F.D15S1)),
    (RasterFormat.F32, (
        F.D32, F.D32_LOCKABLE, F.D24S8, F.D24X8, F.D24X4S4, F.D32F_LOCKABLE,
    )),
):
    for _fmt in _formats:
        _RW_FORMATS[_fmt] = _rw

_COMPRESSED_FORMATS = frozenset({F.DXT1, F.DXT2, F.DXT3, F.DXT4, F.DXT5, F.ATI1, F.ATI2})


def _as_format(value):
    try:
        return D3DFormat(value)
    except ValueError:
        return value


def d3d_format_name(fmt):
    """Printable name of a D3D format, or ``UNKNOWN<n>`` for other values."""
    value = int(fmt)
    return _NAMED_FORMATS.get(value, f"UNKNOWN{value}")


def raster_format_name(fmt):
    """Name of the pixel format in the low four bits of ``fmt``."""
    index = int(fmt) & 0xF
    if index < len(_RASTER_FORMAT_NAMES):
        return _RASTER_FORMAT_NAMES[index]
    return "INCORRECT_RASTER_FORMAT"


def texture_d3d_format(texture):
    """The D3D format a native texture's pixels are stored in."""
    if texture.platform_id == PlatformId.PCD3D8:
        dxt = _DXT_BY_NUMBER.get(texture.compression)
        if dxt is not None:
            return dxt
        pixel_format = texture.raster_format & RasterFormat.PIXELFORMATMASK
        return _D3D8_PIXEL_FORMATS.get(pixel_format, D3DFormat.UNKNOWN0)
    if texture.platform_id == PlatformId.PCD3D9:
        return _as_format(texture.d3d_format)
    return D3DFormat.UNKNOWN0


def format_depth(fmt):
    """Bits per pixel of a format, or 0 if unknown."""
    return _DEPTHS.get(fmt, 0)


def format_has_alpha(fmt):
    """True if the format carries an alpha channel."""
    return fmt in _ALPHA_FORMATS


def format_rw_format(fmt):
    """The raster format flag matching a D3D format, or 0 if there is none."""
    return _RW_FORMATS.get(fmt, 0)


def format_is_compressed(fmt):
    """True for block-compressed formats."""
    return fmt in _COMPRESSED_FORMATS


def format_compression(fmt):
    """The DXT number (1-5) of a format, or 0 if it is not DXT."""
    return _NUMBER_BY_DXT.get(fmt, 0)


_DXT1_BLOCK = struct.Struct("<HHI")


@dataclass(frozen=True)
class Dxt1Block:
    """One 4x4 DXT1 block: two 16-bit colours and 2-bit pixel indices."""

    color_0: int
    color_1: int
    indices: int

    @classmethod
    def parse_blocks(cls, data):
        """Split DXT1 data into blocks of 8 bytes."""
        if len(data) % _DXT1_BLOCK.size:
            raise ValueError(
                f"DXT1 data length {len(data)} is not a multiple of {_DXT1_BLOCK.size}"
            )
        return [cls(*fields) for fields in _DXT1_BLOCK.iter_unpack(bytes(data))]

    @property
    def uses_alpha_format(self):
        """A block whose first colour is not greater than the second is in 1-bit alpha mode."""
        return self.color_0 <= self.color_1

    def pixel_indices(self):
        """The 16 pixel indices of the block, in order."""
        return [(self.indices >> (pixel * 2)) & 3 for pixel in range(16)]


def dxt1_has_alpha_format(blocks):
    """True if any block is in 1-bit alpha mode."""
    return any(block.uses_alpha_format for block in blocks)


def dxt1_has_alpha_pixels(blocks):
    """True if any block in alpha mode has a transparent pixel."""
    return any(
        block.uses_alpha_format and 3 in block.pixel_indices()
        for block in blocks
    )