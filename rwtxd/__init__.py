"""Read and write RenderWare binary streams: texture dictionaries, textures, extensions, skins and INI settings."""

__version__ = "0.1.0"
__all__ = [
    "constants",
    "stream",
    "rwstring",
    "ini",
    "extensions",
    "skin",
    "texture",
    "texture_native",
    "txd",
    "d3dformats",
]