# rwtxd

A pure-Python library for the RenderWare binary stream format as used by
texture dictionaries (`.txd`). It reads and writes chunk headers, strings,
native textures, texture dictionaries, texture references, the sky mipmap,
specular map and UV animation extensions, and geometry skins. It also
answers questions about Direct3D texture formats and reads INI settings
files.

It has no dependencies outside the standard library.

## Installation

```
pip install rwtxd
```

For running the tests:

```
pip install "rwtxd[test]"
```

## Reading a texture dictionary

```python
from rwtxd.stream import open_file, StreamAccess
from rwtxd.txd import TexDictionary

with open_file("vehicle.txd", StreamAccess.READ) as stream:
    txd = TexDictionary.read(stream)

for texture in txd.textures:
    print(texture.name, texture.width, texture.height, texture.total_levels())
```

`TextureNative` handles the D3D8 and D3D9 platforms. Each texture keeps its
palette (for 4- and 8-bit palettised rasters) and a list of `RasterLevel`
objects holding the raw pixel bytes of each mipmap level; D3D9 cube textures
hold six faces per level. The anisotropy extension is kept as its raw chunk
payload in `anisot`.

Errors in the stream are raised as `rwtxd.stream.StreamError`: running out
of data raises its subclass `EndOfStreamError`, and an unsupported platform
id raises `StreamError` itself. `open_file` raises `StreamError` when the
file cannot be opened.

## Writing

Most `write` methods take an optional `RwConfig` from `rwtxd.constants`. It
holds the library version and build number written into chunk headers
(by default `0x36003` and `0xFFFF`) and the target `Platform` (by default
`Platform.D3D9`).

```python
import io
from rwtxd.constants import RwConfig
from rwtxd.stream import RwStream

buffer = io.BytesIO()
txd.write(RwStream(buffer), RwConfig())
```

`stream_size()` returns the number of bytes an object takes in a stream,
chunk headers included. Data that cannot be written as it stands, such as a
name that is too long, a field out of range or a level count that does not
match the levels held, raises `ValueError`.

The platform in the config matters for some chunks: `SkyMipmap` is written
only for `Platform.PS2`, and a native `GeometrySkin` is written for
`Platform.D3D9` or `Platform.OGL`.

## Chunk access

`RwStream` wraps any binary file object:

- `read(size)`, `skip(offset)` and `write(data)` move raw bytes;
- `read_chunk_header()` returns a `ChunkHeader` with type, length, version and build;
- `find_chunk(chunk_type)` skips chunks until one of the given type is found;
- `write_chunk_header(chunk_type, size, version, build)` writes one.

`decode_library_version` and `encode_library_version` unpack and pack the
version field of a header, and `chunk_is_complex` tells which chunk types
contain other chunks. Chunk identifiers are in `rwtxd.constants.ChunkId`;
`make_chunk_id`, `object_id` and `vendor_id` compose and split them.

## Extensions, textures and skins

- `rwtxd.rwstring.RwString` reads and writes plain and unicode string chunks.
- `rwtxd.texture.Texture` is a texture reference: filtering, addressing, name,
  mask name, an optional `SkyMipmap` and raw anisotropy data.
- `rwtxd.extensions` has `SkyMipmap` (packed K/L values, with `set_k`,
  `set_l` and `from_uncompressed`), `SpecMap` (specular level and texture
  name) and `UVAnim` (animation slots and names, with `with_slots` and
  `setup_anim`).
- `rwtxd.skin.GeometrySkin` holds bone ids, per-vertex bone indices and
  weights and skin-to-bone matrices, in generic or native form;
  `find_used_bone_ids` recomputes the weights-per-vertex limit and the bone
  ids that the vertices use.

The extension and skin `read` methods read a chunk body whose header the
caller has already read.

## Texture formats

`rwtxd.d3dformats` names Direct3D formats (`d3d_format_name`) and raster
formats (`raster_format_name`), gives the format a native texture is stored
in (`texture_d3d_format`), gives bit depth, alpha and compression
(`format_depth`, `format_has_alpha`, `format_is_compressed`,
`format_compression`), maps formats to RenderWare raster formats
(`format_rw_format`), and inspects DXT1 block data (`Dxt1Block.parse_blocks`,
`dxt1_has_alpha_format`, `dxt1_has_alpha_pixels`).

## INI settings

`rwtxd.ini.IniReader` reads INI files with sections, `name=value` or
`name:value` pairs, `;` and `#` comments and indented continuation lines,
and offers case-insensitive typed lookups with defaults: `get`,
`get_integer`, `get_real` and `get_boolean`. `parse_error()` returns 0 on
success, the first line with an error, or -1 if the file could not be
opened. `IniReader.from_lines` parses text instead of a file, and
`parse_ini` / `parse_ini_file` return the raw entries as an
`IniParseResult`.

## What it does not do

- It has no command-line tool; it is a library only.
- It does not decode or encode pixels: raster levels are kept as raw bytes,
  and there is no conversion to or from image files.
- It does not read or write whole model files (frames, geometries, atomics,
  clumps or materials); only the texture, extension and skin chunks listed
  above.
- Native textures are supported for the D3D8 and D3D9 platforms only.