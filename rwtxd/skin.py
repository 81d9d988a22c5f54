"""Skinning data attached to geometry: bone weights, indices and matrices."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .constants import ChunkId, Platform, PlatformId, RwConfig
from .stream import StreamError

_HEADER_SIZE = 12
_SKIN_HEAD = struct.Struct("<4B")
_INDICES = struct.Struct("<4B")
_WEIGHTS = struct.Struct("<4f")
_MATRIX = struct.Struct("<16f")
_SPLIT = struct.Struct("<3I")
_UINT32 = struct.Struct("<I")
_NATIVE_HEAD = struct.Struct("<II")

_MAX_WEIGHTS = 4
_ZERO_MATRIX = (0.0,) * 16
_ZERO_INDICES = (0,) * 4
_ZERO_WEIGHTS = (0.0,) * 4


def _check_byte(name, value):
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must fit in one byte: {value}")


def _unpack_all(layout, data):
    return [tuple(item) for item in layout.iter_unpack(data)]


@dataclass
class GeometrySkin:
    """Skin extension of a geometry, in generic or native (D3D9/OpenGL) form."""

    num_bones: int = 0
    num_bone_ids: int = 0
    max_weights_per_vertex: int = _MAX_WEIGHTS
    bone_ids: bytes = b""
    vertex_bone_indices: list = field(default_factory=list)
    vertex_bone_weights: list = field(default_factory=list)
    skin_to_bone_matrices: list = field(default_factory=list)
    bone_limit: int = 0
    num_meshes: int = 0
    num_rle: int = 0
    mesh_bone_remap_indices: bytes = b""
    d3d9_num_bones: int = 0
    d3d9_generated: bool = False
    ogl_num_bones: int = 0
    ogl_matrices: list = field(default_factory=list)
    ogl_generated: bool = False
    enabled: bool = False

    @classmethod
    def create(cls, num_bones, num_bone_ids, num_vertices, max_weights_per_vertex):
        """Create an enabled skin with zeroed bones, bone ids and vertex data."""
        _check_byte("num_bones", num_bones)
        _check_byte("num_bone_ids", num_bone_ids)
        _check_byte("max_weights_per_vertex", max_weights_per_vertex)
        if num_vertices < 0:
            raise ValueError(f"number of vertices must not be negative: {num_vertices}")
        return cls(
            num_bones=num_bones,
            num_bone_ids=num_bone_ids,
            max_weights_per_vertex=max_weights_per_vertex,
            bone_ids=bytes(num_bone_ids),
            vertex_bone_indices=[_ZERO_INDICES] * num_vertices,
            vertex_bone_weights=[_ZERO_WEIGHTS] * num_vertices,
            skin_to_bone_matrices=[_ZERO_MATRIX] * num_bones,
            enabled=True,
        )

    def _remap_size(self):
        return self.num_bones + 2 * (self.num_rle + self.num_meshes)

    @classmethod
    def read(cls, stream, num_vertices, is_native):
        """Read the chunk body (the SKIN header has already been read)."""
        skin = cls(max_weights_per_vertex=0, enabled=True)
        if is_native:
            stream.find_chunk(ChunkId.STRUCT)
            (platform,) = _UINT32.unpack(stream.read(_UINT32.size))
            if platform == PlatformId.PCD3D9:
                (skin.d3d9_num_bones,) = _UINT32.unpack(stream.read(_UINT32.size))
                skin.d3d9_generated = True
            elif platform == PlatformId.PCOGL:
                (skin.ogl_num_bones,) = _UINT32.unpack(stream.read(_UINT32.size))
                data = stream.read(skin.ogl_num_bones * _MATRIX.size)
                skin.ogl_matrices = _unpack_all(_MATRIX, data)
                skin.ogl_generated = True
            else:
                raise StreamError(f"reading native skin data: unknown platform id {platform}")
            return skin

        num_bones, num_bone_ids, max_weights, _pad = _SKIN_HEAD.unpack(stream.read(_SKIN_HEAD.size))
        skin.num_bones = num_bones
        skin.num_bone_ids = num_bone_ids
        skin.max_weights_per_vertex = max_weights
        if num_bone_ids > 0 and max_weights > 0:
            skin.bone_ids = stream.read(num_bone_ids)
        if num_vertices > 0:
            skin.vertex_bone_indices = _unpack_all(_INDICES, stream.read(num_vertices * _INDICES.size))
            skin.vertex_bone_weights = _unpack_all(_WEIGHTS, stream.read(num_vertices * _WEIGHTS.size))
        if num_bones > 0:
            if max_weights > 0:
                skin.skin_to_bone_matrices = _unpack_all(_MATRIX, stream.read(num_bones * _MATRIX.size))
                skin.bone_limit, skin.num_meshes, skin.num_rle = _SPLIT.unpack(stream.read(_SPLIT.size))
                if skin.num_meshes > 0:
                    skin.mesh_bone_remap_indices = stream.read(skin._remap_size())
            else:
                matrices = []
                for _ in range(num_bones):
                    stream.skip(_UINT32.size)
                    matrices.append(_MATRIX.unpack(stream.read(_MATRIX.size)))
                skin.skin_to_bone_matrices = matrices
        return skin

    def _check_generic(self, num_vertices):
        _check_byte("num_bones", self.num_bones)
        _check_byte("num_bone_ids", self.num_bone_ids)
        _check_byte("max_weights_per_vertex", self.max_weights_per_vertex)
        if len(self.vertex_bone_indices) != num_vertices:
            raise ValueError(
                f"expected {num_vertices} vertex bone indices, have {len(self.vertex_bone_indices)}"
            )
        if len(self.vertex_bone_weights) != num_vertices:
            raise ValueError(
                f"expected {num_vertices} vertex bone weights, have {len(self.vertex_bone_weights)}"
            )
        if self.num_bones and len(self.skin_to_bone_matrices) != self.num_bones:
            raise ValueError(
                f"expected {self.num_bones} skin-to-bone matrices, have {len(self.skin_to_bone_matrices)}"
            )
        if self.num_bone_ids and self.max_weights_per_vertex and len(self.bone_ids) != self.num_bone_ids:
            raise ValueError(f"expected {self.num_bone_ids} bone ids, have {len(self.bone_ids)}")
        if (
            self.num_bones
            and self.max_weights_per_vertex
            and self.num_meshes
            and len(self.mesh_bone_remap_indices) != self._remap_size()
        ):
            raise ValueError(
                f"expected {self._remap_size()} mesh bone remap bytes, have {len(self.mesh_bone_remap_indices)}"
            )

    def _native_body(self, config):
        if config.platform is Platform.D3D9:
            if not self.d3d9_generated:
                raise ValueError("native D3D9 skin data has not been generated")
            return _NATIVE_HEAD.pack(PlatformId.PCD3D9, self.d3d9_num_bones)
        if config.platform is Platform.OGL:
            if not self.ogl_generated:
                raise ValueError("native OpenGL skin data has not been generated")
            if len(self.ogl_matrices) != self.ogl_num_bones:
                raise ValueError(
                    f"expected {self.ogl_num_bones} native matrices, have {len(self.ogl_matrices)}"
                )
            matrices = b"".join(_MATRIX.pack(*matrix) for matrix in self.ogl_matrices)
            return _NATIVE_HEAD.pack(PlatformId.PCOGL, self.ogl_num_bones) + matrices
        raise ValueError(f"writing native skin data: platform {config.platform.value} is not supported")

    def write(self, stream, num_vertices, is_native, config=None):
        """Write the SKIN chunk if the skin is enabled."""
        config = config or RwConfig()
        if not self.enabled:
            return stream
        if is_native:
            body = self._native_body(config)
            stream.write_chunk_header(ChunkId.SKIN, _HEADER_SIZE + len(body), config.version, config.build)
            stream.write_chunk_header(ChunkId.STRUCT, len(body), config.version, config.build)
            stream.write(body)
            return stream

        self._check_generic(num_vertices)
        size = self.stream_size(False, num_vertices, config)
        stream.write_chunk_header(ChunkId.SKIN, size - _HEADER_SIZE, config.version, config.build)
        stream.write(_SKIN_HEAD.pack(self.num_bones, self.num_bone_ids, self.max_weights_per_vertex, 0))
        if self.num_bone_ids > 0 and self.max_weights_per_vertex > 0:
            stream.write(bytes(self.bone_ids))
        if num_vertices > 0:
            stream.write(b"".join(_INDICES.pack(*item) for item in self.vertex_bone_indices))
            stream.write(b"".join(_WEIGHTS.pack(*item) for item in self.vertex_bone_weights))
        if self.num_bones > 0:
            if self.max_weights_per_vertex > 0:
                stream.write(b"".join(_MATRIX.pack(*matrix) for matrix in self.skin_to_bone_matrices))
                stream.write(_SPLIT.pack(self.bone_limit, self.num_meshes, self.num_rle))
                if self.num_meshes > 0:
                    stream.write(bytes(self.mesh_bone_remap_indices))
            else:
                for matrix in self.skin_to_bone_matrices:
                    stream.write(_UINT32.pack(0))
                    stream.write(_MATRIX.pack(*matrix))
        return stream

    def stream_size(self, is_native, num_vertices, config=None):
        """Size of the written chunk, header included (0 when nothing is written)."""
        config = config or RwConfig()
        if not self.enabled:
            return 0
        if is_native:
            base = 2 * _HEADER_SIZE + _NATIVE_HEAD.size
            if config.platform is Platform.D3D9 and self.d3d9_generated:
                return base
            if config.platform is Platform.OGL and self.ogl_generated:
                return base + self.ogl_num_bones * _MATRIX.size
            return 0
        size = _HEADER_SIZE + _SKIN_HEAD.size
        if self.max_weights_per_vertex > 0:
            size += self.num_bone_ids
        size += num_vertices * (_INDICES.size + _WEIGHTS.size)
        if self.num_bones > 0:
            if self.max_weights_per_vertex > 0:
                size += _SPLIT.size + self.num_bones * _MATRIX.size
                if self.num_meshes > 0:
                    size += self._remap_size()
            else:
                size += self.num_bones * (_UINT32.size + _MATRIX.size)
        return size

    def find_used_bone_ids(self, num_vertices, num_bones):
        """Recompute the weights-per-vertex limit and the bone ids used by the vertices."""
        _check_byte("num_bones", num_bones)
        self.bone_ids = b""
        self.num_bone_ids = 0
        self.num_bones = num_bones
        if not (self.vertex_bone_weights and self.vertex_bone_indices and num_bones > 0):
            return
        weights = self.vertex_bone_weights[:num_vertices]
        indices = self.vertex_bone_indices[:num_vertices]

        max_weights = 0
        for vertex_weights in weights:
            used = 0
            for weight in vertex_weights[:_MAX_WEIGHTS]:
                if weight == 0.0:
                    break
                used += 1
            max_weights = max(max_weights, used)
            if max_weights == _MAX_WEIGHTS:
                break
        self.max_weights_per_vertex = max_weights

        found = []
        for vertex_weights, vertex_indices in zip(weights, indices):
            for weight, bone in zip(vertex_weights[:max_weights], vertex_indices):
                if weight == 0.0:
                    break
                if bone not in found:
                    found.append(bone)
            if len(found) >= num_bones:
                break
        self.bone_ids = bytes(found)
        self.num_bone_ids = len(found)