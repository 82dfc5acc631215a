"""Resource records: images, textures, meshes, materials and programs."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

FLOAT_SIZE = 4
UINT_SIZE = 4


@dataclass
class Image:
    """Decoded pixel data, rows packed without padding."""

    pixels: bytes
    size: tuple[int, int]
    nchannels: int

    @property
    def stride(self) -> int:
        """Bytes per row."""
        return self.size[0] * self.nchannels


@dataclass
class Texture:
    handle: int
    filepath: str


@dataclass(frozen=True)
class VertexBufferAttribute:
    location: int
    component_count: int
    offset: int


@dataclass
class VertexBufferLayout:
    """Interleaved float attributes and the byte stride between vertices."""

    attributes: list[VertexBufferAttribute] = field(default_factory=list)
    stride: int = 0

    def add(self, location: int, component_count: int) -> VertexBufferAttribute:
        """Append a float attribute at the current stride and grow the stride."""
        attribute = VertexBufferAttribute(location, component_count, self.stride)
        self.attributes.append(attribute)
        self.stride += component_count * FLOAT_SIZE
        return attribute


@dataclass(frozen=True)
class Vao:
    handle: int
    program_handle: int


@dataclass
class Submesh:
    """One drawable part of a mesh with its own vertex layout."""

    vertex_buffer_layout: VertexBufferLayout = field(default_factory=VertexBufferLayout)
    vertices: list[float] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    vertex_offset: int = 0
    index_offset: int = 0
    vaos: list[Vao] = field(default_factory=list)


@dataclass
class Mesh:
    """A group of submeshes sharing one vertex buffer and one index buffer."""

    submeshes: list[Submesh] = field(default_factory=list)
    vertex_buffer_handle: int = 0
    index_buffer_handle: int = 0

    def buffer_sizes(self) -> tuple[int, int]:
        """Return the total vertex and index buffer sizes in bytes."""
        vertex_size = sum(len(sub.vertices) for sub in self.submeshes) * FLOAT_SIZE
        index_size = sum(len(sub.indices) for sub in self.submeshes) * UINT_SIZE
        return vertex_size, index_size

    def pack(self) -> tuple[bytes, bytes]:
        """Lay the submeshes out back to back and record each one's byte offsets.

        Returns the vertex buffer (little-endian float32) and the index buffer
        (little-endian uint32).
        """
        vertex_chunks: list[bytes] = []
        index_chunks: list[bytes] = []
        vertex_offset = index_offset = 0
        for submesh in self.submeshes:
            vertex_bytes = np.asarray(submesh.vertices, dtype="<f4").tobytes()
            index_bytes = np.asarray(submesh.indices, dtype="<u4").tobytes()
            submesh.vertex_offset = vertex_offset
            submesh.index_offset = index_offset
            vertex_offset += len(vertex_bytes)
            index_offset += len(index_bytes)
            vertex_chunks.append(vertex_bytes)
            index_chunks.append(index_bytes)
        return b"".join(vertex_chunks), b"".join(index_chunks)


@dataclass
class Model:
    """A mesh and the material index used by each of its submeshes."""

    mesh_idx: int = 0
    material_idx: list[int] = field(default_factory=list)


@dataclass(eq=False)
class Material:
    """Surface colours and optional texture indices (None where absent)."""

    name: str = ""
    albedo: np.ndarray = field(default_factory=lambda: np.zeros(3))
    emissive: np.ndarray = field(default_factory=lambda: np.zeros(3))
    smoothness: float = 0.0
    albedo_texture_idx: int | None = None
    emissive_texture_idx: int | None = None
    specular_texture_idx: int | None = None
    normals_texture_idx: int | None = None
    bump_texture_idx: int | None = None


@dataclass
class Program:
    """A linked shader program and the vertex inputs it expects."""

    handle: int
    filepath: str
    program_name: str
    last_write_timestamp: int = 0
    vertex_input_layout: VertexBufferLayout = field(default_factory=VertexBufferLayout)


@dataclass
class BloomResources:
    """Programs and render targets used by the bloom pass."""

    blit_brightest_pixels_program: Program | None = None
    blur_program: Program | None = None
    bloom_program: Program | None = None
    rt_bright: int = 0
    rt_bloom_h: int = 0