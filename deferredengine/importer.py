"""Turn an imported scene description into engine meshes and materials."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field

import numpy as np

from deferredengine.platform import make_path
from deferredengine.resources import Material, Mesh, Submesh, VertexBufferLayout

Vector = Sequence[float]
TextureLoader = Callable[[str], "int | None"]


@dataclass
class ImportedMesh:
    """Per-vertex streams and faces of one mesh as delivered by a model importer."""

    positions: list[Vector]
    normals: list[Vector]
    tex_coords: list[Vector] | None = None
    tangents: list[Vector] | None = None
    bitangents: list[Vector] | None = None
    faces: list[Sequence[int]] = field(default_factory=list)
    material_index: int = 0


@dataclass
class ImportedMaterial:
    """Material properties and texture file names relative to the model directory."""

    name: str = ""
    diffuse: Vector = (0.0, 0.0, 0.0)
    emissive: Vector = (0.0, 0.0, 0.0)
    specular: Vector = (0.0, 0.0, 0.0)
    shininess: float = 0.0
    diffuse_texture: str | None = None
    emissive_texture: str | None = None
    specular_texture: str | None = None
    normals_texture: str | None = None
    height_texture: str | None = None


@dataclass
class ImportedNode:
    """A scene node referring to meshes by index, with child nodes."""

    meshes: list[int] = field(default_factory=list)
    children: list[ImportedNode] = field(default_factory=list)


@dataclass
class ImportedScene:
    """The meshes, materials and node hierarchy of an imported model."""

    meshes: list[ImportedMesh] = field(default_factory=list)
    materials: list[ImportedMaterial] = field(default_factory=list)
    root: ImportedNode = field(default_factory=ImportedNode)


def _check_stream(name: str, stream: list[Vector] | None, count: int) -> None:
    if stream is not None and len(stream) != count:
        raise ValueError(f"{name} has {len(stream)} entries, expected {count}")


def process_mesh(mesh: ImportedMesh, base_material_index: int) -> tuple[Submesh, int]:
    """Interleave a mesh's vertex streams into a submesh.

    Returns the submesh and the index of its material in the engine's list.
    Bitangents are negated so the tangent space is right-handed.
    """
    count = len(mesh.positions)
    _check_stream("normals", mesh.normals, count)
    _check_stream("tex_coords", mesh.tex_coords, count)
    _check_stream("tangents", mesh.tangents, count)
    _check_stream("bitangents", mesh.bitangents, count)

    has_tex_coords = count > 0 and mesh.tex_coords is not None
    has_tangent_space = count > 0 and mesh.tangents is not None and mesh.bitangents is not None

    vertices: list[float] = []
    for i, (position, normal) in enumerate(zip(mesh.positions, mesh.normals)):
        vertices.extend(float(c) for c in position[:3])
        vertices.extend(float(c) for c in normal[:3])
        if has_tex_coords:
            vertices.extend(float(c) for c in mesh.tex_coords[i][:2])
        if has_tangent_space:
            vertices.extend(float(c) for c in mesh.tangents[i][:3])
            vertices.extend(-float(c) for c in mesh.bitangents[i][:3])

    indices = [int(index) for face in mesh.faces for index in face]

    layout = VertexBufferLayout()
    layout.add(0, 3)
    layout.add(1, 3)
    if has_tex_coords:
        layout.add(2, 2)
    if has_tangent_space:
        layout.add(3, 3)
        layout.add(4, 3)

    submesh = Submesh(vertex_buffer_layout=layout, vertices=vertices, indices=indices)
    return submesh, base_material_index + mesh.material_index


def process_material(
    material: ImportedMaterial, directory: str, load_texture: TextureLoader
) -> Material:
    """Build an engine material, loading each referenced texture through load_texture."""

    def texture(filename: str | None) -> int | None:
        if filename is None:
            return None
        return load_texture(make_path(directory, filename))

    return Material(
        name=material.name,
        albedo=np.array(material.diffuse, dtype=np.float64),
        emissive=np.array(material.emissive, dtype=np.float64),
        smoothness=material.shininess / 256.0,
        albedo_texture_idx=texture(material.diffuse_texture),
        emissive_texture_idx=texture(material.emissive_texture),
        specular_texture_idx=texture(material.specular_texture),
        normals_texture_idx=texture(material.normals_texture),
        bump_texture_idx=texture(material.height_texture),
    )


def process_node(
    scene: ImportedScene, node: ImportedNode, base_material_index: int
) -> Iterator[tuple[Submesh, int]]:
    """Yield (submesh, material index) for a node's meshes, then for its children."""
    for mesh_index in node.meshes:
        yield process_mesh(scene.meshes[mesh_index], base_material_index)
    for child in node.children:
        yield from process_node(scene, child, base_material_index)


def build_model(
    scene: ImportedScene,
    directory: str,
    base_material_index: int,
    load_texture: TextureLoader,
) -> tuple[Mesh, list[Material], list[int]]:
    """Convert a whole scene into one packed mesh.

    Returns the mesh (with submesh byte offsets set), the new materials in scene
    order, and the engine material index of each submesh.
    """
    materials = [
        process_material(material, directory, load_texture) for material in scene.materials
    ]
    mesh = Mesh()
    material_indices: list[int] = []
    for submesh, material_index in process_node(scene, scene.root, base_material_index):
        mesh.submeshes.append(submesh)
        material_indices.append(material_index)
    mesh.pack()
    return mesh, materials, material_indices