"""Built-in geometry: screen quad, plane, cube and UV sphere."""

from __future__ import annotations

import math

from deferredengine.resources import Mesh, Submesh, VertexBufferLayout


def position_normal_layout() -> VertexBufferLayout:
    """Layout with a position at location 0 and a normal at location 1."""
    layout = VertexBufferLayout()
    layout.add(0, 3)
    layout.add(1, 3)
    return layout


def _single_submesh(vertices: list[float], indices: list[int]) -> Mesh:
    return Mesh(
        submeshes=[
            Submesh(
                vertex_buffer_layout=position_normal_layout(),
                vertices=vertices,
                indices=indices,
            )
        ]
    )


def screen_quad() -> Submesh:
    """A quad covering clip space, with positions and texture coordinates."""
    layout = VertexBufferLayout()
    layout.add(0, 3)
    layout.add(1, 2)
    vertices = [
        -1.0, -1.0, 0.0, 0.0, 0.0,
        1.0, -1.0, 0.0, 1.0, 0.0,
        1.0, 1.0, 0.0, 1.0, 1.0,
        -1.0, 1.0, 0.0, 0.0, 1.0,
    ]
    indices = [0, 1, 2, 0, 2, 3]
    return Submesh(vertex_buffer_layout=layout, vertices=vertices, indices=indices)


def make_plane() -> Mesh:
    """A 2x2 plane in the xy plane facing +z."""
    corners = [(-1, -1), (-1, 1), (1, 1), (1, -1)]
    vertices = [float(c) for x, y in corners for c in (x, y, 0, 0, 0, 1)]
    return _single_submesh(vertices, [0, 1, 2, 0, 2, 3])


def make_cube() -> Mesh:
    """A 2x2x2 cube with eight shared corners and corner-direction normals."""
    d = math.sqrt(3)
    corners = [
        (1, 1, 1), (1, 1, -1), (-1, 1, 1), (-1, 1, -1),
        (1, -1, 1), (1, -1, -1), (-1, -1, 1), (-1, -1, -1),
    ]
    vertices = [
        float(value)
        for corner in corners
        for value in (*corner, *(d * c for c in corner))
    ]
    indices = [
        0, 1, 2, 3, 1, 2,
        0, 1, 4, 5, 1, 4,
        3, 2, 7, 6, 2, 7,
        1, 3, 5, 7, 3, 5,
        0, 2, 4, 6, 2, 4,
        4, 5, 6, 7, 5, 6,
    ]
    return _single_submesh(vertices, indices)


def make_sphere(h_segments: int = 32, v_segments: int = 16) -> Mesh:
    """A unit UV sphere whose normals equal its positions."""
    if h_segments < 1 or v_segments < 1:
        raise ValueError("a sphere needs at least one segment in each direction")
    ring = v_segments + 1
    vertices: list[float] = []
    for h in range(h_segments):
        angle_h = 2 * math.pi * h / h_segments
        for v in range(ring):
            angle_v = -math.pi * (v / v_segments - 0.5)
            x = math.sin(angle_h) * math.cos(angle_v)
            y = -math.sin(angle_v)
            z = math.cos(angle_h) * math.cos(angle_v)
            vertices.extend((x, y, z, x, y, z))

    indices: list[int] = []
    for h in range(h_segments):
        current = h * ring
        following = ((h + 1) % h_segments) * ring
        for v in range(ring):
            indices.extend(
                (
                    current + v,
                    following + v,
                    following + v + 1,
                    current + v,
                    following + v + 1,
                    current + v + 1,
                )
            )
    return _single_submesh(vertices, indices)