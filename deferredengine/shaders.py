"""Shader source assembly, vertex layout matching and VAO caching."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from deferredengine.resources import (
    Program,
    Submesh,
    Vao,
    VertexBufferAttribute,
    VertexBufferLayout,
)

GL_UNSIGNED_BYTE = 0x1401
GL_FLOAT = 0x1406
GL_RGB = 0x1907
GL_RGBA = 0x1908
GL_RGB8 = 0x8051
GL_RGBA8 = 0x8058
GL_FLOAT_VEC2 = 0x8B50
GL_FLOAT_VEC3 = 0x8B51
GL_FLOAT_VEC4 = 0x8B52

VERSION_LINE = "#version 430\n"

_VECTOR_COMPONENTS = {GL_FLOAT_VEC2: 2, GL_FLOAT_VEC3: 3}


@dataclass(frozen=True)
class ActiveAttribute:
    """A vertex input reported by a linked program."""

    name: str
    location: int
    type: int
    size: int = 1


@dataclass(frozen=True)
class TextureFormat:
    internal_format: int
    data_format: int
    data_type: int


def build_shader_sources(program_source: str, shader_name: str) -> tuple[str, str]:
    """Return the vertex and fragment sources for one program in a shared file."""
    prefix = f"{VERSION_LINE}#define {shader_name}\n"
    vertex = f"{prefix}#define VERTEX\n{program_source}"
    fragment = f"{prefix}#define FRAGMENT\n{program_source}"
    return vertex, fragment


def layout_from_active_attributes(attributes: Iterable[ActiveAttribute]) -> VertexBufferLayout:
    """Build the float vertex layout a program expects from its active attributes."""
    layout = VertexBufferLayout()
    for attribute in attributes:
        components = _VECTOR_COMPONENTS.get(attribute.type, attribute.size)
        layout.add(attribute.location, components)
    return layout


def link_vertex_attributes(
    program_layout: VertexBufferLayout,
    submesh_layout: VertexBufferLayout,
    vertex_offset: int,
) -> VertexBufferLayout:
    """Match each program input to the submesh attribute at the same location.

    The result carries the submesh's attribute sizes, offsets shifted by
    vertex_offset, and the submesh stride. Raises ValueError when an input has
    no matching attribute.
    """
    by_location: dict[int, VertexBufferAttribute] = {}
    for attribute in submesh_layout.attributes:
        by_location.setdefault(attribute.location, attribute)

    linked = []
    for wanted in program_layout.attributes:
        found = by_location.get(wanted.location)
        if found is None:
            raise ValueError(f"no vertex attribute at location {wanted.location}")
        linked.append(
            VertexBufferAttribute(found.location, found.component_count, found.offset + vertex_offset)
        )
    return VertexBufferLayout(attributes=linked, stride=submesh_layout.stride)


def texture_format(channels: int) -> TextureFormat:
    """Return the texture format for 8-bit images with 3 or 4 channels."""
    if channels == 3:
        return TextureFormat(GL_RGB8, GL_RGB, GL_UNSIGNED_BYTE)
    if channels == 4:
        return TextureFormat(GL_RGBA8, GL_RGBA, GL_UNSIGNED_BYTE)
    raise ValueError(f"unsupported number of channels: {channels}")


def find_vao(
    submesh: Submesh,
    program: Program,
    create_vao: Callable[[VertexBufferLayout], int],
) -> int:
    """Return the VAO binding submesh to program, creating and caching it if needed.

    create_vao receives the linked attribute layout and returns the new handle.
    """
    for vao in submesh.vaos:
        if vao.program_handle == program.handle:
            return vao.handle
    bindings = link_vertex_attributes(
        program.vertex_input_layout, submesh.vertex_buffer_layout, submesh.vertex_offset
    )
    handle = create_vao(bindings)
    submesh.vaos.append(Vao(handle, program.handle))
    return handle