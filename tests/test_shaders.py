import pytest

from deferredengine.resources import Program, Submesh, VertexBufferLayout
from deferredengine.shaders import (
    GL_FLOAT,
    GL_FLOAT_VEC2,
    GL_FLOAT_VEC3,
    GL_RGB,
    GL_RGB8,
    GL_RGBA,
    GL_RGBA8,
    GL_UNSIGNED_BYTE,
    ActiveAttribute,
    build_shader_sources,
    find_vao,
    layout_from_active_attributes,
    link_vertex_attributes,
    texture_format,
)
from deferredengine.shapes import position_normal_layout, screen_quad


def test_shader_sources_have_prefixes():
    body = "void main() {}\n"
    vertex, fragment = build_shader_sources(body, "SCREEN_QUAD")
    assert vertex == "#version 430\n#define SCREEN_QUAD\n#define VERTEX\n" + body
    assert fragment == "#version 430\n#define SCREEN_QUAD\n#define FRAGMENT\n" + body


def test_layout_matches_screen_quad():
    layout = layout_from_active_attributes(
        [
            ActiveAttribute("aPosition", 0, GL_FLOAT_VEC3),
            ActiveAttribute("aTexCoord", 1, GL_FLOAT_VEC2),
        ]
    )
    assert layout == screen_quad().vertex_buffer_layout


def test_layout_matches_position_normal():
    layout = layout_from_active_attributes(
        [
            ActiveAttribute("aPosition", 0, GL_FLOAT_VEC3),
            ActiveAttribute("aNormal", 1, GL_FLOAT_VEC3),
        ]
    )
    assert layout == position_normal_layout()


def test_scalar_attribute_uses_reported_size():
    layout = layout_from_active_attributes([ActiveAttribute("aWeight", 5, GL_FLOAT, 1)])
    assert [(a.location, a.component_count, a.offset) for a in layout.attributes] == [(5, 1, 0)]
    assert layout.stride == 4


def test_link_shifts_offsets():
    submesh_layout = position_normal_layout()
    linked = link_vertex_attributes(position_normal_layout(), submesh_layout, 96)
    assert linked.stride == submesh_layout.stride
    for got, original in zip(linked.attributes, submesh_layout.attributes):
        assert got.location == original.location
        assert got.component_count == original.component_count
        assert got.offset == original.offset + 96


def test_link_only_requested_attributes():
    program_layout = VertexBufferLayout()
    program_layout.add(1, 3)
    linked = link_vertex_attributes(program_layout, position_normal_layout(), 0)
    assert [a.location for a in linked.attributes] == [1]


def test_link_missing_attribute_raises():
    program_layout = screen_quad().vertex_buffer_layout
    submesh_layout = VertexBufferLayout()
    submesh_layout.add(0, 3)
    with pytest.raises(ValueError):
        link_vertex_attributes(program_layout, submesh_layout, 0)


def test_texture_formats():
    assert texture_format(3).internal_format == GL_RGB8
    assert texture_format(3).data_format == GL_RGB
    assert texture_format(4).internal_format == GL_RGBA8
    assert texture_format(4).data_format == GL_RGBA
    assert texture_format(4).data_type == GL_UNSIGNED_BYTE


@pytest.mark.parametrize("channels", [1, 2, 5])
def test_unsupported_channels_raise(channels):
    with pytest.raises(ValueError):
        texture_format(channels)


def _program(handle):
    return Program(
        handle=handle,
        filepath="shader.glsl",
        program_name="BASIC_SHAPE",
        vertex_input_layout=position_normal_layout(),
    )


def test_find_vao_creates_once_per_program():
    submesh = Submesh(vertex_buffer_layout=position_normal_layout(), vertex_offset=48)
    created = []

    def create(bindings):
        created.append(bindings)
        return 100 + len(created)

    first = find_vao(submesh, _program(1), create)
    again = find_vao(submesh, _program(1), create)
    other = find_vao(submesh, _program(2), create)
    assert first == again
    assert other != first
    assert len(created) == 2
    assert [vao.program_handle for vao in submesh.vaos] == [1, 2]
    assert [a.offset for a in created[0].attributes] == [
        a.offset + 48 for a in submesh.vertex_buffer_layout.attributes
    ]


def test_find_vao_failure_caches_nothing():
    layout = VertexBufferLayout()
    layout.add(0, 3)
    submesh = Submesh(vertex_buffer_layout=layout)
    with pytest.raises(ValueError):
        find_vao(submesh, _program(1), lambda bindings: 1)
    assert submesh.vaos == []