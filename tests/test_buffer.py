import struct

import numpy as np
import pytest

from deferredengine.buffer import UniformBuffer, align, is_power_of_2


@pytest.mark.parametrize("value", [1, 2, 4, 16, 256, 1 << 31])
def test_powers_of_two(value):
    assert is_power_of_2(value)


@pytest.mark.parametrize("value", [0, 3, 6, 12, 255])
def test_not_powers_of_two(value):
    assert not is_power_of_2(value)


@pytest.mark.parametrize("value", range(0, 70))
@pytest.mark.parametrize("alignment", [1, 4, 16, 64])
def test_align_invariants(value, alignment):
    result = align(value, alignment)
    assert result % alignment == 0
    assert value <= result < value + alignment


def test_push_requires_map():
    buffer = UniformBuffer(64)
    with pytest.raises(RuntimeError):
        buffer.push_uint(1)


def test_align_head_rejects_non_power_of_two():
    buffer = UniformBuffer(64)
    buffer.map()
    with pytest.raises(ValueError):
        buffer.align_head(3)


def test_uint_then_vec3_layout():
    buffer = UniformBuffer(64)
    with buffer:
        assert buffer.push_uint(7) == 0
        offset = buffer.push_vec3((1.0, 2.0, 3.0))
        assert offset == 16
        assert buffer.head == 28
    assert not buffer.mapped
    assert struct.unpack_from("<I", buffer.data, 0) == (7,)
    assert struct.unpack_from("<3f", buffer.data, 16) == (1.0, 2.0, 3.0)


def test_mat4_is_written_column_major():
    matrix = np.arange(16, dtype=np.float32).reshape(4, 4)
    buffer = UniformBuffer(128)
    with buffer:
        buffer.push_uint(1)
        offset = buffer.push_mat4(matrix)
    stored = np.frombuffer(bytes(buffer.data[offset:offset + 64]), dtype="<f4")
    assert np.array_equal(stored.reshape(4, 4).T, matrix)
    assert offset % 16 == 0


def test_mat3_and_vec4_round_trip():
    rotation = np.eye(3, dtype=np.float32) * 2.0
    colour = (0.25, 0.5, 0.75, 1.0)
    buffer = UniformBuffer(128)
    with buffer:
        mat_offset = buffer.push_mat3(rotation)
        vec_offset = buffer.push_vec4(colour)
    assert vec_offset % 16 == 0
    assert vec_offset >= mat_offset + 36
    stored = np.frombuffer(bytes(buffer.data[mat_offset:mat_offset + 36]), dtype="<f4")
    assert np.array_equal(stored.reshape(3, 3).T, rotation)
    assert struct.unpack_from("<4f", buffer.data, vec_offset) == colour


def test_map_rewinds_head():
    buffer = UniformBuffer(32)
    buffer.map()
    buffer.push(b"abcd")
    buffer.unmap()
    buffer.map()
    assert buffer.head == 0
    buffer.push(b"xy")
    assert bytes(buffer.data[:4]) == b"xycd"


def test_overflow_is_rejected():
    buffer = UniformBuffer(16)
    with buffer:
        buffer.push_uint(1)
        with pytest.raises(OverflowError):
            buffer.push_vec3((0.0, 0.0, 0.0))


def test_wrong_vector_shape_is_rejected():
    buffer = UniformBuffer(64)
    with buffer:
        with pytest.raises(ValueError):
            buffer.push_vec3((1.0, 2.0))