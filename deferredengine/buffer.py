"""CPU-side uniform buffer with aligned pushes in std140-style layout."""

from __future__ import annotations

import struct

import numpy as np

VEC4_SIZE = 16


def is_power_of_2(value: int) -> bool:
    """True when value is a positive power of two."""
    return value > 0 and not (value & (value - 1))


def align(value: int, alignment: int) -> int:
    """Round value up to a multiple of a power-of-two alignment."""
    return (value + alignment - 1) & ~(alignment - 1)


def _float_bytes(value, shape: tuple[int, ...]) -> bytes:
    array = np.asarray(value, dtype="<f4")
    if array.shape != shape:
        raise ValueError(f"expected shape {shape}, got {array.shape}")
    # Matrices are stored column by column, as the GPU expects.
    return array.tobytes(order="F")


class UniformBuffer:
    """A fixed-size byte buffer written through a moving, aligned head."""

    def __init__(self, size: int):
        if size < 0:
            raise ValueError("buffer size must not be negative")
        self.size = size
        self.data = bytearray(size)
        self.head = 0
        self.mapped = False

    def __enter__(self) -> UniformBuffer:
        self.map()
        return self

    def __exit__(self, *exc_info) -> None:
        self.unmap()

    def map(self) -> None:
        """Open the buffer for writing and rewind the head."""
        self.mapped = True
        self.head = 0

    def unmap(self) -> None:
        """Close the buffer for writing."""
        self.mapped = False

    def align_head(self, alignment: int) -> None:
        """Move the head forward to the next multiple of alignment."""
        if not is_power_of_2(alignment):
            raise ValueError("the alignment must be a power of 2")
        self.head = align(self.head, alignment)

    def push(self, data, alignment: int = 1) -> int:
        """Write bytes at the aligned head and return the offset they start at."""
        if not self.mapped:
            raise RuntimeError("the buffer must be mapped first")
        payload = bytes(data)
        self.align_head(alignment)
        start = self.head
        end = start + len(payload)
        if end > self.size:
            raise OverflowError(f"writing {len(payload)} bytes at {start} exceeds size {self.size}")
        self.data[start:end] = payload
        self.head = end
        return start

    def push_uint(self, value: int) -> int:
        return self.push(struct.pack("<I", value), 4)

    def push_vec3(self, value) -> int:
        return self.push(_float_bytes(value, (3,)), VEC4_SIZE)

    def push_vec4(self, value) -> int:
        return self.push(_float_bytes(value, (4,)), VEC4_SIZE)

    def push_mat3(self, value) -> int:
        return self.push(_float_bytes(value, (3, 3)), VEC4_SIZE)

    def push_mat4(self, value) -> int:
        return self.push(_float_bytes(value, (4, 4)), VEC4_SIZE)