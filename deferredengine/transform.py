"""Position, rotation and scale of an object in the world."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

_VECTOR_FIELDS = frozenset({"position", "rotation", "scale"})


class TransformOrientation(Enum):
    LOCAL = 0
    GLOBAL = 1


def _vec3(value) -> np.ndarray:
    array = np.array(value, dtype=np.float64)
    if array.shape != (3,):
        raise ValueError(f"expected three components, got shape {array.shape}")
    return array


def _quaternion_from_euler(radians: np.ndarray) -> tuple[float, float, float, float]:
    cx, cy, cz = np.cos(radians * 0.5)
    sx, sy, sz = np.sin(radians * 0.5)
    w = cx * cy * cz + sx * sy * sz
    x = sx * cy * cz - cx * sy * sz
    y = cx * sy * cz + sx * cy * sz
    z = cx * cy * sz - sx * sy * cz
    return w, x, y, z


def _rotation_matrix(degrees: np.ndarray) -> np.ndarray:
    w, x, y, z = _quaternion_from_euler(np.radians(degrees))
    matrix = np.eye(4)
    matrix[:3, :3] = [
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ]
    return matrix


@dataclass(eq=False)
class Transform:
    """Translation, Euler rotation in degrees, and scale.

    Matrices are returned in mathematical row-major form acting on column
    vectors, so ``matrix[:3, i]`` is the i-th local axis.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __setattr__(self, name, value):
        if name in _VECTOR_FIELDS:
            value = _vec3(value)
        super().__setattr__(name, value)

    def transformation_matrix(self) -> np.ndarray:
        """Return translate * rotate * scale as a 4x4 matrix."""
        translation = np.eye(4)
        translation[:3, 3] = self.position
        scaling = np.diag([*self.scale, 1.0])
        return translation @ _rotation_matrix(self.rotation) @ scaling

    def axis(self, index: int) -> np.ndarray:
        """Return column ``index`` (0, 1 or 2) of the transformation matrix."""
        if index not in (0, 1, 2):
            raise IndexError(f"axis index must be 0, 1 or 2, not {index}")
        return self.transformation_matrix()[:3, index].copy()