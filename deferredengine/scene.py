"""Scene contents: camera, lights and game objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np

from deferredengine.transform import Transform


@dataclass
class Camera:
    """A viewpoint with a transform and near/far clipping distances."""

    transform: Transform = field(default_factory=Transform)
    z_near: float = 0.01
    z_far: float = 1000.0

    @classmethod
    def at(cls, position) -> Camera:
        """Create a camera placed at position."""
        return cls(transform=Transform(position=position))


class LightType(IntEnum):
    POINT = 0
    DIRECTIONAL = 1


@dataclass(eq=False)
class Light:
    """A point or directional light; the directional one shines along its local z axis."""

    type: LightType = LightType.POINT
    color: np.ndarray = field(default_factory=lambda: np.ones(3))
    transform: Transform = field(default_factory=Transform)
    local_uniform_buffer_head: int = 0
    local_uniform_buffer_size: int = 0

    def __post_init__(self) -> None:
        self.type = LightType(self.type)
        self.color = np.array(self.color, dtype=np.float64)
        if self.color.shape != (3,):
            raise ValueError(f"expected an RGB colour, got shape {self.color.shape}")


@dataclass(eq=False)
class GameObject:
    """An instance of a model drawn with a given program."""

    model_id: int = 0
    program_id: int = 0
    transform: Transform = field(default_factory=Transform)
    local_uniform_buffer_head: int = 0
    local_uniform_buffer_size: int = 0

    @classmethod
    def at(cls, position) -> GameObject:
        """Create a game object placed at position."""
        return cls(transform=Transform(position=position))


@dataclass
class Scene:
    """Everything that is drawn: one camera, game objects and lights."""

    camera: Camera = field(default_factory=Camera)
    game_objects: list[GameObject] = field(default_factory=list)
    lights: list[Light] = field(default_factory=list)