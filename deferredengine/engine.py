"""Engine state: resources, scene set-up, camera control and per-frame uniforms."""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum, IntEnum

import numpy as np

from deferredengine.buffer import VEC4_SIZE, UniformBuffer
from deferredengine.inputs import Input, Key, MouseButton
from deferredengine.platform import get_file_last_write_timestamp
from deferredengine.resources import Material, Mesh, Model, Program, Texture, VertexBufferLayout
from deferredengine.scene import GameObject, Light, LightType, Scene
from deferredengine.shapes import (
    make_cube,
    make_plane,
    make_sphere,
    position_normal_layout,
    screen_quad,
)

MAX_UNIFORM_BLOCK_SIZE = 65536
UNIFORM_BUFFER_OFFSET_ALIGNMENT = 256
FIELD_OF_VIEW_DEGREES = 60.0
CAMERA_SPEED = 0.1
CAMERA_ROTATION_SPEED = 0.1


class FramebufferType(IntEnum):
    FINAL = 0
    ALBEDO = 1
    NORMAL = 2
    POSITION = 3
    LIGHTS = 4
    DEPTH = 5


class BasicShape(Enum):
    PLANE = "plane"
    CUBE = "cube"
    SPHERE = "sphere"


_SCENE_LIGHTS = (
    (LightType.POINT, (1.0, 1.0, 0.0), (0.0, 2.0, -1.0), (0.0, 0.0, 0.0)),
    (LightType.DIRECTIONAL, (1.0, 1.0, 1.0), (0.0, 0.0, 0.0), (170.0, 0.0, 0.0)),
    (LightType.POINT, (0.0, 1.0, 1.0), (-3.0, -2.0, -1.0), (0.0, 0.0, 0.0)),
    (LightType.POINT, (1.0, 0.0, 1.0), (3.0, -2.0, -2.0), (0.0, 0.0, 0.0)),
    (LightType.POINT, (1.0, 0.0, 0.0), (5.0, 1.0, -3.0), (0.0, 0.0, 0.0)),
    (LightType.POINT, (0.0, 1.0, 0.0), (0.0, -2.0, -3.0), (0.0, 0.0, 0.0)),
    (LightType.POINT, (0.0, 0.0, 1.0), (-5.0, 2.0, -2.0), (0.0, 0.0, 0.0)),
)


def _perspective(fovy: float, aspect: float, z_near: float, z_far: float) -> np.ndarray:
    focal = 1.0 / math.tan(fovy / 2.0)
    matrix = np.zeros((4, 4))
    matrix[0, 0] = focal / aspect
    matrix[1, 1] = focal
    matrix[2, 2] = -(z_far + z_near) / (z_far - z_near)
    matrix[2, 3] = -2.0 * z_far * z_near / (z_far - z_near)
    matrix[3, 2] = -1.0
    return matrix


def _look_at(eye: np.ndarray, center: np.ndarray, up: np.ndarray) -> np.ndarray:
    forward = center - eye
    forward = forward / np.linalg.norm(forward)
    side = np.cross(forward, up)
    side = side / np.linalg.norm(side)
    true_up = np.cross(side, forward)
    matrix = np.eye(4)
    matrix[0, :3] = side
    matrix[1, :3] = true_up
    matrix[2, :3] = -forward
    matrix[0, 3] = -side @ eye
    matrix[1, 3] = -true_up @ eye
    matrix[2, 3] = forward @ eye
    return matrix


class App:
    """All engine state that does not live on the GPU."""

    def __init__(self, display_size):
        width, height = display_size
        self.display_size: tuple[int, int] = (int(width), int(height))
        self.delta_time = 1.0 / 60.0
        self.is_running = True
        self.input = Input()
        self.scene = Scene()

        self.textures: list[Texture] = []
        self.materials: list[Material] = []
        self.meshes: list[Mesh] = []
        self.models: list[Model] = []
        self.programs: list[Program] = []

        self.screen_quad = screen_quad()
        self.screen_quad_program_idx: int | None = None
        self.basic_shapes_program_idx: int | None = None
        self.plane_idx: int | None = None
        self.cube_idx: int | None = None
        self.sphere_idx: int | None = None

        self.projection = np.eye(4)
        self.view = np.eye(4)

        self.uniform_block_alignment = UNIFORM_BUFFER_OFFSET_ALIGNMENT
        self.uniforms_buffer = UniformBuffer(MAX_UNIFORM_BLOCK_SIZE)
        self.global_uniform_head = 0
        self.global_uniform_size = 0

        self.gl_version = ""
        self.gl_renderer = ""
        self.gl_vendor = ""
        self.gl_shading_language_version = ""
        self.gl_num_extensions = 0
        self.gl_extensions = ""

        self.show_guizmos = True
        self.ui_show_info = False
        self.framebuffer_to_display = FramebufferType.FINAL
        self.ui_scene_hierarchy = True
        self.ui_game_object_inspector = True
        self.ui_light_inspector = True
        self.game_object_selected: GameObject | None = None
        self.light_selected: Light | None = None

        self._next_program_handle = 1

    def _register_program(
        self, filepath: str, program_name: str, layout: VertexBufferLayout
    ) -> int:
        program = Program(
            handle=self._next_program_handle,
            filepath=filepath,
            program_name=program_name,
            last_write_timestamp=get_file_last_write_timestamp(filepath),
            vertex_input_layout=layout,
        )
        self._next_program_handle += 1
        self.programs.append(program)
        return len(self.programs) - 1

    def add_mesh_model(self, mesh: Mesh, materials: Sequence[Material]) -> int:
        """Store a mesh with one new material per submesh and return the model index.

        The mesh is packed so that every submesh knows its byte offsets.
        """
        if len(materials) != len(mesh.submeshes):
            raise ValueError(
                f"{len(mesh.submeshes)} submeshes need as many materials, got {len(materials)}"
            )
        mesh.pack()
        self.meshes.append(mesh)
        base = len(self.materials)
        self.materials.extend(materials)
        model = Model(
            mesh_idx=len(self.meshes) - 1,
            material_idx=list(range(base, base + len(materials))),
        )
        self.models.append(model)
        return len(self.models) - 1

    def add_texture(self, filepath: str, handle: int) -> int:
        """Register a texture once per file path and return its index."""
        for index, texture in enumerate(self.textures):
            if texture.filepath == filepath:
                return index
        self.textures.append(Texture(handle=handle, filepath=filepath))
        return len(self.textures) - 1

    def init_scene(self) -> None:
        """Create the programs, basic shapes, ground plane, lights and camera."""
        camera = self.scene.camera.transform
        camera.position = (0.0, 0.0, 10.0)
        camera.rotation = (0.0, 180.0, 0.0)

        quad_layout = VertexBufferLayout(
            attributes=list(self.screen_quad.vertex_buffer_layout.attributes),
            stride=self.screen_quad.vertex_buffer_layout.stride,
        )
        self.screen_quad_program_idx = self._register_program(
            "screen_quad.glsl", "SCREEN_QUAD", quad_layout
        )
        self.basic_shapes_program_idx = self._register_program(
            "deferred_mesh.glsl", "BASIC_SHAPE", position_normal_layout()
        )

        self.plane_idx = self.add_mesh_model(make_plane(), [Material()])
        self.cube_idx = self.add_mesh_model(make_cube(), [Material()])
        self.sphere_idx = self.add_mesh_model(make_sphere(), [Material()])

        plane = self.add_basic_shape(BasicShape.PLANE)
        plane.transform.scale = (10.0, 10.0, 10.0)
        plane.transform.position = (0.0, -3.5, 0.0)
        plane.transform.rotation = (-90.0, 0.0, 0.0)

        for light_type, color, position, rotation in _SCENE_LIGHTS:
            light = Light(type=light_type, color=color)
            light.transform.position = position
            light.transform.rotation = rotation
            light.transform.scale = (0.2, 0.2, 0.2)
            self.scene.lights.append(light)

    def add_basic_shape(self, kind: BasicShape) -> GameObject:
        """Add a game object showing one of the built-in shapes."""
        model_idx = {
            BasicShape.PLANE: self.plane_idx,
            BasicShape.CUBE: self.cube_idx,
            BasicShape.SPHERE: self.sphere_idx,
        }[BasicShape(kind)]
        if model_idx is None or self.basic_shapes_program_idx is None:
            raise RuntimeError("basic shapes are not loaded; call init_scene first")
        game_object = GameObject(model_id=model_idx, program_id=self.basic_shapes_program_idx)
        self.scene.game_objects.append(game_object)
        return game_object

    def resize(self, width: int, height: int) -> None:
        """Record a new framebuffer size."""
        self.display_size = (int(width), int(height))

    def _move_camera(self) -> None:
        camera = self.scene.camera.transform
        matrix = camera.transformation_matrix()
        forward = matrix[:3, 2]
        side = matrix[:3, 0]
        movements = (
            (Key.W, forward),
            (Key.A, side),
            (Key.S, -forward),
            (Key.D, -side),
        )
        for key, direction in movements:
            if self.input.key_active(key):
                camera.position = camera.position + direction * CAMERA_SPEED

        if self.input.button_active(MouseButton.RIGHT):
            dx, dy = self.input.mouse_delta
            camera.rotation = camera.rotation + CAMERA_ROTATION_SPEED * -dx * np.array(
                (0.0, 1.0, 0.0)
            )
            camera.rotation = camera.rotation + CAMERA_ROTATION_SPEED * dy * np.array(
                (1.0, 0.0, 0.0)
            )

    def _update_matrices(self) -> None:
        width, height = self.display_size
        if height <= 0:
            return
        camera = self.scene.camera
        self.projection = _perspective(
            math.radians(FIELD_OF_VIEW_DEGREES), width / height, camera.z_near, camera.z_far
        )
        matrix = camera.transform.transformation_matrix()
        eye = camera.transform.position
        self.view = _look_at(eye, eye + matrix[:3, 2], matrix[:3, 1])

    def update(self) -> None:
        """Apply camera input, rebuild the matrices and refill the uniform buffer."""
        self._move_camera()
        self._update_matrices()

        buffer = self.uniforms_buffer
        scene = self.scene
        with buffer:
            self.global_uniform_head = buffer.head
            buffer.push_vec3(scene.camera.transform.position)
            buffer.push_uint(len(scene.lights))
            for light in scene.lights:
                buffer.align_head(VEC4_SIZE)
                buffer.push_uint(int(light.type))
                buffer.push_vec3(light.color)
                buffer.push_vec3(light.transform.transformation_matrix()[:3, 2])
                buffer.push_vec3(light.transform.position)
            self.global_uniform_size = buffer.head - self.global_uniform_head

            view_projection = self.projection @ self.view
            for item in (*scene.game_objects, *scene.lights):
                buffer.align_head(self.uniform_block_alignment)
                world = item.transform.transformation_matrix()
                item.local_uniform_buffer_head = buffer.head
                buffer.push_mat4(world)
                buffer.push_mat4(view_projection @ world)
                item.local_uniform_buffer_size = buffer.head - item.local_uniform_buffer_head