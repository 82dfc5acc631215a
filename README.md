# deferredengine

The data side of a small deferred-shading renderer. It holds a scene
of game objects, lights and a camera. Transforms produce model
matrices. Basic shapes are built in code. A model importer works on
scene data that has already been loaded. Helpers cover shader sources
and vertex layouts, and a uniform buffer packs per-frame data with
std140-style alignment.

Everything is plain Python on top of NumPy. The results are matrices,
byte buffers, layouts and index lists that a rendering back end can
upload as they are.

## Modules

- `deferredengine.platform`
  - `make_path(directory, filename)` joins the two with `/`.
  - `get_directory_part(path)` returns everything before the last `/`
    or `\`, or `""` when the path has neither.
  - `read_text_file` reads a whole UTF-8 file and raises `OSError` if it
    cannot be opened.
  - `get_file_last_write_timestamp` gives the modification time in whole
    seconds, or 0 when the file cannot be read.
  - `log_string` writes one line to standard error.
- `deferredengine.inputs`
  - The enumerations `Key`, `MouseButton` and `ButtonState` (`IDLE`,
    `PRESS`, `PRESSED`, `RELEASE`).
  - `remap_glfw_key` maps GLFW key codes to `Key` values. It returns
    `None` for keys that are not tracked.
  - `Input` records events with `on_key`, `on_mouse_button` and
    `on_mouse_move`. `on_mouse_move` also sets `mouse_delta`.
  - `clear(keyboard_captured, mouse_captured)` resets the devices that
    the user interface has captured.
  - `end_frame` moves `PRESS` to `PRESSED` and `RELEASE` to `IDLE` for
    devices that are not captured, and zeroes the mouse delta.
  - `key_active` and `button_active` are true for any state other than
    `IDLE`.
- `deferredengine.transform`
  - `Transform` has a `position`, a `rotation` (Euler angles in
    degrees) and a `scale`. Each is stored as a three-component NumPy
    array, and any other shape raises `ValueError`.
  - `transformation_matrix()` returns translate · rotate · scale as a
    4×4 matrix that acts on column vectors.
  - `axis(i)` returns column `i` (0, 1 or 2) of that matrix.
  - `TransformOrientation` has the members `LOCAL` and `GLOBAL`.
- `deferredengine.buffer`
  - `is_power_of_2` and `align`.
  - `UniformBuffer(size)` is a fixed `bytearray` with a moving head.
    `map()` opens it for writing and rewinds the head, and `unmap()`
    closes it. It can also be used as a context manager.
  - `push(data, alignment)` writes bytes at the aligned head and returns
    their offset.
  - `push_uint` aligns to 4 bytes. `push_vec3`, `push_vec4`, `push_mat3`
    and `push_mat4` align to 16 bytes and store little-endian float32.
    Matrices are written column by column.
  - Pushing raises `RuntimeError` when the buffer is not mapped, and
    `OverflowError` past its end. An alignment that is not a power of
    two raises `ValueError`.
- `deferredengine.scene`
  - `Camera`, with `z_near` and `z_far`, and `Camera.at(position)`.
  - `LightType` (`POINT`, `DIRECTIONAL`) and `Light`.
  - `GameObject`, with `GameObject.at(position)`.
  - `Scene`.
- `deferredengine.resources`
  - The records `Image`, `Texture`, `VertexBufferAttribute`,
    `VertexBufferLayout`, `Vao`, `Submesh`, `Mesh`, `Model`, `Material`,
    `Program` and `BloomResources`.
  - `VertexBufferLayout.add(location, component_count)` appends a float
    attribute at the current stride.
  - `Mesh.buffer_sizes()` returns the total vertex and index bytes.
  - `Mesh.pack()` returns a float32 vertex buffer and a uint32 index
    buffer, and records each submesh's byte offsets.
- `deferredengine.shapes`
  - `screen_quad()` returns positions and texture coordinates.
  - `make_plane()`, `make_cube()` and `make_sphere(h_segments=32,
    v_segments=16)` use the layout from `position_normal_layout()`.
- `deferredengine.importer`
  - The input types are `ImportedScene`, `ImportedNode`, `ImportedMesh`
    and `ImportedMaterial`.
  - `process_mesh` interleaves positions, normals, optional texture
    coordinates and an optional tangent frame. Bitangents are negated.
  - `process_material` turns shininess into smoothness (shininess / 256)
    and loads textures through a callback.
  - `process_node` walks the node tree.
  - `build_model` returns a packed mesh, its materials and the material
    index of each submesh.
- `deferredengine.shaders`
  - `build_shader_sources` prefixes a combined shader file with
    `#version 430`, `#define <name>`, and `#define VERTEX` or
    `#define FRAGMENT`.
  - `layout_from_active_attributes` builds the vertex layout a program
    expects.
  - `link_vertex_attributes` matches program inputs to submesh
    attributes by location, and raises `ValueError` when one is missing.
  - `texture_format` handles 3 or 4 channels.
  - `find_vao` caches one VAO handle per submesh and program.
- `deferredengine.engine`
  - `App(display_size)` holds the resources and the scene.
  - `add_mesh_model`, `add_texture` (one entry per file path) and
    `init_scene` set it up. `init_scene` creates the basic-shape models,
    a ground plane, seven lights and the camera.
  - `add_basic_shape(BasicShape.PLANE | CUBE | SPHERE)` adds a game
    object showing a built-in shape.
  - `resize(width, height)` records a new display size.
  - `update()` applies the camera input, rebuilds the matrices and fills
    the uniform buffer.
  - `FramebufferType` lists the views that can be displayed.
- `deferredengine.gui`
  - `light_labels`, `game_object_labels`, `framebuffer_options` and
    `light_type_names` give the labels for the editor panels.
  - `select_light` and `select_game_object` set the selection.
  - `MenuItem` and `menu_action` run menu commands.
  - `info_lines` gives the lines of the Info window.

## Example

```python
import numpy as np

from deferredengine.buffer import UniformBuffer, align, is_power_of_2
from deferredengine.transform import Transform

assert is_power_of_2(16)
assert align(5, 4) == 8

model_matrix = Transform(position=(1.0, 2.0, 3.0)).transformation_matrix()

uniforms = UniformBuffer(1024)
with uniforms:
    uniforms.push_vec3(np.array([0.0, 0.0, 10.0]))
    uniforms.push_uint(7)
    offset = uniforms.push_mat4(model_matrix)
assert offset == 16
```

## A frame

```python
from deferredengine.engine import App, BasicShape

app = App((1080, 720))
app.init_scene()
app.add_basic_shape(BasicShape.SPHERE)
app.update()
```

While W, A, S, D or the right mouse button are active, `update` moves
and turns the camera. It then rebuilds the projection and view matrices
and writes the global block, which holds the camera position and every
light. After that it writes one local block per game object and per
light, each holding the world matrix and the world-view-projection
matrix. Each local block starts on `uniform_block_alignment` (256).
Every object keeps the offset and size of its own block.

## What it does not do

The package opens no window and creates no graphics context. It
compiles no shaders, uploads nothing to a GPU and draws nothing. It
neither decodes image files nor reads model files. `importer` expects
scene data that has already been loaded, and `find_vao` and
`process_material` take callbacks for the parts a back end has to
supply. There is no command-line program.

## Tests

The tests use pytest, which comes with the `test` extra.