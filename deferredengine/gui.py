"""Editor interface logic: labels, selections and menu commands."""

from __future__ import annotations

from enum import Enum

from deferredengine.engine import App, BasicShape, FramebufferType
from deferredengine.scene import GameObject, Light, LightType, Scene

_FRAMEBUFFER_NAMES = {
    FramebufferType.FINAL: "Final",
    FramebufferType.ALBEDO: "Albedo",
    FramebufferType.NORMAL: "Normals",
    FramebufferType.POSITION: "Position",
    FramebufferType.LIGHTS: "Lights",
    FramebufferType.DEPTH: "Depth",
}

_LIGHT_TYPE_NAMES = {
    LightType.POINT: "Point Light",
    LightType.DIRECTIONAL: "Directional Light",
}


class MenuItem(Enum):
    """Entries of the main menu bar that trigger an action."""

    INFO = "Info"
    ADD_PLANE = "Add Plane"
    ADD_CUBE = "Add Cube"
    ADD_SPHERE = "Add Sphere"
    HIERARCHY = "Hierarchy"
    LIGHT_INSPECTOR = "Light Inspector"
    GAME_OBJECT_INSPECTOR = "GameObject Inspector"


_SHAPE_ITEMS = {
    MenuItem.ADD_PLANE: BasicShape.PLANE,
    MenuItem.ADD_CUBE: BasicShape.CUBE,
    MenuItem.ADD_SPHERE: BasicShape.SPHERE,
}

_FLAG_ITEMS = {
    MenuItem.INFO: "ui_show_info",
    MenuItem.HIERARCHY: "ui_scene_hierarchy",
    MenuItem.LIGHT_INSPECTOR: "ui_light_inspector",
    MenuItem.GAME_OBJECT_INSPECTOR: "ui_game_object_inspector",
}


def light_labels(scene: Scene) -> list[str]:
    """Hierarchy labels for the scene's lights, numbered from 1."""
    return [f"Light {number}" for number, _ in enumerate(scene.lights, start=1)]


def game_object_labels(scene: Scene) -> list[str]:
    """Hierarchy labels for the scene's game objects, numbered from 1."""
    return [f"GameObject {number}" for number, _ in enumerate(scene.game_objects, start=1)]


def framebuffer_options() -> list[str]:
    """Display names of the framebuffers, in FramebufferType order."""
    return [_FRAMEBUFFER_NAMES[kind] for kind in FramebufferType]


def light_type_names() -> list[str]:
    """Display names of the light types, in LightType order."""
    return [_LIGHT_TYPE_NAMES[kind] for kind in LightType]


def _pick(items: list, index: int, what: str):
    if not 0 <= index < len(items):
        raise IndexError(f"no {what} at index {index}")
    return items[index]


def select_light(app: App, index: int) -> Light:
    """Make the light at index the one shown in the light inspector."""
    light = _pick(app.scene.lights, index, "light")
    app.light_selected = light
    return light


def select_game_object(app: App, index: int) -> GameObject:
    """Make the game object at index the one shown in the game object inspector."""
    game_object = _pick(app.scene.game_objects, index, "game object")
    app.game_object_selected = game_object
    return game_object


def menu_action(app: App, item: MenuItem | str) -> GameObject | None:
    """Carry out a menu command; returns the game object a shape command adds."""
    item = MenuItem(item)
    shape = _SHAPE_ITEMS.get(item)
    if shape is not None:
        return app.add_basic_shape(shape)
    setattr(app, _FLAG_ITEMS[item], True)
    return None


def info_lines(app: App) -> list[str]:
    """The lines shown in the Info window."""
    return [
        f"FPS: {1.0 / app.delta_time:f}",
        f"OpenGL Version: {app.gl_version}",
        f"OpenGL Renderer: {app.gl_renderer}",
        f"OpenGL Vendor: {app.gl_vendor}",
        f"OpenGL Shading Language Version: {app.gl_shading_language_version}",
        f"OpenGL Number of Extensions: {app.gl_num_extensions:d}",
        f"OpenGL Extensions: {app.gl_extensions}",
    ]