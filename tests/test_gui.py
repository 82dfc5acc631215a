import pytest

from deferredengine.engine import App, FramebufferType
from deferredengine.gui import (
    MenuItem,
    framebuffer_options,
    game_object_labels,
    info_lines,
    light_labels,
    light_type_names,
    menu_action,
    select_game_object,
    select_light,
)
from deferredengine.scene import LightType


@pytest.fixture
def app():
    application = App((1080, 720))
    application.init_scene()
    return application


def test_light_labels_numbered_from_one(app):
    labels = light_labels(app.scene)
    assert len(labels) == len(app.scene.lights)
    assert labels[0] == "Light 1"
    assert labels[-1] == f"Light {len(app.scene.lights)}"


def test_game_object_labels_follow_scene(app):
    before = game_object_labels(app.scene)
    menu_action(app, MenuItem.ADD_CUBE)
    after = game_object_labels(app.scene)
    assert after[: len(before)] == before
    assert after[-1] == f"GameObject {len(app.scene.game_objects)}"


def test_labels_empty_scene():
    empty = App((10, 10))
    assert light_labels(empty.scene) == []
    assert game_object_labels(empty.scene) == []


def test_framebuffer_options_match_enum():
    options = framebuffer_options()
    assert options == ["Final", "Albedo", "Normals", "Position", "Lights", "Depth"]
    assert len(options) == len(FramebufferType)


def test_light_type_names_match_enum():
    names = light_type_names()
    assert names == ["Point Light", "Directional Light"]
    assert names[LightType.DIRECTIONAL] == "Directional Light"


def test_select_light(app):
    light = select_light(app, 1)
    assert app.light_selected is light
    assert light is app.scene.lights[1]


def test_select_light_out_of_range(app):
    with pytest.raises(IndexError):
        select_light(app, len(app.scene.lights))
    with pytest.raises(IndexError):
        select_light(app, -1)


def test_select_game_object(app):
    game_object = select_game_object(app, 0)
    assert app.game_object_selected is app.scene.game_objects[0]
    assert game_object is app.game_object_selected


def test_select_game_object_out_of_range(app):
    with pytest.raises(IndexError):
        select_game_object(app, len(app.scene.game_objects))


@pytest.mark.parametrize(
    "item, attribute",
    [
        (MenuItem.ADD_PLANE, "plane_idx"),
        (MenuItem.ADD_CUBE, "cube_idx"),
        (MenuItem.ADD_SPHERE, "sphere_idx"),
    ],
)
def test_menu_adds_shapes(app, item, attribute):
    count = len(app.scene.game_objects)
    added = menu_action(app, item)
    assert len(app.scene.game_objects) == count + 1
    assert app.scene.game_objects[-1] is added
    assert added.model_id == getattr(app, attribute)
    assert added.program_id == app.basic_shapes_program_idx


@pytest.mark.parametrize(
    "item, attribute",
    [
        (MenuItem.INFO, "ui_show_info"),
        (MenuItem.HIERARCHY, "ui_scene_hierarchy"),
        (MenuItem.LIGHT_INSPECTOR, "ui_light_inspector"),
        (MenuItem.GAME_OBJECT_INSPECTOR, "ui_game_object_inspector"),
    ],
)
def test_menu_opens_windows(app, item, attribute):
    setattr(app, attribute, False)
    assert menu_action(app, item) is None
    assert getattr(app, attribute) is True


def test_menu_accepts_label_string(app):
    app.ui_scene_hierarchy = False
    menu_action(app, "Hierarchy")
    assert app.ui_scene_hierarchy is True


def test_menu_unknown_item(app):
    with pytest.raises(ValueError):
        menu_action(app, "Quit")


def test_menu_shape_before_init():
    fresh = App((10, 10))
    with pytest.raises(RuntimeError):
        menu_action(fresh, MenuItem.ADD_CUBE)


def test_info_lines(app):
    app.delta_time = 1.0
    app.gl_version = "4.3"
    app.gl_num_extensions = 7
    lines = info_lines(app)
    assert lines[0] == "FPS: 1.000000"
    assert lines[1] == "OpenGL Version: 4.3"
    assert "OpenGL Number of Extensions: 7" in lines
    assert len(lines) == 7