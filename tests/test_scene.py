import numpy as np
import pytest

from alice2.primitives import PrimitiveObject, PrimitiveType
from alice2.scene import Scene
from alice2.scene_object import SceneObject


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def record(*args):
            self.calls.append((name, args))

        return record

    def names(self):
        return [name for name, _ in self.calls]


class CountingObject(SceneObject):
    def __init__(self, name="counter"):
        super().__init__(name)
        self.updates = []
        self.renders = 0

    def update(self, delta_time):
        self.updates.append(delta_time)

    def render_impl(self, renderer, camera):
        self.renders += 1


def _cube_at(y, name):
    cube = PrimitiveObject(PrimitiveType.CUBE, name)
    cube.transform.position = (0.0, y, 0.0)
    return cube


def test_add_object_ignores_duplicates_and_none():
    scene = Scene()
    obj = SceneObject("a")
    scene.add_object(obj)
    scene.add_object(obj)
    scene.add_object(None)
    assert len(scene) == 1
    assert scene.objects == (obj,)


def test_remove_object_by_instance_and_by_name():
    scene = Scene()
    a, b = SceneObject("a"), SceneObject("b")
    scene.add_object(a)
    scene.add_object(b)
    scene.remove_object(a)
    assert scene.objects == (b,)
    scene.remove_object("b")
    assert len(scene) == 0


def test_find_object():
    scene = Scene()
    obj = SceneObject("target")
    scene.add_object(obj)
    assert scene.find_object("target") is obj
    assert scene.find_object("missing") is None


def test_clear_empties_scene():
    scene = Scene()
    scene.add_object(SceneObject("a"))
    scene.clear()
    assert list(scene) == []


def test_empty_scene_bounds_are_unit():
    scene = Scene()
    scene.calculate_bounds()
    np.testing.assert_allclose(scene.bounds_min, [-1.0, -1.0, -1.0])
    np.testing.assert_allclose(scene.bounds_max, [1.0, 1.0, 1.0])


def test_bounds_union_of_objects():
    scene = Scene()
    cube = PrimitiveObject(PrimitiveType.CUBE, "cube")
    cube.size = (2.0, 2.0, 2.0)
    sphere = PrimitiveObject(PrimitiveType.SPHERE, "sphere")
    sphere.radius = 3.0
    scene.add_object(cube)
    scene.add_object(sphere)
    scene.calculate_bounds()
    np.testing.assert_allclose(scene.bounds_min, sphere.bounds_min)
    np.testing.assert_allclose(scene.bounds_max, sphere.bounds_max)
    assert np.all(scene.bounds_min <= cube.bounds_min)
    assert np.all(scene.bounds_max >= cube.bounds_max)
    np.testing.assert_allclose(scene.bounds_center(), (scene.bounds_min + scene.bounds_max) / 2)
    np.testing.assert_allclose(scene.bounds_size(), scene.bounds_max - scene.bounds_min)


def test_pick_returns_closest_object():
    scene = Scene()
    far = _cube_at(10.0, "far")
    near = _cube_at(5.0, "near")
    scene.add_object(far)
    scene.add_object(near)
    assert scene.pick((0.0, 0.0, 0.0), (0.0, 1.0, 0.0)) is near


def test_pick_multiple_sorted_by_distance():
    scene = Scene()
    far = _cube_at(10.0, "far")
    near = _cube_at(5.0, "near")
    mid = _cube_at(7.0, "mid")
    for obj in (far, near, mid):
        scene.add_object(obj)
    assert scene.pick_multiple((0.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == [near, mid, far]


def test_pick_skips_invisible_and_misses():
    scene = Scene()
    cube = _cube_at(5.0, "hidden")
    cube.visible = False
    scene.add_object(cube)
    assert scene.pick((0.0, 0.0, 0.0), (0.0, 1.0, 0.0)) is None
    cube.visible = True
    assert scene.pick((0.0, 0.0, 0.0), (0.0, -1.0, 0.0)) is None
    assert scene.pick_multiple((0.0, 0.0, 0.0), (0.0, -1.0, 0.0)) == []


def test_render_draws_grid_axes_and_visible_objects():
    scene = Scene()
    shown = CountingObject("shown")
    hidden = CountingObject("hidden")
    hidden.visible = False
    scene.add_object(shown)
    scene.add_object(hidden)
    renderer = RecordingRenderer()
    scene.render(renderer, camera=None)
    names = renderer.names()
    assert names[0] == "clear"
    assert ("draw_grid", (scene.grid_size, scene.grid_divisions)) in renderer.calls
    assert ("draw_axes", (scene.axes_length,)) in renderer.calls
    assert shown.renders == 1
    assert hidden.renders == 0


def test_render_without_grid_and_axes():
    scene = Scene()
    scene.show_grid = False
    scene.show_axes = False
    renderer = RecordingRenderer()
    scene.render(renderer, camera=None)
    assert "draw_grid" not in renderer.names()
    assert "draw_axes" not in renderer.names()


def test_update_forwards_delta_time():
    scene = Scene()
    obj = CountingObject()
    scene.add_object(obj)
    scene.update(0.25)
    scene.update(0.5)
    assert obj.updates == [0.25, 0.5]


def test_default_settings():
    scene = Scene()
    assert scene.show_grid is True
    assert scene.show_axes is True
    assert scene.grid_divisions == 10
    assert scene.grid_size == pytest.approx(10.0)