import numpy as np
import pytest

from alice2.primitives import POINT_HALF_EXTENT, PrimitiveObject, PrimitiveType
from alice2.scene_object import ObjectType


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        def record(*args):
            self.calls.append((name, args))

        return record

    def names(self):
        return [call[0] for call in self.calls]


def test_type_and_name():
    obj = PrimitiveObject(PrimitiveType.CUBE)
    assert obj.object_type is ObjectType.PRIMITIVE
    assert obj.name == "Primitive"


@pytest.mark.parametrize("kind", [PrimitiveType.CUBE, PrimitiveType.PLANE])
def test_box_bounds_follow_size(kind):
    obj = PrimitiveObject(kind)
    obj.size = (2.0, 4.0, 6.0)
    assert np.allclose(obj.bounds_size(), obj.size)
    assert np.allclose(obj.bounds_min, -obj.bounds_max)


def test_sphere_bounds_follow_radius():
    obj = PrimitiveObject(PrimitiveType.SPHERE)
    obj.radius = 2.0
    assert np.allclose(obj.bounds_max, (2.0, 2.0, 2.0))
    assert np.allclose(obj.bounds_min, -obj.bounds_max)


def test_cylinder_bounds():
    obj = PrimitiveObject(PrimitiveType.CYLINDER)
    obj.radius = 3.0
    obj.height = 8.0
    assert np.allclose(obj.bounds_size(), (6.0, 8.0, 6.0))


def test_line_bounds_flat():
    obj = PrimitiveObject(PrimitiveType.LINE)
    obj.size = (4.0, 9.0, 9.0)
    size = obj.bounds_size()
    assert size[0] == pytest.approx(4.0)
    assert size[1] == 0.0 and size[2] == 0.0


def test_point_bounds():
    obj = PrimitiveObject(PrimitiveType.POINT)
    assert np.allclose(obj.bounds_max, POINT_HALF_EXTENT)
    assert np.allclose(obj.bounds_min, -POINT_HALF_EXTENT)


def test_changing_type_recomputes_bounds():
    obj = PrimitiveObject(PrimitiveType.POINT)
    obj.primitive_type = PrimitiveType.CUBE
    assert np.allclose(obj.bounds_size(), obj.size)


def test_cube_render_scales_by_size():
    obj = PrimitiveObject(PrimitiveType.CUBE)
    obj.size = (2.0, 3.0, 4.0)
    renderer = RecordingRenderer()
    obj.render_impl(renderer, None)
    assert renderer.names() == [
        "set_color", "set_wireframe", "push_matrix", "mult_matrix", "draw_cube", "pop_matrix",
    ]
    assert np.allclose(renderer.calls[3][1][0], np.diag([2.0, 3.0, 4.0, 1.0]))


@pytest.mark.parametrize(
    "kind, draw",
    [
        (PrimitiveType.SPHERE, "draw_sphere"),
        (PrimitiveType.CYLINDER, "draw_cylinder"),
        (PrimitiveType.LINE, "draw_line"),
        (PrimitiveType.POINT, "draw_point"),
        (PrimitiveType.PLANE, "draw_quad"),
    ],
)
def test_each_type_draws(kind, draw):
    renderer = RecordingRenderer()
    PrimitiveObject(kind).render_impl(renderer, None)
    assert draw in renderer.names()
    assert renderer.names()[:2] == ["set_color", "set_wireframe"]


def test_plane_quad_corners():
    obj = PrimitiveObject(PrimitiveType.PLANE)
    obj.size = (2.0, 5.0, 6.0)
    renderer = RecordingRenderer()
    obj.render_impl(renderer, None)
    (corners,) = [args for name, args in renderer.calls if name == "draw_quad"]
    for corner in corners:
        assert abs(corner[0]) == pytest.approx(1.0)
        assert corner[1] == 0.0
        assert abs(corner[2]) == pytest.approx(3.0)


def test_render_passes_material():
    obj = PrimitiveObject(PrimitiveType.POINT)
    obj.opacity = 0.5
    obj.wireframe = True
    renderer = RecordingRenderer()
    obj.render_impl(renderer, None)
    assert renderer.calls[0][1][1] == 0.5
    assert renderer.calls[1][1] == (True,)