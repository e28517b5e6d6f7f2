import numpy as np
import pytest

from alice2.scene_object import ObjectType
from alice2.zspace import GRAPH_COLOR, PLACEHOLDER_COLOR, POINT_CLOUD_SAMPLES, ZSpaceObject, ZSpaceObjectType


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


def test_defaults_keep_base_bounds():
    obj = ZSpaceObject()
    assert obj.object_type is ObjectType.ZSPACE_OBJECT
    assert obj.zspace_type is ZSpaceObjectType.UNKNOWN
    assert obj.display_faces
    assert np.allclose(obj.bounds_max, 1.0)


def test_typed_constructor_without_object_uses_placeholder_bounds():
    obj = ZSpaceObject("x", None, ZSpaceObjectType.GRAPH)
    assert not obj.display_faces
    assert np.allclose(obj.bounds_max, 0.5)
    assert np.allclose(obj.bounds_min, -0.5)


def test_mesh_constructor_shows_faces():
    obj = ZSpaceObject("m", object(), ZSpaceObjectType.MESH)
    assert obj.display_faces
    assert np.allclose(obj.bounds_max, 1.0)


@pytest.mark.parametrize(
    "method, kind",
    [
        ("set_zspace_object", ZSpaceObjectType.GENERIC),
        ("set_zspace_mesh", ZSpaceObjectType.MESH),
        ("set_zspace_graph", ZSpaceObjectType.GRAPH),
        ("set_zspace_point_cloud", ZSpaceObjectType.POINT_CLOUD),
    ],
)
def test_setters_set_type(method, kind):
    obj = ZSpaceObject()
    payload = object()
    getattr(obj, method)(payload)
    assert obj.zspace_type is kind
    assert obj.zspace_object is payload


def test_update_recalculates_bounds():
    obj = ZSpaceObject()
    obj._set_bounds((-7.0, -7.0, -7.0), (7.0, 7.0, 7.0))
    obj.update(0.016)
    assert np.allclose(obj.bounds_max, 0.5)


def test_render_placeholder_without_object():
    renderer = RecordingRenderer()
    ZSpaceObject().render_impl(renderer, None)
    assert renderer.names() == ["set_color", "draw_cube"]
    assert np.allclose(renderer.calls[0][1][0], PLACEHOLDER_COLOR)


def test_render_mesh_faces_and_edges():
    obj = ZSpaceObject()
    obj.set_zspace_mesh(object())
    obj.edge_width = 2.5
    renderer = RecordingRenderer()
    obj.render_impl(renderer, None)
    assert renderer.names().count("draw_cube") == 2
    assert ("set_line_width", (2.5,)) in renderer.calls


def test_render_mesh_nothing_displayed():
    obj = ZSpaceObject()
    obj.set_zspace_mesh(object())
    obj.display_faces = False
    obj.display_edges = False
    renderer = RecordingRenderer()
    obj.render_impl(renderer, None)
    assert renderer.names() == ["set_color"]


def test_render_graph_three_axis_lines():
    obj = ZSpaceObject()
    obj.set_zspace_graph(object())
    renderer = RecordingRenderer()
    obj.render_impl(renderer, None)
    lines = [args for name, args in renderer.calls if name == "draw_line"]
    assert len(lines) == 3
    for start, end in lines:
        assert np.allclose(start, -end)
    colors = [args for name, args in renderer.calls if name == "set_color"]
    assert np.allclose(colors[-1][0], GRAPH_COLOR)


def test_render_point_cloud_on_unit_circle():
    obj = ZSpaceObject()
    obj.set_zspace_point_cloud(object())
    obj.vertex_size = 4.0
    renderer = RecordingRenderer()
    obj.render_impl(renderer, None)
    points = [args[0] for name, args in renderer.calls if name == "draw_point"]
    assert len(points) == POINT_CLOUD_SAMPLES
    for point in points:
        assert np.linalg.norm(point) == pytest.approx(1.0)
        assert point[2] == 0.0
    assert ("set_point_size", (4.0,)) in renderer.calls


def test_render_generic_draws_cube():
    obj = ZSpaceObject()
    obj.set_zspace_object(object())
    renderer = RecordingRenderer()
    obj.render_impl(renderer, None)
    assert renderer.names() == ["set_color", "draw_cube"]
    assert np.allclose(renderer.calls[0][1][0], obj.color)