"""Scene objects wrapping external mesh, graph and point-cloud data."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Optional

import numpy as np

from .scene_object import ObjectType, SceneObject

PLACEHOLDER_COLOR = (0.5, 0.5, 0.5)
GRAPH_COLOR = (0.8, 0.8, 0.8)
POINT_CLOUD_SAMPLES = 8


class ZSpaceObjectType(Enum):
    UNKNOWN = "unknown"
    MESH = "mesh"
    GRAPH = "graph"
    POINT_CLOUD = "point_cloud"
    GENERIC = "generic"


class ZSpaceObject(SceneObject):
    """A scene object holding an opaque geometry object and how to display it."""

    def __init__(
        self,
        name: str = "ZSpaceObject",
        zspace_object: Any = None,
        zspace_type: Optional[ZSpaceObjectType] = None,
    ) -> None:
        super().__init__(name)
        self.zspace_object = zspace_object
        self.zspace_type = zspace_type if zspace_type is not None else ZSpaceObjectType.UNKNOWN
        self.display_vertices = True
        self.display_edges = True
        self.display_faces = zspace_type is None or zspace_type is ZSpaceObjectType.MESH
        self.vertex_size = 3.0
        self.edge_width = 1.0
        if zspace_type is not None:
            self.calculate_bounds()

    @property
    def object_type(self) -> ObjectType:
        return ObjectType.ZSPACE_OBJECT

    def _attach(self, obj: Any, kind: ZSpaceObjectType) -> None:
        self.zspace_object = obj
        self.zspace_type = kind
        self.calculate_bounds()

    def set_zspace_object(self, obj: Any) -> None:
        self._attach(obj, ZSpaceObjectType.GENERIC)

    def set_zspace_mesh(self, mesh: Any) -> None:
        self._attach(mesh, ZSpaceObjectType.MESH)

    def set_zspace_graph(self, graph: Any) -> None:
        self._attach(graph, ZSpaceObjectType.GRAPH)

    def set_zspace_point_cloud(self, point_cloud: Any) -> None:
        self._attach(point_cloud, ZSpaceObjectType.POINT_CLOUD)

    def render_impl(self, renderer, camera) -> None:
        if self.zspace_object is None:
            renderer.set_color(np.array(PLACEHOLDER_COLOR))
            renderer.draw_cube(1.0)
            return
        renderer.set_color(self.color)
        if self.zspace_type is ZSpaceObjectType.MESH:
            self._render_mesh(renderer)
        elif self.zspace_type is ZSpaceObjectType.GRAPH:
            self._render_graph(renderer)
        elif self.zspace_type is ZSpaceObjectType.POINT_CLOUD:
            self._render_point_cloud(renderer)
        else:
            renderer.draw_cube(1.0)

    def update(self, delta_time: float) -> None:
        self.calculate_bounds()

    def calculate_bounds(self) -> None:
        if self.zspace_object is None:
            self._set_bounds((-0.5, -0.5, -0.5), (0.5, 0.5, 0.5))
            return
        self._set_bounds((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))

    def _render_mesh(self, renderer) -> None:
        if self.display_faces:
            renderer.set_wireframe(False)
            renderer.draw_cube(1.0)
        if self.display_edges:
            renderer.set_wireframe(True)
            renderer.set_line_width(self.edge_width)
            renderer.draw_cube(1.0)

    def _render_graph(self, renderer) -> None:
        renderer.set_color(np.array(GRAPH_COLOR))
        renderer.set_line_width(self.edge_width)
        for axis in np.eye(3):
            renderer.draw_line(-axis, axis.copy())

    def _render_point_cloud(self, renderer) -> None:
        renderer.set_point_size(self.vertex_size)
        for i in range(POINT_CLOUD_SAMPLES):
            angle = i * 2.0 * 3.14159 / POINT_CLOUD_SAMPLES
            renderer.draw_point(np.array([math.cos(angle), math.sin(angle), 0.0]))