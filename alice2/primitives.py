"""Simple geometric primitives: cube, sphere, cylinder, plane, line and point."""

from __future__ import annotations

from enum import Enum

import numpy as np

from .scene_object import ObjectType, SceneObject
from .transform import VectorLike, _scale_matrix, _vec3

POINT_HALF_EXTENT = 0.01


class PrimitiveType(Enum):
    CUBE = "cube"
    SPHERE = "sphere"
    CYLINDER = "cylinder"
    PLANE = "plane"
    LINE = "line"
    POINT = "point"


class PrimitiveObject(SceneObject):
    """A scene object drawn as one of the built-in primitive shapes."""

    def __init__(self, primitive_type: PrimitiveType, name: str = "Primitive") -> None:
        super().__init__(name)
        self._primitive_type = primitive_type
        self._size = np.array([1.0, 1.0, 1.0])
        self._radius = 0.5
        self._height = 1.0
        self.calculate_bounds()

    @property
    def object_type(self) -> ObjectType:
        return ObjectType.PRIMITIVE

    @property
    def primitive_type(self) -> PrimitiveType:
        return self._primitive_type

    @primitive_type.setter
    def primitive_type(self, value: PrimitiveType) -> None:
        self._primitive_type = value
        self.calculate_bounds()

    @property
    def size(self) -> np.ndarray:
        return self._size.copy()

    @size.setter
    def size(self, value: VectorLike) -> None:
        self._size = _vec3(value)
        self.calculate_bounds()

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float) -> None:
        self._radius = float(value)
        self.calculate_bounds()

    @property
    def height(self) -> float:
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self._height = float(value)
        self.calculate_bounds()

    def render_impl(self, renderer, camera) -> None:
        renderer.set_color(self.color, self.opacity)
        renderer.set_wireframe(self.wireframe)
        draw = {
            PrimitiveType.CUBE: self._render_cube,
            PrimitiveType.SPHERE: self._render_sphere,
            PrimitiveType.CYLINDER: self._render_cylinder,
            PrimitiveType.PLANE: self._render_plane,
            PrimitiveType.LINE: self._render_line,
            PrimitiveType.POINT: self._render_point,
        }[self._primitive_type]
        draw(renderer)

    def calculate_bounds(self) -> None:
        half = self._size * 0.5
        r = self._radius
        kind = self._primitive_type
        if kind in (PrimitiveType.CUBE, PrimitiveType.PLANE):
            self._set_bounds(-half, half)
        elif kind is PrimitiveType.SPHERE:
            self._set_bounds((-r, -r, -r), (r, r, r))
        elif kind is PrimitiveType.CYLINDER:
            h = self._height * 0.5
            self._set_bounds((-r, -h, -r), (r, h, r))
        elif kind is PrimitiveType.LINE:
            self._set_bounds((-half[0], 0.0, 0.0), (half[0], 0.0, 0.0))
        else:
            e = POINT_HALF_EXTENT
            self._set_bounds((-e, -e, -e), (e, e, e))

    def _render_scaled(self, renderer, scale: np.ndarray, draw) -> None:
        renderer.push_matrix()
        renderer.mult_matrix(_scale_matrix(scale))
        draw()
        renderer.pop_matrix()

    def _render_cube(self, renderer) -> None:
        self._render_scaled(renderer, self._size, lambda: renderer.draw_cube(1.0))

    def _render_sphere(self, renderer) -> None:
        r = self._radius
        self._render_scaled(renderer, np.array([r, r, r]), lambda: renderer.draw_sphere(1.0))

    def _render_cylinder(self, renderer) -> None:
        scale = np.array([self._radius, self._height, self._radius])
        self._render_scaled(renderer, scale, lambda: renderer.draw_cylinder(1.0, 1.0))

    def _render_plane(self, renderer) -> None:
        hx, _, hz = self._size * 0.5
        renderer.draw_quad(
            np.array([-hx, 0.0, -hz]),
            np.array([hx, 0.0, -hz]),
            np.array([hx, 0.0, hz]),
            np.array([-hx, 0.0, hz]),
        )

    def _render_line(self, renderer) -> None:
        hx = self._size[0] * 0.5
        renderer.draw_line(np.array([-hx, 0.0, 0.0]), np.array([hx, 0.0, 0.0]))

    def _render_point(self, renderer) -> None:
        renderer.draw_point(np.zeros(3))