"""Base class for renderable objects placed in a scene."""

from __future__ import annotations

import itertools
import sys
import weakref
from enum import Enum
from typing import Any, Optional

import numpy as np

from .transform import Transform, VectorLike, _vec3

SELECTION_COLOR = (1.0, 0.5, 0.0)
_PARALLEL_EPSILON = 1e-6
_FAR = sys.float_info.max


class ObjectType(Enum):
    UNKNOWN = "unknown"
    PRIMITIVE = "primitive"
    ZSPACE_OBJECT = "zspace_object"
    MESH = "mesh"
    POINT_CLOUD = "point_cloud"
    GRAPH = "graph"


class SceneObject:
    """A named, transformable object with bounds, material and children.

    The renderer passed to :meth:`render` is any object offering
    ``push_matrix``, ``pop_matrix``, ``mult_matrix``, ``set_color``,
    ``set_wireframe`` and whatever drawing calls subclasses make.
    """

    _ids = itertools.count(1)

    def __init__(self, name: str = "SceneObject") -> None:
        self.name = name
        self.id = next(SceneObject._ids)
        self.transform = Transform()
        self.visible = True
        self.selected = False
        self._color = np.array([1.0, 1.0, 1.0])
        self.wireframe = False
        self._opacity = 1.0
        self._bounds_min = np.array([-1.0, -1.0, -1.0])
        self._bounds_max = np.array([1.0, 1.0, 1.0])
        self._parent: Optional[weakref.ReferenceType[SceneObject]] = None
        self._children: list[SceneObject] = []
        self.user_data: Any = None

    @property
    def object_type(self) -> ObjectType:
        return ObjectType.UNKNOWN

    # Material

    @property
    def color(self) -> np.ndarray:
        return self._color.copy()

    @color.setter
    def color(self, value: VectorLike) -> None:
        self._color = _vec3(value)

    @property
    def opacity(self) -> float:
        return self._opacity

    @opacity.setter
    def opacity(self, value: float) -> None:
        self._opacity = min(max(float(value), 0.0), 1.0)

    # Rendering

    def render(self, renderer, camera) -> None:
        """Draw this object and its children under its world transform."""
        if not self.visible:
            return
        renderer.push_matrix()
        renderer.mult_matrix(self.transform.world_matrix)
        renderer.set_color(self.color, self._opacity)
        renderer.set_wireframe(self.wireframe)
        if self.selected:
            renderer.set_color(np.array(SELECTION_COLOR), self._opacity)
        self.render_impl(renderer, camera)
        for child in self._children:
            child.render(renderer, camera)
        renderer.pop_matrix()

    def render_impl(self, renderer, camera) -> None:
        """Object-specific drawing; the base object draws nothing."""

    def update(self, delta_time: float) -> None:
        """Per-frame update; the base object does nothing."""

    # Bounds

    def calculate_bounds(self) -> None:
        """Recompute local bounds; the base object keeps what it has."""

    @property
    def bounds_min(self) -> np.ndarray:
        return self._bounds_min.copy()

    @property
    def bounds_max(self) -> np.ndarray:
        return self._bounds_max.copy()

    def bounds_center(self) -> np.ndarray:
        return (self._bounds_min + self._bounds_max) * 0.5

    def bounds_size(self) -> np.ndarray:
        return self._bounds_max - self._bounds_min

    def _set_bounds(self, minimum: VectorLike, maximum: VectorLike) -> None:
        self._bounds_min = _vec3(minimum)
        self._bounds_max = _vec3(maximum)

    # Picking

    def intersect_ray(self, ray_origin: VectorLike, ray_direction: VectorLike) -> Optional[float]:
        """Distance along the ray to the object's bounding box, or None on a miss."""
        origin = _vec3(ray_origin)
        direction = _vec3(ray_direction)
        corner_a = self.transform.transform_point(self._bounds_min)
        corner_b = self.transform.transform_point(self._bounds_max)
        lower = np.minimum(corner_a, corner_b)
        upper = np.maximum(corner_a, corner_b)

        tmin = 0.0
        tmax = _FAR
        for o, d, lo, hi in zip(origin, direction, lower, upper):
            if abs(d) < _PARALLEL_EPSILON:
                if o < lo or o > hi:
                    return None
                continue
            t1 = (lo - o) / d
            t2 = (hi - o) / d
            if t1 > t2:
                t1, t2 = t2, t1
            tmin = max(tmin, float(t1))
            tmax = min(tmax, float(t2))
            if tmin > tmax:
                return None

        distance = tmin if tmin > 0 else tmax
        return distance if distance > 0 else None

    # Hierarchy

    @property
    def parent(self) -> Optional["SceneObject"]:
        return self._parent() if self._parent is not None else None

    @property
    def children(self) -> tuple["SceneObject", ...]:
        return tuple(self._children)

    def set_parent(self, parent: Optional["SceneObject"]) -> None:
        current = self.parent
        if current is parent:
            return
        if current is not None:
            current.remove_child(self)
        self._parent = weakref.ref(parent) if parent is not None else None
        if parent is not None:
            parent.add_child(self)
            self.transform.set_parent(parent.transform)
        else:
            self.transform.set_parent(None)

    def add_child(self, child: Optional["SceneObject"]) -> None:
        if child is None or child is self:
            return
        if any(existing is child for existing in self._children):
            return
        self._children.append(child)
        child._parent = weakref.ref(self)
        child.transform.set_parent(self.transform)

    def remove_child(self, child: "SceneObject") -> None:
        for index, existing in enumerate(self._children):
            if existing is child:
                existing._parent = None
                existing.transform.set_parent(None)
                del self._children[index]
                return