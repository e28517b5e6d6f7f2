"""A collection of scene objects with grid, axes, bounds and ray picking."""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from .scene_object import SceneObject
from .transform import VectorLike, _vec3

GRID_COLOR = (0.5, 0.5, 0.5)
DEFAULT_BOUNDS_MIN = (-1.0, -1.0, -1.0)
DEFAULT_BOUNDS_MAX = (1.0, 1.0, 1.0)


class Scene:
    """Holds scene objects and draws them with an optional grid and axes.

    The renderer handed to :meth:`render` must offer ``clear``,
    ``set_ambient_light``, ``set_color``, ``draw_grid`` and ``draw_axes``,
    plus whatever the objects themselves draw with.
    """

    def __init__(self) -> None:
        self._objects: list[SceneObject] = []
        self.background_color = np.array([0.2, 0.2, 0.3])
        self.ambient_light = np.array([0.2, 0.2, 0.2])
        self.show_grid = True
        self.grid_size = 10.0
        self.grid_divisions = 10
        self.show_axes = True
        self.axes_length = 1.0
        self._bounds_min = np.array(DEFAULT_BOUNDS_MIN)
        self._bounds_max = np.array(DEFAULT_BOUNDS_MAX)

    # Object management

    @property
    def objects(self) -> tuple[SceneObject, ...]:
        return tuple(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self):
        return iter(self._objects)

    def add_object(self, obj: Optional[SceneObject]) -> None:
        """Add an object unless it is None or already present."""
        if obj is None:
            return
        if not any(existing is obj for existing in self._objects):
            self._objects.append(obj)

    def remove_object(self, obj: Union[SceneObject, str]) -> None:
        """Remove an object, or the first object with the given name."""
        for index, existing in enumerate(self._objects):
            matches = existing.name == obj if isinstance(obj, str) else existing is obj
            if matches:
                del self._objects[index]
                return

    def find_object(self, name: str) -> Optional[SceneObject]:
        return next((obj for obj in self._objects if obj.name == name), None)

    def clear(self) -> None:
        self._objects.clear()

    # Rendering

    def render(self, renderer, camera) -> None:
        renderer.clear()
        renderer.set_ambient_light(self.ambient_light)
        if self.show_grid:
            renderer.set_color(np.array(GRID_COLOR))
            renderer.draw_grid(self.grid_size, self.grid_divisions)
        if self.show_axes:
            renderer.draw_axes(self.axes_length)
        for obj in self._objects:
            if obj.visible:
                obj.render(renderer, camera)

    def update(self, delta_time: float) -> None:
        for obj in self._objects:
            obj.update(delta_time)

    # Bounds

    def calculate_bounds(self) -> None:
        """Combine the bounds of all objects; an empty scene gets unit bounds."""
        if not self._objects:
            self._bounds_min = np.array(DEFAULT_BOUNDS_MIN)
            self._bounds_max = np.array(DEFAULT_BOUNDS_MAX)
            return
        lows = []
        highs = []
        for obj in self._objects:
            obj.calculate_bounds()
            lows.append(obj.bounds_min)
            highs.append(obj.bounds_max)
        self._bounds_min = np.min(lows, axis=0)
        self._bounds_max = np.max(highs, axis=0)

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

    # Picking

    def _hits(self, ray_origin: VectorLike, ray_direction: VectorLike) -> list[tuple[float, SceneObject]]:
        origin = _vec3(ray_origin)
        direction = _vec3(ray_direction)
        hits = []
        for obj in self._objects:
            if not obj.visible:
                continue
            distance = obj.intersect_ray(origin, direction)
            if distance is not None:
                hits.append((distance, obj))
        return hits

    def pick(self, ray_origin: VectorLike, ray_direction: VectorLike) -> Optional[SceneObject]:
        """The nearest visible object hit by the ray, or None."""
        hits = self._hits(ray_origin, ray_direction)
        if not hits:
            return None
        return min(hits, key=lambda hit: hit[0])[1]

    def pick_multiple(self, ray_origin: VectorLike, ray_direction: VectorLike) -> list[SceneObject]:
        """All visible objects hit by the ray, nearest first."""
        hits = self._hits(ray_origin, ray_direction)
        hits.sort(key=lambda hit: hit[0])
        return [obj for _, obj in hits]