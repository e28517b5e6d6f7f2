"""Quaternion rotations and hierarchical TRS transforms in a Z-up world.

Vectors are numpy arrays of shape ``(3,)`` and matrices are ``4x4`` numpy
arrays in the usual column-vector convention (``M @ v``).
The axis convention is Z-up: +X is right, +Y is forward and +Z is up.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

import numpy as np

_EPSILON = 1e-12

VectorLike = Union[Sequence[float], np.ndarray]


def _vec3(value: VectorLike) -> np.ndarray:
    vector = np.array(value, dtype=float)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {vector.shape}")
    return vector


def _scale3(value: Union[float, VectorLike]) -> np.ndarray:
    if np.isscalar(value):
        return np.full(3, float(value))
    return _vec3(value)


def _normalize(vector: np.ndarray) -> Optional[np.ndarray]:
    length = float(np.linalg.norm(vector))
    if length < _EPSILON:
        return None
    return vector / length


def _translation_matrix(offset: np.ndarray) -> np.ndarray:
    matrix = np.eye(4)
    matrix[:3, 3] = offset
    return matrix


def _scale_matrix(scale: np.ndarray) -> np.ndarray:
    return np.diag([scale[0], scale[1], scale[2], 1.0])


def _apply_point(matrix: np.ndarray, point: np.ndarray) -> np.ndarray:
    homogeneous = matrix @ np.append(point, 1.0)
    w = homogeneous[3]
    if w != 0.0 and w != 1.0:
        return homogeneous[:3] / w
    return homogeneous[:3]


@dataclass(frozen=True)
class Quaternion:
    """A rotation quaternion; the default value is the identity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def from_axis_angle(cls, axis: VectorLike, angle: float) -> "Quaternion":
        """Rotation of ``angle`` radians about ``axis``."""
        unit = _normalize(_vec3(axis))
        if unit is None:
            return cls()
        half = angle * 0.5
        s = math.sin(half)
        return cls(unit[0] * s, unit[1] * s, unit[2] * s, math.cos(half))

    @classmethod
    def look_at(cls, forward: VectorLike, up: VectorLike = (0.0, 0.0, 1.0)) -> "Quaternion":
        """Rotation taking +Y onto ``forward`` with +Z as close to ``up`` as possible."""
        f = _normalize(_vec3(forward))
        if f is None:
            return cls()
        up_vector = _vec3(up)
        r = _normalize(np.cross(f, up_vector))
        if r is None:
            fallback = np.array([1.0, 0.0, 0.0]) if abs(f[0]) < 0.9 else np.array([0.0, 1.0, 0.0])
            r = _normalize(np.cross(f, fallback))
        u = np.cross(r, f)
        return cls._from_rotation_matrix(np.column_stack([r, f, u]))

    @classmethod
    def _from_rotation_matrix(cls, m: np.ndarray) -> "Quaternion":
        trace = m[0, 0] + m[1, 1] + m[2, 2]
        if trace > 0.0:
            s = math.sqrt(trace + 1.0) * 2.0
            return cls(
                (m[2, 1] - m[1, 2]) / s,
                (m[0, 2] - m[2, 0]) / s,
                (m[1, 0] - m[0, 1]) / s,
                0.25 * s,
            ).normalized()
        if m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
            s = math.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2]) * 2.0
            return cls(
                0.25 * s,
                (m[0, 1] + m[1, 0]) / s,
                (m[0, 2] + m[2, 0]) / s,
                (m[2, 1] - m[1, 2]) / s,
            ).normalized()
        if m[1, 1] > m[2, 2]:
            s = math.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2]) * 2.0
            return cls(
                (m[0, 1] + m[1, 0]) / s,
                0.25 * s,
                (m[1, 2] + m[2, 1]) / s,
                (m[0, 2] - m[2, 0]) / s,
            ).normalized()
        s = math.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1]) * 2.0
        return cls(
            (m[0, 2] + m[2, 0]) / s,
            (m[1, 2] + m[2, 1]) / s,
            0.25 * s,
            (m[1, 0] - m[0, 1]) / s,
        ).normalized()

    @classmethod
    def slerp(cls, a: "Quaternion", b: "Quaternion", t: float) -> "Quaternion":
        """Spherical interpolation from ``a`` (t=0) to ``b`` (t=1) along the short arc."""
        qa = np.array([a.x, a.y, a.z, a.w])
        qb = np.array([b.x, b.y, b.z, b.w])
        dot = float(qa @ qb)
        if dot < 0.0:
            qb = -qb
            dot = -dot
        if dot > 0.9995:
            result = qa + (qb - qa) * t
            return cls(*result).normalized()
        theta0 = math.acos(min(dot, 1.0))
        theta = theta0 * t
        sin0 = math.sin(theta0)
        s0 = math.cos(theta) - dot * math.sin(theta) / sin0
        s1 = math.sin(theta) / sin0
        return cls(*(qa * s0 + qb * s1))

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        if not isinstance(other, Quaternion):
            return NotImplemented
        x1, y1, z1, w1 = self.x, self.y, self.z, self.w
        x2, y2, z2, w2 = other.x, other.y, other.z, other.w
        return Quaternion(
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        )

    def rotate(self, vector: VectorLike) -> np.ndarray:
        """Rotate a vector by this (unit) quaternion."""
        v = _vec3(vector)
        q = np.array([self.x, self.y, self.z])
        t = 2.0 * np.cross(q, v)
        return v + self.w * t + np.cross(q, t)

    def conjugate(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def normalized(self) -> "Quaternion":
        length = math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)
        if length < _EPSILON:
            return Quaternion()
        return Quaternion(self.x / length, self.y / length, self.z / length, self.w / length)

    def to_matrix(self) -> np.ndarray:
        """The 4x4 rotation matrix of this quaternion."""
        x, y, z, w = self.x, self.y, self.z, self.w
        matrix = np.eye(4)
        matrix[:3, :3] = [
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ]
        return matrix


class Transform:
    """Position, rotation and scale with an optional parent transform."""

    def __init__(
        self,
        position: VectorLike = (0.0, 0.0, 0.0),
        rotation: Optional[Quaternion] = None,
        scale: Union[float, VectorLike] = (1.0, 1.0, 1.0),
    ) -> None:
        self._position = _vec3(position)
        self._rotation = rotation if rotation is not None else Quaternion()
        self._scale = _scale3(scale)
        self._parent: Optional[Transform] = None
        self._children: list[Transform] = []

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: VectorLike) -> None:
        self._position = _vec3(value)

    @property
    def rotation(self) -> Quaternion:
        return self._rotation

    @rotation.setter
    def rotation(self, value: Quaternion) -> None:
        self._rotation = value.normalized()

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @scale.setter
    def scale(self, value: Union[float, VectorLike]) -> None:
        self._scale = _scale3(value)

    def translate(self, translation: VectorLike) -> None:
        self._position = self._position + _vec3(translation)

    def rotate(self, rotation: Quaternion) -> None:
        """Apply ``rotation`` on top of the current rotation."""
        self._rotation = rotation * self._rotation

    def rotate_axis(self, axis: VectorLike, angle: float) -> None:
        self.rotate(Quaternion.from_axis_angle(axis, angle))

    def scale_by(self, scale: VectorLike) -> None:
        self._scale = self._scale * _vec3(scale)

    @property
    def matrix(self) -> np.ndarray:
        """Local matrix: translation * rotation * scale."""
        return (
            _translation_matrix(self._position)
            @ self._rotation.to_matrix()
            @ _scale_matrix(self._scale)
        )

    @property
    def world_matrix(self) -> np.ndarray:
        if self._parent is not None:
            return self._parent.world_matrix @ self.matrix
        return self.matrix

    def inverse_matrix(self) -> np.ndarray:
        """Inverse of the local matrix."""
        inv_scale = _scale_matrix(1.0 / self._scale)
        inv_rotation = self._rotation.conjugate().to_matrix()
        inv_translation = _translation_matrix(-self._position)
        return inv_scale @ inv_rotation @ inv_translation

    @property
    def parent(self) -> Optional["Transform"]:
        return self._parent

    @property
    def children(self) -> tuple["Transform", ...]:
        return tuple(self._children)

    def set_parent(self, parent: Optional["Transform"]) -> None:
        if self._parent is parent:
            return
        if self._parent is not None:
            self._parent.remove_child(self)
        self._parent = parent
        if parent is not None:
            parent.add_child(self)

    def add_child(self, child: Optional["Transform"]) -> None:
        if child is None or child is self:
            return
        if not any(existing is child for existing in self._children):
            self._children.append(child)
            child._parent = self

    def remove_child(self, child: "Transform") -> None:
        for index, existing in enumerate(self._children):
            if existing is child:
                existing._parent = None
                del self._children[index]
                return

    def world_position(self) -> np.ndarray:
        if self._parent is not None:
            return _apply_point(self._parent.world_matrix, self._position)
        return self._position.copy()

    def world_scale(self) -> np.ndarray:
        if self._parent is not None:
            return self._scale * self._parent.world_scale()
        return self._scale.copy()

    def transform_point(self, point: VectorLike) -> np.ndarray:
        return _apply_point(self.matrix, _vec3(point))

    def transform_direction(self, direction: VectorLike) -> np.ndarray:
        return self._rotation.rotate(_vec3(direction) * self._scale)

    def inverse_transform_point(self, point: VectorLike) -> np.ndarray:
        return _apply_point(self.inverse_matrix(), _vec3(point))

    def inverse_transform_direction(self, direction: VectorLike) -> np.ndarray:
        return self.inverse_matrix()[:3, :3] @ _vec3(direction)

    def look_at(self, target: VectorLike, up: VectorLike = (0.0, 0.0, 1.0)) -> None:
        forward = _vec3(target) - self._position
        self._rotation = Quaternion.look_at(forward, up)

    def forward(self) -> np.ndarray:
        return self._rotation.rotate((0.0, 1.0, 0.0))

    def right(self) -> np.ndarray:
        return self._rotation.rotate((1.0, 0.0, 0.0))

    def up(self) -> np.ndarray:
        return self._rotation.rotate((0.0, 0.0, 1.0))


def _iter_descendants(transform: Transform) -> Iterable[Transform]:
    for child in transform.children:
        yield child
        yield from _iter_descendants(child)