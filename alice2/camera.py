"""Orbit camera with perspective or orthographic projection in a Z-up world."""

from __future__ import annotations

import math
from enum import Enum

import numpy as np

from .transform import Quaternion, Transform, VectorLike, _apply_point, _vec3

DEG_TO_RAD = math.pi / 180.0

WORLD_UP = np.array([0.0, 0.0, 1.0])
WORLD_RIGHT = np.array([1.0, 0.0, 0.0])

DEFAULT_ORBIT_DISTANCE = 15.0
MIN_ORBIT_DISTANCE = 0.1
MIN_FOV = 1.0
MAX_FOV = 179.0
PAN_FACTOR = 0.002


def _unit(vector: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(vector))
    if length == 0.0:
        return vector
    return vector / length


def perspective_matrix(fov: float, aspect: float, near_plane: float, far_plane: float) -> np.ndarray:
    """Perspective projection; ``fov`` is the vertical field of view in degrees."""
    f = 1.0 / math.tan(fov * DEG_TO_RAD * 0.5)
    depth = near_plane - far_plane
    return np.array(
        [
            [f / aspect, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, (far_plane + near_plane) / depth, 2.0 * far_plane * near_plane / depth],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


def look_at_matrix(eye: VectorLike, center: VectorLike, up: VectorLike) -> np.ndarray:
    """View matrix for an eye at ``eye`` looking at ``center``."""
    eye_v = _vec3(eye)
    f = _unit(_vec3(center) - eye_v)
    s = _unit(np.cross(f, _vec3(up)))
    u = np.cross(s, f)
    matrix = np.eye(4)
    matrix[0, :3] = s
    matrix[1, :3] = u
    matrix[2, :3] = -f
    matrix[0, 3] = -float(s @ eye_v)
    matrix[1, 3] = -float(u @ eye_v)
    matrix[2, 3] = float(f @ eye_v)
    return matrix


class ProjectionType(Enum):
    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"


class Camera:
    """A camera that orbits a centre point using a quaternion rotation."""

    def __init__(self) -> None:
        self.transform = Transform()
        self._projection_type = ProjectionType.PERSPECTIVE
        self._fov = 45.0
        self._aspect_ratio = 16.0 / 9.0
        self._near_plane = 0.1
        self._far_plane = 1000.0
        self._ortho_left = -10.0
        self._ortho_right = 10.0
        self._ortho_bottom = -10.0
        self._ortho_top = 10.0
        self._projection_matrix = np.eye(4)

        self.orbit_center = np.zeros(3)
        self._orbit_distance = DEFAULT_ORBIT_DISTANCE
        yaw = Quaternion.from_axis_angle(WORLD_UP, 45.0 * DEG_TO_RAD)
        pitch = Quaternion.from_axis_angle(WORLD_RIGHT, -25.0 * DEG_TO_RAD)
        self._orbit_rotation = yaw * pitch

        self._update_orbit_position()
        self._update_projection()

    # Position and orientation

    @property
    def position(self) -> np.ndarray:
        return self.transform.position

    @position.setter
    def position(self, value: VectorLike) -> None:
        self.transform.position = value

    def look_at(self, target: VectorLike, up: VectorLike = (0.0, 0.0, 1.0)) -> None:
        up_vector = _vec3(up)
        if float(np.linalg.norm(up_vector)) == 0.0:
            up_vector = WORLD_UP.copy()
        forward = _unit(_vec3(target) - self.transform.position)
        self.transform.rotation = Quaternion.look_at(forward, up_vector)

    # Projection settings

    def set_perspective(self, fov: float, aspect: float, near_plane: float, far_plane: float) -> None:
        self._projection_type = ProjectionType.PERSPECTIVE
        self._fov = fov
        self._aspect_ratio = aspect
        self._near_plane = near_plane
        self._far_plane = far_plane
        self._update_projection()

    def set_orthographic(
        self,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near_plane: float,
        far_plane: float,
    ) -> None:
        self._projection_type = ProjectionType.ORTHOGRAPHIC
        self._ortho_left = left
        self._ortho_right = right
        self._ortho_bottom = bottom
        self._ortho_top = top
        self._near_plane = near_plane
        self._far_plane = far_plane
        self._update_projection()

    @property
    def field_of_view(self) -> float:
        return self._fov

    @field_of_view.setter
    def field_of_view(self, value: float) -> None:
        self._fov = value
        self._update_projection()

    @property
    def aspect_ratio(self) -> float:
        return self._aspect_ratio

    @aspect_ratio.setter
    def aspect_ratio(self, value: float) -> None:
        self._aspect_ratio = value
        self._update_projection()

    @property
    def near_plane(self) -> float:
        return self._near_plane

    @near_plane.setter
    def near_plane(self, value: float) -> None:
        self._near_plane = value
        self._update_projection()

    @property
    def far_plane(self) -> float:
        return self._far_plane

    @far_plane.setter
    def far_plane(self, value: float) -> None:
        self._far_plane = value
        self._update_projection()

    @property
    def projection_type(self) -> ProjectionType:
        return self._projection_type

    @projection_type.setter
    def projection_type(self, value: ProjectionType) -> None:
        self._projection_type = value
        self._update_projection()

    @property
    def ortho_bounds(self) -> tuple[float, float, float, float]:
        """(left, right, bottom, top) of the orthographic volume."""
        return (self._ortho_left, self._ortho_right, self._ortho_bottom, self._ortho_top)

    # Matrices

    @property
    def view_matrix(self) -> np.ndarray:
        position = self.transform.position
        return look_at_matrix(position, position + self.transform.forward(), self.transform.up())

    @property
    def projection_matrix(self) -> np.ndarray:
        return self._projection_matrix.copy()

    def view_projection_matrix(self) -> np.ndarray:
        return self._projection_matrix @ self.view_matrix

    # Movement

    def orbit(self, center: VectorLike, delta_x: float, delta_y: float, distance: float) -> None:
        """Rotate about ``center``: yaw about world Z, pitch about the camera's right axis."""
        self.orbit_center = _vec3(center)
        self._orbit_distance = distance
        yaw = Quaternion.from_axis_angle(WORLD_UP, -delta_x * DEG_TO_RAD)
        current_right = self._orbit_rotation.rotate(WORLD_RIGHT)
        pitch = Quaternion.from_axis_angle(current_right, -delta_y * DEG_TO_RAD)
        self._orbit_rotation = (yaw * pitch * self._orbit_rotation).normalized()
        self._update_orbit_position()

    def pan(self, delta_x: float, delta_y: float) -> None:
        """Move the orbit centre in screen space, scaled by distance and field of view."""
        right = self.transform.right()
        up = self.transform.up()
        fov_scale = math.tan(self._fov * DEG_TO_RAD * 0.5)
        pan_scale = self._orbit_distance * fov_scale * PAN_FACTOR
        offset = (right * delta_x + up * delta_y) * pan_scale
        self.orbit_center = self.orbit_center + offset
        self._update_orbit_position()

    def zoom(self, delta: float) -> None:
        if self._projection_type is ProjectionType.PERSPECTIVE:
            self._fov = min(max(self._fov + delta, MIN_FOV), MAX_FOV)
        else:
            scale = 1.0 + delta * 0.1
            self._ortho_left *= scale
            self._ortho_right *= scale
            self._ortho_bottom *= scale
            self._ortho_top *= scale
        self._update_projection()

    def dolly(self, delta: float) -> None:
        self._orbit_distance = max(MIN_ORBIT_DISTANCE, self._orbit_distance + delta)
        self._update_orbit_position()

    # Ray casting

    def screen_to_world_ray(
        self, screen_x: float, screen_y: float, screen_width: int, screen_height: int
    ) -> np.ndarray:
        """Approximate unit direction through a screen pixel."""
        x = (2.0 * screen_x) / screen_width - 1.0
        y = 1.0 - (2.0 * screen_y) / screen_height
        ray = self.forward() + self.right() * x + self.up() * y
        return _unit(ray)

    def world_to_screen(self, world_pos: VectorLike, screen_width: int, screen_height: int) -> np.ndarray:
        """Screen (x, y) of a world point, with its normalised depth as z."""
        clip = _apply_point(self.view_projection_matrix(), _vec3(world_pos))
        x = (clip[0] + 1.0) * 0.5 * screen_width
        y = (1.0 - clip[1]) * 0.5 * screen_height
        return np.array([x, y, clip[2]])

    # Orbit state

    @property
    def orbit_distance(self) -> float:
        return self._orbit_distance

    @orbit_distance.setter
    def orbit_distance(self, value: float) -> None:
        self._orbit_distance = value
        self._update_orbit_position()

    @property
    def orbit_rotation(self) -> Quaternion:
        return self._orbit_rotation

    def smooth_orbit_to(
        self, center: VectorLike, target_rotation: Quaternion, distance: float, t: float
    ) -> None:
        """Move a fraction ``t`` of the way towards the given orbit state."""
        target = _vec3(center)
        self.orbit_center = self.orbit_center + (target - self.orbit_center) * t
        self._orbit_distance = self._orbit_distance + (distance - self._orbit_distance) * t
        self._orbit_rotation = Quaternion.slerp(self._orbit_rotation, target_rotation, t)
        self._update_orbit_position()

    # Directions

    def forward(self) -> np.ndarray:
        return self.transform.forward()

    def right(self) -> np.ndarray:
        return self.transform.right()

    def up(self) -> np.ndarray:
        return self.transform.up()

    # Internals

    def _update_projection(self) -> None:
        if self._projection_type is ProjectionType.PERSPECTIVE:
            self._projection_matrix = perspective_matrix(
                self._fov, self._aspect_ratio, self._near_plane, self._far_plane
            )
            return
        rl = self._ortho_right - self._ortho_left
        tb = self._ortho_top - self._ortho_bottom
        fn = self._far_plane - self._near_plane
        matrix = np.eye(4)
        matrix[0, 0] = 2.0 / rl
        matrix[1, 1] = 2.0 / tb
        matrix[2, 2] = -2.0 / fn
        matrix[0, 3] = -(self._ortho_right + self._ortho_left) / rl
        matrix[1, 3] = -(self._ortho_top + self._ortho_bottom) / tb
        matrix[2, 3] = -(self._far_plane + self._near_plane) / fn
        self._projection_matrix = matrix

    def _update_orbit_position(self) -> None:
        offset = self._orbit_rotation.rotate((0.0, -self._orbit_distance, 0.0))
        self.transform.position = self.orbit_center + offset
        self.transform.rotation = self._orbit_rotation