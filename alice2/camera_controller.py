"""Mouse-driven orbit, pan and zoom control of a camera."""

from __future__ import annotations

from enum import Enum

import numpy as np

from .camera import DEFAULT_ORBIT_DISTANCE, MIN_ORBIT_DISTANCE, Camera
from .input import InputManager, MouseButton
from .transform import VectorLike, _vec3


class CameraMode(Enum):
    ORBIT = "orbit"
    FLY = "fly"
    PAN = "pan"


class CameraController:
    """Turns input state into camera movement once per frame."""

    def __init__(self, camera: Camera, input_manager: InputManager) -> None:
        self.camera = camera
        self.input_manager = input_manager
        self.mode = CameraMode.ORBIT
        self.orbit_speed = 2.0
        self.pan_speed = 0.2
        self.zoom_speed = 1.0
        self.fly_speed = 5.0
        self.mouse_sensitivity = 0.1
        self.invert_y = False
        self._is_dragging = False
        self._last_mouse_pos = np.zeros(3)

        # Keep whatever distance the camera already has from the origin.
        self._orbit_center = np.zeros(3)
        self._orbit_distance = float(np.linalg.norm(camera.position - self._orbit_center))
        if self._orbit_distance < MIN_ORBIT_DISTANCE:
            self._orbit_distance = DEFAULT_ORBIT_DISTANCE

    # Orbit state

    @property
    def orbit_center(self) -> np.ndarray:
        return self._orbit_center.copy()

    @orbit_center.setter
    def orbit_center(self, value: VectorLike) -> None:
        self._orbit_center = _vec3(value)
        self._apply_orbit()

    @property
    def orbit_distance(self) -> float:
        return self._orbit_distance

    @orbit_distance.setter
    def orbit_distance(self, value: float) -> None:
        self._orbit_distance = max(MIN_ORBIT_DISTANCE, float(value))
        self._apply_orbit()

    def _apply_orbit(self) -> None:
        self.camera.orbit(self._orbit_center, 0.0, 0.0, self._orbit_distance)

    # Per-frame update

    def update(self, delta_time: float) -> None:
        if self.mode is CameraMode.PAN:
            self._handle_pan_mode()
        else:
            # Fly mode currently behaves like orbit mode.
            self._handle_orbit_mode()

    def _handle_orbit_mode(self) -> None:
        mouse = self.input_manager.mouse_state
        if self.input_manager.is_mouse_button_down(MouseButton.LEFT):
            if not self._is_dragging:
                self._is_dragging = True
                self._last_mouse_pos = mouse.position.copy()
            else:
                delta = mouse.position - self._last_mouse_pos
                factor = self.mouse_sensitivity * 0.5
                self.orbit(delta[0] * factor, delta[1] * factor)
                self._last_mouse_pos = mouse.position.copy()
        else:
            self._is_dragging = False

        for button in (MouseButton.MIDDLE, MouseButton.RIGHT):
            if self.input_manager.is_mouse_button_down(button):
                delta = mouse.delta
                factor = self.pan_speed * 0.1
                self.pan(-delta[0] * factor, delta[1] * factor)

        if mouse.wheel_delta != 0.0:
            self.dolly(-mouse.wheel_delta * self.zoom_speed)

    def _handle_pan_mode(self) -> None:
        mouse = self.input_manager.mouse_state
        if self.input_manager.is_mouse_button_down(MouseButton.LEFT):
            delta = mouse.delta
            self.pan(-delta[0] * self.pan_speed, delta[1] * self.pan_speed)
        if mouse.wheel_delta != 0.0:
            self.zoom(-mouse.wheel_delta * self.zoom_speed)

    # Manual control

    def orbit(self, delta_x: float, delta_y: float) -> None:
        adjusted_y = -delta_y if self.invert_y else delta_y
        self.camera.orbit(
            self._orbit_center,
            delta_x * self.orbit_speed,
            adjusted_y * self.orbit_speed,
            self._orbit_distance,
        )

    def pan(self, delta_x: float, delta_y: float) -> None:
        offset = (
            self.camera.right() * delta_x * self.pan_speed
            + self.camera.up() * delta_y * self.pan_speed
        )
        if self.mode is CameraMode.ORBIT:
            self._orbit_center = self._orbit_center + offset
            self._apply_orbit()
        else:
            self.camera.transform.translate(offset)

    def zoom(self, delta: float) -> None:
        if self.mode is CameraMode.ORBIT:
            self.dolly(delta * self.zoom_speed)
        else:
            self.camera.zoom(delta * self.zoom_speed)

    def dolly(self, delta: float) -> None:
        self._orbit_distance = max(MIN_ORBIT_DISTANCE, self._orbit_distance + delta)
        self._apply_orbit()

    # Utility

    def focus_on_bounds(self, bounds_min: VectorLike, bounds_max: VectorLike) -> None:
        """Centre on a box and back off to twice its largest side."""
        low = _vec3(bounds_min)
        high = _vec3(bounds_max)
        self.orbit_center = (low + high) * 0.5
        self.orbit_distance = float(np.max(high - low)) * 2.0

    def reset_to_default(self) -> None:
        self._orbit_center = np.zeros(3)
        self._orbit_distance = DEFAULT_ORBIT_DISTANCE
        self._apply_orbit()