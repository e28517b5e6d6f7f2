"""Keyboard and mouse state tracking with per-frame edge detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Hashable, Optional

import numpy as np

# Modifier bits and mouse button codes as reported by the windowing layer.
MOD_SHIFT = 0x0001
MOD_CONTROL = 0x0002
MOD_ALT = 0x0004

RAW_MOUSE_BUTTON_LEFT = 0
RAW_MOUSE_BUTTON_RIGHT = 1
RAW_MOUSE_BUTTON_MIDDLE = 2

_RAW_BUTTONS = {
    RAW_MOUSE_BUTTON_LEFT: "LEFT",
    RAW_MOUSE_BUTTON_MIDDLE: "MIDDLE",
    RAW_MOUSE_BUTTON_RIGHT: "RIGHT",
}


class MouseButton(IntEnum):
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


class KeyState(IntEnum):
    RELEASED = 0
    PRESSED = 1


def _zero() -> np.ndarray:
    return np.zeros(3)


@dataclass
class MouseState:
    """Mouse position, movement, buttons and wheel for the current frame."""

    position: np.ndarray = field(default_factory=_zero)
    last_position: np.ndarray = field(default_factory=_zero)
    delta: np.ndarray = field(default_factory=_zero)
    buttons: list[bool] = field(default_factory=lambda: [False, False, False])
    last_buttons: list[bool] = field(default_factory=lambda: [False, False, False])
    wheel_delta: float = 0.0


KeyCallback = Callable[[Hashable, int, int], None]
MouseButtonCallback = Callable[[MouseButton, KeyState, int, int], None]
MouseMoveCallback = Callable[[int, int], None]
MouseWheelCallback = Callable[[float], None]


def _button(button) -> Optional[MouseButton]:
    try:
        return MouseButton(button)
    except ValueError:
        return None


class InputManager:
    """Collects input events and answers queries about the current frame."""

    def __init__(self) -> None:
        self.mouse_state = MouseState()
        self.modifiers = 0
        self.key_callback: Optional[KeyCallback] = None
        self.mouse_button_callback: Optional[MouseButtonCallback] = None
        self.mouse_move_callback: Optional[MouseMoveCallback] = None
        self.mouse_wheel_callback: Optional[MouseWheelCallback] = None
        self._key_states: dict[Hashable, KeyState] = {}
        self._last_key_states: dict[Hashable, KeyState] = {}

    def update(self) -> None:
        """Advance one frame: remember states, compute mouse delta, reset wheel."""
        self._last_key_states = dict(self._key_states)
        self.mouse_state.last_buttons = list(self.mouse_state.buttons)
        self.mouse_state.delta = self.mouse_state.position - self.mouse_state.last_position
        self.mouse_state.last_position = self.mouse_state.position.copy()
        self.mouse_state.wheel_delta = 0.0

    # Keyboard

    def set_key_state(self, key: Hashable, state: KeyState) -> None:
        self._key_states[key] = state

    def _pressed_now(self, key: Hashable) -> bool:
        return self._key_states.get(key) == KeyState.PRESSED

    def _pressed_before(self, key: Hashable) -> bool:
        return self._last_key_states.get(key) == KeyState.PRESSED

    def is_key_pressed(self, key: Hashable) -> bool:
        """True on the frame a key goes down."""
        return self._pressed_now(key) and not self._pressed_before(key)

    def is_key_down(self, key: Hashable) -> bool:
        return self._pressed_now(key)

    def is_key_released(self, key: Hashable) -> bool:
        """True on the frame a key goes up."""
        return not self._pressed_now(key) and self._pressed_before(key)

    # Mouse

    def set_mouse_position(self, x: int, y: int) -> None:
        self.mouse_state.last_position = self.mouse_state.position
        self.mouse_state.position = np.array([float(x), float(y), 0.0])

    def set_mouse_button(self, button: MouseButton, state: KeyState) -> None:
        which = _button(button)
        if which is not None:
            self.mouse_state.buttons[which] = state == KeyState.PRESSED

    def set_mouse_wheel(self, delta: float) -> None:
        self.mouse_state.wheel_delta = delta

    @property
    def mouse_position(self) -> np.ndarray:
        return self.mouse_state.position.copy()

    @property
    def mouse_delta(self) -> np.ndarray:
        return self.mouse_state.delta.copy()

    @property
    def mouse_wheel_delta(self) -> float:
        return self.mouse_state.wheel_delta

    def is_mouse_button_pressed(self, button: MouseButton) -> bool:
        which = _button(button)
        if which is None:
            return False
        return self.mouse_state.buttons[which] and not self.mouse_state.last_buttons[which]

    def is_mouse_button_down(self, button: MouseButton) -> bool:
        which = _button(button)
        return which is not None and self.mouse_state.buttons[which]

    def is_mouse_button_released(self, button: MouseButton) -> bool:
        which = _button(button)
        if which is None:
            return False
        return not self.mouse_state.buttons[which] and self.mouse_state.last_buttons[which]

    # Modifiers

    def is_shift_pressed(self) -> bool:
        return bool(self.modifiers & MOD_SHIFT)

    def is_ctrl_pressed(self) -> bool:
        return bool(self.modifiers & MOD_CONTROL)

    def is_alt_pressed(self) -> bool:
        return bool(self.modifiers & MOD_ALT)

    # Event processing

    def process_keyboard(self, key: Hashable, x: int, y: int) -> None:
        self.set_key_state(key, KeyState.PRESSED)
        if self.key_callback:
            self.key_callback(key, x, y)

    def process_mouse_button(self, button: int, state: int, x: int, y: int) -> None:
        """Handle a raw button event; ``state`` is 0 for press and anything else for release."""
        self.set_mouse_position(x, y)
        name = _RAW_BUTTONS.get(button)
        if name is None:
            return
        mouse_button = MouseButton[name]
        key_state = KeyState.PRESSED if state == 0 else KeyState.RELEASED
        self.set_mouse_button(mouse_button, key_state)
        if self.mouse_button_callback:
            self.mouse_button_callback(mouse_button, key_state, x, y)

    def process_mouse_motion(self, x: int, y: int) -> None:
        self.set_mouse_position(x, y)
        if self.mouse_move_callback:
            self.mouse_move_callback(x, y)

    def process_mouse_wheel(self, delta: float) -> None:
        self.set_mouse_wheel(delta)
        if self.mouse_wheel_callback:
            self.mouse_wheel_callback(delta)