"""Discovers, loads, switches and drives sketches."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .sketch import Sketch, SketchRegistry, default_registry

logger = logging.getLogger(__name__)

BASE_SKETCH_NAME = "Base Sketch"
DEFAULT_USER_SRC_DIRECTORY = "userSrc"

SketchLoadedCallback = Callable[[str], None]
SketchUnloadedCallback = Callable[[str], None]
SketchErrorCallback = Callable[[str, str], None]


@dataclass
class SketchInfo:
    """What is known about a sketch that can be loaded."""

    name: str
    description: str
    author: str
    version: str
    file_path: str
    is_loaded: bool = False


def _modification_time(path: str) -> Optional[int]:
    try:
        return os.stat(path).st_mtime_ns
    except OSError:
        return None


class SketchManager:
    """Keeps the list of available sketches and runs the current one.

    Errors raised by a sketch are caught, recorded in :attr:`last_error`
    and passed to the error callback, so a faulty sketch never stops the
    viewer.  ``base_sketch_factory`` creates the template sketch listed as
    ``"Base Sketch"`` when no registered sketch has that name.
    """

    def __init__(
        self,
        registry: Optional[SketchRegistry] = None,
        base_sketch_factory: Optional[Callable[[], Sketch]] = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry
        self.base_sketch_factory = base_sketch_factory
        self.scene: Any = None
        self.renderer: Any = None
        self.camera: Any = None
        self.input_manager: Any = None
        self._current_sketch: Optional[Sketch] = None
        self._current_sketch_name = ""
        self._current_sketch_index = -1
        self._available: list[SketchInfo] = []
        self.user_src_directory = DEFAULT_USER_SRC_DIRECTORY
        self.hot_reload_enabled = False
        self._file_timestamps: dict[str, Optional[int]] = {}
        self.last_error = ""
        self.sketch_loaded_callback: Optional[SketchLoadedCallback] = None
        self.sketch_unloaded_callback: Optional[SketchUnloadedCallback] = None
        self.sketch_error_callback: Optional[SketchErrorCallback] = None

    def initialize(self, scene, renderer, camera, input_manager) -> None:
        self.scene = scene
        self.renderer = renderer
        self.camera = camera
        self.input_manager = input_manager

    # State

    @property
    def has_current_sketch(self) -> bool:
        return self._current_sketch is not None

    @property
    def current_sketch(self) -> Optional[Sketch]:
        return self._current_sketch

    @property
    def current_sketch_name(self) -> str:
        return self._current_sketch_name

    @property
    def current_sketch_index(self) -> int:
        return self._current_sketch_index

    @property
    def available_sketches(self) -> tuple[SketchInfo, ...]:
        return tuple(self._available)

    @property
    def has_error(self) -> bool:
        return bool(self.last_error)

    def clear_error(self) -> None:
        self.last_error = ""

    # Discovery

    def scan_user_src_directory(self, directory: str = DEFAULT_USER_SRC_DIRECTORY) -> None:
        """Rebuild the list of available sketches from the registry."""
        self.user_src_directory = directory
        self._available = [
            SketchInfo(
                name=entry.name,
                description=entry.description,
                author=entry.author,
                version=entry.version,
                file_path=f"{directory}/{entry.name}.py",
            )
            for entry in self.registry
        ]
        if not self.registry.has_sketch(BASE_SKETCH_NAME):
            self._available.append(
                SketchInfo(
                    name=BASE_SKETCH_NAME,
                    description="Basic template sketch",
                    author="alice2",
                    version="1.0",
                    file_path=f"{directory}/sketch_base.py",
                )
            )
        self._file_timestamps = {
            info.file_path: _modification_time(info.file_path) for info in self._available
        }
        logger.info("Found %d sketches available", len(self._available))
        for info in self._available:
            logger.info("  - %s by %s", info.name, info.author)

    def is_sketch_available(self, name: str) -> bool:
        return any(info.name == name for info in self._available)

    # Loading

    def _create(self, name: str) -> Optional[Sketch]:
        if self.registry.has_sketch(name):
            return self.registry.create_sketch(name)
        if name == BASE_SKETCH_NAME and self.base_sketch_factory is not None:
            return self.base_sketch_factory()
        return None

    def load_sketch(self, name: str) -> None:
        try:
            sketch = self._create(name)
            if sketch is None:
                self._set_error(f"Failed to create sketch: {name}")
                return
            if self._current_sketch is not None:
                self.unload_current_sketch()

            self._current_sketch = sketch
            self._current_sketch_name = name
            self._current_sketch_index = next(
                (i for i, info in enumerate(self._available) if info.name == name), -1
            )
            sketch.scene = self.scene
            sketch.renderer = self.renderer
            sketch.camera = self.camera
            sketch.input_manager = self.input_manager

            self.setup_current_sketch()
            logger.info(
                "Loaded sketch: %s (%d/%d)",
                name,
                self._current_sketch_index + 1,
                len(self._available),
            )
            if self.sketch_loaded_callback:
                self.sketch_loaded_callback(name)
        except Exception as exc:
            self._set_error(f"Error loading sketch '{name}': {exc}")

    def unload_current_sketch(self) -> None:
        if self._current_sketch is None:
            return
        self.cleanup_current_sketch()
        name = self._current_sketch_name
        self._current_sketch = None
        self._current_sketch_name = ""
        self._current_sketch_index = -1
        if self.sketch_unloaded_callback:
            self.sketch_unloaded_callback(name)
        logger.info("Unloaded sketch: %s", name)

    def reload_current_sketch(self) -> None:
        if self._current_sketch_name:
            name = self._current_sketch_name
            self.unload_current_sketch()
            self.load_sketch(name)

    # Switching

    def switch_to_next_sketch(self) -> None:
        if not self._available:
            return
        self.switch_to_sketch((self._current_sketch_index + 1) % len(self._available))

    def switch_to_previous_sketch(self) -> None:
        if not self._available:
            return
        index = self._current_sketch_index - 1
        if index < 0:
            index = len(self._available) - 1
        self.switch_to_sketch(index)

    def switch_to_sketch(self, index: int) -> None:
        """Load the sketch at ``index``; an index out of range is ignored."""
        if 0 <= index < len(self._available):
            self.load_sketch(self._available[index].name)

    # Lifecycle

    def _guarded(self, what: str, call: Callable[[Sketch], Any], default: Any = None) -> Any:
        if self._current_sketch is None:
            return default
        try:
            return call(self._current_sketch)
        except Exception as exc:
            self._set_error(f"Error in sketch {what}: {exc}")
            return default

    def setup_current_sketch(self) -> None:
        self._guarded("setup", lambda sketch: sketch.setup())

    def update_current_sketch(self, delta_time: float) -> None:
        self._guarded("update", lambda sketch: sketch.update(delta_time))

    def draw_current_sketch(self, renderer, camera) -> None:
        self._guarded("draw", lambda sketch: sketch.draw(renderer, camera))

    def cleanup_current_sketch(self) -> None:
        self._guarded("cleanup", lambda sketch: sketch.cleanup())

    # Input forwarding

    def forward_key_press(self, key, x: int, y: int) -> bool:
        return bool(self._guarded("key press", lambda s: s.on_key_press(key, x, y), False))

    def forward_mouse_press(self, button: int, state: int, x: int, y: int) -> bool:
        return bool(
            self._guarded("mouse press", lambda s: s.on_mouse_press(button, state, x, y), False)
        )

    def forward_mouse_move(self, x: int, y: int) -> bool:
        return bool(self._guarded("mouse move", lambda s: s.on_mouse_move(x, y), False))

    # Hot reload

    def check_for_changes(self) -> bool:
        """Reload the current sketch if its file changed; True if it was reloaded."""
        if not self.hot_reload_enabled or not self._current_sketch_name:
            return False
        info = next(
            (info for info in self._available if info.name == self._current_sketch_name), None
        )
        if info is None:
            return False
        now = _modification_time(info.file_path)
        if now == self._file_timestamps.get(info.file_path):
            return False
        self._file_timestamps[info.file_path] = now
        if now is None:
            return False
        self.reload_current_sketch()
        return True

    # Errors

    def _set_error(self, error: str) -> None:
        self.last_error = error
        logger.error("SketchManager Error: %s", error)
        if self.sketch_error_callback:
            self.sketch_error_callback(self._current_sketch_name, error)