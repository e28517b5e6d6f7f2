"""The sketch interface and the registry that sketches are created from."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar


class Sketch(ABC):
    """A user program driven by the viewer: set up once, then updated and drawn each frame.

    Subclasses give ``name`` (usually as a class attribute) and may give
    ``description``, ``author`` and ``version``.  The manager hands each
    sketch the shared ``scene``, ``renderer``, ``camera`` and
    ``input_manager`` before calling :meth:`setup`.
    """

    description: str = ""
    author: str = ""
    version: str = "1.0"

    def __init__(self) -> None:
        self.scene: Any = None
        self.renderer: Any = None
        self.camera: Any = None
        self.input_manager: Any = None

    @property
    @abstractmethod
    def name(self) -> str:
        """The name the sketch is listed and loaded under."""

    @abstractmethod
    def setup(self) -> None:
        """Called once after the sketch is loaded."""

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """Called once per frame with the seconds since the last frame."""

    @abstractmethod
    def draw(self, renderer, camera) -> None:
        """Called once per frame after the scene has been drawn."""

    def cleanup(self) -> None:
        """Called before the sketch is unloaded."""

    def on_key_press(self, key, x: int, y: int) -> bool:
        """Return True if the key was handled and default handling should be skipped."""
        return False

    def on_mouse_press(self, button: int, state: int, x: int, y: int) -> bool:
        """Return True if the button event was handled."""
        return False

    def on_mouse_move(self, x: int, y: int) -> bool:
        """Return True if the motion event was handled."""
        return False


SketchFactory = Callable[[], Sketch]


@dataclass(frozen=True)
class RegisteredSketch:
    """A registry entry: a sketch's description and how to create it."""

    name: str
    description: str
    author: str
    version: str
    factory: SketchFactory


class SketchRegistry:
    """An ordered list of sketches that can be created by name."""

    def __init__(self) -> None:
        self._sketches: list[RegisteredSketch] = []

    @property
    def sketches(self) -> tuple[RegisteredSketch, ...]:
        return tuple(self._sketches)

    def __len__(self) -> int:
        return len(self._sketches)

    def __iter__(self):
        return iter(self._sketches)

    def __contains__(self, name: object) -> bool:
        return self.has_sketch(name)  # type: ignore[arg-type]

    def register_sketch(
        self,
        name: str,
        description: str,
        author: str,
        version: str,
        factory: SketchFactory,
    ) -> RegisteredSketch:
        entry = RegisteredSketch(name, description, author, version, factory)
        self._sketches.append(entry)
        return entry

    def create_sketch(self, name: str) -> Sketch:
        """A new instance of the first sketch registered under ``name``."""
        entry = self.get_sketch_info(name)
        if entry is None:
            raise KeyError(name)
        return entry.factory()

    def has_sketch(self, name: str) -> bool:
        return self.get_sketch_info(name) is not None

    def get_sketch_info(self, name: str) -> Optional[RegisteredSketch]:
        return next((entry for entry in self._sketches if entry.name == name), None)


default_registry = SketchRegistry()

_S = TypeVar("_S", bound=type)


def register(sketch_class: _S, registry: Optional[SketchRegistry] = None) -> _S:
    """Register a sketch class, reading its details from a temporary instance.

    Returns the class, so it can be used as a decorator.
    """
    target = registry if registry is not None else default_registry
    sample = sketch_class()
    target.register_sketch(
        sample.name,
        sample.description,
        sample.author,
        sample.version,
        sketch_class,
    )
    return sketch_class