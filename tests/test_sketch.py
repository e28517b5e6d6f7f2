import pytest

from alice2.sketch import RegisteredSketch, Sketch, SketchRegistry, register


class Minimal(Sketch):
    name = "Minimal"

    def setup(self):
        self.was_setup = True

    def update(self, delta_time):
        pass

    def draw(self, renderer, camera):
        pass


class Detailed(Minimal):
    name = "Detailed"
    description = "with details"
    author = "someone"
    version = "2.0"


def test_sketch_is_abstract():
    with pytest.raises(TypeError):
        Sketch()


def test_sketch_without_name_cannot_be_created():
    class Nameless(Sketch):
        def setup(self):
            pass

        def update(self, delta_time):
            pass

        def draw(self, renderer, camera):
            pass

    registry = SketchRegistry()
    registry.register_sketch("Nameless", "", "", "1.0", Nameless)
    assert registry.has_sketch("Nameless")
    with pytest.raises(TypeError):
        registry.create_sketch("Nameless")


def test_sketch_defaults():
    registry = SketchRegistry()
    register(Minimal, registry)
    sketch = registry.create_sketch("Minimal")
    assert sketch.name == "Minimal"
    assert sketch.description == ""
    assert sketch.author == ""
    assert sketch.version == "1.0"
    assert sketch.scene is None
    assert sketch.on_key_press("a", 1, 2) is False
    assert sketch.on_mouse_press(0, 0, 1, 2) is False
    assert sketch.on_mouse_move(1, 2) is False


def test_register_sketch_and_lookup():
    registry = SketchRegistry()
    entry = registry.register_sketch("Minimal", "d", "a", "v", Minimal)
    assert isinstance(entry, RegisteredSketch)
    assert registry.has_sketch("Minimal")
    assert "Minimal" in registry
    assert not registry.has_sketch("Other")
    assert registry.get_sketch_info("Minimal") == entry
    assert registry.get_sketch_info("Other") is None
    assert len(registry) == 1


def test_create_sketch_returns_new_instances():
    registry = SketchRegistry()
    registry.register_sketch("Minimal", "", "", "1.0", Minimal)
    first = registry.create_sketch("Minimal")
    second = registry.create_sketch("Minimal")
    assert isinstance(first, Minimal)
    assert first is not second


def test_create_unknown_sketch_raises():
    registry = SketchRegistry()
    with pytest.raises(KeyError):
        registry.create_sketch("missing")


def test_first_registration_wins_for_duplicates():
    registry = SketchRegistry()
    registry.register_sketch("Same", "first", "", "1.0", Minimal)
    registry.register_sketch("Same", "second", "", "1.0", Detailed)
    assert len(registry) == 2
    assert registry.get_sketch_info("Same").description == "first"
    assert type(registry.create_sketch("Same")) is Minimal


def test_register_reads_details_from_class():
    registry = SketchRegistry()
    returned = register(Detailed, registry)
    assert returned is Detailed
    info = registry.get_sketch_info("Detailed")
    assert info.description == "with details"
    assert info.author == "someone"
    assert info.version == "2.0"
    assert isinstance(registry.create_sketch("Detailed"), Detailed)


def test_registration_order_is_kept():
    registry = SketchRegistry()
    register(Detailed, registry)
    register(Minimal, registry)
    assert [entry.name for entry in registry.sketches] == ["Detailed", "Minimal"]