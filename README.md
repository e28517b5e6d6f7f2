# alice2

The core of an interactive 3D scene viewer that uses a Z-up coordinate system
(+X right, +Y forward, +Z up). Vectors are numpy arrays of shape `(3,)` and
matrices are 4x4 numpy arrays used as `M @ v`.

## Modules

- **`alice2.transform`**: `Quaternion` (axis-angle, look-at, slerp, products,
  rotating vectors, conversion to a matrix) and `Transform`, which holds a
  position, rotation and scale, an optional parent and its children, and answers
  local and world-space queries.
- **`alice2.camera`**: `Camera` with perspective or orthographic projection
  (`ProjectionType`), quaternion orbit about a centre, pan, zoom, dolly,
  `smooth_orbit_to`, `screen_to_world_ray` and `world_to_screen`. The module also
  has the `perspective_matrix` and `look_at_matrix` helpers.
- **`alice2.input`**: `InputManager` tracks keys, mouse buttons, position,
  motion, wheel and modifier bits. It detects when a key or button goes down or
  up between frames (`MouseButton`, `KeyState`, `MouseState`), and optional
  callbacks are called for each event.
- **`alice2.camera_controller`**: `CameraController` turns the input state into
  camera motion once per frame in `CameraMode.ORBIT`, `FLY` (currently the same
  as orbit) or `PAN`. It also has `focus_on_bounds` and `reset_to_default`.
- **`alice2.scene_object`**: `SceneObject`, a named object with a transform,
  colour, opacity, wireframe flag, bounds, ray/box intersection
  (`intersect_ray` returns the distance or `None`) and child objects.
- **`alice2.primitives`**: `PrimitiveObject` drawn as a cube, sphere, cylinder,
  plane, line or point (`PrimitiveType`), with bounds that follow its size,
  radius and height.
- **`alice2.zspace`**: `ZSpaceObject` holds an opaque mesh, graph, point-cloud or
  generic object (`ZSpaceObjectType`) together with its display settings. It
  draws simple placeholder geometry and uses fixed bounds.
- **`alice2.scene`**: `Scene` holds objects and updates and renders them
  together with an optional grid and axes. It combines their bounds, and `pick`
  and `pick_multiple` find the objects a ray hits.
- **`alice2.sketch`**: the `Sketch` base class, the `SketchRegistry` with
  `RegisteredSketch` entries, a module-level `default_registry`, and
  `register`, which can be used as a class decorator.
- **`alice2.sketch_manager`**: `SketchManager` lists the available sketches
  (`SketchInfo`), loads, reloads and switches between them, drives the current
  sketch each frame and forwards input to it.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Examples

### Orbiting a camera

```python
import numpy as np
from alice2.camera import Camera

camera = Camera()
camera.orbit(np.array([0.0, 0.0, 0.0]), 10.0, 5.0, 15.0)  # yaw, pitch (degrees), distance
camera.dolly(-2.0)                                         # move closer to the orbit centre
print(camera.forward(), camera.view_projection_matrix())
```

### Feeding input to a camera controller

```python
from alice2.camera import Camera
from alice2.input import InputManager
from alice2.camera_controller import CameraController

camera = Camera()
inputs = InputManager()
controller = CameraController(camera, inputs)

inputs.process_mouse_wheel(1.0)
controller.update(1 / 60)  # applies the wheel to the camera
inputs.update()            # then resets the per-frame deltas
```

### Writing and running a sketch

```python
from alice2.sketch import Sketch, SketchRegistry, register
from alice2.sketch_manager import SketchManager


class Spinner(Sketch):
    name = "Spinner"

    def setup(self):
        self.angle = 0.0

    def update(self, delta_time):
        self.angle += 90.0 * delta_time

    def draw(self, renderer, camera):
        pass


registry = SketchRegistry()
register(Spinner, registry)

manager = SketchManager(registry)
manager.scan_user_src_directory()
manager.load_sketch("Spinner")
manager.update_current_sketch(1 / 60)
```

`scan_user_src_directory` lists every registered sketch. It also adds a
`"Base Sketch"` entry when no registered sketch has that name, and that entry
can be loaded only if a `base_sketch_factory` was given to the manager.
`switch_to_next_sketch` and `switch_to_previous_sketch` step through the list
and wrap around at either end. An exception raised by a sketch does not
propagate. The manager records it in `last_error`, logs it, and passes it to
`sketch_error_callback`.

## Renderers

Drawing is delegated to a renderer object that you pass to `render`,
`render_impl` and `draw_current_sketch`. Any object that has the methods these
calls use will work: `push_matrix`, `pop_matrix`, `mult_matrix`, `set_color`,
`set_wireframe`, `set_line_width`, `set_point_size`, `draw_cube`,
`draw_sphere`, `draw_cylinder`, `draw_quad`, `draw_line`, `draw_point`, and,
for a scene, `clear`, `set_ambient_light`, `draw_grid` and `draw_axes`.

## What this package does not do

- It opens no window, creates no graphics context and draws nothing itself. No
  renderer or text rendering is included.
- It has no application main loop and no command to run. Your own program has to
  route window events to the `InputManager`, step the controller, scene and
  sketch manager each frame, and supply the renderer.
- Sketches are Python classes taken from a registry. The `file_path` in
  `SketchInfo` is used only by `check_for_changes`: when `hot_reload_enabled` is
  set and that file's modification time changes, the current sketch is reloaded
  from the registry. Nothing is compiled or loaded from files.
- `ZSpaceObject` does not read the geometry it holds. It draws placeholders and
  uses fixed bounds.

## Running the tests

```
pytest
```