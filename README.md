# spriteengine

A small 2D sprite engine core for Python. The package holds these modules:

- `spriteengine.engine`: an `Engine` singleton with a game loop capped at
  60 frames per second. It has life-cycle states (`EngineState`), `Scene`,
  `GameObject` and `Component` classes, and raises `EngineError` on invalid
  transitions.
- `spriteengine.scene`: JSON scene files (`SceneDescription`, `SceneObject`).
  `save_scene` writes them and `load_scene` reads them back.
- `spriteengine.textures`: a `TextureManager` that decodes images with Pillow.
  It caches them by normalized path (`normalize_path`) and returns `Texture`
  records that hold the pixel data as a bottom-up numpy array.
- `spriteengine.viewport`: a grid `Viewport` with zoom, pan, drag-panning,
  wheel zoom about the mouse, and grid and background colours. It also has the
  matrix helpers `ortho` and `translate`, and `check_grid_uniforms`, which
  raises `UniformError`.
- `spriteengine.editor`: a `SceneEditor` over a `SceneDescription`. It selects,
  moves, rotates, scales and deletes objects, snaps them to the grid, converts
  between viewport and world coordinates, and produces the selection gizmo
  geometry and projection and view matrices. `sprite_model_matrix` builds a
  sprite's model matrix.
- `spriteengine.environment`: a host report covering architecture, CPU, GPUs,
  logical cores, RAM, OS and drives. It also reads drive write totals from
  `smartctl`.
- `spriteengine.debug`: the console loggers `log_info`, `log_warning` and
  `log_error`, plus the start-up and shut-down announcements `initialize` and
  `shutdown`.

## Installation

```
pip install .
```

## Running the game loop

```python
from spriteengine.engine import Component, Engine, Scene


class StopAfter(Component):
    def __init__(self, seconds):
        super().__init__()
        self.remaining = seconds

    def update(self, delta_time):
        self.remaining -= delta_time
        if self.remaining <= 0:
            Engine.get_instance().stop()


engine = Engine.get_instance()
engine.initialize("Demo", 1280, 720)   # raises EngineError if already initialized

scene = Scene("Main")
player = scene.create_game_object("Player")
player.add_component(StopAfter(1.0))
engine.set_active_scene(scene)

engine.run()        # loops until stop() or pause() is called
engine.shutdown()
```

`run()` caps each frame's delta time at 0.1 s. It also sleeps so that frames
are no shorter than the engine's `target_fps` allows. The hooks
`init_callback`, `update_callback`, `render_callback` and `shutdown_callback`
are plain attributes that you can set on the engine.

## Scene files

```python
from spriteengine.scene import SceneDescription, SceneObject, load_scene, save_scene

scene = SceneDescription(scene_name="Level 1")
scene.objects.append(SceneObject(name="Box", x=10, y=20, width=32, height=32,
                                 sprite_path="assets/box.png"))
save_scene(scene, "level1.json")
again = load_scene("level1.json")
```

Scene files use the keys `sceneName`, `objects`, `name`, `x`, `y`, `width`,
`height`, `spritePath`, `rotation`, `scaleX` and `scaleY`. Backslashes in
sprite paths become forward slashes when a file is loaded.

`load_scene` raises the following errors:

- `FileNotFoundError` for a missing file.
- `SceneFormatError` for missing or invalid fields.
- `json.JSONDecodeError` for malformed JSON.

## Textures

```python
from spriteengine.textures import TextureManager

textures = TextureManager()
tex = textures.load_texture("assets/box.png")   # loaded once, then cached
print(tex.id, tex.width, tex.height, tex.channels, tex.format)
assert textures.get_texture("assets\\box.png") is tex
```

`load_texture` raises the following errors:

- `FileNotFoundError` for a missing file.
- `TextureLoadError` for a file that is not an image.

## Editing a scene

```python
from spriteengine.editor import EditMode, SceneEditor

editor = SceneEditor(1280, 720, scene)
editor.handle_click(15, 25)        # selects the topmost object under the point
editor.set_edit_mode(EditMode.MOVE)
editor.set_snap_to_grid(True)
editor.handle_drag(5, 0)
print(editor.gizmo_outline())      # raises LookupError when nothing is selected
```

## Environment report

```
spriteengine-env [--drive DEVICE]
```

This command first asks `smartctl --scan` for devices, if `smartctl` is
installed, and prints the estimated terabytes written for each device. It then
prints the system architecture, CPU, GPUs, core count, memory, OS and drives.
Last, it prints the write total of `--drive`, which defaults to `/dev/sdb`.

## What the package does not do

The package opens no window and draws nothing. It has no editor user
interface, and it has no GPU upload of textures or shaders. Textures are
decoded into numpy arrays. The viewport and editor compute state, matrices,
uniform values and gizmo geometry for a renderer to use, but they do not
render.

## Tests

```
pip install ".[test]"
pytest
```