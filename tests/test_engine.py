import pytest

from spriteengine.engine import (
    Component,
    Engine,
    EngineError,
    EngineState,
    GameObject,
    Scene,
)


class CountingComponent(Component):
    def __init__(self):
        super().__init__()
        self.updates = []
        self.renders = 0

    def update(self, delta_time):
        self.updates.append(delta_time)

    def render(self):
        self.renders += 1


@pytest.fixture
def engine():
    eng = Engine()
    eng.initialize("Test", 320, 240)
    return eng


@pytest.fixture
def singleton():
    Engine.destroy_instance()
    yield
    Engine.destroy_instance()


def test_get_instance_returns_same_object(singleton):
    first = Engine.get_instance()
    assert first.state is EngineState.UNINITIALIZED
    first.initialize("Shared", 64, 48)
    second = Engine.get_instance()
    assert second.state is EngineState.INITIALIZED
    assert (second.window_title, second.width, second.height) == ("Shared", 64, 48)


def test_destroy_instance_resets_singleton(singleton):
    first = Engine.get_instance()
    first.initialize("A", 10, 10)
    Engine.destroy_instance()
    assert first.state is EngineState.UNINITIALIZED
    assert Engine.get_instance() is not first


def test_initialize_sets_state_and_window(engine):
    assert engine.state is EngineState.INITIALIZED
    assert (engine.window_title, engine.width, engine.height) == ("Test", 320, 240)


def test_double_initialize_raises(engine):
    with pytest.raises(EngineError):
        engine.initialize("Again", 1, 1)
    assert engine.state is EngineState.INITIALIZED


def test_failing_init_callback_raises():
    eng = Engine()
    eng.init_callback = lambda: False
    with pytest.raises(EngineError):
        eng.initialize("X", 1, 1)
    assert eng.state is EngineState.UNINITIALIZED


def test_run_before_initialize_raises():
    eng = Engine()
    with pytest.raises(EngineError):
        eng.run()
    assert eng.state is EngineState.UNINITIALIZED


def test_run_until_stopped(engine):
    frames = []
    renders = []

    def on_update(dt):
        frames.append(dt)
        if len(frames) == 3:
            engine.stop()

    engine.update_callback = on_update
    engine.render_callback = lambda: renders.append(True)
    engine.run()
    assert engine.state is EngineState.STOPPED
    assert len(frames) == 3
    assert len(renders) == 3
    assert all(0.0 <= dt <= 0.1 for dt in frames)


def test_run_updates_active_scene(engine):
    scene = Scene("main")
    obj = scene.create_game_object("player")
    comp = obj.add_component(CountingComponent())
    engine.set_active_scene(scene)

    calls = []

    def on_update(dt):
        calls.append(dt)
        if len(calls) == 2:
            engine.stop()

    engine.update_callback = on_update
    engine.run()
    assert len(comp.updates) == 2
    assert comp.renders == 2


def test_run_after_stop_raises(engine):
    engine.update_callback = lambda dt: engine.stop()
    engine.run()
    with pytest.raises(EngineError):
        engine.run()


def test_pause_and_resume(engine):
    engine.update_callback = lambda dt: engine.pause()
    engine.run()
    assert engine.state is EngineState.PAUSED
    engine.resume()
    assert engine.state is EngineState.RUNNING


def test_pause_ignored_when_not_running(engine):
    engine.pause()
    assert engine.state is EngineState.INITIALIZED
    engine.resume()
    assert engine.state is EngineState.INITIALIZED


def test_shutdown_runs_callback_and_clears_scene(engine):
    called = []
    scene = Scene("s")
    scene.create_game_object("a")
    engine.set_active_scene(scene)
    engine.shutdown_callback = lambda: called.append(True)
    engine.shutdown()
    assert called == [True]
    assert engine.active_scene is None
    assert scene.game_objects == []
    assert engine.state is EngineState.UNINITIALIZED


def test_shutdown_when_uninitialized_skips_callback():
    eng = Engine()
    called = []
    eng.shutdown_callback = lambda: called.append(True)
    eng.shutdown()
    assert called == []


def test_set_active_scene_swaps_scenes(engine):
    old = Scene("old")
    old.create_game_object("x")
    new = Scene("new")
    engine.set_active_scene(old)
    assert old.initialized
    engine.set_active_scene(new)
    assert not old.initialized
    assert old.game_objects == []
    assert new.initialized
    assert engine.active_scene is new


def test_get_time_is_monotonic(engine):
    first = engine.get_time()
    second = engine.get_time()
    assert 0.0 <= first <= second


def test_scene_create_find_destroy():
    scene = Scene("level")
    a = scene.create_game_object("a")
    b = scene.create_game_object("b")
    assert a.started and b.started
    assert scene.find_game_object("b") is b
    scene.destroy_game_object(a)
    assert scene.game_objects == [b]
    assert scene.find_game_object("a") is None


def test_inactive_objects_are_skipped():
    scene = Scene("level")
    obj = scene.create_game_object("ghost")
    comp = obj.add_component(CountingComponent())
    obj.active = False
    scene.update(0.5)
    scene.render()
    assert comp.updates == []
    assert comp.renders == 0


def test_disabled_components_are_skipped():
    obj = GameObject("thing")
    on = obj.add_component(CountingComponent())
    off = obj.add_component(CountingComponent())
    off.enabled = False
    obj.update(0.25)
    obj.render()
    assert on.updates == [0.25]
    assert on.renders == 1
    assert off.updates == []
    assert off.renders == 0


def test_add_component_sets_owner():
    obj = GameObject("owner")
    comp = obj.add_component(CountingComponent())
    assert comp.owner is obj
    assert obj.components == [comp]