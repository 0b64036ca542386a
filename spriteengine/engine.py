"""Engine lifecycle, scenes, game objects and components."""

from __future__ import annotations

import time
from enum import IntEnum
from typing import Callable, ClassVar, Optional

from spriteengine.debug import log_error, log_info, log_warning

MAX_DELTA_TIME = 0.1
DEFAULT_DELTA_TIME = 0.016


class EngineError(RuntimeError):
    """Raised when the engine is driven through an invalid transition."""


class EngineState(IntEnum):
    UNINITIALIZED = 0
    INITIALIZED = 1
    RUNNING = 2
    PAUSED = 3
    STOPPED = 4


class Component:
    """Behaviour attached to a game object; subclasses override the hooks."""

    def __init__(self) -> None:
        self.owner: Optional[GameObject] = None
        self.enabled = True

    def update(self, delta_time: float) -> None:
        """Per-frame update hook; the base component has no behaviour."""

    def render(self) -> None:
        """Per-frame render hook; the base component draws nothing."""


class GameObject:
    """A named entity that owns components."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.active = True
        self.started = False
        self.components: list[Component] = []

    def add_component(self, component: Component) -> Component:
        component.owner = self
        self.components.append(component)
        return component

    def start(self) -> None:
        self.started = True

    def update(self, delta_time: float) -> None:
        for component in self.components:
            if component.enabled:
                component.update(delta_time)

    def render(self) -> None:
        for component in self.components:
            if component.enabled:
                component.render()


class Scene:
    """A collection of game objects updated and rendered together."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.initialized = False
        self.game_objects: list[GameObject] = []

    def initialize(self) -> None:
        self.initialized = True

    def shutdown(self) -> None:
        self.game_objects.clear()
        self.initialized = False

    def update(self, delta_time: float) -> None:
        for obj in self.game_objects:
            if obj.active:
                obj.update(delta_time)

    def render(self) -> None:
        for obj in self.game_objects:
            if obj.active:
                obj.render()

    def create_game_object(self, name: str) -> GameObject:
        obj = GameObject(name)
        self.game_objects.append(obj)
        obj.start()
        return obj

    def destroy_game_object(self, obj: GameObject) -> None:
        self.game_objects = [go for go in self.game_objects if go is not obj]

    def find_game_object(self, name: str) -> Optional[GameObject]:
        return next((go for go in self.game_objects if go.name == name), None)


class Engine:
    """The engine: owns the game loop, the active scene and user callbacks."""

    _instance: ClassVar[Optional["Engine"]] = None
    _time_origin: ClassVar[Optional[float]] = None

    def __init__(self) -> None:
        self.state = EngineState.UNINITIALIZED
        self.window_title = ""
        self.width = 0
        self.height = 0
        self.target_fps = 60.0
        self.delta_time = DEFAULT_DELTA_TIME
        self.active_scene: Optional[Scene] = None
        self.init_callback: Optional[Callable[[], bool]] = None
        self.update_callback: Optional[Callable[[float], None]] = None
        self.render_callback: Optional[Callable[[], None]] = None
        self.shutdown_callback: Optional[Callable[[], None]] = None

    @classmethod
    def get_instance(cls) -> "Engine":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def destroy_instance(cls) -> None:
        if cls._instance is not None:
            cls._instance.shutdown()
            cls._instance = None

    def initialize(self, window_title: str, width: int, height: int) -> None:
        if self.state is not EngineState.UNINITIALIZED:
            log_warning("Engine already initialized")
            raise EngineError("Engine already initialized")
        log_info("Thanks for using GameEngine!")
        log_info(f"Window: {window_title} ({width}x{height})")
        log_info("Initializing Game Engine...")
        self.window_title = window_title
        self.width = width
        self.height = height

        log_info("Initializing rendering system...")
        log_info("Initializing input system...")
        log_info("Initializing audio system...")

        if self.init_callback is not None and not self.init_callback():
            log_error("User initialization callback failed")
            raise EngineError("User initialization callback failed")

        self.state = EngineState.INITIALIZED
        log_info("Game Engine initialized successfully")

    def run(self) -> None:
        """Run the game loop until the state leaves RUNNING."""
        if self.state not in (EngineState.INITIALIZED, EngineState.PAUSED):
            log_error("Engine must be initialized before running")
            raise EngineError("Engine must be initialized before running")

        self.state = EngineState.RUNNING
        log_info("Starting game loop...")
        target_frame_time = 1.0 / self.target_fps
        last_time = time.perf_counter()

        while self.state is EngineState.RUNNING:
            current_time = time.perf_counter()
            delta = min(current_time - last_time, MAX_DELTA_TIME)
            last_time = current_time
            self.delta_time = delta

            self._update(delta)
            self._render()

            frame_time = time.perf_counter() - current_time
            if frame_time < target_frame_time:
                time.sleep(target_frame_time - frame_time)

        log_info("Game loop ended")

    def _update(self, delta_time: float) -> None:
        if self.active_scene is not None:
            self.active_scene.update(delta_time)
        if self.update_callback is not None:
            self.update_callback(delta_time)

    def _render(self) -> None:
        if self.active_scene is not None:
            self.active_scene.render()
        if self.render_callback is not None:
            self.render_callback()

    def stop(self) -> None:
        if self.state is EngineState.RUNNING:
            self.state = EngineState.STOPPED
            log_info("Engine stopped")

    def pause(self) -> None:
        if self.state is EngineState.RUNNING:
            self.state = EngineState.PAUSED
            log_info("Engine paused")

    def resume(self) -> None:
        if self.state is EngineState.PAUSED:
            self.state = EngineState.RUNNING
            log_info("Engine resumed")

    def shutdown(self) -> None:
        if self.state is EngineState.UNINITIALIZED:
            return
        log_info("Shutting down Game Engine...")
        if self.shutdown_callback is not None:
            self.shutdown_callback()
        if self.active_scene is not None:
            self.active_scene.shutdown()
            self.active_scene = None
        log_info("Cleaning up rendering system...")
        log_info("Cleaning up input system...")
        log_info("Cleaning up audio system...")
        self.state = EngineState.UNINITIALIZED
        log_info("Game Engine shut down")

    def set_active_scene(self, scene: Optional[Scene]) -> None:
        if self.active_scene is not None:
            self.active_scene.shutdown()
        self.active_scene = scene
        if scene is not None:
            scene.initialize()

    def get_time(self) -> float:
        """Seconds elapsed since the first call to this method."""
        now = time.perf_counter()
        if Engine._time_origin is None:
            Engine._time_origin = now
        return now - Engine._time_origin