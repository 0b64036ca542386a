"""Grid viewport state: zoom, pan, colours and matrix helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

logger = logging.getLogger(__name__)

GRID_UNIFORMS: tuple[tuple[str, str], ...] = (
    ("uViewport", "vec2"),
    ("uPan", "vec2"),
    ("uZoom", "float"),
    ("uGridColor", "vec3"),
    ("uBgColor", "vec3"),
    ("uGridSize", "float"),
)

MIN_ZOOM = 0.1
MAX_ZOOM = 10.0
WHEEL_MIN_ZOOM = 1.0
WHEEL_ZOOM_FACTOR = 1.1


class UniformError(RuntimeError):
    """Raised when a shader lacks uniforms the grid needs."""

    def __init__(self, missing: list[tuple[str, str]]) -> None:
        self.missing = missing
        details = "; ".join(
            f"Uniform '{name}' ({kind}) not found in shader program"
            for name, kind in missing
        )
        super().__init__(details)


def ortho(left: float, right: float, bottom: float, top: float,
          near: float, far: float) -> np.ndarray:
    """Orthographic projection matrix acting on column vectors."""
    m = np.identity(4)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def translate(x: float, y: float, z: float) -> np.ndarray:
    """Translation matrix acting on column vectors."""
    m = np.identity(4)
    m[:3, 3] = (x, y, z)
    return m


def check_grid_uniforms(available: Iterable[str]) -> dict[str, str]:
    """Check that every grid uniform is present; return them with their types."""
    names = set(available)
    missing = [(name, kind) for name, kind in GRID_UNIFORMS if name not in names]
    if missing:
        for name, kind in missing:
            logger.error("Uniform '%s' (%s) not found in shader program", name, kind)
        raise UniformError(missing)
    return dict(GRID_UNIFORMS)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


@dataclass
class Viewport:
    """Pan and zoom state of the grid viewport shown in the editor."""

    width: int = 1280
    height: int = 720
    zoom: float = 1.0
    pan: tuple[float, float] = (0.0, 0.0)
    grid_size: float = 10.0
    grid_color: tuple[float, float, float, float] = (0.5, 0.5, 0.5, 1.0)
    bg_color: tuple[float, float, float, float] = (0.2, 0.2, 0.2, 1.0)
    dragging: bool = field(default=False, init=False)
    last_mouse: tuple[float, float] = field(default=(0.0, 0.0), init=False)

    def reset(self) -> None:
        """Return to the origin at unit zoom."""
        self.pan = (0.0, 0.0)
        self.zoom = 1.0

    def set_zoom(self, zoom: float) -> None:
        self.zoom = _clamp(zoom, MIN_ZOOM, MAX_ZOOM)

    def set_grid_size(self, size: float) -> None:
        self.grid_size = size

    def set_grid_color(self, r: float, g: float, b: float, a: float) -> None:
        self.grid_color = (r, g, b, a)

    def set_background_color(self, r: float, g: float, b: float, a: float) -> None:
        self.bg_color = (r, g, b, a)

    def screen_to_world(self, mouse_x: float, mouse_y: float,
                        viewport_width: float, viewport_height: float) -> tuple[float, float]:
        """World position under a point given relative to the viewport's corner."""
        return (
            (mouse_x - viewport_width * 0.5) / self.zoom + self.pan[0],
            (mouse_y - viewport_height * 0.5) / self.zoom + self.pan[1],
        )

    def wheel_zoom(self, wheel: float, mouse_x: float, mouse_y: float,
                   viewport_width: float, viewport_height: float) -> None:
        """Zoom by one wheel step, keeping the point under the mouse fixed."""
        if wheel == 0.0:
            return
        before = self.screen_to_world(mouse_x, mouse_y, viewport_width, viewport_height)
        if wheel > 0.0:
            zoom = self.zoom * WHEEL_ZOOM_FACTOR
        else:
            zoom = self.zoom / WHEEL_ZOOM_FACTOR
        self.zoom = _clamp(zoom, WHEEL_MIN_ZOOM, MAX_ZOOM)
        after = self.screen_to_world(mouse_x, mouse_y, viewport_width, viewport_height)
        self.pan = (
            self.pan[0] + before[0] - after[0],
            self.pan[1] + before[1] - after[1],
        )

    def drag_pan(self, mouse_x: float, mouse_y: float, middle_down: bool) -> None:
        """Pan while the middle button is held; the first press only anchors."""
        if not middle_down:
            self.dragging = False
            return
        if self.dragging:
            last_x, last_y = self.last_mouse
            self.pan = (
                self.pan[0] - (mouse_x - last_x) / self.zoom,
                self.pan[1] - (mouse_y - last_y) / self.zoom,
            )
        else:
            self.dragging = True
        self.last_mouse = (mouse_x, mouse_y)

    def resize(self, width: float, height: float) -> bool:
        """Adopt a new pixel size; return whether it changed."""
        new_width, new_height = int(width), int(height)
        if (new_width, new_height) == (self.width, self.height):
            return False
        self.width, self.height = new_width, new_height
        return True

    def grid_uniforms(self) -> dict[str, object]:
        """Values for the grid shader's uniforms."""
        return {
            "uViewport": (float(self.width), float(self.height)),
            "uPan": self.pan,
            "uZoom": self.zoom,
            "uGridColor": self.grid_color[:3],
            "uBgColor": self.bg_color[:3],
            "uGridSize": self.grid_size,
        }