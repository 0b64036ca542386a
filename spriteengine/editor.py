"""Scene editing: selection, transforms, camera and selection gizmo geometry."""

from __future__ import annotations

import logging
import math
from enum import IntEnum
from typing import Optional

import numpy as np

from spriteengine.scene import SceneDescription, SceneObject
from spriteengine.viewport import ortho, translate

logger = logging.getLogger(__name__)

MIN_CAMERA_ZOOM = 0.1
MAX_CAMERA_ZOOM = 5.0
ZOOM_STEP = 0.1
MIN_SCALE = 0.1
ROTATE_SPEED = 0.5
SCALE_SPEED = 0.01
GIZMO_MARGIN = 2.0

Point = tuple[float, float]


class EditMode(IntEnum):
    SELECT = 0
    MOVE = 1
    ROTATE = 2
    SCALE = 3


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _rotate_z(radians: float) -> np.ndarray:
    c, s = math.cos(radians), math.sin(radians)
    m = np.identity(4)
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def _scale(x: float, y: float, z: float) -> np.ndarray:
    return np.diag([x, y, z, 1.0])


def sprite_model_matrix(x: float, y: float, width: float, height: float,
                        rotation: float, scale_x: float, scale_y: float) -> np.ndarray:
    """Model matrix placing a unit quad as a sprite rotated about its centre.

    The rotation is given in degrees.
    """
    half_w, half_h = width * 0.5, height * 0.5
    return (
        translate(x, y, 0.0)
        @ translate(half_w, half_h, 0.0)
        @ _rotate_z(math.radians(rotation))
        @ translate(-half_w, -half_h, 0.0)
        @ _scale(width * scale_x, height * scale_y, 1.0)
    )


class SceneEditor:
    """Editor state over a scene: camera, grid settings and the selected object."""

    def __init__(self, width: int = 1280, height: int = 720,
                 scene: Optional[SceneDescription] = None) -> None:
        self.width = width
        self.height = height
        self.scene = scene if scene is not None else SceneDescription(scene_name="")
        self.camera_zoom = 1.0
        self.camera_position: Point = (0.0, 0.0)
        self.grid_visible = False
        self.grid_size = 10.0
        self.snap_to_grid = False
        self.mode = EditMode.SELECT
        self.selected_index: Optional[int] = None

    @property
    def selected(self) -> Optional[SceneObject]:
        """The selected object, or None."""
        if self.selected_index is None:
            return None
        return self.scene.objects[self.selected_index]

    @property
    def has_selection(self) -> bool:
        return self.selected_index is not None

    def set_edit_mode(self, mode: EditMode) -> None:
        self.mode = EditMode(mode)

    def set_grid_visible(self, visible: bool) -> None:
        self.grid_visible = visible

    def set_grid_size(self, size: float) -> None:
        self.grid_size = size

    def set_snap_to_grid(self, snap: bool) -> None:
        self.snap_to_grid = snap

    def viewport_to_world(self, view_x: float, view_y: float) -> Point:
        cam_x, cam_y = self.camera_position
        return (view_x / self.camera_zoom + cam_x, view_y / self.camera_zoom + cam_y)

    def world_to_viewport(self, world_x: float, world_y: float) -> Point:
        cam_x, cam_y = self.camera_position
        return ((world_x - cam_x) * self.camera_zoom, (world_y - cam_y) * self.camera_zoom)

    def handle_click(self, world_x: float, world_y: float) -> Optional[SceneObject]:
        """Select the topmost object under the point; return it or None."""
        self.selected_index = None
        for index in reversed(range(len(self.scene.objects))):
            obj = self.scene.objects[index]
            if (obj.x <= world_x <= obj.x + obj.width * obj.scale_x
                    and obj.y <= world_y <= obj.y + obj.height * obj.scale_y):
                self.selected_index = index
                return obj
        return None

    def _snap(self, obj: SceneObject) -> None:
        if self.snap_to_grid:
            obj.x = _round_half_away(obj.x / self.grid_size) * self.grid_size
            obj.y = _round_half_away(obj.y / self.grid_size) * self.grid_size

    def handle_drag(self, delta_x: float, delta_y: float) -> None:
        """Apply a drag according to the edit mode, or pan the camera."""
        dx = delta_x / self.camera_zoom
        dy = delta_y / self.camera_zoom
        obj = self.selected

        if obj is not None and self.mode is EditMode.MOVE:
            obj.x += dx
            obj.y += dy
            self._snap(obj)
        elif obj is not None and self.mode is EditMode.ROTATE:
            rotation = (obj.rotation + dx * ROTATE_SPEED) % 360.0
            if rotation >= 360.0:
                rotation -= 360.0
            obj.rotation = rotation
        elif obj is not None and self.mode is EditMode.SCALE:
            obj.scale_x = max(MIN_SCALE, obj.scale_x + dx * SCALE_SPEED)
            obj.scale_y = max(MIN_SCALE, obj.scale_y + dy * SCALE_SPEED)
        else:
            cam_x, cam_y = self.camera_position
            self.camera_position = (cam_x - dx, cam_y - dy)

    def handle_zoom(self, delta: float) -> None:
        new_zoom = self.camera_zoom * (1.0 + delta * ZOOM_STEP)
        logger.debug("Zoom factor: %s", new_zoom)
        self.camera_zoom = max(MIN_CAMERA_ZOOM, min(new_zoom, MAX_CAMERA_ZOOM))

    def move_selected(self, delta_x: float, delta_y: float) -> None:
        obj = self.selected
        if obj is None:
            return
        obj.x += delta_x
        obj.y += delta_y
        self._snap(obj)

    def delete_selected(self) -> Optional[SceneObject]:
        """Remove the selected object from the scene and return it."""
        if self.selected_index is None:
            return None
        removed = self.scene.objects.pop(self.selected_index)
        self.selected_index = None
        return removed

    def projection_matrix(self) -> np.ndarray:
        half_w = self.width * 0.5 / self.camera_zoom
        half_h = self.height * 0.5 / self.camera_zoom
        return ortho(-half_w, half_w, -half_h, half_h, -1.0, 1.0)

    def view_matrix(self) -> np.ndarray:
        cam_x, cam_y = self.camera_position
        return translate(-cam_x, -cam_y, 0.0)

    def _gizmo_bounds(self) -> tuple[float, float, float, float]:
        obj = self.selected
        if obj is None:
            raise LookupError("no object is selected")
        margin = GIZMO_MARGIN / self.camera_zoom
        return (
            obj.x - margin,
            obj.y - margin,
            obj.x + obj.width * obj.scale_x + margin,
            obj.y + obj.height * obj.scale_y + margin,
        )

    def gizmo_outline(self) -> list[Point]:
        """Closed line strip around the selection: five points, first equals last."""
        x1, y1, x2, y2 = self._gizmo_bounds()
        return [(x1, y1), (x2, y1), (x2, y2), (x1, y2), (x1, y1)]

    def gizmo_handles(self) -> list[Point]:
        """Corner and edge-midpoint handles, shown only when rotating or scaling."""
        x1, y1, x2, y2 = self._gizmo_bounds()
        if self.mode not in (EditMode.ROTATE, EditMode.SCALE):
            return []
        mx, my = (x1 + x2) / 2, (y1 + y2) / 2
        return [
            (x1, y1), (mx, y1), (x2, y1), (x2, my),
            (x2, y2), (mx, y2), (x1, y2), (x1, my),
        ]