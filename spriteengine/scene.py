"""Scene descriptions and their JSON serialization."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class SceneFormatError(ValueError):
    """Raised when a scene file lacks required fields."""


@dataclass
class SceneObject:
    name: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    sprite_path: str = ""
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "x": float(self.x),
            "y": float(self.y),
            "width": float(self.width),
            "height": float(self.height),
            "spritePath": self.sprite_path,
            "rotation": float(self.rotation),
            "scaleX": float(self.scale_x),
            "scaleY": float(self.scale_y),
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SceneObject":
        try:
            name = data["name"]
            x, y = float(data["x"]), float(data["y"])
            width, height = float(data["width"]), float(data["height"])
        except KeyError as exc:
            raise SceneFormatError(f"scene object is missing {exc.args[0]!r}") from exc
        except (TypeError, ValueError) as exc:
            raise SceneFormatError(f"scene object has an invalid value: {exc}") from exc

        sprite_path = data.get("spritePath")
        if sprite_path is None:
            sprite_path = ""
        else:
            sprite_path = str(sprite_path).replace("\\", "/")
            if not os.path.exists(sprite_path):
                logger.warning("Sprite file does not exist: %s", sprite_path)

        return cls(
            name=name,
            x=x,
            y=y,
            width=width,
            height=height,
            sprite_path=sprite_path,
            rotation=float(data.get("rotation", 0.0)),
            scale_x=float(data.get("scaleX", 1.0)),
            scale_y=float(data.get("scaleY", 1.0)),
        )


@dataclass
class SceneDescription:
    scene_name: str
    objects: list[SceneObject] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"sceneName": self.scene_name}
        if self.objects:
            doc["objects"] = [obj.to_json() for obj in self.objects]
        return doc


def save_scene(scene: SceneDescription, path: PathLike) -> None:
    """Write a scene as indented JSON with sorted keys."""
    text = json.dumps(scene.to_json(), indent=4, sort_keys=True)
    with open(path, "w", encoding="utf-8") as out:
        out.write(text)


def load_scene(path: PathLike) -> SceneDescription:
    """Read a scene file; raises FileNotFoundError, ValueError or SceneFormatError."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Scene file does not exist: {os.fspath(path)}")
    with open(path, encoding="utf-8") as src:
        doc = json.load(src)
    if not isinstance(doc, dict):
        raise SceneFormatError("scene document must be a JSON object")
    try:
        scene_name = doc["sceneName"]
    except KeyError as exc:
        raise SceneFormatError("scene is missing 'sceneName'") from exc
    if not isinstance(scene_name, str):
        raise SceneFormatError("'sceneName' must be a string")

    raw_objects = doc.get("objects") or []
    objects = [SceneObject.from_json(item) for item in raw_objects]
    return SceneDescription(scene_name=scene_name, objects=objects)