"""Loading image files into cached, identified textures."""

from __future__ import annotations

import itertools
import logging
import os
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_CHANNELS_BY_MODE = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}


class TextureLoadError(OSError):
    """Raised when an existing file cannot be decoded as an image."""


def normalize_path(path: PathLike) -> str:
    """Return the path as a string with forward slashes only."""
    return os.fspath(path).replace("\\", "/")


@dataclass(frozen=True)
class Texture:
    """Decoded image data with the identifier it was registered under."""

    id: int
    path: str
    width: int
    height: int
    channels: int
    data: np.ndarray = field(repr=False, compare=False)

    @property
    def format(self) -> str:
        """Pixel layout used for upload: RGBA for four channels, RGB otherwise."""
        return "RGBA" if self.channels == 4 else "RGB"


def _decode(path: str) -> np.ndarray:
    try:
        with Image.open(path) as image:
            image.load()
            mode = image.mode
            if mode not in _CHANNELS_BY_MODE:
                has_alpha = "A" in mode or "transparency" in image.info
                image = image.convert("RGBA" if has_alpha else "RGB")
            pixels = np.asarray(image, dtype=np.uint8)
    except UnidentifiedImageError as exc:
        raise TextureLoadError(f"Failed to load texture: {path} - {exc}") from exc
    if pixels.ndim == 2:
        pixels = pixels[:, :, np.newaxis]
    # Rows are flipped so the first row is the bottom of the image.
    return np.ascontiguousarray(pixels[::-1])


class TextureManager:
    """Loads textures once per normalized path and hands out cached copies."""

    def __init__(self) -> None:
        self._cache: dict[str, Texture] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return normalize_path(path) in self._cache

    def __iter__(self) -> Iterator[Texture]:
        return iter(list(self._cache.values()))

    def load_texture(self, path: PathLike) -> Texture:
        """Return the cached texture for path, loading it on first use."""
        key = normalize_path(path)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        if not os.path.exists(key):
            raise FileNotFoundError(f"File does not exist: {key}")

        logger.info("Loading texture from path: %s", key)
        pixels = _decode(key)
        height, width, channels = pixels.shape
        texture = Texture(
            id=next(self._ids),
            path=key,
            width=width,
            height=height,
            channels=channels,
            data=pixels,
        )
        self._cache[key] = texture
        logger.info(
            "Successfully loaded texture: %s (%dx%d, %d channels), ID: %d",
            key, width, height, channels, texture.id,
        )
        return texture

    def get_texture(self, path: PathLike) -> Optional[Texture]:
        """Return the cached texture for path, or None if it was never loaded."""
        key = normalize_path(path)
        texture = self._cache.get(key)
        if texture is None:
            logger.warning("Texture not found in cache: %s", key)
        return texture

    def clear(self) -> None:
        """Forget every cached texture."""
        self._cache.clear()