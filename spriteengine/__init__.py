"""A small 2D sprite engine core: game loop, scene files, textures, editor maths and an environment report."""

__version__ = "1.0.0"
__all__ = ["debug", "editor", "engine", "environment", "scene", "textures", "viewport"]