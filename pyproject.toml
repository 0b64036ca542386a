[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spriteengine"
version = "1.0.0"
description = "A small 2D sprite engine core: game loop, JSON scene files, cached image textures, editor viewport maths and a host environment report"
requires-python = ">=3.10"
keywords = ["game engine", "2d", "sprites", "scene editor", "game loop", "smartctl"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "numpy",
    "pillow",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
spriteengine-env = "spriteengine.environment:main"

[tool.hatch.build.targets.wheel]
packages = ["spriteengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
