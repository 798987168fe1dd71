[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubray"
version = "0.1.0"
description = "A textured grid raycaster that loads .cub scene files and renders them in a window"
requires-python = ">=3.10"
keywords = ["raycasting", "raycaster", "game", "cub", "xpm42", "dda"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "pillow",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubray = "cubray.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cubray"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
