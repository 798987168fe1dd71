"""Grid raycaster that loads .cub scene files and renders them with textured walls."""

__version__ = "0.1.0"