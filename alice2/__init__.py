"""Transforms, cameras, input tracking, scene objects and sketch management for a Z-up 3D viewer."""

__version__ = "0.1.0"