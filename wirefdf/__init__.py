"""Isometric wireframe viewer for .fdf height maps, with image, XPM and display helpers."""

__version__ = "0.1.0"