"""Rendering components for the 2D boids simulation."""

from .entities import EntityRenderer
from .grid import BoundaryFrame
from .text import TextRenderer

__all__ = ["EntityRenderer", "BoundaryFrame", "TextRenderer"]
