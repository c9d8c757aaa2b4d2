"""Pygame front end for the blockfall engine."""

from .renderer import Renderer

__all__ = ["Renderer"]
