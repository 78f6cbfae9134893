# src/castgraph/models/story/__init__.py
"""Models related to story structure."""

from .context import StoryContext
from .scene import DirectorSettings, Scene

__all__ = ["DirectorSettings", "Scene", "StoryContext"]
