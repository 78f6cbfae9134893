# src/castgraph/__init__.py
"""Character relationship inference for storyboard projects."""

__version__ = "0.1.0"
