"""
Models package for RichView.
Contains data models and validation schemas.
"""

from .viewer import ViewerOptions, RenderResult

__all__ = ["ViewerOptions", "RenderResult"]
