"""
API routes package for RichView.
This package contains API route modules that return JSON responses.
"""

from . import preview

__all__ = ["preview"]
