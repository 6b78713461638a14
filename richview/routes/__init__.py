"""
Routes package for RichView.
This package contains all the route modules for the application.
"""

from .api import preview
from .web import gallery

__all__ = ["gallery", "preview"]
