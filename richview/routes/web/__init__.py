"""
Web routes package for RichView.
This package contains web route modules that return HTML template responses.
"""

from . import gallery

__all__ = ["gallery"]
