"""
Utils package for RichView.
Contains utility functions and helpers.
"""

from .sanitizer import sanitize_html, get_profile, PROFILES
from .styles import resolve_styles, style_attribute, DEFAULT_STYLES

__all__ = [
    'sanitize_html',
    'get_profile',
    'PROFILES',
    'resolve_styles',
    'style_attribute',
    'DEFAULT_STYLES',
]
