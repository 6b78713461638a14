"""
Services package for RichView.
Contains the sanitization engine adapter and the generation guard.
"""

from .generation_guard import GenerationGuard
from .sanitizer_engine import SanitizerEngine, get_engine

__all__ = ["GenerationGuard", "SanitizerEngine", "get_engine"]
