"""
Components package for RichView.
"""

from .rich_text_viewer import ContentState, RichTextViewer, render_once

__all__ = ["ContentState", "RichTextViewer", "render_once"]
