"""
Built-in stories shown by the gallery.
Each story groups a few viewer configurations demonstrating one feature.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from .models.viewer import ViewerOptions


@dataclass(frozen=True)
class Example:
    heading: str
    options: ViewerOptions


@dataclass(frozen=True)
class Story:
    name: str
    title: str
    examples: List[Example] = field(default_factory=list)


_STORY_LIST = [
    Story(
        name="basic",
        title="Basic",
        examples=[
            Example("Output", ViewerOptions(html="<p>Hello <strong>world</strong></p>")),
        ],
    ),
    Story(
        name="safe-html",
        title="Safe HTML",
        examples=[
            Example(
                "Article",
                ViewerOptions(
                    html=(
                        "<h2>Article Title</h2><p>This is a <strong>safe</strong> "
                        "paragraph with a <a href='#'>link</a>.</p>"
                    )
                ),
            ),
        ],
    ),
    Story(
        name="custom-typography",
        title="Custom Typography",
        examples=[
            Example(
                "Large Text",
                ViewerOptions(
                    html="<p>This content has <strong>larger font size</strong> for better readability.</p>",
                    font_size="18px",
                    line_height="1.8",
                ),
            ),
            Example(
                "Custom Font Family",
                ViewerOptions(
                    html="<p>This content uses <em>Georgia</em> font for a more classic look.</p>",
                    font_family="Georgia, serif",
                ),
            ),
            Example(
                "Custom Color",
                ViewerOptions(
                    html="<p>This content has a <strong>custom text color</strong>.</p>",
                    color="#1e40af",
                ),
            ),
        ],
    ),
    Story(
        name="container-styling",
        title="Container Styling",
        examples=[
            Example(
                "Custom Border & Background",
                ViewerOptions(
                    html="<p>This has a <strong>custom border</strong> and background color.</p>",
                    border="2px solid #10b981",
                    background_color="#f0fdf4",
                    border_radius="12px",
                ),
            ),
            Example(
                "Maximum Height with Scrolling",
                ViewerOptions(
                    html=(
                        "<p>This is a long content that will scroll...</p><p>Paragraph 2</p>"
                        "<p>Paragraph 3</p><p>Paragraph 4</p><p>Paragraph 5</p>"
                    ),
                    max_height="150px",
                    overflow="auto",
                ),
            ),
            Example(
                "No Border, Custom Padding",
                ViewerOptions(
                    html="<p>This has <strong>no border</strong> but extra padding.</p>",
                    border="none",
                    padding="24px",
                    background_color="#f8fafc",
                ),
            ),
        ],
    ),
    Story(
        name="with-class-name",
        title="With Class Name",
        examples=[
            Example(
                "Styled by class",
                ViewerOptions(
                    html="<p>This is <strong>styled content</strong> with custom CSS.</p>",
                    class_name="custom-content",
                ),
            ),
        ],
    ),
    Story(
        name="sanitization-demo",
        title="Sanitization Examples",
        examples=[
            Example(
                "Script element (removed)",
                ViewerOptions(html='<p>Safe text</p><script>alert("XSS")</script>'),
            ),
            Example(
                "Event handler (removed)",
                ViewerOptions(html='<div onclick="alert(1)">Click me</div>'),
            ),
            Example(
                "javascript: link (href removed)",
                ViewerOptions(html='<a href="javascript:alert(1)">Bad link</a>'),
            ),
            Example(
                "Broken image with onerror (handler removed)",
                ViewerOptions(html='<img src="x" onerror="alert(1)" alt="broken">'),
            ),
        ],
    ),
]

STORIES: Dict[str, Story] = {story.name: story for story in _STORY_LIST}
