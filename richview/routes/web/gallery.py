"""
Gallery routes for RichView.
Renders the built-in stories and an interactive playground.
"""

from typing import List, Optional

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse
from loguru import logger

from ...components.rich_text_viewer import render_once
from ...config import MAX_CONTENT_LENGTH, SANITIZE_PROFILE
from ...models.viewer import ViewerOptions
from ...stories import STORIES, Story
from ...utils.error_utils import render_error_page
from ...utils.template_env import get_templates

router = APIRouter()

templates = get_templates()

PLAYGROUND_DEFAULT = "<p>Hello <strong>world</strong></p>"


async def _render_story(story: Story) -> List[dict]:
    """Render every example of a story into template-ready sections."""
    sections = []
    for example in story.examples:
        result = await render_once(example.options, profile=SANITIZE_PROFILE)
        sections.append({"heading": example.heading, "html": result.html})
    return sections


@router.get("/", response_class=HTMLResponse, name="gallery")
async def gallery(request: Request):
    """List every story with its rendered examples."""
    rendered = []
    for story in STORIES.values():
        rendered.append({"story": story, "sections": await _render_story(story)})
    return templates.TemplateResponse(
        request,
        "gallery.html",
        {"stories": rendered},
    )


@router.get("/stories/{name}", response_class=HTMLResponse, name="story")
async def story_page(request: Request, name: str):
    """Show a single story."""
    story = STORIES.get(name)
    if story is None:
        logger.info(f"Unknown story requested: {name}")
        return render_error_page(
            request,
            title="Story not found",
            message=f"There is no story named '{name}'.",
            status_code=404,
        )
    sections = await _render_story(story)
    return templates.TemplateResponse(
        request,
        "gallery.html",
        {"stories": [{"story": story, "sections": sections}]},
    )


async def _playground_response(request: Request, html: str, status_code: int = 200):
    preview = await render_once(ViewerOptions(html=html), profile=SANITIZE_PROFILE)
    return templates.TemplateResponse(
        request,
        "playground.html",
        {"source": html, "preview": preview.html},
        status_code=status_code,
    )


@router.get("/playground", response_class=HTMLResponse, name="playground")
async def playground(request: Request):
    """Interactive editor with a sanitized preview."""
    return await _playground_response(request, PLAYGROUND_DEFAULT)


@router.post("/playground", response_class=HTMLResponse)
async def playground_submit(request: Request, html: Optional[str] = Form("")):
    """Render submitted markup through the viewer."""
    html = html or ""
    if len(html) > MAX_CONTENT_LENGTH:
        return render_error_page(
            request,
            title="Content too large",
            message=f"Content must be at most {MAX_CONTENT_LENGTH} characters.",
            status_code=413,
        )
    return await _playground_response(request, html)
