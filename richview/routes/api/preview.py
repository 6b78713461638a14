"""
Preview API routes for RichView.
Renders viewer options into a sanitized HTML fragment.
"""

from fastapi import APIRouter, HTTPException
from loguru import logger

from ...components.rich_text_viewer import render_once
from ...config import MAX_CONTENT_LENGTH, SANITIZE_PROFILE
from ...models.viewer import RenderResult, ViewerOptions

router = APIRouter()


@router.post("/render", response_model=RenderResult)
async def render_fragment(options: ViewerOptions):
    """
    Sanitize and render viewer options.

    Args:
        options: Content, class name and style options for the viewer

    Returns:
        RenderResult: The rendered surface and its final content state
    """
    try:
        if options.html and len(options.html) > MAX_CONTENT_LENGTH:
            raise HTTPException(
                status_code=413,
                detail=f"Content must be at most {MAX_CONTENT_LENGTH} characters",
            )
        return await render_once(options, profile=SANITIZE_PROFILE)
    except HTTPException:
        # Re-raise HTTP exceptions
        raise
    except Exception as e:
        logger.error(f"Error rendering preview: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
