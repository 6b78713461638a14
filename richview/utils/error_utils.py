from fastapi import Request
from fastapi.responses import HTMLResponse
from ..utils.template_env import get_templates

def render_error_page(
    request: Request,
    title: str = "Error",
    message: str = "An error occurred",
    status_code: int = 404,
) -> HTMLResponse:
    """Render a standardized error template for gallery pages."""
    templates = get_templates()
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "title": title,
            "message": message,
        },
        status_code=status_code,
    )
