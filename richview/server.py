"""
Main FastAPI application for RichView.
Serves the story gallery, the playground and the preview API.
"""

import os
from fastapi import FastAPI
from loguru import logger
from .config import NAME, APP_DESCRIPTION, LOG_DIR, LOG_LEVEL, LOG_RETENTION, LOG_ROTATION
from .routes.web import gallery
from .routes.api import preview
from .middleware.security_headers import SecurityHeadersMiddleware
from .services.sanitizer_engine import get_engine

# Configure loguru
os.makedirs(LOG_DIR, exist_ok=True)
logger.add(
    os.path.join(LOG_DIR, "richview.log"),
    rotation=LOG_ROTATION,
    retention=LOG_RETENTION,
    level=LOG_LEVEL,
)
logger.add(
    os.path.join(LOG_DIR, "errors.log"),
    rotation=LOG_ROTATION,
    retention=LOG_RETENTION,
    level="ERROR",
)

# Create FastAPI app
app = FastAPI(title=NAME, description=APP_DESCRIPTION)

logger.info(f"Gallery name is {NAME}")

# Security headers middleware
app.add_middleware(SecurityHeadersMiddleware)


@app.on_event("startup")
async def warm_sanitizer():
    """Load the sanitization engine ahead of the first request."""
    try:
        await get_engine().acquire()
    except Exception as exc:
        # Requests retry the acquisition lazily
        logger.error(f"Sanitization engine warm-up failed: {exc}")


# Include route modules
app.include_router(gallery.router)
# API routes
app.include_router(preview.router, prefix="/api")
