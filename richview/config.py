"""
Configuration module for RichView.
Centralizes all configuration settings and environment variables.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Server configuration
PORT = int(os.getenv("PORT", "8000"))
DEV = os.getenv("DEV", "false").lower() == "true"
HOST = os.getenv("HOST", "0.0.0.0")

# Application settings
APP_TITLE = "RichView"
APP_DESCRIPTION = "Sanitized rich text rendering"

# Name shown on all pages
NAME = os.getenv("RICHVIEW_NAME", "RichView Gallery")

# Version shown on all pages
VERSION = "1.0"

# Sanitization settings
SANITIZE_PROFILE = os.getenv("SANITIZE_PROFILE", "html")
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(256 * 1024)))  # 256KB

# Logging settings
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_ROTATION = "1 day"
LOG_RETENTION = "7 days"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Template settings
TEMPLATE_DIR = str(Path(__file__).resolve().parent / "templates")
