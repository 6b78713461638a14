"""
Test configuration for RichView unit tests.

Ensures the project root is on sys.path so the richview package can be
imported without installing it, and keeps log files out of the working tree.
"""

import os
import sys
import tempfile
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="richview-logs-"))
