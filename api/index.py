"""Serverless entrypoint exposing the travel buddy ASGI app."""

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if SRC_DIR.is_dir() and str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))

from travel_buddy.api.asgi import app  # noqa: E402

__all__ = ["app"]
