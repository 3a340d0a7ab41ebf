"""Release identifiers shown in the title bar and on the welcome page."""

from __future__ import annotations

VERSION = "0.6.1"
RELEASE_NAME = "Glasswave"

__all__ = ["RELEASE_NAME", "VERSION"]
