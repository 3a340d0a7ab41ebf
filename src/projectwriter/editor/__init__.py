"""Editor package containing formatting models and the selection sync controller."""

from .formatting import FontSpec, SelectionFontView, TextSurface, page_for_line
from .selection_sync import FormattingControls, SelectionSyncController, SyncState

__all__ = [
    "FontSpec",
    "FormattingControls",
    "SelectionFontView",
    "SelectionSyncController",
    "SyncState",
    "TextSurface",
    "page_for_line",
]
