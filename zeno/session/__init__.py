"""Interactive session core: state machine, list widget, and text buffers."""

from .list_widget import ROWS_PER_ITEM, EntryListWidget, ListWidget
from .machine import CONFIRM_KEYS, DENY_KEYS, Session, delete_prompt
from .state import (
    FIELD_NAMES,
    BrowseView,
    BrowsingState,
    ConfirmingDeleteState,
    EditingState,
    SessionExit,
    SessionState,
)
from .text_buffer import TextBuffer, VisibleLine

__all__ = [
    "Session",
    "SessionExit",
    "SessionState",
    "BrowseView",
    "BrowsingState",
    "ConfirmingDeleteState",
    "EditingState",
    "FIELD_NAMES",
    "CONFIRM_KEYS",
    "DENY_KEYS",
    "delete_prompt",
    "EntryListWidget",
    "ListWidget",
    "ROWS_PER_ITEM",
    "TextBuffer",
    "VisibleLine",
]
