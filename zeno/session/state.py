"""Session state variants and the terminal outcome.

The session is always in exactly one of ``BrowsingState``,
``ConfirmingDeleteState``, or ``EditingState``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..entries import Entry
from ..filtering import filter_entries, query_tokens
from .list_widget import EntryListWidget
from .text_buffer import TextBuffer

FIELD_NAMES: tuple[str, ...] = ("title", "description", "keywords", "code")


@dataclass
class BrowseView:
    """Full entry set, active query, filtered view, and list selection."""

    entries: list[Entry]
    query: str = ""
    visible: list[Entry] = field(default_factory=list)
    list_widget: EntryListWidget[Entry] = field(default_factory=EntryListWidget)
    status: str = ""

    def refilter(self, *, keep_selection: bool = False) -> None:
        self.visible = filter_entries(self.entries, self.query)
        self.list_widget.set_items(self.visible, keep_selection=keep_selection)

    def selected_entry(self) -> Entry | None:
        return self.list_widget.selected_item()

    def tokens(self) -> list[str]:
        return query_tokens(self.query)


@dataclass
class BrowsingState:
    view: BrowseView


@dataclass
class ConfirmingDeleteState:
    """Browsing plus a pending delete awaiting a yes/no answer."""

    view: BrowseView
    pending_id: int
    message: str


@dataclass
class EditingState:
    """Inline editor over one entry's four text fields."""

    entry_id: int
    buffers: dict[str, TextBuffer]
    fallback_entries: list[Entry]
    focus: str = FIELD_NAMES[0]
    status: str = ""

    def focused_buffer(self) -> TextBuffer:
        return self.buffers[self.focus]

    def cycle_focus(self, delta: int) -> None:
        index = FIELD_NAMES.index(self.focus)
        self.focus = FIELD_NAMES[(index + delta) % len(FIELD_NAMES)]


SessionState = Union[BrowsingState, ConfirmingDeleteState, EditingState]


@dataclass(frozen=True)
class SessionExit:
    """How the session ended: ``copied`` is set on copy-and-exit."""

    copied: Entry | None = None
    query: str = ""
