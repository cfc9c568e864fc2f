"""Keystroke and resize dispatch for the interactive session.

``Session`` owns the current state and the entry set. Store and sink
failures raised during a transition become status text on the state the
user is left in; nothing escapes ``handle_key`` except ``SessionExit``
results.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..entries import Entry, remove_entry
from ..errors import SinkError, StoreError
from ..input import keys
from ..layout import Layout, compute_layout
from .list_widget import EntryListWidget
from .state import (
    FIELD_NAMES,
    BrowseView,
    BrowsingState,
    ConfirmingDeleteState,
    EditingState,
    SessionExit,
    SessionState,
)
from .text_buffer import TextBuffer

if TYPE_CHECKING:
    from ..clipboard import OutputSink
    from ..store import ItemStore

logger = logging.getLogger(__name__)

CONFIRM_KEYS = frozenset({"y", "Y", "z", "Z"})
DENY_KEYS = frozenset({"n", "N", keys.ESC})


def delete_prompt(entry: Entry) -> str:
    return f'Delete command "{entry.title}" (id={entry.id})? Press Y to confirm, N or ESC to cancel.'


class Session:
    """Browsing / confirming / editing state machine over an injected store."""

    def __init__(
        self,
        entries: Sequence[Entry],
        store: ItemStore,
        sink: OutputSink,
        *,
        width: int = 0,
        height: int = 0,
        list_fraction: float | None = None,
    ) -> None:
        self.store = store
        self.sink = sink
        self.list_fraction = list_fraction
        self.layout: Layout = compute_layout(width, height, list_fraction)
        self.state: SessionState = BrowsingState(self._new_view(entries))

    # Construction helpers

    def _new_view(self, entries: Sequence[Entry], status: str = "") -> BrowseView:
        widget: EntryListWidget[Entry] = EntryListWidget(
            width=self.layout.list_inner_width, height=self.layout.list_rows
        )
        view = BrowseView(entries=list(entries), list_widget=widget, status=status)
        view.refilter()
        return view

    def _size_buffers(self, state: EditingState) -> None:
        editor = self.layout.editor
        heights = {
            "title": editor.title_height,
            "description": editor.description_height,
            "keywords": editor.keywords_height,
            "code": editor.code_height,
        }
        width = editor.inner_width if self.layout.known else 0
        for name, buffer in state.buffers.items():
            buffer.set_size(width, heights[name])

    def _current_view(self) -> BrowseView | None:
        if isinstance(self.state, (BrowsingState, ConfirmingDeleteState)):
            return self.state.view
        return None

    # Events

    def resize(self, width: int, height: int) -> None:
        """Recompute geometry and re-size widgets without touching content."""
        self.layout = compute_layout(width, height, self.list_fraction)
        view = self._current_view()
        if view is not None:
            view.list_widget.set_size(self.layout.list_inner_width, self.layout.list_rows)
        elif isinstance(self.state, EditingState):
            self._size_buffers(self.state)

    def handle_key(self, key: str) -> SessionExit | None:
        """Apply one key; return a ``SessionExit`` when the session ends."""
        if key == keys.CTRL_C:
            view = self._current_view()
            return SessionExit(query=view.query if view is not None else "")
        state = self.state
        if isinstance(state, BrowsingState):
            return self._handle_browsing(state, key)
        if isinstance(state, ConfirmingDeleteState):
            self._handle_confirming(state, key)
        elif isinstance(state, EditingState):
            self._handle_editing(state, key)
        return None

    # Browsing

    def _handle_browsing(self, state: BrowsingState, key: str) -> SessionExit | None:
        view = state.view
        view.status = ""
        if keys.is_printable(key):
            view.query += key
            view.refilter()
        elif key == keys.BACKSPACE:
            if view.query:
                view.query = view.query[:-1]
                view.refilter()
        elif key == keys.ESC:
            if not view.query:
                return SessionExit()
            view.query = ""
            view.refilter()
        elif key == keys.ENTER:
            return self._copy_selected(view)
        elif key == keys.CTRL_D:
            entry = view.selected_entry()
            if entry is not None:
                self.state = ConfirmingDeleteState(view, entry.id, delete_prompt(entry))
        elif key == keys.CTRL_E:
            entry = view.selected_entry()
            if entry is not None:
                self._open_editor(view, entry)
        else:
            view.list_widget.handle_navigation_key(key)
        return None

    def _copy_selected(self, view: BrowseView) -> SessionExit | None:
        entry = view.selected_entry()
        if entry is None:
            return None
        try:
            self.sink.write(entry.code)
        except SinkError as exc:
            logger.warning("copy of command %s failed: %s", entry.id, exc)
            view.status = f"Copy failed: {exc}"
            return None
        return SessionExit(copied=entry, query=view.query)

    def _open_editor(self, view: BrowseView, entry: Entry) -> None:
        if self.layout.known:
            self.layout = compute_layout(self.layout.width, self.layout.height, self.list_fraction)
        values = {
            "title": entry.title,
            "description": entry.description,
            "keywords": entry.keywords,
            "code": entry.code,
        }
        buffers = {
            name: TextBuffer(values[name], multiline=name != "title") for name in FIELD_NAMES
        }
        editing = EditingState(entry_id=entry.id, buffers=buffers, fallback_entries=list(view.entries))
        self._size_buffers(editing)
        self.state = editing

    # Confirming delete

    def _handle_confirming(self, state: ConfirmingDeleteState, key: str) -> None:
        view = state.view
        if key in CONFIRM_KEYS:
            try:
                self.store.delete(state.pending_id)
            except StoreError as exc:
                logger.warning("delete of command %s failed: %s", state.pending_id, exc)
                state.message = f"Delete failed: {exc}"
                return
            view.entries = remove_entry(view.entries, state.pending_id)
            view.refilter(keep_selection=True)
            self.state = BrowsingState(view)
        elif key in DENY_KEYS:
            self.state = BrowsingState(view)
        elif key in keys.NAVIGATION_KEYS:
            view.list_widget.handle_navigation_key(key)

    # Editing

    def _handle_editing(self, state: EditingState, key: str) -> None:
        if key == keys.TAB:
            state.cycle_focus(1)
        elif key == keys.SHIFT_TAB:
            state.cycle_focus(-1)
        elif key == keys.CTRL_S:
            self._save(state)
        elif key == keys.ESC:
            self._cancel(state)
        else:
            state.focused_buffer().handle_key(key)

    def _save(self, state: EditingState) -> None:
        title = state.buffers["title"].value().strip()
        description = state.buffers["description"].value().strip()
        keywords = state.buffers["keywords"].value().strip()
        code = state.buffers["code"].value()
        try:
            self.store.update(state.entry_id, title, description, keywords, code)
        except StoreError as exc:
            logger.warning("update of command %s failed: %s", state.entry_id, exc)
            state.status = f"Save failed: {exc}"
            return
        try:
            entries = self.store.load_all()
        except StoreError as exc:
            logger.warning("reload after update failed: %s", exc)
            state.status = f"Reload failed: {exc}"
            return
        self.state = BrowsingState(self._new_view(entries))

    def _cancel(self, state: EditingState) -> None:
        try:
            entries = self.store.load_all()
        except StoreError as exc:
            logger.warning("reload after cancel failed: %s", exc)
            self.state = BrowsingState(
                self._new_view(state.fallback_entries, status=f"Reload failed: {exc}")
            )
            return
        self.state = BrowsingState(self._new_view(entries))
