"""Selectable, scrollable list used by the browsing view.

``ListWidget`` is the capability the session depends on; ``EntryListWidget``
is the default virtual scroller where every item occupies a fixed number of
rows (title, description, spacer).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, Protocol, TypeVar

from ..input import keys

T = TypeVar("T")

ROWS_PER_ITEM = 3


class ListWidget(Protocol[T]):
    """Capability interface for the browse list."""

    def set_items(self, items: Sequence[T], *, keep_selection: bool = False) -> None: ...

    def selected_index(self) -> int | None: ...

    def selected_item(self) -> T | None: ...

    def handle_navigation_key(self, key: str) -> bool: ...

    def set_size(self, width: int, height: int) -> None: ...

    def measured_height(self) -> int: ...


class EntryListWidget(Generic[T]):
    """Hand-rolled virtual scroller over a list of items."""

    def __init__(self, items: Sequence[T] = (), width: int = 0, height: int = 0) -> None:
        self.items: list[T] = list(items)
        self.width = width
        self.height = height
        self.selected = 0
        self.offset = 0

    def set_items(self, items: Sequence[T], *, keep_selection: bool = False) -> None:
        """Replace items; reset selection and scroll unless ``keep_selection``."""
        self.items = list(items)
        if keep_selection:
            self._scroll_to_selection()
            return
        self.selected = 0
        self.offset = 0

    def set_size(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._scroll_to_selection()

    def measured_height(self) -> int:
        return self.height

    def page_size(self) -> int:
        """Return how many items fit in the measured height (at least one)."""
        return max(1, self.height // ROWS_PER_ITEM)

    def selected_index(self) -> int | None:
        if not self.items:
            return None
        return self.selected

    def selected_item(self) -> T | None:
        index = self.selected_index()
        return None if index is None else self.items[index]

    def visible_items(self) -> list[tuple[int, T]]:
        """Return ``(index, item)`` pairs on the current page."""
        end = min(len(self.items), self.offset + self.page_size())
        return [(idx, self.items[idx]) for idx in range(self.offset, end)]

    def select(self, index: int) -> None:
        if not self.items:
            return
        self.selected = max(0, min(index, len(self.items) - 1))
        self._scroll_to_selection()

    def _scroll_to_selection(self) -> None:
        if not self.items:
            self.selected = 0
            self.offset = 0
            return
        self.selected = max(0, min(self.selected, len(self.items) - 1))
        page = self.page_size()
        if self.selected < self.offset:
            self.offset = self.selected
        elif self.selected >= self.offset + page:
            self.offset = self.selected - page + 1
        self.offset = max(0, min(self.offset, max(0, len(self.items) - page)))

    def handle_navigation_key(self, key: str) -> bool:
        """Move the selection for navigation keys; return whether the key was used."""
        if not self.items:
            return key in keys.NAVIGATION_KEYS
        page = self.page_size()
        if key in {keys.UP, keys.CTRL_P}:
            self.select(self.selected - 1)
        elif key in {keys.DOWN, keys.CTRL_N}:
            self.select(self.selected + 1)
        elif key in {keys.PAGE_UP, keys.LEFT}:
            self.offset = max(0, self.offset - page)
            self.select(self.selected - page)
        elif key in {keys.PAGE_DOWN, keys.RIGHT}:
            self.offset = min(max(0, len(self.items) - page), self.offset + page)
            self.select(self.selected + page)
        elif key == keys.HOME:
            self.select(0)
        elif key == keys.END:
            self.select(len(self.items) - 1)
        else:
            return False
        return True
