"""Pane geometry derived from terminal size.

Pure functions only: the session calls ``compute_layout`` on resize (and
when a size is already known at start), never on other events.
"""

from __future__ import annotations

from dataclasses import dataclass

LIST_PANE_FRACTION = 0.4
MIN_LIST_WIDTH = 20
GUTTER_COLS = 1
# Top border, title row, spacer row, bottom border.
LIST_CHROME_ROWS = 4
LIST_CHROME_COLS = 4

EDITOR_SIDE_COLS = 4
TITLE_HEIGHT = 1
DESCRIPTION_HEIGHT = 3
KEYWORDS_HEIGHT = 3
MIN_CODE_HEIGHT = 3
MIN_SECTION_HEIGHT = 1
EDITOR_SECTIONS = 4
# Each section: top border, label, bottom border.
SECTION_CHROME_ROWS = 3
# Sections plus the status row and the legend row.
EDITOR_CHROME_ROWS = EDITOR_SECTIONS * SECTION_CHROME_ROWS + 2


@dataclass(frozen=True)
class EditorGeometry:
    """Text-area sizes for the four edit sections."""

    inner_width: int
    title_height: int = TITLE_HEIGHT
    description_height: int = DESCRIPTION_HEIGHT
    keywords_height: int = KEYWORDS_HEIGHT
    code_height: int = MIN_CODE_HEIGHT


@dataclass(frozen=True)
class Layout:
    """Resolved geometry for one terminal size."""

    width: int
    height: int
    list_width: int
    detail_width: int
    list_rows: int
    editor: EditorGeometry

    @property
    def known(self) -> bool:
        return self.width > 0 and self.height > 0

    @property
    def list_inner_width(self) -> int:
        return max(1, self.list_width - LIST_CHROME_COLS)


def compute_list_width(width: int, fraction: float | None = None) -> int:
    """Return list pane width: a fixed fraction, or half the screen when that is too narrow."""
    if width <= 0:
        return 0
    ratio = LIST_PANE_FRACTION if fraction is None else fraction
    list_width = int(ratio * width)
    if list_width < MIN_LIST_WIDTH:
        list_width = width // 2
    return max(1, min(list_width, width - 1)) if width > 1 else width


def compute_editor_geometry(width: int, height: int) -> EditorGeometry:
    """Give fixed heights to title/description/keywords and the rest to code.

    On short terminals sections shrink from the code box upward, down to one
    row each. The inner width always matches the section box interior.
    """
    inner_width = width - EDITOR_SIDE_COLS if width > EDITOR_SIDE_COLS else width
    heights = [TITLE_HEIGHT, DESCRIPTION_HEIGHT, KEYWORDS_HEIGHT, MIN_CODE_HEIGHT]
    available = height - EDITOR_CHROME_ROWS
    fixed = sum(heights[:3])
    if available >= fixed + MIN_CODE_HEIGHT:
        heights[3] = available - fixed
    else:
        for index in (3, 2, 1):
            excess = sum(heights) - available
            if excess <= 0:
                break
            heights[index] = max(MIN_SECTION_HEIGHT, heights[index] - excess)
    title_height, description_height, keywords_height, code_height = heights
    return EditorGeometry(
        inner_width=max(1, inner_width),
        title_height=title_height,
        description_height=description_height,
        keywords_height=keywords_height,
        code_height=code_height,
    )


def compute_layout(width: int, height: int, list_fraction: float | None = None) -> Layout:
    """Return pane geometry for a ``width`` x ``height`` terminal."""
    width = max(0, width)
    height = max(0, height)
    list_width = compute_list_width(width, list_fraction)
    detail_width = max(1, width - list_width - GUTTER_COLS)
    return Layout(
        width=width,
        height=height,
        list_width=list_width,
        detail_width=detail_width,
        list_rows=max(0, height - LIST_CHROME_ROWS),
        editor=compute_editor_geometry(width, height),
    )
