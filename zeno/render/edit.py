"""Editor-screen rendering: four labeled boxes, a status row, and a legend."""

from __future__ import annotations

from ..layout import Layout
from ..session.state import FIELD_NAMES, EditingState
from ..session.text_buffer import TextBuffer
from ..ui_theme import UITheme
from .boxes import box_lines, fit_rows, paint

EDITOR_LEGEND = "<Ctrl+S> Save  •  <Esc> Cancel  •  <Tab/Shift+Tab> Move between fields"
CURSOR_MARK = "▏"


def _buffer_rows(buffer: TextBuffer, focused: bool, theme: UITheme) -> list[str]:
    rows: list[str] = []
    for line in buffer.visible_lines():
        if not focused or line.cursor is None:
            rows.append(line.text)
            continue
        col = line.cursor
        under = line.text[col:col + 1] or " "
        if theme.cursor:
            cursor = paint(under, theme.cursor, theme)
        else:
            # Without colors the cursor cell is drawn as a bar.
            cursor = CURSOR_MARK
        rows.append(line.text[:col] + cursor + line.text[col + 1:])
    return rows


def render_editor(state: EditingState, layout: Layout, theme: UITheme) -> list[str]:
    """Return exactly ``layout.height`` rows for the editing screen."""
    width = layout.width
    rows: list[str] = []
    for name in FIELD_NAMES:
        focused = name == state.focus
        prefix = "▸ " if focused else "  "
        rows.append(paint(prefix + name.upper(), theme.section_label, theme))
        body = _buffer_rows(state.buffers[name], focused, theme)
        rows.extend(box_lines(body, width, theme.section_border, theme))
    # Status and legend stay pinned to the bottom; sections are cropped instead.
    tail = [
        paint(state.status, theme.status_error, theme),
        paint(EDITOR_LEGEND, theme.editor_footer, theme),
    ]
    section_rows = max(0, layout.height - len(tail))
    return fit_rows(rows, width, section_rows) + fit_rows(tail, width, layout.height - section_rows)
