"""Rounded box drawing and row padding shared by the renderers."""

from __future__ import annotations

from collections.abc import Sequence

from ..ansi import fit_ansi_line
from ..ui_theme import UITheme

TOP_LEFT = "╭"
TOP_RIGHT = "╮"
BOTTOM_LEFT = "╰"
BOTTOM_RIGHT = "╯"
HORIZONTAL = "─"
VERTICAL = "│"
# Two border columns plus one padding column on each side.
FRAME_COLS = 4


def paint(text: str, style: str, theme: UITheme) -> str:
    """Wrap ``text`` in ``style`` and the theme reset; no-op for empty styles."""
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


def box_lines(body: Sequence[str], width: int, style: str, theme: UITheme) -> list[str]:
    """Frame ``body`` rows in a rounded box exactly ``width`` columns wide.

    Each body row gets one space of padding on both sides, so content is
    clipped to ``width - 4`` columns. At four columns or fewer there is no
    room for content inside a frame, so rows are returned unframed.
    """
    if width <= FRAME_COLS:
        return [fit_ansi_line(row, width) for row in body]
    inner = width - FRAME_COLS
    rows = [paint(TOP_LEFT + HORIZONTAL * (width - 2) + TOP_RIGHT, style, theme)]
    side = paint(VERTICAL, style, theme)
    for row in body:
        rows.append(f"{side} {fit_ansi_line(row, inner)} {side}")
    rows.append(paint(BOTTOM_LEFT + HORIZONTAL * (width - 2) + BOTTOM_RIGHT, style, theme))
    return rows


def fit_rows(rows: Sequence[str], width: int, height: int) -> list[str]:
    """Return exactly ``height`` rows, each exactly ``width`` columns."""
    out = [fit_ansi_line(row, width) for row in rows[:height]]
    while len(out) < height:
        out.append(" " * width)
    return out
