"""Frame rendering for the interactive session.

``render_frame`` is a read-only projection of the session state: it never
mutates the state and returns the same frame for the same inputs.
"""

from __future__ import annotations

from ..highlight import Highlighter
from ..layout import Layout
from ..session.state import BrowsingState, ConfirmingDeleteState, EditingState, SessionState
from ..ui_theme import DEFAULT_THEME, UITheme
from .browse import (
    EMPTY_DETAIL,
    KEY_LEGEND,
    MAX_PREVIEW_LINES,
    TRUNCATED_MARKER,
    render_browse,
)
from .edit import EDITOR_LEGEND, render_editor

ROW_SEPARATOR = "\r\n"


def render_lines(
    state: SessionState,
    layout: Layout,
    highlighter: Highlighter,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Return exactly ``layout.height`` styled rows for ``state``."""
    if not layout.known:
        return []
    if isinstance(state, EditingState):
        return render_editor(state, layout, theme)
    if isinstance(state, ConfirmingDeleteState):
        return render_browse(state.view, layout, highlighter, theme, state.message)
    if isinstance(state, BrowsingState):
        return render_browse(state.view, layout, highlighter, theme)
    raise TypeError(f"unknown session state: {type(state).__name__}")


def render_frame(
    state: SessionState,
    layout: Layout,
    highlighter: Highlighter,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    """Return one frame: ``layout.height`` rows joined by CR LF."""
    return ROW_SEPARATOR.join(render_lines(state, layout, highlighter, theme))


__all__ = [
    "render_frame",
    "render_lines",
    "ROW_SEPARATOR",
    "EDITOR_LEGEND",
    "EMPTY_DETAIL",
    "KEY_LEGEND",
    "MAX_PREVIEW_LINES",
    "TRUNCATED_MARKER",
]
