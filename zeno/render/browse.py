"""Browse-screen rendering: command list on the left, details on the right.

The right pane stacks a header (title and description with query tokens
marked), a capped code preview, and a footer box with metadata plus either
the delete prompt or the key legend.
"""

from __future__ import annotations

from ..ansi import mark_tokens, wrap_marked, wrap_plain
from ..entries import Entry
from ..highlight import Highlighter
from ..layout import Layout
from ..session.list_widget import EntryListWidget
from ..session.state import BrowseView
from ..ui_theme import UITheme
from .boxes import HORIZONTAL, box_lines, fit_rows, paint

MAX_PREVIEW_LINES = 20
TRUNCATED_MARKER = "... (truncated)"
EMPTY_DETAIL = "No matching commands."
EMPTY_LIST = "No items."
LIST_TITLE = " Commands "
SELECTED_MARKER = "│"
KEY_LEGEND = (
    "KEYS:  <↑/↓> to select  •  <CR> to copy & return  •  <ESC> to clear/quit"
    "  •  <Ctrl+D> to delete  •  <Ctrl+E> to edit"
)


def _first_line(text: str) -> str:
    return text.splitlines()[0] if text else ""


def render_list_pane(widget: EntryListWidget[Entry], layout: Layout, theme: UITheme) -> list[str]:
    """Return the bordered list pane, ``layout.height`` rows tall."""
    inner = layout.list_inner_width
    body = [paint(LIST_TITLE, theme.list_title, theme), ""]
    selected = widget.selected_index()
    visible = widget.visible_items()
    if not visible:
        body.append(paint(EMPTY_LIST, theme.empty_hint, theme))
    for index, entry in visible:
        title = _first_line(entry.title)
        description = _first_line(entry.description)
        if index == selected:
            marker = paint(SELECTED_MARKER, theme.list_selected_marker, theme)
            body.append(marker + " " + paint(title, theme.list_selected_title, theme))
            body.append(marker + " " + paint(description, theme.list_selected_description, theme))
        else:
            body.append("  " + title)
            body.append("  " + paint(description, theme.list_description, theme))
        body.append("")
    body = fit_rows(body, inner, max(0, layout.height - 2))
    return box_lines(body, layout.list_width, theme.border, theme)[: layout.height]


def code_preview_lines(entry: Entry, highlighter: Highlighter, theme: UITheme) -> list[str]:
    """Return highlighted code lines, capped at ``MAX_PREVIEW_LINES``."""
    rendered = highlighter.render(entry.code, entry.language)
    lines = rendered.replace("\r", "").split("\n") if rendered else []
    if len(lines) > MAX_PREVIEW_LINES:
        lines = lines[:MAX_PREVIEW_LINES] + [paint(TRUNCATED_MARKER, theme.empty_hint, theme)]
    return lines


def header_lines(entry: Entry | None, tokens: list[str], width: int, theme: UITheme) -> list[str]:
    rule = paint(HORIZONTAL * width, theme.rule, theme)
    if entry is None:
        return [rule, "", rule]
    rows = [rule]
    for marked in wrap_marked(entry.title, width, tokens, theme.token_match, theme.reset, theme.detail_title):
        rows.append(paint(marked, theme.detail_title, theme))
    if entry.description:
        rows.extend(wrap_marked(entry.description, width, tokens, theme.token_match, theme.reset))
    rows.append(rule)
    return rows


def footer_lines(
    entry: Entry | None,
    view: BrowseView,
    width: int,
    theme: UITheme,
    confirm_message: str | None = None,
) -> list[str]:
    """Return the metadata/legend box for the detail pane."""
    inner = max(1, width - 4)
    tokens = view.tokens()
    body: list[str] = []

    def field(label: str, value: str) -> str:
        return paint(f"{label}:", theme.footer_label, theme) + " " + value

    if entry is not None:
        body.append(field("Language", entry.language or "-"))
        body.append(field("Formatters", entry.formatters or "-"))
        body.append(field("Keywords", mark_tokens(entry.keywords, tokens, theme.token_match, theme.reset)))
        body.append(field("Hit count", str(entry.count)))
        body.append(field("Last used", entry.last_used or "-"))
        body.append("")
    if confirm_message is not None:
        body.extend(paint(line, theme.confirm, theme) for line in wrap_plain(confirm_message, inner))
    else:
        body.extend(wrap_plain(KEY_LEGEND, inner))
    if view.status:
        body.extend(paint(line, theme.status_error, theme) for line in wrap_plain(view.status, inner))
    body.append(f'Query: "{view.query}"')
    return box_lines(body, width, theme.footer_border, theme)


def render_detail_pane(
    view: BrowseView,
    layout: Layout,
    highlighter: Highlighter,
    theme: UITheme,
    confirm_message: str | None = None,
) -> list[str]:
    """Return the right pane, exactly ``layout.height`` rows of ``detail_width`` columns."""
    width = layout.detail_width
    height = layout.height
    entry = view.selected_entry()

    header = header_lines(entry, view.tokens(), width, theme)
    if entry is None:
        code = [paint(EMPTY_DETAIL, theme.empty_hint, theme)]
    else:
        code = code_preview_lines(entry, highlighter, theme)
    footer = footer_lines(entry, view, width, theme, confirm_message)

    body_rows = max(0, height - len(footer))
    if body_rows < len(header):
        header = header[:body_rows]
        code = []
    else:
        room = body_rows - len(header)
        if len(code) > room:
            marker = paint(TRUNCATED_MARKER, theme.empty_hint, theme)
            code = code[: room - 1] + [marker] if room > 0 else []
    free = body_rows - len(header) - len(code)
    above = free // 2
    below = free - above
    rows = header + [""] * above + code + [""] * below + footer
    return fit_rows(rows, width, height)


def render_browse(
    view: BrowseView,
    layout: Layout,
    highlighter: Highlighter,
    theme: UITheme,
    confirm_message: str | None = None,
) -> list[str]:
    """Join list and detail panes side by side with a one-column gutter."""
    left = fit_rows(render_list_pane(view.list_widget, layout, theme), layout.list_width, layout.height)
    right = render_detail_pane(view, layout, highlighter, theme, confirm_message)
    gutter = " " * max(0, layout.width - layout.list_width - layout.detail_width)
    return [f"{l_row}{gutter}{r_row}" for l_row, r_row in zip(left, right)]
