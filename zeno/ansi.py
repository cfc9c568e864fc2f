"""ANSI-aware text measurement and line shaping utilities.

Provides display-width measurement, clipping, and padding that preserve
escape sequences, plus query-token marking for plain header text.
"""

from __future__ import annotations

import re
import string
import textwrap
import unicodedata
from collections.abc import Sequence

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    """Remove escape sequences from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Return the rendered column width of a styled single line."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    # Keep trailing style resets so a cut line never bleeds color.
    while i < n:
        match = ANSI_ESCAPE_RE.match(text, i) if text[i] == "\x1b" else None
        if match is None:
            i += 1
            continue
        out.append(match.group(0))
        i = match.end()
    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad a styled line to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    used = display_width(clipped)
    if "\x1b" in clipped:
        clipped += RESET
    if used < width:
        clipped += " " * (width - used)
    return clipped


# Each whitespace char becomes one space so wrapped lines stay substrings.
_WHITESPACE_TO_SPACE = str.maketrans(string.whitespace, " " * len(string.whitespace))


def _wrap_paragraph(paragraph: str, width: int) -> tuple[str, list[str]]:
    flat = paragraph.translate(_WHITESPACE_TO_SPACE)
    return flat, textwrap.wrap(flat, width, break_long_words=True, expand_tabs=False) or [""]


def wrap_plain(text: str, width: int) -> list[str]:
    """Word-wrap plain text, keeping explicit newlines as paragraph breaks."""
    if width <= 0:
        return [""]
    out: list[str] = []
    for paragraph in text.splitlines() or [""]:
        out.extend(_wrap_paragraph(paragraph, width)[1])
    return out


def wrap_marked(
    text: str,
    width: int,
    tokens: Sequence[str],
    style: str,
    reset: str = RESET,
    base: str = "",
) -> list[str]:
    """Word-wrap plain ``text`` and mark ``tokens`` like ``mark_tokens``.

    Hits are located before wrapping, so a token broken across two rows is
    marked on both of them.
    """
    if width <= 0:
        return [""]
    out: list[str] = []
    for paragraph in text.splitlines() or [""]:
        flat, lines = _wrap_paragraph(paragraph, width)
        spans = _token_spans(flat, tokens) if tokens and style else []
        cursor = 0
        for line in lines:
            start = flat.find(line, cursor)
            end = start + len(line)
            cursor = end
            local = [(max(s, start) - start, min(e, end) - start) for s, e in spans if s < end and e > start]
            out.append(_apply_spans(line, local, style, reset, base))
    return out


def _token_spans(text: str, tokens: Sequence[str]) -> list[tuple[int, int]]:
    """Return merged ``(start, end)`` spans of case-insensitive token hits."""
    # Fold per character so span offsets stay aligned with ``text``.
    folded = "".join(ch.lower() if len(ch.lower()) == 1 else ch for ch in text)
    spans: list[tuple[int, int]] = []
    for token in tokens:
        if not token:
            continue
        cursor = 0
        while True:
            idx = folded.find(token, cursor)
            if idx < 0:
                break
            spans.append((idx, idx + len(token)))
            cursor = idx + len(token)
    if not spans:
        return []

    spans.sort()
    merged = [spans[0]]
    for start, end in spans[1:]:
        last_start, last_end = merged[-1]
        if start <= last_end:
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def mark_tokens(text: str, tokens: Sequence[str], style: str, reset: str = RESET, base: str = "") -> str:
    """Wrap every occurrence of ``tokens`` in plain ``text`` with ``style``.

    ``base`` is re-applied after each marked span so surrounding styling
    survives the reset.
    """
    if not text or not tokens or not style:
        return text
    return _apply_spans(text, _token_spans(text, tokens), style, reset, base)


def _apply_spans(text: str, spans: Sequence[tuple[int, int]], style: str, reset: str, base: str) -> str:
    if not spans:
        return text
    out: list[str] = []
    cursor = 0
    for start, end in spans:
        out.append(text[cursor:start])
        out.append(style)
        out.append(text[start:end])
        out.append(reset)
        out.append(base)
        cursor = end
    out.append(text[cursor:])
    return "".join(out)
