"""Code preview sanitization and syntax highlighting.

Highlighting goes through Pygments with a lexer picked from the snippet's
language label, then content sniffing, then plain text. Any failure degrades
to the sanitized source; ``Highlighter.render`` never raises.
"""

from __future__ import annotations

import logging
import re

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, guess_lexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"
_CACHE_LIMIT = 256
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

LANGUAGE_ALIASES: dict[str, str] = {
    "ps": "powershell",
    "pwsh": "powershell",
    "ps1": "powershell",
    "js": "javascript",
    "node": "javascript",
    "nodejs": "javascript",
    "ts": "typescript",
    "sh": "bash",
    "shell": "bash",
    "zsh": "bash",
    "py": "python",
    "c#": "csharp",
    "c++": "cpp",
    "md": "markdown",
    "yml": "yaml",
    "tf": "terraform",
}


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_language(language: str) -> str:
    """Map a stored language label to a Pygments lexer alias."""
    lowered = language.strip().lower()
    return LANGUAGE_ALIASES.get(lowered, lowered)


def pick_lexer(code: str, language: str) -> Lexer:
    """Return the best lexer for ``code`` given an optional language label."""
    if language.strip():
        try:
            return get_lexer_by_name(normalize_language(language))
        except ClassNotFound:
            pass
    try:
        return guess_lexer(code)
    except ClassNotFound:
        return TextLexer()


class Highlighter:
    """Render snippet code as ANSI-styled terminal text."""

    def __init__(self, style: str = DEFAULT_STYLE, *, no_color: bool = False) -> None:
        self.no_color = no_color
        self.style = self._normalize_style(style)
        self._formatter: Terminal256Formatter | None = None
        self._cache: dict[tuple[str, str], str] = {}

    @staticmethod
    def _normalize_style(style: str) -> str:
        try:
            get_style_by_name(style)
        except ClassNotFound:
            logger.warning("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
            return DEFAULT_STYLE
        return style

    def _get_formatter(self) -> Terminal256Formatter:
        if self._formatter is None:
            self._formatter = Terminal256Formatter(style=self.style)
        return self._formatter

    def render(self, code: str, language: str = "") -> str:
        """Return ``code`` highlighted for ``language``; plain text on any failure."""
        safe = sanitize_terminal_text(code)
        if self.no_color or not safe.strip():
            return safe

        key = (safe, language)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            rendered = pygments_highlight(safe, pick_lexer(safe, language), self._get_formatter())
        except Exception:
            logger.debug("highlighting failed for language %r", language, exc_info=True)
            return safe

        # Pygments always terminates output with a newline the source may lack.
        if not safe.endswith("\n") and rendered.endswith("\n"):
            rendered = rendered[:-1]
        if len(self._cache) >= _CACHE_LIMIT:
            self._cache.clear()
        self._cache[key] = rendered
        return rendered
