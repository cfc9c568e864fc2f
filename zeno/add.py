"""One-shot ``zeno add`` flow: prompt, summarize, and insert a new snippet.

Prompts are line-oriented so the flow works in any terminal. Errors from
the store, clipboard, or input surface as ``ZenoError`` for the CLI.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence

from .ai import Summary, summarize
from .clipboard import read_clipboard
from .entries import Language
from .errors import AIError, ZenoError
from .languages import order_languages
from .textcase import title_case

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "(todo: description)"
MANUAL_END_MARKER = "."
CODE_SOURCES = ("Clipboard", "Manual entry")
SUCCESS_MESSAGE = "Command added successfully."


def language_label(language: Language) -> str:
    return f"{language.name.upper():<10}  {language.description:<45}  [{language.count:3d}]"


def with_language_keyword(keywords: Sequence[str], language: str) -> list[str]:
    """Prepend ``language`` to ``keywords`` unless already present (case-insensitive)."""
    keywords = list(keywords)
    if not language:
        return keywords
    if any(keyword.casefold() == language.casefold() for keyword in keywords):
        return keywords
    return [language] + keywords


def _ask(prompt: Callable[[str], str], message: str) -> str:
    try:
        return prompt(message)
    except EOFError as exc:
        raise ZenoError("input aborted") from exc


def ask_title(prompt: Callable[[str], str], out: Callable[[str], None]) -> str:
    while True:
        title = _ask(prompt, "Command title: ").strip()
        if title:
            return title
        out("Title must not be empty.")


def ask_choice(
    prompt: Callable[[str], str],
    out: Callable[[str], None],
    heading: str,
    labels: Sequence[str],
) -> int:
    """Show numbered ``labels`` and return the chosen index (Enter picks the first)."""
    out(heading)
    for number, label in enumerate(labels, start=1):
        out(f"{number:>3}) {label}")
    while True:
        answer = _ask(prompt, f"Select [1-{len(labels)}] (default 1): ").strip()
        if not answer:
            return 0
        if answer.isdigit() and 1 <= int(answer) <= len(labels):
            return int(answer) - 1
        out(f"Please enter a number between 1 and {len(labels)}.")


def read_manual_code(prompt: Callable[[str], str], out: Callable[[str], None]) -> str:
    """Read code lines until a line holding only ``.`` or end of input."""
    out(f"Code snippet (finish with a line containing only '{MANUAL_END_MARKER}'):")
    lines: list[str] = []
    while True:
        try:
            line = prompt("")
        except EOFError:
            break
        if line.strip() == MANUAL_END_MARKER:
            break
        lines.append(line)
    return "\n".join(lines)


def build_summary(
    title: str,
    code: str,
    *,
    ai_enabled: bool,
    out: Callable[[str], None],
    summarize_fn: Callable[[str, str], Summary],
) -> Summary:
    """Return the AI summary, or the title-cased fallback when AI is off or fails."""
    fallback = Summary(title_case(title), FALLBACK_DESCRIPTION, [])
    if not ai_enabled:
        return fallback
    try:
        return summarize_fn(title, code)
    except AIError as exc:
        logger.warning("AI summary failed, using fallback: %s", exc)
        out(f"AI error, using fallback: {exc}")
        return fallback


def run_add(
    store,
    *,
    ai_enabled: bool = True,
    prompt: Callable[[str], str] = input,
    read_clip: Callable[[], str] = read_clipboard,
    out: Callable[[str], None] = print,
    summarize_fn: Callable[[str, str], Summary] = summarize,
) -> int:
    """Collect a new snippet interactively, insert it, and return its id."""
    title = ask_title(prompt, out)
    source = ask_choice(prompt, out, "Code input", CODE_SOURCES)
    code = read_clip() if source == 0 else read_manual_code(prompt, out)
    if not code.strip():
        raise ZenoError("no code given")

    languages = store.fetch_languages()
    if not languages:
        raise ZenoError("no languages found in database")
    ordered = order_languages(languages, title)
    language = ordered[ask_choice(prompt, out, "Language", [language_label(item) for item in ordered])]

    summary = build_summary(title, code, ai_enabled=ai_enabled, out=out, summarize_fn=summarize_fn)
    keywords = with_language_keyword(summary.keywords, language.name)
    new_id = store.insert(summary.title, summary.description, code, json.dumps(keywords), language.id)
    out(SUCCESS_MESSAGE)
    return new_id
