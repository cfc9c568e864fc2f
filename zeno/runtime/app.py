"""Runtime composition for ``zeno search``.

Loads entries, builds the session and terminal, runs the loop, and reports
the outcome once the terminal has been handed back.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Callable
from typing import TextIO

from ..clipboard import ClipboardSink, OutputSink
from ..config import Settings
from ..entries import Entry
from ..errors import LoadError, StoreError
from ..highlight import Highlighter
from ..session import Session, SessionExit
from ..store import SqlItemStore
from ..ui_theme import resolve_theme
from .loop import FALLBACK_TERMINAL_SIZE, run_session_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)

EMPTY_STORE_MESSAGE = "No commands in database."
COPIED_MESSAGE = "Copied to clipboard"


def load_entries(store) -> list[Entry]:
    """Load the initial entry set; any store failure is fatal here."""
    try:
        return store.load_all()
    except StoreError as exc:
        raise LoadError(str(exc)) from exc


def record_usage(store, term: str, entry: Entry) -> None:
    """Count a copy of ``entry`` for ``term``; failures are logged only."""
    recorder = getattr(store, "record_usage", None)
    if recorder is None:
        return
    try:
        recorder(term, entry.id)
    except StoreError as exc:
        logger.warning("recording usage of command %s failed: %s", entry.id, exc)


def run_search(
    settings: Settings,
    *,
    store=None,
    sink: OutputSink | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    terminal_factory: Callable[[int, int], TerminalController] = TerminalController,
    run_loop: Callable[..., SessionExit] = run_session_loop,
) -> int:
    """Run the interactive search session and return the process exit code."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr
    sink = ClipboardSink() if sink is None else sink
    if store is not None:
        return _run_search(settings, store, sink, stdin, stdout, stderr, terminal_factory, run_loop)

    owned = SqlItemStore(settings.database_url)
    try:
        return _run_search(settings, owned, sink, stdin, stdout, stderr, terminal_factory, run_loop)
    finally:
        owned.close()


def _run_search(settings, store, sink, stdin, stdout, stderr, terminal_factory, run_loop) -> int:
    try:
        entries = load_entries(store)
    except LoadError as exc:
        logger.error("initial load failed: %s", exc)
        print(f"Error: failed to load commands: {exc}", file=stderr)
        return 1
    if not entries:
        print(EMPTY_STORE_MESSAGE, file=stdout)
        return 0

    stdin_fd = stdin.fileno()
    stdout_fd = stdout.fileno()
    if not os.isatty(stdin_fd):
        print("Error: zeno search needs an interactive terminal", file=stderr)
        return 1

    size = shutil.get_terminal_size(FALLBACK_TERMINAL_SIZE)
    session = Session(
        entries,
        store,
        sink,
        width=size.columns,
        height=size.lines,
        list_fraction=settings.list_pane_fraction,
    )
    highlighter = Highlighter(settings.style, no_color=settings.no_color)
    theme = resolve_theme(settings.theme, no_color=settings.no_color)
    terminal = terminal_factory(stdin_fd, stdout_fd)
    outcome = run_loop(session, terminal, stdin_fd, highlighter, theme)

    if outcome.copied is not None:
        print(COPIED_MESSAGE, file=stdout)
        record_usage(store, outcome.query, outcome.copied)
    return 0
