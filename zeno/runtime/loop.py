"""Main interactive event loop for the terminal UI.

Polls the terminal size, renders when the session changed, and feeds
decoded keys to the session until it reports a ``SessionExit``.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable
from typing import Protocol

from ..highlight import Highlighter
from ..input import EnterNormalizer, keys, read_key
from ..render import render_frame
from ..session import Session, SessionExit
from ..ui_theme import DEFAULT_THEME, UITheme

KEY_TIMEOUT_MS = 120
FALLBACK_TERMINAL_SIZE = (80, 24)


class Terminal(Protocol):
    def raw_mode(self): ...

    def write_frame(self, frame: str) -> None: ...


def run_session_loop(
    session: Session,
    terminal: Terminal,
    stdin_fd: int,
    highlighter: Highlighter,
    theme: UITheme = DEFAULT_THEME,
    *,
    get_terminal_size: Callable[[], os.terminal_size] | None = None,
    read_key_fn: Callable[..., str] = read_key,
) -> SessionExit:
    """Run the session until it exits; the terminal is restored on return.

    Each iteration handles resize bookkeeping, optional rendering, and
    one key read with a short timeout so resizes are noticed while idle.
    """
    if get_terminal_size is None:
        def get_terminal_size() -> os.terminal_size:
            return shutil.get_terminal_size(FALLBACK_TERMINAL_SIZE)

    enter = EnterNormalizer()
    last_size: tuple[int, int] | None = None
    dirty = True

    with terminal.raw_mode():
        while True:
            term = get_terminal_size()
            size = (term.columns, term.lines)
            if size != last_size:
                session.resize(*size)
                last_size = size
                dirty = True

            if dirty:
                terminal.write_frame(render_frame(session.state, session.layout, highlighter, theme))
                dirty = False

            try:
                key = read_key_fn(stdin_fd, timeout_ms=KEY_TIMEOUT_MS)
            except KeyboardInterrupt:
                key = keys.CTRL_C
            if key == "":
                continue
            normalized = enter.feed(key)
            if normalized is None:
                continue

            outcome = session.handle_key(normalized)
            if outcome is not None:
                return outcome
            dirty = True
