"""Tests for the interactive runtime loop with scripted keys.

A fake terminal records frames; ``read_key`` is replaced by a scripted
sequence so the loop runs without a tty.
"""

from __future__ import annotations

import contextlib
import os
import unittest

from zeno.entries import Entry
from zeno.highlight import Highlighter
from zeno.runtime.loop import run_session_loop
from zeno.session import Session, SessionExit
from zeno.ui_theme import PLAIN_THEME


class FakeTerminal:
    def __init__(self) -> None:
        self.frames: list[str] = []
        self.entered = 0
        self.exited = 0

    @contextlib.contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1

    def write_frame(self, frame: str) -> None:
        self.frames.append(frame)


class FakeSink:
    def __init__(self) -> None:
        self.written: list[str] = []

    def write(self, text: str) -> None:
        self.written.append(text)


class FakeStore:
    def load_all(self) -> list[Entry]:
        return []

    def delete(self, entry_id: int) -> None:
        return None

    def update(self, *args) -> None:
        return None


def _scripted(keys: list[str]):
    pending = list(keys)

    def read_key(fd: int, timeout_ms: int | None = None) -> str:
        if not pending:
            raise AssertionError("script exhausted before the session ended")
        key = pending.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key

    return read_key


def _sizes(*sizes: tuple[int, int]):
    remaining = list(sizes)

    def get_terminal_size() -> os.terminal_size:
        if len(remaining) > 1:
            return os.terminal_size(remaining.pop(0))
        return os.terminal_size(remaining[0])

    return get_terminal_size


def _entries() -> list[Entry]:
    return [
        Entry(id=1, title="Connect to DB", description="Open a session", code="mysql -u root"),
        Entry(id=2, title="List files", description="Show contents", code="ls -la"),
    ]


class RunSessionLoopTests(unittest.TestCase):
    def _run(self, keys: list, sizes=((100, 40),), sink: FakeSink | None = None):
        sink = FakeSink() if sink is None else sink
        session = Session(_entries(), FakeStore(), sink)
        terminal = FakeTerminal()
        outcome = run_session_loop(
            session,
            terminal,
            0,
            Highlighter(no_color=True),
            PLAIN_THEME,
            get_terminal_size=_sizes(*sizes),
            read_key_fn=_scripted(keys),
        )
        return outcome, session, terminal, sink

    def test_copy_and_exit_returns_outcome_and_restores_terminal(self) -> None:
        outcome, _, terminal, sink = self._run(["DOWN", "ENTER_CR"])
        self.assertEqual(outcome.copied.id, 2)
        self.assertEqual(sink.written, ["ls -la"])
        self.assertEqual((terminal.entered, terminal.exited), (1, 1))

    def test_cr_lf_pair_counts_as_one_enter(self) -> None:
        outcome, session, _, _ = self._run(["CTRL_E", "TAB", "ENTER_CR", "ENTER_LF", "CTRL_C"])
        self.assertIsNone(outcome.copied)
        self.assertEqual(session.state.buffers["description"].value(), "Open a session\n")

    def test_lone_lf_is_an_enter(self) -> None:
        outcome, _, _, sink = self._run(["ENTER_LF"])
        self.assertEqual(outcome.copied.id, 1)
        self.assertEqual(sink.written, ["mysql -u root"])

    def test_idle_timeouts_do_not_redraw(self) -> None:
        _, _, terminal, _ = self._run(["", "", "", "ESC"])
        self.assertEqual(len(terminal.frames), 1)

    def test_first_frame_has_terminal_height(self) -> None:
        _, _, terminal, _ = self._run(["ESC"])
        self.assertEqual(len(terminal.frames[0].split("\r\n")), 40)

    def test_resize_is_applied_and_redrawn(self) -> None:
        _, session, terminal, _ = self._run(["", "ESC"], sizes=((100, 40), (60, 20)))
        self.assertEqual((session.layout.width, session.layout.height), (60, 20))
        self.assertEqual(len(terminal.frames), 2)
        self.assertEqual(len(terminal.frames[1].split("\r\n")), 20)

    def test_quit_outcome_has_no_copy(self) -> None:
        outcome, _, _, sink = self._run(["ESC"])
        self.assertEqual(outcome, SessionExit())
        self.assertEqual(sink.written, [])

    def test_keyboard_interrupt_ends_session(self) -> None:
        outcome, _, terminal, _ = self._run([KeyboardInterrupt()])
        self.assertIsNone(outcome.copied)
        self.assertEqual(terminal.exited, 1)

    def test_terminal_is_restored_when_session_raises(self) -> None:
        session = Session(_entries(), FakeStore(), FakeSink())
        terminal = FakeTerminal()
        with self.assertRaises(AssertionError):
            run_session_loop(
                session,
                terminal,
                0,
                Highlighter(no_color=True),
                PLAIN_THEME,
                get_terminal_size=_sizes((80, 24)),
                read_key_fn=_scripted(["a"]),
            )
        self.assertEqual(terminal.exited, 1)


if __name__ == "__main__":
    unittest.main()
