"""Key token names and classification shared by the session and the loop."""

from __future__ import annotations

ENTER = "ENTER"
ESC = "ESC"
TAB = "TAB"
SHIFT_TAB = "SHIFT_TAB"
BACKSPACE = "BACKSPACE"
DELETE = "DELETE"
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
HOME = "HOME"
END = "END"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"
CTRL_A = "CTRL_A"
CTRL_C = "CTRL_C"
CTRL_D = "CTRL_D"
CTRL_E = "CTRL_E"
CTRL_K = "CTRL_K"
CTRL_N = "CTRL_N"
CTRL_P = "CTRL_P"
CTRL_S = "CTRL_S"
CTRL_U = "CTRL_U"

NAVIGATION_KEYS = frozenset({UP, DOWN, LEFT, RIGHT, HOME, END, PAGE_UP, PAGE_DOWN, CTRL_N, CTRL_P})


def is_printable(key: str) -> bool:
    """Return whether ``key`` is a single printable character (not a token name)."""
    return len(key) == 1 and key.isprintable()


class EnterNormalizer:
    """Fold CR, LF, and CR+LF into one ``ENTER`` token.

    Terminals in raw mode may send ``\\r``, ``\\n``, or both for one press.
    """

    def __init__(self) -> None:
        self.skip_next_lf = False

    def feed(self, key: str) -> str | None:
        """Return the normalized key, or ``None`` when it should be dropped."""
        if self.skip_next_lf and key == "ENTER_LF":
            self.skip_next_lf = False
            return None
        self.skip_next_lf = key == "ENTER_CR"
        if key in {"ENTER_CR", "ENTER_LF"}:
            return ENTER
        return key
