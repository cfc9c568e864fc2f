"""Editable multi-line text area with its own cursor and scroll offsets.

Columns count code points. Scroll offsets follow the cursor so it always
stays inside the ``width`` x ``height`` viewport.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..input import keys


@dataclass(frozen=True)
class VisibleLine:
    """One viewport row: the visible slice and the cursor column inside it, if any."""

    text: str
    cursor: int | None = None


class TextBuffer:
    """Multi-line text area; single-line buffers ignore ENTER."""

    def __init__(self, value: str = "", *, multiline: bool = True, width: int = 0, height: int = 1) -> None:
        self.multiline = multiline
        self.lines: list[str] = [""]
        self.row = 0
        self.col = 0
        self.top = 0
        self.left = 0
        self.width = max(0, width)
        self.height = max(1, height)
        self.set_value(value)

    def set_value(self, value: str) -> None:
        """Replace the content and put the cursor at its end."""
        if not self.multiline:
            value = value.replace("\r\n", " ").replace("\n", " ")
        self.lines = value.split("\n") if value else [""]
        self.row = len(self.lines) - 1
        self.col = len(self.lines[self.row])
        self._follow_cursor()

    def value(self) -> str:
        return "\n".join(self.lines)

    def set_size(self, width: int, height: int) -> None:
        """Resize the viewport without touching content or cursor."""
        self.width = max(0, width)
        self.height = max(1, height)
        self._follow_cursor()

    def _follow_cursor(self) -> None:
        if self.row < self.top:
            self.top = self.row
        elif self.row >= self.top + self.height:
            self.top = self.row - self.height + 1
        self.top = max(0, min(self.top, max(0, len(self.lines) - 1)))

        if self.width <= 0:
            self.left = 0
            return
        if self.col < self.left:
            self.left = self.col
        elif self.col >= self.left + self.width:
            self.left = self.col - self.width + 1

    def visible_lines(self) -> list[VisibleLine]:
        """Return exactly ``height`` viewport rows."""
        out: list[VisibleLine] = []
        for row in range(self.top, self.top + self.height):
            if row >= len(self.lines):
                out.append(VisibleLine(""))
                continue
            line = self.lines[row]
            visible = line[self.left:self.left + self.width] if self.width > 0 else line
            cursor = self.col - self.left if row == self.row else None
            out.append(VisibleLine(visible, cursor))
        return out

    def insert(self, text: str) -> None:
        """Insert ``text`` at the cursor; newlines split lines in multi-line buffers."""
        for ch in text:
            if ch == "\n":
                self.newline()
                continue
            line = self.lines[self.row]
            self.lines[self.row] = line[:self.col] + ch + line[self.col:]
            self.col += 1
        self._follow_cursor()

    def newline(self) -> None:
        if not self.multiline:
            return
        line = self.lines[self.row]
        self.lines[self.row] = line[:self.col]
        self.lines.insert(self.row + 1, line[self.col:])
        self.row += 1
        self.col = 0
        self._follow_cursor()

    def backspace(self) -> None:
        if self.col > 0:
            line = self.lines[self.row]
            self.lines[self.row] = line[:self.col - 1] + line[self.col:]
            self.col -= 1
        elif self.row > 0:
            previous = self.lines[self.row - 1]
            self.lines[self.row - 1] = previous + self.lines.pop(self.row)
            self.row -= 1
            self.col = len(previous)
        self._follow_cursor()

    def delete_forward(self) -> None:
        line = self.lines[self.row]
        if self.col < len(line):
            self.lines[self.row] = line[:self.col] + line[self.col + 1:]
        elif self.row < len(self.lines) - 1:
            self.lines[self.row] = line + self.lines.pop(self.row + 1)

    def move_left(self) -> None:
        if self.col > 0:
            self.col -= 1
        elif self.row > 0:
            self.row -= 1
            self.col = len(self.lines[self.row])

    def move_right(self) -> None:
        if self.col < len(self.lines[self.row]):
            self.col += 1
        elif self.row < len(self.lines) - 1:
            self.row += 1
            self.col = 0

    def move_rows(self, delta: int) -> None:
        self.row = max(0, min(len(self.lines) - 1, self.row + delta))
        self.col = min(self.col, len(self.lines[self.row]))

    def handle_key(self, key: str) -> bool:
        """Apply one editing key; return whether it was recognized."""
        if keys.is_printable(key):
            self.insert(key)
            return True
        if key == keys.ENTER:
            self.newline()
        elif key == keys.BACKSPACE:
            self.backspace()
        elif key == keys.DELETE:
            self.delete_forward()
        elif key == keys.LEFT:
            self.move_left()
        elif key == keys.RIGHT:
            self.move_right()
        elif key == keys.UP:
            self.move_rows(-1)
        elif key == keys.DOWN:
            self.move_rows(1)
        elif key == keys.PAGE_UP:
            self.move_rows(-self.height)
        elif key == keys.PAGE_DOWN:
            self.move_rows(self.height)
        elif key in {keys.HOME, keys.CTRL_A}:
            self.col = 0
        elif key in {keys.END, keys.CTRL_E}:
            self.col = len(self.lines[self.row])
        elif key == keys.CTRL_K:
            self.lines[self.row] = self.lines[self.row][:self.col]
        elif key == keys.CTRL_U:
            self.lines[self.row] = self.lines[self.row][self.col:]
            self.col = 0
        else:
            return False
        self._follow_cursor()
        return True
