"""System clipboard access through platform command-line tools.

Tries pbcopy/pbpaste on macOS, clip/PowerShell on Windows, and
wl-clipboard, xclip, or xsel elsewhere.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from typing import Protocol

from .errors import SinkError

logger = logging.getLogger(__name__)


def _copy_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def _paste_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbpaste"]]
    if os.name == "nt":
        return [["powershell", "-NoProfile", "-Command", "Get-Clipboard"]]
    return [
        ["wl-paste", "--no-newline"],
        ["xclip", "-selection", "clipboard", "-o"],
        ["xsel", "--clipboard", "--output"],
    ]


def copy_text_to_clipboard(text: str) -> None:
    """Copy ``text`` with the first available clipboard tool.

    Raises ``SinkError`` when no tool is installed or every candidate fails.
    """
    failures: list[str] = []
    for command in _copy_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(command, input=text, text=True, capture_output=True, check=False)
        except OSError as exc:
            failures.append(f"{command[0]}: {exc}")
            continue
        if proc.returncode == 0:
            return
        failures.append(f"{command[0]} exited with {proc.returncode}")
    if not failures:
        raise SinkError("no clipboard tool found (install wl-clipboard, xclip, or xsel)")
    logger.warning("clipboard copy failed: %s", "; ".join(failures))
    raise SinkError("; ".join(failures))


def read_clipboard() -> str:
    """Return current clipboard text, raising ``SinkError`` when unavailable."""
    failures: list[str] = []
    for command in _paste_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(command, text=True, capture_output=True, check=False)
        except OSError as exc:
            failures.append(f"{command[0]}: {exc}")
            continue
        if proc.returncode == 0:
            return proc.stdout
        failures.append(f"{command[0]} exited with {proc.returncode}")
    if not failures:
        raise SinkError("no clipboard tool found (install wl-clipboard, xclip, or xsel)")
    raise SinkError("; ".join(failures))


class OutputSink(Protocol):
    """Destination for the code of a copied snippet."""

    def write(self, text: str) -> None: ...


class ClipboardSink:
    """Output sink that places copied snippet code on the system clipboard."""

    def write(self, text: str) -> None:
        copy_text_to_clipboard(text)
