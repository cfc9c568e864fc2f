"""File-only logging setup.

The interactive session owns the terminal, so records never go to stderr
while the UI is active; they are appended to a log file instead.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path, level: str = "WARNING") -> logging.Handler | None:
    """Attach a file handler for the ``zeno`` logger hierarchy.

    Returns the installed handler, or ``None`` when the log file cannot be
    opened (logging is then disabled rather than failing the command).
    """
    root = logging.getLogger("zeno")
    resolved = logging.getLevelName(level.upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.WARNING)
    root.propagate = False
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        root.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return handler
