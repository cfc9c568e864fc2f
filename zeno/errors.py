"""Exception types shared by the store, clipboard, and AI collaborators.

Session code converts these into inline status text; only the initial load
and the one-shot add flow let them reach the CLI.
"""

from __future__ import annotations


class ZenoError(Exception):
    """Base class for all zeno failures."""


class StoreError(ZenoError):
    """A store read or write failed."""


class LoadError(StoreError):
    """The initial entry load failed; the session cannot start."""


class SinkError(ZenoError):
    """Writing to (or reading from) the clipboard failed."""


class AIError(ZenoError):
    """The summarizer is unavailable or returned an unusable reply."""


__all__ = ["ZenoError", "StoreError", "LoadError", "SinkError", "AIError"]
