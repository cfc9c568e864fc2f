"""Public runtime orchestration entry points.

This package groups the interactive search bootstrap (`run_search`) and the
lower-level event loop used by tests and composition code.
"""

from __future__ import annotations


def run_search(*args, **kwargs):
    """Lazily import search entrypoint to avoid heavy runtime bootstrap on import."""
    from .app import run_search as _run_search

    return _run_search(*args, **kwargs)


def run_session_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_session_loop as _run_session_loop

    return _run_session_loop(*args, **kwargs)


__all__ = [
    "run_search",
    "run_session_loop",
]
