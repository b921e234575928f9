"""Public runtime orchestration entry points.

This package groups the interactive bootstrap (`run_browser`), config and
logging setup, and the event loop used by tests and composition code.
"""

from __future__ import annotations


def run_browser(*args, **kwargs):
    """Lazily import the bootstrap to avoid package-import cycles."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = [
    "run_browser",
    "run_main_loop",
]
