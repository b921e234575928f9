"""Keyboard-driven terminal file browser.

The package logger stays silent until ``--log-file`` (or ``FXBROWSER_LOG``)
attaches a file handler.
"""

from __future__ import annotations

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Run the command-line browser; the CLI module is imported on first use."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
