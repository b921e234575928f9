"""Error taxonomy for fxbrowser.

Only ``ConfigError`` (and a bad starting path) is fatal, and only at startup.
Everything else is caught by the navigation engine and shown on the status row.
"""

from __future__ import annotations

from pathlib import Path


class FxError(Exception):
    """Base exception for fxbrowser errors."""


class ConfigError(FxError):
    """Raised when the config file cannot be parsed or has invalid values."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config file {path}! Reason: {reason}")


class PathError(FxError):
    """Raised for a start path or goto target that is not a usable directory."""

    def __init__(self, raw_path: str, reason: str = "not a valid directory") -> None:
        self.raw_path = raw_path
        self.reason = reason
        super().__init__(f"'{raw_path}' is {reason}")


class PatternError(FxError):
    """Raised when a search prompt does not compile as a regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid search pattern {pattern!r}: {reason}")


class ExecError(FxError):
    """Raised when an external command cannot launch or exits non-zero."""

    def __init__(
        self,
        command: str,
        reason: str,
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        self.command = command
        self.reason = reason
        self.returncode = returncode
        self.output = output
        super().__init__(f"Failed to execute {command!r}! Reason: {reason}")


class DirectoryReadError(FxError, OSError):
    """Raised when a directory cannot be listed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to read {path}: {reason}")


__all__ = [
    "FxError",
    "ConfigError",
    "PathError",
    "PatternError",
    "ExecError",
    "DirectoryReadError",
]
