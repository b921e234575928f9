"""Status-row messages."""

from __future__ import annotations

from dataclasses import dataclass

INFO = "info"
WARN = "warn"
ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    text: str
    level: str = INFO

    @classmethod
    def info(cls, text: str) -> StatusMessage:
        return cls(text, INFO)

    @classmethod
    def warn(cls, text: str) -> StatusMessage:
        return cls(text, WARN)

    @classmethod
    def error(cls, text: str) -> StatusMessage:
        return cls(text, ERROR)


__all__ = ["INFO", "WARN", "ERROR", "StatusMessage"]
