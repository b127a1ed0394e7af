"""
Exceptions raised by lockless.

Each error also derives from the builtin it refines, so callers that
already catch ``ValueError``/``OSError``/``RuntimeError`` keep working.
"""
from __future__ import annotations

import os
from typing import Optional


class LocklessError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(LocklessError, ValueError):
    """A required argument is missing, empty or malformed. Raised before any I/O."""


class IOFailure(LocklessError, OSError):
    """
    Opening, reading or decoding a file failed.

    Attributes:
        path: The file or directory the failure relates to (if known)
    """

    def __init__(self, message: str, path: Optional[str | os.PathLike] = None) -> None:
        super().__init__(message)
        self.path = os.fspath(path) if path is not None else None

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class InvalidOperation(LocklessError, RuntimeError):
    """The requested operation cannot be completed in the current filesystem state."""


def ensure_not_empty(value: object, name: str) -> None:
    """
    Reject ``None`` and empty/whitespace-only strings.

    Raises:
        InvalidArgument: if the value is missing or blank
    """
    if value is None:
        raise InvalidArgument(f"{name} must not be None")
    if isinstance(value, str) and not value.strip():
        raise InvalidArgument(f"{name} must not be empty")


__all__ = [
    "LocklessError",
    "InvalidArgument",
    "IOFailure",
    "InvalidOperation",
    "ensure_not_empty",
]
