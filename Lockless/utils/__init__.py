"""
Lockless utilities package.

Provides the module-level defaults shared by the core helpers.
"""
from __future__ import annotations

from Lockless.utils.defaults import (
    DEFAULT_ENCODING,
    MAX_FILENAME_LENGTH,
    POSIX_INVALID_CHARS,
    WINDOWS_INVALID_CHARS,
    WINDOWS_RESERVED_NAMES,
)

__all__ = [
    "DEFAULT_ENCODING",
    "MAX_FILENAME_LENGTH",
    "POSIX_INVALID_CHARS",
    "WINDOWS_INVALID_CHARS",
    "WINDOWS_RESERVED_NAMES",
]
