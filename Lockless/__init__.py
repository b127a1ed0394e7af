"""
Lockless - lock-tolerant file and directory helpers.
"""
from __future__ import annotations

from Lockless.core.errors import (
    InvalidArgument,
    InvalidOperation,
    IOFailure,
    LocklessError,
)
from Lockless.core.paths import (
    directory_size_in_bytes,
    is_hidden,
    is_valid_filename,
    rename_file,
)
from Lockless.core.reader import LineStreamReader, read_all_lines

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "LineStreamReader",
    "read_all_lines",
    "directory_size_in_bytes",
    "is_hidden",
    "is_valid_filename",
    "rename_file",
    "LocklessError",
    "InvalidArgument",
    "IOFailure",
    "InvalidOperation",
]
