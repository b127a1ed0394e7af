"""
Core helpers: the lazy line reader and the path/directory operations.
"""
from __future__ import annotations

from Lockless.core.errors import InvalidArgument, InvalidOperation, IOFailure, LocklessError
from Lockless.core.paths import directory_size_in_bytes, is_hidden, is_valid_filename, rename_file
from Lockless.core.reader import LineStreamReader, read_all_lines

__all__ = [
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
