from __future__ import annotations

import logging
import os
import stat
import sys
from pathlib import Path

from Lockless.core.errors import InvalidArgument, InvalidOperation, IOFailure, ensure_not_empty
from Lockless.utils.defaults import (
    MAX_FILENAME_LENGTH,
    POSIX_INVALID_CHARS,
    WINDOWS_INVALID_CHARS,
    WINDOWS_RESERVED_NAMES,
)

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == "win32"


def _entry_size(entry: os.DirEntry) -> int:
    """Size of one directory entry, or 0 if it disappeared under us."""
    try:
        if entry.is_dir(follow_symlinks=False):
            return _tree_size(Path(entry.path))
        if entry.is_file():
            return entry.stat().st_size
    except FileNotFoundError:
        logger.debug("Entry vanished while sizing: %s", entry.path)
    return 0


def _tree_size(directory: Path) -> int:
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except FileNotFoundError:
        logger.debug("Directory vanished while sizing: %s", directory)
        return 0

    return sum(_entry_size(entry) for entry in entries)


def directory_size_in_bytes(directory: str | os.PathLike) -> int:
    """
    Return the total size in bytes of every file under a directory.

    Subdirectories are walked recursively; symlinked directories are not
    followed. Files or directories deleted while the walk is in progress
    count as zero bytes instead of failing the whole call.

    Args:
        directory: Directory to measure

    Returns:
        Sum of the sizes of all files below ``directory``

    Raises:
        InvalidArgument: if directory is None or empty
        IOFailure: if directory does not exist, is not a directory, or
            cannot be listed

    Example:
        >>> directory_size_in_bytes("./build")
        1048576
    """
    ensure_not_empty(directory, "directory")
    dir_path = Path(directory)

    if not dir_path.is_dir():
        raise IOFailure(f"Not a directory: {dir_path}", dir_path)

    try:
        return _tree_size(dir_path)
    except OSError as e:
        raise IOFailure(f"Cannot compute size of {dir_path}: {e}", dir_path) from e


def is_hidden(path: str | os.PathLike) -> bool:
    """
    Indicate whether a file or directory is hidden.

    On Windows this is the FILE_ATTRIBUTE_HIDDEN bit. On macOS/BSD the
    UF_HIDDEN flag also counts. Elsewhere a leading dot in the name is
    the hidden marker.

    Raises:
        InvalidArgument: if path is None or empty
        IOFailure: if path does not exist
    """
    ensure_not_empty(path, "path")
    target = Path(path)

    try:
        st = target.lstat()
    except OSError as e:
        raise IOFailure(f"Cannot read attributes of {target}: {e}", target) from e

    if IS_WINDOWS:
        return bool(getattr(st, "st_file_attributes", 0) & stat.FILE_ATTRIBUTE_HIDDEN)

    if getattr(st, "st_flags", 0) & getattr(stat, "UF_HIDDEN", 0):
        return True

    # "dir/.." and "." name the directory they point at.
    name = os.path.basename(os.path.abspath(target))
    return name.startswith(".")


def is_valid_filename(name: str | None) -> bool:
    """
    Check that ``name`` is a single, syntactically valid file name on this OS.

    Rejects blank names, ``.``/``..``, names with a path separator or NUL
    and overlong names. On Windows, reserved characters, device names
    such as ``CON`` or ``LPT1.txt`` and a trailing dot or space are
    rejected as well.
    """
    if not name or not name.strip():
        return False
    if name in (".", ".."):
        return False

    if IS_WINDOWS:
        if len(name) > MAX_FILENAME_LENGTH:
            return False
        if any(ch in WINDOWS_INVALID_CHARS for ch in name):
            return False
        if name.endswith((".", " ")):
            return False
        stem = name.split(".", 1)[0].rstrip(" ")
        if stem.upper() in WINDOWS_RESERVED_NAMES:
            return False
        return True

    # POSIX filesystems cap names in bytes, not characters.
    try:
        if len(os.fsencode(name)) > MAX_FILENAME_LENGTH:
            return False
    except UnicodeEncodeError:
        return False
    return not any(ch in POSIX_INVALID_CHARS for ch in name)


def rename_file(path: str | os.PathLike, new_name: str) -> Path:
    """
    Rename a file to ``new_name``, keeping it in the same directory.

    Arguments are validated before the filesystem is touched.

    Args:
        path: The file to rename
        new_name: New file name (a name only, not a path)

    Returns:
        Path of the renamed file

    Raises:
        InvalidArgument: if path is None, new_name is blank, or new_name is
            not a valid file name
        InvalidOperation: if the file or its directory does not exist, the
            target name is taken, or the move fails

    Example:
        >>> rename_file("reports/draft.txt", "final.txt")
        PosixPath('reports/final.txt')
    """
    ensure_not_empty(path, "path")
    ensure_not_empty(new_name, "new_name")
    if not is_valid_filename(new_name):
        raise InvalidArgument(f"Invalid file name: {new_name}")

    source = Path(path).absolute()
    parent = source.parent
    error_message = f"Unable to rename the file: {source} to: {new_name}"

    if not (parent.is_dir() and source.is_file()):
        raise InvalidOperation(error_message)

    target = parent / new_name
    if target.exists() or target.is_symlink():
        raise InvalidOperation(f"{error_message} (target already exists)")

    try:
        source.rename(target)
    except OSError as e:
        raise InvalidOperation(f"{error_message} ({e})") from e

    logger.debug("Renamed %s -> %s", source, target)
    return target


__all__ = [
    "directory_size_in_bytes",
    "is_hidden",
    "is_valid_filename",
    "rename_file",
]
