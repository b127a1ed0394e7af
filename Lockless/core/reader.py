"""
Lock-tolerant lazy line reader.

This version:
- Opens the file read-only, never asking for an exclusive lock
- Defers the open until the first line is pulled
- Yields one decoded line at a time (universal newlines, terminators stripped)
- Closes the handle on exhaustion, on error, on close() and on ``with`` exit
"""
from __future__ import annotations

import codecs
import io
import logging
import os
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, Iterator, Optional, Type

from Lockless.core.errors import InvalidArgument, IOFailure, ensure_not_empty
from Lockless.utils.defaults import DEFAULT_ENCODING

logger = logging.getLogger(__name__)


def _resolve_encoding(encoding: Optional[str]) -> str:
    """
    Validate a codec name and return the name used for decoding.

    UTF-8 decodes as ``utf-8-sig`` so a leading byte-order mark is dropped
    whether the caller passed the default or asked for UTF-8 explicitly.
    """
    if encoding is None:
        raise InvalidArgument("encoding must not be None")
    if not isinstance(encoding, str) or not encoding.strip():
        raise InvalidArgument(f"Invalid encoding: {encoding!r}")
    try:
        info = codecs.lookup(encoding)
    except LookupError as e:
        raise InvalidArgument(f"Unknown encoding: {encoding}") from e

    name = "utf-8-sig" if info.name == "utf-8" else info.name
    # Bytes-to-bytes codecs (base64, hex, rot13...) resolve but cannot wrap a text stream.
    try:
        io.TextIOWrapper(io.BytesIO(), encoding=name).detach()
    except LookupError as e:
        raise InvalidArgument(f"Not a text encoding: {encoding}") from e
    return name


class LineStreamReader:
    """
    Single-pass iterator over the text lines of a file.

    Nothing touches the filesystem until the first ``next()``. The handle is
    released as soon as the last line has been produced, when decoding or
    reading fails, or when ``close()`` is called (directly or by leaving a
    ``with`` block). A closed reader yields nothing more and cannot be
    restarted; call ``read_all_lines`` again to re-read the file.

    Attributes:
        path: Path of the file being read
        encoding: Codec name used to decode the file
        line_number: Number of lines produced so far
    """

    def __init__(self, path: str | os.PathLike, encoding: str = DEFAULT_ENCODING) -> None:
        ensure_not_empty(path, "path")
        self.path = Path(path)
        self.encoding = encoding
        self._codec = _resolve_encoding(encoding)
        self._stream: Optional[io.TextIOWrapper] = None
        self._closed = False
        self.line_number = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def _open(self) -> io.TextIOWrapper:
        # open() takes no lock on POSIX, and on Windows the CRT opens with
        # FILE_SHARE_READ | FILE_SHARE_WRITE, so writers elsewhere are tolerated.
        try:
            raw: BinaryIO = open(self.path, "rb")
        except OSError as e:
            raise IOFailure(f"Cannot open {self.path}: {e}", self.path) from e

        try:
            stream = io.TextIOWrapper(raw, encoding=self._codec, errors="strict", newline=None)
        except BaseException:
            raw.close()
            raise

        logger.debug("Opened %s for shared reading (%s)", self.path, self._codec)
        return stream

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self._closed:
            raise StopIteration

        if self._stream is None:
            try:
                self._stream = self._open()
            except BaseException:
                self._closed = True
                raise

        try:
            line = self._stream.readline()
        except UnicodeDecodeError as e:
            self.close()
            raise IOFailure(
                f"Cannot decode {self.path} as {self.encoding} "
                f"after line {self.line_number}: {e.reason}",
                self.path,
            ) from e
        except OSError as e:
            self.close()
            raise IOFailure(f"Error reading {self.path}: {e}", self.path) from e

        if not line:
            self.close()
            raise StopIteration

        self.line_number += 1
        if line.endswith("\n"):
            return line[:-1]
        return line

    def close(self) -> None:
        """Release the file handle. Safe to call more than once."""
        self._closed = True
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()
            logger.debug("Closed %s after %d lines", self.path, self.line_number)

    def __enter__(self) -> "LineStreamReader":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __del__(self) -> None:
        # Last resort only; callers abandoning a reader early should close() it.
        stream = getattr(self, "_stream", None)
        if stream is not None:
            stream.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("open" if self._stream else "pending")
        return f"LineStreamReader({str(self.path)!r}, encoding={self.encoding!r}, {state})"


def read_all_lines(path: str | os.PathLike, encoding: str = DEFAULT_ENCODING) -> LineStreamReader:
    """
    Lazily read all the lines of a file without requiring a file lock.

    Preferred over ``Path.read_text().splitlines()`` for files another
    process keeps open (a log being written, a spreadsheet open in an
    editor): only one line is held in memory at a time, and the file is
    opened in a mode that shares access with other readers and writers.

    Args:
        path: The file to read
        encoding: Text encoding used to decode the file. Defaults to UTF-8.

    Returns:
        A LineStreamReader yielding each line without its terminator

    Raises:
        InvalidArgument: immediately, if path or encoding is missing or invalid.
        IOFailure: on the first pull if the file cannot be opened, or on the
            pull that hits bytes the encoding cannot decode.

    Example:
        >>> with read_all_lines("app.log") as lines:
        ...     for line in lines:
        ...         if "ERROR" in line:
        ...             print(line)
    """
    return LineStreamReader(path, encoding)


__all__ = ["LineStreamReader", "read_all_lines"]
