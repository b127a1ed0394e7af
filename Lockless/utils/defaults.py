from __future__ import annotations

DEFAULT_ENCODING = "utf-8"

# Names longer than this are rejected by every common filesystem.
MAX_FILENAME_LENGTH = 255

WINDOWS_INVALID_CHARS = set('<>:"/\\|?*') | {chr(c) for c in range(32)}

POSIX_INVALID_CHARS = {"/", "\x00"}

WINDOWS_RESERVED_NAMES = {
    "CON", "PRN", "AUX", "NUL",
    # Serial ports
    "COM1", "COM2", "COM3", "COM4", "COM5", "COM6", "COM7", "COM8", "COM9",
    # Parallel ports
    "LPT1", "LPT2", "LPT3", "LPT4", "LPT5", "LPT6", "LPT7", "LPT8", "LPT9",
}
