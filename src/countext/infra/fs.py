from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, user data directory resolution, stream
detection and output/listing file handles. Acts as an abstraction over the
'os' and 'sys' modules so the core never opens files on its own.
"""

import os
import sys
from typing import BinaryIO, Iterator, Optional, TextIO

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "countext"
UNIX_APP_DIR_NAME = ".countext"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    The directory is not created here; writers create it on demand.
    Standards:
    - Windows: %LOCALAPPDATA%/countext
    - Linux/Mac: ~/.countext

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string, expanding '~' and environment variables.

    Relative paths stay relative so reported and visited paths keep the
    shape the user typed. Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.expandvars(os.path.expanduser(p))

# -----------------------------------------------------------------------------
# STREAM API
# -----------------------------------------------------------------------------

def is_piped(stream: Optional[TextIO] = None) -> bool:
    """
    Check whether a stream is fed by a pipe or a file instead of a terminal.

    Args:
        stream: Stream to inspect. Defaults to sys.stdin.

    Returns:
        bool: True when the stream is redirected.
    """
    stream = stream if stream is not None else sys.stdin
    if stream is None:
        return False
    try:
        return not os.isatty(stream.fileno())
    except (AttributeError, OSError, ValueError):
        # Streams without a descriptor (e.g. io.StringIO) are never terminals
        return True


def open_output(path: str) -> BinaryIO:
    """
    Open a report destination for binary writing.

    Args:
        path: Target file path.

    Returns:
        BinaryIO: Writable binary handle owned by the caller.

    Raises:
        OSError: When the file cannot be created or truncated.
    """
    return open(path, "wb")


def open_listing(path: str) -> BinaryIO:
    """
    Open a listing file (one path per line) for binary reading.

    Raises:
        OSError: When the file cannot be opened.
    """
    return open(path, "rb")


def iter_lines(stream: BinaryIO) -> Iterator[str]:
    """
    Yield the lines of a binary stream, split on '\\n' only.

    Line endings are kept untouched so that foreign '\\r' artifacts reach
    the classifier. Undecodable bytes are kept as surrogates and survive
    until the report is written back as bytes.

    Args:
        stream: Binary input stream.
    """
    for raw in stream:
        yield raw.decode("utf-8", errors="surrogateescape")
