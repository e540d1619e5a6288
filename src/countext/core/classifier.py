from __future__ import annotations

"""
Filename Classification.

Turns a path, or a raw line read from a listing, into at most one
classification key according to the active mode: the file extension, the
filename stem, or the whole filename.
"""

import os
import string
from typing import Dict, Optional, Union

from countext.domain.models import ClassifyMode, ConfigurationError

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

# First letter of a mode name; aliases kept for users of older releases
_MODE_ALIASES: Dict[str, ClassifyMode] = {
    "e": ClassifyMode.EXTENSION,
    "x": ClassifyMode.EXTENSION,
    "s": ClassifyMode.STEM,
    "n": ClassifyMode.STEM,
    "f": ClassifyMode.FILENAME,
    "b": ClassifyMode.FILENAME,
}


def parse_mode(value: Union[str, ClassifyMode]) -> ClassifyMode:
    """
    Resolve a mode name such as 'e', 'ext' or 'Stem' to a ClassifyMode.

    Only the first character counts, case-insensitively.

    Raises:
        ConfigurationError: For empty or unknown values.
    """
    if isinstance(value, ClassifyMode):
        return value
    text = (value or "").strip()
    mode = _MODE_ALIASES.get(text[:1].lower())
    if mode is None:
        raise ConfigurationError(f"unknown mode '{value}' (expected one of: e, s, f)")
    return mode


def ascii_lower(text: str) -> str:
    """Lowercase A-Z only, leaving every other character untouched."""
    return text.translate(_ASCII_LOWER)


def strip_line_ending(line: str) -> str:
    """
    Remove the line terminator from a listing line.

    Tolerates listings written on another platform: a trailing '\\r\\n' or
    a stray trailing '\\r' is removed as well as a plain '\\n'.
    """
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class Classifier:
    """
    Key extraction for a single mode.

    Args:
        mode: Classification mode, or its textual name.
        reject_no_extension: In extension mode, produce no key for
            filenames without a real extension instead of the filename.
        case_insensitive: Fold keys to lowercase (ASCII only).
    """

    def __init__(
            self,
            mode: Union[str, ClassifyMode] = ClassifyMode.EXTENSION,
            *,
            reject_no_extension: bool = False,
            case_insensitive: bool = False,
    ) -> None:
        self.mode = parse_mode(mode)
        self.reject_no_extension = reject_no_extension
        self.case_insensitive = case_insensitive

    def key_for_path(self, path: str) -> Optional[str]:
        """
        Classify a path.

        Returns:
            Optional[str]: The normalized key, or None when the path does
            not contribute to the counts.
        """
        filename = os.path.basename(path)

        if self.mode is ClassifyMode.EXTENSION:
            key = self._extension_key(filename)
        elif self.mode is ClassifyMode.STEM:
            key = os.path.splitext(filename)[0]
        else:
            key = filename or None

        if key is None:
            return None
        return self.normalize(key)

    def key_for_line(self, line: str) -> Optional[str]:
        """Classify one line of a listing, ignoring its line terminator."""
        return self.key_for_path(strip_line_ending(line))

    def normalize(self, key: str) -> str:
        if self.case_insensitive:
            return ascii_lower(key)
        return key

    def _extension_key(self, filename: str) -> Optional[str]:
        # 'foo/bar/' has no filename component at all
        if not filename:
            return None

        ext = os.path.splitext(filename)[1]
        # A bare '.' as in 'foo.' is not an extension
        if len(ext) > 1:
            return ext
        if self.reject_no_extension:
            return None
        return filename
