from __future__ import annotations

"""
Count Report Rendering.

Formats (key, count) pairs as right-aligned text lines or as JSON and
writes them to binary streams, so that keys built from undecodable
filenames are written back byte for byte.
"""

import json
from typing import BinaryIO, List, Sequence, Tuple

from countext.core.aggregator import CountedCollection

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def format_line(key: str, count: int, padding: int) -> str:
    """Right-justify `key` to `padding + 2` columns, then a space and the count."""
    return f"{key:>{padding + 2}} {count}\n"


def render_lines(entries: Sequence[Tuple[str, int]], padding: int) -> List[str]:
    return [format_line(key, count, padding) for key, count in entries]


def render_report(collection: CountedCollection, *, sort: bool = True) -> List[str]:
    """
    Render a collection as report lines.

    Args:
        collection: Aggregated counts.
        sort: Order by ascending count instead of first-seen order.
    """
    return render_lines(collection.report_entries(sort), collection.padding)


def render_json(entries: Sequence[Tuple[str, int]]) -> str:
    """Render (key, count) pairs as a JSON array of objects."""
    payload = [{"key": key, "count": count} for key, count in entries]
    # surrogateescape'd keys are not valid UTF-8; keep them as escapes
    return json.dumps(payload, ensure_ascii=True, indent=2) + "\n"


def write_text(stream: BinaryIO, text: str) -> None:
    stream.write(text.encode(ENCODING, ENCODING_ERRORS))


def write_lines(stream: BinaryIO, lines: Sequence[str]) -> None:
    for line in lines:
        write_text(stream, line)
    stream.flush()


def print_output(collection: CountedCollection, stream: BinaryIO, *, sort: bool = True) -> None:
    """Write the padded report of `collection` to a binary stream."""
    write_lines(stream, render_report(collection, sort=sort))
