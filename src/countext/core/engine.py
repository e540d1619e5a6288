from __future__ import annotations

"""
Counting Engine.

Wires the TreeWalker, the Classifier and the CountedCollection together and
selects the input source of a run: standard input, listing files, or
directory trees (the working directory when no path is given).
"""

import logging
import sys
from typing import Any, BinaryIO, Dict, Iterable, Optional

from countext.core.aggregator import CountedCollection
from countext.core.classifier import Classifier
from countext.core.filters import ignore_matching, prune_names, skip_directories
from countext.core.walker import TreeWalker
from countext.domain.models import CountResult, WalkError, WalkResult, WalkSignal
from countext.infra.fs import is_piped, iter_lines, open_listing

logger = logging.getLogger(__name__)


class FileCounter:
    """
    Feeds paths or listing lines through a classifier into a collection.

    Attributes:
        inputs: Number of paths and lines handled.
        counted: Number of inputs that produced a key.
        rejected: Number of inputs that produced no key.
        errors: Number of inputs or subtrees that failed.
    """

    def __init__(self, classifier: Classifier, collection: Optional[CountedCollection] = None) -> None:
        self.classifier = classifier
        self.collection = collection if collection is not None else CountedCollection()
        self.inputs = 0
        self.counted = 0
        self.rejected = 0
        self.errors = 0

    def handle_item(self, item: str, *, is_line: bool = False) -> Optional[str]:
        """
        Classify one path (or listing line) and count its key.

        A failure while classifying only drops this input.

        Returns:
            Optional[str]: The counted key, if any.
        """
        self.inputs += 1
        try:
            if is_line:
                key = self.classifier.key_for_line(item)
            else:
                key = self.classifier.key_for_path(item)
        except Exception as e:
            self.errors += 1
            logger.warning(f"Skipping {item!r}: {e}")
            return None

        if key is None:
            self.rejected += 1
            return None

        self.collection.increase(key)
        self.counted += 1
        return key

    def walk_stream(self, lines: Iterable[str]) -> None:
        """Classify every line of a listing or of standard input."""
        for line in lines:
            self.handle_item(line, is_line=True)

    def walk_directories(
            self,
            roots: Iterable[str],
            *,
            prune_dirs: Iterable[str] = (),
            ignore_patterns: Iterable[str] = (),
    ) -> WalkResult:
        """
        Count the files below `roots`; directories themselves are not counted.

        Failing roots and subtrees are logged and skipped.

        Args:
            roots: Directories to walk.
            prune_dirs: Directory names whose subtrees are left out.
            ignore_patterns: Regexes for file names that are not counted.
        """
        walker = TreeWalker(roots)
        walker.skip_if(skip_directories)

        prune_dirs = list(prune_dirs)
        if prune_dirs:
            walker.prune_if(prune_names(prune_dirs))

        ignore_patterns = list(ignore_patterns)
        if ignore_patterns:
            walker.ignore_if(ignore_matching(ignore_patterns))

        walker.on_error(self._on_walk_error)
        return walker.walk(self.handle_item)

    def _on_walk_error(self, error: WalkError) -> WalkSignal:
        self.errors += 1
        logger.error(f"cannot walk '{error.path}': {error.message}")
        return WalkSignal.CONTINUE

    def summary(self) -> Dict[str, int]:
        return {
            "inputs": self.inputs,
            "counted": self.counted,
            "rejected": self.rejected,
            "errors": self.errors,
            "keys": len(self.collection),
        }


# -----------------------------------------------------------------------------
# RUN ORCHESTRATION
# -----------------------------------------------------------------------------

def run_count(config: Dict[str, Any], *, stdin: Optional[Any] = None) -> CountResult:
    """
    Execute one counting run from a validated configuration.

    Args:
        config: Normalized configuration (see `validate_config`).
        stdin: Stream to read in stdin mode. Defaults to sys.stdin.

    Returns:
        CountResult: Ordered counts and statistics, or the failure reason.
    """
    classifier = Classifier(
        config["mode"],
        reject_no_extension=config["reject_no_extension"],
        case_insensitive=config["case_insensitive"],
    )
    counter = FileCounter(classifier)
    paths = list(config["paths"])

    if config["read_stdin"]:
        stream = stdin if stdin is not None else sys.stdin
        if not is_piped(stream):
            return CountResult(ok=False, error="no file piped to standard input", mode=config["mode"])
        logger.debug("Reading paths from standard input")
        counter.walk_stream(iter_lines(_binary(stream)))

    elif config["read_listings"] and paths:
        for listing in paths:
            try:
                fh = open_listing(listing)
            except OSError as e:
                counter.errors += 1
                logger.error(f"failed to open '{listing}' for reading: {e.strerror or e}")
                continue
            logger.debug(f"Reading paths from listing '{listing}'")
            with fh:
                counter.walk_stream(iter_lines(fh))

    else:
        walk = counter.walk_directories(
            paths or ["."],
            prune_dirs=config["prune_dirs"],
            ignore_patterns=config["ignore_patterns"],
        )
        logger.debug(f"Walk finished: {walk.visited} entries, {len(walk.errors)} errors")

    collection = counter.collection
    return CountResult(
        ok=True,
        mode=config["mode"],
        entries=collection.report_entries(config["sort"]),
        padding=collection.padding,
        summary=counter.summary(),
    )


def _binary(stream: Any) -> BinaryIO:
    """Return the byte layer of a text stream, or the stream itself."""
    return getattr(stream, "buffer", stream)
