from __future__ import annotations

"""
Traversal Predicate Factories.

Builds the plain predicate functions consumed by the TreeWalker hooks:
directory-name pruning, regex-based file ignoring and the directory skip
used when only files should be counted. Also hosts the regex compilation
helpers shared with the configuration validator.
"""

import os
import re
from typing import Callable, Iterable, List

from countext.core.walker import TreeWalker

PrunePredicate = Callable[[str], bool]
SkipPredicate = Callable[[str, bool, bool], bool]
IgnorePredicate = Callable[[str], bool]

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: Iterable[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed expressions are discarded; the validator reports them before
    they get here.

    Args:
        patterns: Raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error:
            continue
    return compiled


def invalid_patterns(patterns: Iterable[str]) -> List[str]:
    """Return the patterns that do not compile, in input order."""
    bad: List[str] = []
    for p in patterns:
        try:
            re.compile(p)
        except re.error:
            bad.append(p)
    return bad


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """
    Verify if a string matches at least one compiled regex pattern.

    Args:
        name: Filename or directory name to evaluate.
        compiled_patterns: Pre-compiled regex objects.

    Returns:
        bool: True if any match is found, False otherwise.
    """
    return any(rx.search(name) for rx in compiled_patterns)

# -----------------------------------------------------------------------------
# PREDICATE FACTORIES
# -----------------------------------------------------------------------------

def prune_names(names: Iterable[str]) -> PrunePredicate:
    """
    Build a prune predicate firing for directories with one of `names`.

    Args:
        names: Directory names (not paths) to keep out of the walk.
    """
    frozen = tuple(n for n in names if n)

    def _prune(path: str) -> bool:
        return TreeWalker.directory_is(path, frozen)

    return _prune


def ignore_matching(patterns: Iterable[str]) -> IgnorePredicate:
    """
    Build an ignore predicate for files whose name matches any regex.

    Args:
        patterns: Raw regex strings, searched against the file name only.
    """
    compiled = compile_patterns(patterns)

    def _ignore(path: str) -> bool:
        return matches_any(os.path.basename(path), compiled)

    return _ignore


def skip_directories(path: str, is_dir: bool, is_file: bool) -> bool:
    """Skip predicate suppressing directory entries; descent is unaffected."""
    return is_dir
