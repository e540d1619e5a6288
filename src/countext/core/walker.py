from __future__ import annotations

"""
Directory Tree Walker.

Recursively visits the entries below one or more root directories and
emits every entry that survives three families of user supplied hooks:

- prune predicates  (directory path -> bool): no descent, no emission;
- ignore predicates (regular file path -> bool): no emission;
- skip predicates   (path, is_dir, is_file -> bool): no emission, descent
  into a skipped directory still happens.

Symlinked directories are emitted like any other entry but never entered,
which keeps the walk free of cycles without tracking visited inodes.
Traversal failures are reported through a single error hook whose return
value decides whether the remaining roots are still walked.
"""

import logging
import os
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from countext.domain.models import WalkEntry, WalkError, WalkResult, WalkSignal

logger = logging.getLogger(__name__)

PruneFunc = Callable[[str], bool]
SkipFunc = Callable[[str, bool, bool], bool]
IgnoreFileFunc = Callable[[str], bool]
VisitFunc = Callable[[str], None]
ErrorFunc = Callable[[WalkError], Optional[WalkSignal]]


class TreeWalker:
    """
    Depth-first, pre-order filesystem walker with composable filter hooks.

    Hooks are evaluated in registration order. Siblings are visited sorted
    by name so that repeated walks over an unchanged tree emit the same
    sequence; callers must not rely on that order for anything else.
    """

    def __init__(self, roots: Optional[Iterable[str]] = None) -> None:
        self._roots: List[str] = list(roots or [])
        self._prune_funcs: List[PruneFunc] = []
        self._skip_funcs: List[SkipFunc] = []
        self._ignore_funcs: List[IgnoreFileFunc] = []
        self._error_func: Optional[ErrorFunc] = None

    # -------------------------------------------------------------------------
    # CONFIGURATION
    # -------------------------------------------------------------------------

    @property
    def roots(self) -> List[str]:
        return list(self._roots)

    def add_root(self, path: str) -> None:
        self._roots.append(path)

    def prune_if(self, fn: PruneFunc) -> None:
        self._prune_funcs.append(fn)

    def skip_if(self, fn: SkipFunc) -> None:
        self._skip_funcs.append(fn)

    def ignore_if(self, fn: IgnoreFileFunc) -> None:
        self._ignore_funcs.append(fn)

    def on_error(self, fn: ErrorFunc) -> None:
        """Install the error handler, replacing any previous one."""
        self._error_func = fn

    @staticmethod
    def directory_is(path: str, names: Iterable[str]) -> bool:
        """True when the last component of `path` equals one of `names`."""
        base = os.path.basename(os.path.normpath(path))
        return any(base == name for name in names)

    # -------------------------------------------------------------------------
    # TRAVERSAL
    # -------------------------------------------------------------------------

    def walk(self, visit: VisitFunc) -> WalkResult:
        """
        Walk every configured root, or the working directory if none.

        Args:
            visit: Called with the path of each surviving entry.

        Returns:
            WalkResult: Number of visited entries and recorded failures.
            `aborted` is set when a failure stopped the walk early.
        """
        result = WalkResult()
        roots = self._roots or [os.getcwd()]

        for root in roots:
            logger.debug(f"Walking root: {root}")
            if not self._walk_root(root, visit, result):
                result.aborted = True
                break

        return result

    def _walk_root(self, root: str, visit: VisitFunc, result: WalkResult) -> bool:
        """Walk a single root. Returns False when the whole walk must stop."""
        if not os.path.isdir(root):
            reason = "not a directory" if os.path.lexists(root) else "no such directory"
            return self._handle_error(WalkError(path=root, message=reason), result)

        listing = self._list_dir(root, result)
        if listing is None:
            return not result.aborted
        stack: List[Iterator[os.DirEntry]] = [iter(listing)]

        while stack:
            dirent = next(stack[-1], None)
            if dirent is None:
                stack.pop()
                continue

            try:
                entry = _to_entry(dirent)
            except OSError as e:
                if not self._handle_error(_from_os_error(dirent.path, e), result):
                    return False
                continue

            descend, emit = self._evaluate(entry)

            if emit:
                visit(entry.path)
                result.visited += 1

            if descend:
                children = self._list_dir(entry.path, result)
                if children is None:
                    if result.aborted:
                        return False
                    continue
                stack.append(iter(children))

        return True

    def _evaluate(self, entry: WalkEntry) -> Tuple[bool, bool]:
        """
        Apply the hooks to one entry.

        Returns:
            Tuple[bool, bool]: (descend into it, emit it).
        """
        descend = False
        emit = True

        if entry.is_dir:
            if not entry.is_symlink:
                descend = True
                if any(fn(entry.path) for fn in self._prune_funcs):
                    descend = False
                    emit = False
        elif entry.is_file:
            if any(fn(entry.path) for fn in self._ignore_funcs):
                emit = False

        # Once suppressed, an entry stays suppressed
        if emit and any(fn(entry.path, entry.is_dir, entry.is_file) for fn in self._skip_funcs):
            emit = False

        return descend, emit

    def _list_dir(self, path: str, result: WalkResult) -> Optional[List[os.DirEntry]]:
        """
        Read a directory, sorted by entry name.

        Returns None when the directory could not be read; `result.aborted`
        tells whether the failure also stops the walk.
        """
        try:
            with os.scandir(path) as it:
                return sorted(it, key=lambda d: d.name)
        except OSError as e:
            if not self._handle_error(_from_os_error(path, e), result):
                result.aborted = True
            return None

    def _handle_error(self, error: WalkError, result: WalkResult) -> bool:
        """
        Record a failure and ask the error hook how to proceed.

        Without a hook every failure is fatal to the walk.

        Returns:
            bool: True to continue with the next subtree or root.
        """
        result.record(error)

        if self._error_func is None:
            logger.error(f"Walk aborted: {error}")
            return False

        signal = self._error_func(error)
        if signal is WalkSignal.ABORT:
            logger.debug(f"Walk aborted by error handler at {error.path}")
            return False
        return True


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _to_entry(dirent: os.DirEntry) -> WalkEntry:
    """Snapshot the type flags of a directory entry."""
    return WalkEntry(
        path=dirent.path,
        is_dir=dirent.is_dir(),
        is_file=dirent.is_file(),
        is_symlink=dirent.is_symlink(),
    )


def _from_os_error(path: str, exc: OSError) -> WalkError:
    return WalkError(path=path, message=exc.strerror or str(exc), errno=exc.errno)
