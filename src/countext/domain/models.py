from __future__ import annotations

"""
Counting Domain Data Models.

Defines the data structures exchanged between the traversal engine, the
classification layer and the interface controllers: filesystem entries,
aggregate counters, traversal errors and execution results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# -----------------------------------------------------------------------------
# EXCEPTIONS
# -----------------------------------------------------------------------------

class CountextError(Exception):
    """Base class for all application-level failures."""


class ConfigurationError(CountextError):
    """Raised for unusable options: unknown modes, unopenable output files."""

# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class ClassifyMode(Enum):
    """Which part of a filename becomes the classification key."""
    EXTENSION = "e"
    STEM = "s"
    FILENAME = "f"


class WalkSignal(Enum):
    """Decision returned by a traversal error handler."""
    CONTINUE = "continue"
    ABORT = "abort"

# -----------------------------------------------------------------------------
# TRAVERSAL MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class WalkEntry:
    """
    A single filesystem object seen during traversal.

    Attributes:
        path: Path of the entry, joined onto its root.
        is_dir: Whether the entry resolves to a directory.
        is_file: Whether the entry resolves to a regular file.
        is_symlink: Whether the entry itself is a symbolic link.
    """
    path: str
    is_dir: bool
    is_file: bool
    is_symlink: bool


@dataclass(frozen=True)
class WalkError:
    """
    Encapsulates a traversal failure for a root or a subtree.

    Attributes:
        path: The offending path.
        message: Human readable description of the failure.
        errno: OS error number, if the failure came from the OS.
    """
    path: str
    message: str
    errno: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class WalkResult:
    """Outcome of a complete multi-root walk."""
    ok: bool = True
    visited: int = 0
    aborted: bool = False
    errors: List[WalkError] = field(default_factory=list)

    def record(self, error: WalkError) -> None:
        self.ok = False
        self.errors.append(error)

# -----------------------------------------------------------------------------
# AGGREGATION MODELS
# -----------------------------------------------------------------------------

@dataclass
class AggregateEntry:
    """
    Running counter for one classification key.

    Attributes:
        key: The classification key.
        count: Number of observations, always at least 1.
        key_hash: Cached hash of the key.
    """
    key: str
    count: int
    key_hash: int

# -----------------------------------------------------------------------------
# EXECUTION RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CountResult:
    """
    Unified result of a counting run.

    Attributes:
        ok: False when the run could not produce a report.
        error: Descriptive message in case of failure.
        mode: Canonical mode letter used for classification.
        entries: (key, count) pairs in report order.
        padding: Column width basis for the padded report.
        summary: Execution statistics (inputs, counted, rejected, errors).
    """
    ok: bool
    error: str = ""
    mode: str = ClassifyMode.EXTENSION.value
    entries: List[Tuple[str, int]] = field(default_factory=list)
    padding: int = 5
    summary: Dict[str, Any] = field(default_factory=dict)
