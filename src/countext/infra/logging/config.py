from __future__ import annotations

"""
Logging Configuration Models.

countext reports on stdout and diagnoses on stderr. The diagnostics are
walk errors (unreadable directories, missing roots), skipped inputs and
listing files that could not be opened, configuration warnings and, at
INFO, the per-run summary. `LoggingConfig` captures how those records are
emitted; the CLI builds one from `-v`, `--debug` and `--log-file`.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Diagnostic output settings for one countext run.

    The default level keeps stderr quiet except for recovered walk errors
    and configuration warnings, so piping the report stays clean.

    Attributes:
        level: Minimum severity. WARNING by default, INFO with -v, DEBUG
            with --debug (adds tracebacks of fatal errors).
        console: Emit diagnostics on stderr.
        log_file: Optional rotating log file from --log-file.
        max_bytes: Size of one log file before it rotates.
        backup_count: Rotated log files kept.
        console_fmt: stderr line format.
        file_fmt: Log file line format, with timestamp and logger name.
        datefmt: Timestamp format of the log file.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
