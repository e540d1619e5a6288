from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the countext CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="countext",
        description="Count files per extension, stem or filename.",
    )

    p.add_argument(
        "paths",
        nargs="*",
        help="Directories to walk (default: current directory), "
             "or listing files with --listing.",
    )

    # --- Input selection ---
    p.add_argument(
        "-i", "--stdin",
        dest="read_stdin",
        action="store_true",
        help="Read paths from standard input, one per line.",
    )
    p.add_argument(
        "-f", "--listing",
        dest="read_listings",
        action="store_true",
        help="Interpret arguments as files containing paths.",
    )

    # --- Classification ---
    p.add_argument(
        "-m", "--mode",
        dest="mode",
        default=None,
        help="What to count: 'e' extension (default), 's' stem, 'f' filename.",
    )
    p.add_argument(
        "-c", "--nocase",
        dest="case_insensitive",
        action="store_true",
        help="Turn extensions/names to lowercase.",
    )
    p.add_argument(
        "-e", "--rnoext",
        dest="reject_no_extension",
        action="store_true",
        help="Do not count files without an extension.",
    )

    # --- Traversal filters ---
    p.add_argument(
        "--prune",
        dest="prune_dirs",
        default=None,
        help="Comma-separated directory names not to descend into (e.g. .git,node_modules).",
    )
    p.add_argument(
        "--ignore",
        dest="ignore_patterns",
        default=None,
        help="Comma-separated regexes; matching file names are not counted.",
    )

    # --- Report ---
    p.add_argument(
        "-n", "--nosort",
        action="store_true",
        help="Do not sort by count; keep first-seen order.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write output to file (default: standard output).",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Emit the counts as JSON.",
    )

    # --- Configuration and diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted config file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist the classification/report options as defaults and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to a rotating log file.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Report progress on stderr.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Flags that were not given map to None, so they never mask values from
    the persisted configuration.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["paths"] = list(args.paths)
    overrides["mode"] = args.mode
    overrides["output_path"] = args.output_path

    if args.read_stdin:
        overrides["read_stdin"] = True
    if args.read_listings:
        overrides["read_listings"] = True
    if args.case_insensitive:
        overrides["case_insensitive"] = True
    if args.reject_no_extension:
        overrides["reject_no_extension"] = True
    if args.nosort:
        overrides["sort"] = False
    if args.json_output:
        overrides["json_output"] = True

    if args.prune_dirs:
        overrides["prune_dirs"] = _split_csv(args.prune_dirs)
    if args.ignore_patterns:
        overrides["ignore_patterns"] = _split_csv(args.ignore_patterns)

    return overrides


def log_level(args: argparse.Namespace) -> str:
    """Map the verbosity flags to a logging level name."""
    if args.debug:
        return "DEBUG"
    if args.verbose:
        return "INFO"
    return "WARNING"

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of non-empty items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
