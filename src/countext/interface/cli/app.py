from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates a CLI run: logging bootstrap, merging of configuration
sources (defaults, persisted file, command-line overrides), validation,
the counting run itself and the rendering of the report. Fatal problems
end up as a single 'error: ...' line on stderr and a non-zero exit code.
"""

import json
import logging
import sys
from typing import Any, BinaryIO, Dict, List, Optional

from countext.core.engine import run_count
from countext.core.reporter import render_json, render_lines, write_lines, write_text
from countext.core.validator import validate_config
from countext.domain.config import get_default_config, load_config, save_config
from countext.domain.models import ConfigurationError, CountResult
from countext.infra.fs import normalize_path, open_output
from countext.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from countext.interface.cli import args as cli_args

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(
        argv: Optional[List[str]] = None,
        *,
        stdin: Optional[Any] = None,
        stdout: Optional[BinaryIO] = None,
) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv[1:].
        stdin: Input stream for --stdin. Defaults to sys.stdin.
        stdout: Binary report stream. Defaults to sys.stdout's buffer.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_file = normalize_path(args.log_file, "") if args.log_file else None
    configure_logging(LoggingConfig(level=cli_args.log_level(args), log_file=log_file), force=True)

    try:
        return _run(args, stdin=stdin, stdout=stdout)
    except OSError as e:
        logger.debug("I/O failure", exc_info=True)
        return _fail(f"{e.filename or 'output'}: {e.strerror or e}")
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        return _fail(f"unexpected failure: {e}")
    finally:
        shutdown_logging()


def _run(args: Any, *, stdin: Optional[Any], stdout: Optional[BinaryIO]) -> int:
    # 1. Resolve base configuration (defaults vs persisted file)
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 2. Merge command-line overrides and validate
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)
    try:
        conf, warnings = validate_config(raw_conf, strict=False)
    except ConfigurationError as e:
        return _fail(str(e))

    for w in warnings:
        logger.warning(f"Configuration: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=True, indent=2))
        return 0

    if args.save_defaults:
        try:
            path = save_config(conf)
        except OSError as e:
            return _fail(f"failed to save defaults: {e}")
        logger.info(f"Defaults saved to {path}")
        return 0

    # 3. Open the report destination before doing any work
    out_fh: Optional[BinaryIO] = None
    if conf["output_path"]:
        try:
            out_fh = open_output(conf["output_path"])
        except OSError as e:
            return _fail(f"failed to open '{conf['output_path']}' for writing: {e.strerror or e}")

    try:
        # 4. Counting run
        try:
            result = run_count(conf, stdin=stdin)
        except KeyboardInterrupt:
            print("interrupted", file=sys.stderr)
            return 130

        if not result.ok:
            return _fail(result.error)

        logger.info(
            f"Counted {result.summary.get('counted', 0)} of "
            f"{result.summary.get('inputs', 0)} inputs into {len(result.entries)} keys"
        )

        # 5. Report rendering
        target = out_fh if out_fh is not None else (stdout or sys.stdout.buffer)
        _write_result(result, target, as_json=conf["json_output"])
    finally:
        if out_fh is not None:
            out_fh.close()

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of override values into the base configuration.

    Only known keys are merged and None never overrides a value.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _write_result(result: CountResult, stream: BinaryIO, *, as_json: bool) -> None:
    if as_json:
        write_text(stream, render_json(result.entries))
        stream.flush()
    else:
        write_lines(stream, render_lines(result.entries, result.padding))


def _fail(message: str, code: int = 1) -> int:
    """Report a fatal problem as one diagnostic line."""
    logger.debug(f"Fatal: {message}")
    print(f"error: {message}", file=sys.stderr)
    return code

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
