from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess: exit codes, the report on stdout, diagnostics on
stderr, and file side effects.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "countext" / "main.py"


def run_cli(
        args: List[str],
        cwd: Optional[Path] = None,
        input_bytes: Optional[bytes] = None,
        config_path: Optional[Path] = None,
) -> subprocess.CompletedProcess:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed, and isolates the persisted config file.

    Returns:
        subprocess.CompletedProcess: returncode plus raw stdout/stderr bytes.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    if config_path is not None:
        env["COUNTEXT_CONFIG"] = str(config_path)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        input=input_bytes if input_bytes is not None else b"",
        capture_output=True,
    )


def test_cli_counts_directory(sample_tree: Path, isolated_config_file: Path) -> None:
    """TC-01: A plain run prints the sorted, padded report (Exit Code 0)."""
    result = run_cli([str(sample_tree)], config_path=isolated_config_file)

    assert result.returncode == 0, result.stderr
    assert result.stdout.decode().splitlines()[-1] == "    .py 3"


def test_cli_defaults_to_working_directory(sample_tree: Path, isolated_config_file: Path) -> None:
    """TC-02: Without arguments the current directory is walked."""
    result = run_cli([], cwd=sample_tree / "docs", config_path=isolated_config_file)

    assert result.returncode == 0
    assert result.stdout == b"    .md 1\n   .txt 1\n"


def test_cli_reads_piped_stdin(isolated_config_file: Path) -> None:
    """TC-03: Paths piped into --stdin are classified line by line."""
    result = run_cli(
        ["--stdin", "--nocase"],
        input_bytes=b"a/IMG_1.JPG\r\nb/img_2.jpg\nnotes\n",
        config_path=isolated_config_file,
    )

    assert result.returncode == 0
    assert result.stdout == b"  notes 1\n   .jpg 2\n"


def test_cli_unknown_mode_fails(sample_tree: Path, isolated_config_file: Path) -> None:
    """TC-04: An unknown mode is fatal with a one-line diagnostic."""
    result = run_cli(["--mode", "z", str(sample_tree)], config_path=isolated_config_file)

    assert result.returncode == 1
    assert result.stdout == b""
    assert b"unknown mode 'z'" in result.stderr
    assert b"Traceback" not in result.stderr


def test_cli_output_file_failure(sample_tree: Path, tmp_path: Path, isolated_config_file: Path) -> None:
    """TC-05: An output file that cannot be opened is fatal."""
    target = tmp_path / "nowhere" / "report.txt"
    result = run_cli(["-o", str(target), str(sample_tree)], config_path=isolated_config_file)

    assert result.returncode == 1
    assert b"for writing" in result.stderr


def test_cli_recovers_from_missing_root(sample_tree: Path, tmp_path: Path, isolated_config_file: Path) -> None:
    """TC-06: Per-root failures are reported but do not change the exit code."""
    missing = tmp_path / "missing_root"
    result = run_cli([str(missing), str(sample_tree / "src")], config_path=isolated_config_file)

    assert result.returncode == 0
    assert result.stdout == b"    .py 3\n"
    assert b"missing_root" in result.stderr


@pytest.mark.skipif(sys.platform.startswith("win") or sys.platform == "darwin",
                    reason="needs a filesystem accepting arbitrary bytes in names")
def test_cli_output_is_binary_safe(tmp_path: Path, isolated_config_file: Path) -> None:
    """TC-07: Undecodable filenames are written back byte for byte."""
    root = tmp_path / "raw"
    root.mkdir()
    raw_name = os.path.join(os.fsencode(str(root)), b"\xff\xfe")
    with open(raw_name, "wb"):
        pass

    out_file = tmp_path / "report.bin"
    result = run_cli(["-o", str(out_file), str(root)], config_path=isolated_config_file)

    assert result.returncode == 0
    assert out_file.read_bytes() == b"     \xff\xfe 1\n"
