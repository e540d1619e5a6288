from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a validated default configuration and a small
   directory tree used by traversal and counting tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Mirrors 'countext.domain.config.get_default_config' after validation.
    """
    return {
        "paths": [],
        "read_stdin": False,
        "read_listings": False,
        "mode": "e",
        "case_insensitive": False,
        "reject_no_extension": False,
        "prune_dirs": [],
        "ignore_patterns": [],
        "sort": True,
        "json_output": False,
        "output_path": "",
    }


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    Create a small project tree.

    Structure:
    /project
      a.txt
      b.TXT
      c
      /src
        main.py
        util.py
        /pkg
          mod.py
      /docs
        guide.md
        notes.txt
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / "a.txt").write_text("a", encoding="utf-8")
    (root / "b.TXT").write_text("b", encoding="utf-8")
    (root / "c").write_text("c", encoding="utf-8")

    src = root / "src"
    src.mkdir()
    (src / "main.py").write_text("", encoding="utf-8")
    (src / "util.py").write_text("", encoding="utf-8")
    (src / "pkg").mkdir()
    (src / "pkg" / "mod.py").write_text("", encoding="utf-8")

    docs = root / "docs"
    docs.mkdir()
    (docs / "guide.md").write_text("", encoding="utf-8")
    (docs / "notes.txt").write_text("", encoding="utf-8")

    return root


@pytest.fixture(autouse=True)
def isolated_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the persisted config file at a per-test location."""
    path = tmp_path / "countext_config" / "config.json"
    monkeypatch.setenv("COUNTEXT_CONFIG", str(path))
    return path
