from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies default injection, type coercion with warnings, strict mode,
mode canonicalization and the handling of invalid ignore patterns.
"""

import pytest

from countext.core.validator import validate_config
from countext.domain.models import ConfigurationError


def test_validate_fills_defaults(mock_config_dict):
    clean, warnings = validate_config({})

    assert clean == mock_config_dict
    assert warnings == []


def test_validate_non_dict_falls_back_to_defaults(mock_config_dict):
    clean, warnings = validate_config(["not", "a", "dict"])

    assert clean == mock_config_dict
    assert "Invalid config type" in warnings[0]


def test_validate_non_dict_strict_raises():
    with pytest.raises(ConfigurationError):
        validate_config("nope", strict=True)


def test_validate_canonicalizes_mode():
    assert validate_config({"mode": "Stem"})[0]["mode"] == "s"
    assert validate_config({"mode": "b"})[0]["mode"] == "f"
    assert validate_config({"mode": "x"})[0]["mode"] == "e"


@pytest.mark.parametrize("mode", ["q", "", 3, None])
def test_validate_unknown_mode_is_fatal(mode):
    raw = {"mode": mode}
    if mode is None:
        # None means "not given" and falls back to the default
        assert validate_config(raw)[0]["mode"] == "e"
        return
    with pytest.raises(ConfigurationError, match="unknown mode"):
        validate_config(raw)


def test_validate_coerces_bool_strings():
    clean, warnings = validate_config({"case_insensitive": "yes", "sort": "off"})

    assert clean["case_insensitive"] is True
    assert clean["sort"] is False
    assert warnings == []


def test_validate_bad_bool_warns_and_uses_fallback():
    clean, warnings = validate_config({"sort": "maybe"})

    assert clean["sort"] is True
    assert any("'sort'" in w for w in warnings)


def test_validate_bad_bool_strict_raises():
    with pytest.raises(ConfigurationError):
        validate_config({"sort": "maybe"}, strict=True)


def test_validate_list_fields_accept_csv_and_drop_non_strings():
    clean, warnings = validate_config({
        "prune_dirs": ".git, node_modules,,",
        "paths": ["a", 5, "", "b"],
    })

    assert clean["prune_dirs"] == [".git", "node_modules"]
    assert clean["paths"] == ["a", "b"]
    assert len(warnings) == 1


def test_validate_drops_invalid_ignore_patterns():
    clean, warnings = validate_config({"ignore_patterns": [r"\.pyc$", r"[broken"]})

    assert clean["ignore_patterns"] == [r"\.pyc$"]
    assert "[broken" in warnings[0]


def test_validate_invalid_ignore_pattern_strict_raises():
    with pytest.raises(ConfigurationError, match="Invalid ignore patterns"):
        validate_config({"ignore_patterns": ["("]}, strict=True)


def test_validate_warns_on_conflicting_inputs():
    _, warnings = validate_config({"read_stdin": True, "read_listings": True})
    assert any("stdin" in w for w in warnings)


def test_validate_output_path_type():
    clean, warnings = validate_config({"output_path": 12})

    assert clean["output_path"] == ""
    assert warnings


def test_validate_output_path_kept_verbatim():
    clean, warnings = validate_config({"output_path": " report .txt "})

    assert clean["output_path"] == " report .txt "
    assert warnings == []
