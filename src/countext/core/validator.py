from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between the loosely typed configuration sources (persisted JSON
file, CLI overrides) and the counting engine. Coerces values into the
expected types, fills missing keys from the defaults and collects warnings
for anything it had to correct.
"""

import logging
from typing import Any, Dict, List, Tuple

from countext.core.classifier import parse_mode
from countext.core.filters import invalid_patterns
from countext.domain.config import get_default_config
from countext.domain.models import ConfigurationError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a raw configuration dictionary.

    The mode is always checked strictly: an unknown mode cannot be
    replaced by a guess without changing what gets counted.

    Args:
        config: Raw configuration data.
        strict: If True, raise on type mismatches instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and
        the list of warnings.

    Raises:
        ConfigurationError: For an unknown mode, or any problem when strict.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise ConfigurationError(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    bool_fields = [
        "read_stdin", "read_listings", "case_insensitive",
        "reject_no_extension", "sort", "json_output",
    ]
    list_fields = ["paths", "prune_dirs", "ignore_patterns"]

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in list_fields:
        merged[field] = _as_list_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["output_path"] = _as_str(merged.get("output_path"), "", "output_path", warnings, strict)

    mode_value = merged.get("mode")
    if mode_value is None:
        mode_value = defaults["mode"]
    if not isinstance(mode_value, str):
        raise ConfigurationError(f"unknown mode '{mode_value}' (expected one of: e, s, f)")
    merged["mode"] = parse_mode(mode_value).value

    bad = invalid_patterns(merged["ignore_patterns"])
    if bad:
        msg = f"Invalid ignore patterns: {', '.join(bad)}"
        if strict:
            raise ConfigurationError(msg)
        warnings.append(f"{msg}. Dropped.")
        merged["ignore_patterns"] = [p for p in merged["ignore_patterns"] if p not in bad]

    if merged["read_stdin"] and merged["read_listings"]:
        warnings.append("Both stdin and listing input requested; reading stdin.")

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise ConfigurationError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "on"):
            return True
        if v in ("0", "false", "no", "off"):
            return False

    msg = f"Invalid field '{field}': expected bool, received {value!r}."
    if strict:
        raise ConfigurationError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(
        value: Any,
        fallback: List[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> List[str]:
    """Accept a list of strings or a comma-separated string."""
    if value is None:
        return list(fallback)
    if isinstance(value, str):
        return [x.strip() for x in value.split(",") if x.strip()]
    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for item in value:
            if isinstance(item, str):
                if item:
                    out.append(item)
            else:
                msg = f"Invalid item in '{field}': {item!r} is not a string."
                if strict:
                    raise ConfigurationError(msg)
                warnings.append(f"{msg} Skipped.")
        return out

    msg = f"Invalid field '{field}': expected list, received {type(value).__name__}."
    if strict:
        raise ConfigurationError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)
