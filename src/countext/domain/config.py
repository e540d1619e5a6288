from __future__ import annotations

"""
Configuration Domain Management.

Holds the default run configuration and the optional persisted defaults
file (JSON) that users can keep in their data directory to change the
behaviour of every run, e.g. always counting case-insensitively.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from countext.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
CONFIG_ENV_VAR = "COUNTEXT_CONFIG"

# Keys a persisted config file may set. Positional inputs and the output
# destination are per-run and never read from disk.
PERSISTED_KEYS = (
    "mode", "case_insensitive", "sort", "reject_no_extension",
    "prune_dirs", "ignore_patterns", "json_output",
)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default run configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Inputs
        "paths": [],
        "read_stdin": False,
        "read_listings": False,

        # Classification
        "mode": "e",
        "case_insensitive": False,
        "reject_no_extension": False,

        # Traversal filters
        "prune_dirs": [],
        "ignore_patterns": [],

        # Report
        "sort": True,
        "json_output": False,
        "output_path": "",
    }


def get_config_path() -> str:
    """
    Resolve the location of the persisted defaults file.

    The COUNTEXT_CONFIG environment variable takes precedence over the
    user data directory.
    """
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return override
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the defaults merged with the persisted config file, if any.

    Unknown keys and per-run keys in the file are ignored; a missing or
    corrupted file yields the plain defaults.

    Args:
        path: Explicit config file path. Defaults to `get_config_path()`.

    Returns:
        Dict[str, Any]: The effective base configuration.
    """
    config = get_default_config()
    config_path = path or get_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config '{config_path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{config_path}'. Using defaults.")
        return config

    for key in PERSISTED_KEYS:
        if key in data:
            config[key] = data[key]

    ignored = sorted(k for k in data if k not in PERSISTED_KEYS)
    if ignored:
        logger.debug(f"Ignoring unsupported config keys: {', '.join(ignored)}")

    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> str:
    """
    Persist the defaults-relevant subset of a configuration.

    Args:
        config: Configuration dictionary to persist.
        path: Explicit config file path. Defaults to `get_config_path()`.

    Returns:
        str: The path written to.

    Raises:
        OSError: When the file cannot be written.
    """
    config_path = path or get_config_path()
    os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)

    subset = {k: config[k] for k in PERSISTED_KEYS if k in config}
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(subset, f, ensure_ascii=False, indent=4)

    logger.debug(f"Configuration saved to {config_path}")
    return config_path
