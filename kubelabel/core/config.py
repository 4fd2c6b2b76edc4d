"""Centralized configuration loading for kubelabel.

This module provides utilities for loading and accessing configuration from
config.json with support for environment variable fallbacks and default
values.

Example config.json::

    {
      "kubelabel": {
        "namespace": "payments",
        "kubeconfig": "~/.kube/config",
        "context": "staging",
        "output": "name"
      }
    }
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from JSON file.

    Returns empty dict if file doesn't exist or is invalid.

    Args:
        config_path: Path to config.json file (default: "config.json")

    Returns:
        Configuration dictionary, or empty dict if file not found/invalid
    """
    path = Path(config_path).expanduser()

    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: top level must be an object")
        return {}
    return data


def get_config_value(
    keys: List[str], default: Any = None, config: Optional[Dict[str, Any]] = None
) -> Any:
    """Get nested configuration value with fallback to environment variable.

    Supports key paths like ["kubelabel", "namespace"]. Also checks
    environment variables as fallback (e.g., KUBELABEL_NAMESPACE for
    kubelabel.namespace).

    Args:
        keys: List of keys to traverse (e.g., ["kubelabel", "context"])
        default: Default value if key not found
        config: Optional config dict (uses load_config() if not provided)

    Returns:
        Configuration value, or default if not found
    """
    if config is None:
        config = load_config()

    value: Any = config
    for key in keys:
        if isinstance(value, dict):
            value = value.get(key)
            if value is None:
                break
        else:
            value = None
            break

    if value is not None:
        return value

    env_key = "_".join(k.upper() for k in keys)
    env_value = os.environ.get(env_key)
    if env_value is not None:
        return env_value

    return default
