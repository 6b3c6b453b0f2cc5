#!/usr/bin/env python3

"""Tunables for header compilation and registry generation."""

import os
from typing import Any

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    # qpi.h default; contracts use it in constexpr sizes (`1024 * X_MULTIPLIER`)
    "X_MULTIPLIER": 1,

    # Registry layout
    "QPI_HEADER": "qpi.h",
    "OUTPUT_SUFFIX": ".qbi",

    # Document content
    "INCLUDE_GENERATED_AT": True,
}


def get_config() -> dict[str, Any]:
    """Get configuration with environment variable overrides.

    Every key can be overridden with a ``QBI_<KEY>`` environment variable.

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    for key in config:
        env_value = os.getenv(f"QBI_{key}")
        if env_value is not None:
            # bool before int: bool is an int subclass
            if isinstance(config[key], bool):
                config[key] = env_value.lower() in ("true", "1", "yes", "on")
            elif isinstance(config[key], int):
                try:
                    config[key] = int(env_value)
                except ValueError:
                    pass
            else:
                config[key] = env_value

    return config


def get_constant_seed() -> dict[str, int]:
    """Named constants every header compilation starts with."""
    return {"X_MULTIPLIER": get_config()["X_MULTIPLIER"]}
