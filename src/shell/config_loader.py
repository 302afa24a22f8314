"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, MatcherSettings) are defined in src/core to avoid
information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from src.core.config import Config, validate_config
from src.core.search import (
    DEFAULT_FUZZY_THRESHOLD,
    DEFAULT_MIN_PREFIX_LENGTH,
    MatcherSettings,
)


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a value that may be an environment variable placeholder.

    Args:
        value: Value to resolve (may be a ${VAR} placeholder)

    Returns:
        Resolved value, or the original value if unresolvable
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    return int(value)


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def _parse_matcher(data: dict[str, Any]) -> MatcherSettings:
    """Parse search matcher settings from config data."""
    return MatcherSettings(
        fuzzy_threshold=float(data.get("fuzzy_threshold", DEFAULT_FUZZY_THRESHOLD)),
        min_prefix_length=int(data.get("min_prefix_length", DEFAULT_MIN_PREFIX_LENGTH)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    resolved = {key: _resolve_value(value) for key, value in data.items()}

    return Config(
        firestore_database=resolved.get("firestore_database"),
        messages_collection=resolved.get("messages_collection", "messages"),
        fetch_limit=_optional_int(resolved.get("fetch_limit", 500)),
        default_sort=resolved.get("default_sort", "date"),
        default_radius_km=_optional_float(resolved.get("default_radius_km")),
        matcher=_parse_matcher(resolved.get("matcher") or {}),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    validation = validate_config(config)
    for issue in validation.critical_errors:
        logger.error("Config error in %s: %s", issue.field, issue.message)
    for issue in validation.warnings:
        logger.warning("Config warning in %s: %s", issue.field, issue.message)

    logger.info(
        "Loaded config: collection=%s, default_sort=%s, fuzzy_threshold=%.2f",
        config.messages_collection,
        config.default_sort,
        config.matcher.fuzzy_threshold,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        FIRESTORE_DATABASE: Firestore database name
        MESSAGES_COLLECTION: Collection holding posted messages
        DEFAULT_SORT: date, distance_asc or distance_desc
        FUZZY_THRESHOLD: Fuzzy search similarity threshold

    Returns:
        Config object from environment
    """
    matcher = MatcherSettings(
        fuzzy_threshold=float(os.environ.get("FUZZY_THRESHOLD", DEFAULT_FUZZY_THRESHOLD)),
    )

    return Config(
        firestore_database=os.environ.get("FIRESTORE_DATABASE"),
        messages_collection=os.environ.get("MESSAGES_COLLECTION", "messages"),
        default_sort=os.environ.get("DEFAULT_SORT", "date"),
        matcher=matcher,
    )
