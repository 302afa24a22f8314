"""Tests for the Configuration Loader module.

Tests configuration loading from YAML files and environment variables.
"""

import logging
import os
import pytest
import tempfile
from pathlib import Path
from unittest.mock import patch

from src.shell.config_loader import (
    load_config,
    load_config_from_dict,
    load_config_from_env,
    _resolve_value,
    _parse_matcher,
)
from src.core.config import Config
from src.core.search import MatcherSettings


class TestResolveValue:
    """Tests for _resolve_value function."""

    def test_returns_non_string_unchanged(self):
        """Non-string values are returned unchanged."""
        assert _resolve_value(123) == 123
        assert _resolve_value(None) is None
        assert _resolve_value(True) is True

    def test_returns_plain_string_unchanged(self):
        """Plain strings without placeholders are returned unchanged."""
        assert _resolve_value("messages") == "messages"

    def test_resolves_env_var_placeholder(self):
        """Resolves ${VAR} placeholders from environment."""
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert _resolve_value("${TEST_VAR}") == "test_value"

    def test_returns_placeholder_if_env_var_not_set(self):
        """Returns original placeholder if env var not set."""
        with patch.dict(os.environ, {}, clear=True):
            assert _resolve_value("${UNDEFINED_VAR}") == "${UNDEFINED_VAR}"


class TestParseMatcher:
    """Tests for _parse_matcher function."""

    def test_defaults(self):
        assert _parse_matcher({}) == MatcherSettings()

    def test_overrides(self):
        settings = _parse_matcher({"fuzzy_threshold": "0.5", "min_prefix_length": 5})

        assert settings == MatcherSettings(fuzzy_threshold=0.5, min_prefix_length=5)


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict function."""

    def test_empty_dict_gives_defaults(self):
        assert load_config_from_dict({}) == Config()

    def test_full_config(self):
        config = load_config_from_dict({
            "firestore_database": "geo-messages",
            "messages_collection": "posts",
            "fetch_limit": 100,
            "default_sort": "distance_asc",
            "default_radius_km": 25,
            "matcher": {"fuzzy_threshold": 0.7},
        })

        assert config.firestore_database == "geo-messages"
        assert config.messages_collection == "posts"
        assert config.fetch_limit == 100
        assert config.default_sort == "distance_asc"
        assert config.default_radius_km == 25.0
        assert config.matcher.fuzzy_threshold == 0.7
        assert config.matcher.min_prefix_length == 4

    def test_null_fetch_limit_means_no_limit(self):
        assert load_config_from_dict({"fetch_limit": None}).fetch_limit is None

    def test_expands_env_placeholders(self):
        with patch.dict(os.environ, {"DB_NAME": "from-env"}):
            config = load_config_from_dict({"firestore_database": "${DB_NAME}"})

        assert config.firestore_database == "from-env"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_returns_defaults(self):
        assert load_config("/nonexistent/config.yaml") == Config()

    def test_loads_yaml_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text(
                "messages_collection: posts\n"
                "default_sort: distance_desc\n"
                "matcher:\n"
                "  fuzzy_threshold: 0.5\n"
            )

            config = load_config(path)

        assert config.messages_collection == "posts"
        assert config.default_sort == "distance_desc"
        assert config.matcher.fuzzy_threshold == 0.5

    def test_empty_file_returns_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("")

            assert load_config(path) == Config()

    def test_uses_config_path_env_var(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "custom.yaml"
            path.write_text("fetch_limit: 42\n")

            with patch.dict(os.environ, {"CONFIG_PATH": str(path)}):
                config = load_config()

        assert config.fetch_limit == 42

    def test_logs_validation_issues_by_severity(self, caplog):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text(
                "default_sort: random\n"
                "matcher:\n"
                "  min_prefix_length: 2\n"
            )

            with caplog.at_level(logging.WARNING, logger="src.shell.config_loader"):
                load_config(path)

        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert any("default_sort" in message for message in errors)
        assert any("matcher.min_prefix_length" in message for message in warnings)

    def test_repository_config_file_loads(self):
        path = Path(__file__).resolve().parents[2] / "config" / "config.yaml"

        config = load_config(path)

        assert config.messages_collection == "messages"
        assert config.matcher == MatcherSettings()


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    def test_reads_environment(self):
        env = {
            "FIRESTORE_DATABASE": "geo-db",
            "MESSAGES_COLLECTION": "posts",
            "DEFAULT_SORT": "distance_asc",
            "FUZZY_THRESHOLD": "0.8",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config_from_env()

        assert config.firestore_database == "geo-db"
        assert config.messages_collection == "posts"
        assert config.default_sort == "distance_asc"
        assert config.matcher.fuzzy_threshold == 0.8

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_config_from_env()

        assert config == Config()
