"""Unit tests for configuration validation.

Pure function tests - no mocks needed.
"""

from src.core.config import Config, validate_config
from src.core.search import MatcherSettings
from src.core.validation import ValidationError, validate_coordinates


class TestValidateCoordinates:
    """Tests for validate_coordinates() function."""

    def test_valid(self):
        assert validate_coordinates(40.7, -74.0, "viewer") == []

    def test_boundaries_are_valid(self):
        assert validate_coordinates(90, 180, "viewer") == []
        assert validate_coordinates(-90, -180, "viewer") == []

    def test_out_of_range(self):
        errors = validate_coordinates(90.1, -180.5, "viewer")

        assert len(errors) == 2
        assert "Latitude" in errors[0].message
        assert "Longitude" in errors[1].message

    def test_nan_is_invalid(self):
        assert len(validate_coordinates(float("nan"), 0, "viewer")) == 1


class TestValidateConfig:
    """Tests for validate_config() function."""

    def test_defaults_are_valid(self):
        result = validate_config(Config())

        assert result.valid is True
        assert result.errors == []

    def test_unknown_sort(self):
        result = validate_config(Config(default_sort="relevance"))

        assert result.valid is False
        assert result.critical_errors[0].field == "default_sort"

    def test_bad_limits(self):
        result = validate_config(Config(fetch_limit=0, default_radius_km=-1))

        assert {e.field for e in result.critical_errors} == {"fetch_limit", "default_radius_km"}

    def test_threshold_out_of_range(self):
        result = validate_config(Config(matcher=MatcherSettings(fuzzy_threshold=1.0)))

        assert result.valid is False

    def test_short_prefix_is_a_warning(self):
        result = validate_config(Config(matcher=MatcherSettings(min_prefix_length=2)))

        assert result.valid is True
        assert result.warnings == [ValidationError(
            field="matcher.min_prefix_length",
            message="Prefix length below 3 lets very short words match by prefix",
            severity="warning",
        )]

    def test_unresolved_database_placeholder(self):
        result = validate_config(Config(firestore_database="${FIRESTORE_DATABASE}"))

        assert result.valid is True
        assert result.warnings[0].field == "firestore_database"
