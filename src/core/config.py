"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from src.core.search import MatcherSettings
from src.core.validation import ValidationError, ValidationResult, result_from_errors


SORT_ORDERS = ("date", "distance_asc", "distance_desc")


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        firestore_database: Firestore database name (None for default)
        messages_collection: Firestore collection holding posted messages
        fetch_limit: Maximum messages to read per request (None = all)
        default_sort: Sort order when the request does not name one
        default_radius_km: Radius filter when the request does not name one
        matcher: Search matcher constants
    """
    firestore_database: str | None = None
    messages_collection: str = "messages"
    fetch_limit: int | None = 500
    default_sort: str = "date"
    default_radius_km: float | None = None
    matcher: MatcherSettings = field(default_factory=MatcherSettings)


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if config.firestore_database and config.firestore_database.startswith("${"):
        errors.append(ValidationError(
            field="firestore_database",
            message="Database name not resolved (still contains placeholder)",
            severity="warning",
        ))

    if not config.messages_collection:
        errors.append(ValidationError(
            field="messages_collection",
            message="Collection name must not be empty",
        ))

    if config.fetch_limit is not None and config.fetch_limit <= 0:
        errors.append(ValidationError(
            field="fetch_limit",
            message=f"Fetch limit must be positive, got {config.fetch_limit}",
        ))

    if config.default_sort not in SORT_ORDERS:
        errors.append(ValidationError(
            field="default_sort",
            message=f"Unknown sort order '{config.default_sort}', expected one of {', '.join(SORT_ORDERS)}",
        ))

    if config.default_radius_km is not None and config.default_radius_km <= 0:
        errors.append(ValidationError(
            field="default_radius_km",
            message=f"Radius must be positive, got {config.default_radius_km}",
        ))

    if not 0 <= config.matcher.fuzzy_threshold < 1:
        errors.append(ValidationError(
            field="matcher.fuzzy_threshold",
            message=f"Threshold {config.matcher.fuzzy_threshold} out of range [0, 1)",
        ))

    if config.matcher.min_prefix_length < 1:
        errors.append(ValidationError(
            field="matcher.min_prefix_length",
            message=f"Prefix length must be at least 1, got {config.matcher.min_prefix_length}",
        ))
    elif config.matcher.min_prefix_length < 3:
        errors.append(ValidationError(
            field="matcher.min_prefix_length",
            message="Prefix length below 3 lets very short words match by prefix",
            severity="warning",
        ))

    return result_from_errors(errors)
