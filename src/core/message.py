"""Message data models and parsing - Pure functions.

This module turns raw stored message documents into typed Message objects
and validates new posts before they are written. All functions are pure
with no side effects.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from src.core.validation import ValidationError, validate_coordinates


DEFAULT_AUTHOR_NAME = "Anonymous"


@dataclass(frozen=True)
class Coordinate:
    """A (latitude, longitude) pair in decimal degrees.

    Range is not checked here; see validate_coordinates().
    """
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Message:
    """Immutable snapshot of a posted message.

    Attributes:
        id: Document ID in the message store
        text: Free-text body
        author_name: Display name of the poster
        author_contact: Contact identifier (email) used to open a chat
        created_at: Creation timestamp (UTC), None if not yet set
        location: Where the message was pinned, None if unknown
        author_photo_url: Avatar URL (optional)
        author_id: Identity provider user ID (optional)
    """
    id: str
    text: str
    author_name: str
    author_contact: str | None = None
    created_at: datetime | None = None
    location: Coordinate | None = None
    author_photo_url: str | None = None
    author_id: str | None = None


def _to_float(value: Any) -> float | None:
    """Convert a stored number to float, None for anything non-numeric."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def _optional_str(value: Any) -> str | None:
    """Keep a stored text field only if it is a non-blank string."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _parse_location(data: dict[str, Any]) -> Coordinate | None:
    """Read a coordinate from either the nested or the flat document shape."""
    location = data.get("location")
    if isinstance(location, dict):
        lat = _to_float(location.get("lat"))
        lng = _to_float(location.get("lng"))
    else:
        lat = _to_float(data.get("latitude"))
        lng = _to_float(data.get("longitude"))

    if lat is None or lng is None:
        return None
    return Coordinate(latitude=lat, longitude=lng)


def _parse_timestamp(value: Any) -> datetime | None:
    """Read a creation timestamp.

    Firestore returns datetime subclasses; plain numbers are treated as
    milliseconds since epoch.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return None


def parse_message(doc_id: str, data: dict[str, Any]) -> Message | None:
    """Parse a single stored document into a Message.

    Pure function: takes raw dict, returns typed Message or None if invalid.

    Args:
        doc_id: Document ID
        data: Document fields

    Returns:
        Message object or None if the document has no usable body
    """
    try:
        text = data.get("message")
        if not isinstance(text, str) or not text.strip():
            return None

        # Older posts carried a separate title
        title = data.get("title")
        if isinstance(title, str) and title.strip():
            text = f"{title.strip()}: {text}"

        return Message(
            id=str(doc_id),
            text=text,
            author_name=_optional_str(data.get("userName")) or DEFAULT_AUTHOR_NAME,
            author_contact=_optional_str(data.get("userEmail")),
            created_at=_parse_timestamp(data.get("createdAt")),
            location=_parse_location(data),
            author_photo_url=_optional_str(data.get("userPhotoURL")),
            author_id=_optional_str(data.get("userId")),
        )
    except (AttributeError, TypeError, ValueError, OverflowError, OSError):
        return None


def parse_messages(documents: Iterable[tuple[str, dict[str, Any]]]) -> list[Message]:
    """Parse (doc_id, data) pairs into Messages.

    Pure function: skips invalid documents and keeps the input order.
    """
    messages = []
    for doc_id, data in documents:
        message = parse_message(doc_id, data)
        if message is not None:
            messages.append(message)
    return messages


def validate_new_message(data: dict[str, Any]) -> list[ValidationError]:
    """Validate an incoming post.

    Pure function.

    Args:
        data: Request payload

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    text = data.get("message")
    if not isinstance(text, str) or not text.strip():
        errors.append(ValidationError(
            field="message",
            message="Message text is required",
        ))

    lat = _to_float(data.get("latitude"))
    lng = _to_float(data.get("longitude"))

    if lat is None:
        errors.append(ValidationError(
            field="latitude",
            message="Latitude is required and must be a number",
        ))
    if lng is None:
        errors.append(ValidationError(
            field="longitude",
            message="Longitude is required and must be a number",
        ))

    if lat is not None and lng is not None:
        errors.extend(validate_coordinates(lat, lng, "location"))

    return errors


def build_message_document(data: dict[str, Any]) -> dict[str, Any]:
    """Build the document to store for a validated post.

    Pure function. The creation timestamp is added by the store.

    Args:
        data: Validated request payload

    Returns:
        Document fields
    """
    return {
        "message": data["message"].strip(),
        "location": {
            "lat": float(data["latitude"]),
            "lng": float(data["longitude"]),
        },
        "userId": _optional_str(data.get("userId")),
        "userEmail": _optional_str(data.get("userEmail")),
        "userName": _optional_str(data.get("userName")) or DEFAULT_AUTHOR_NAME,
        "userPhotoURL": _optional_str(data.get("userPhotoURL")),
        "isFound": False,
    }
