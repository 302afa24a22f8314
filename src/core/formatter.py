"""Message formatting - Pure functions.

This module formats messages into JSON-ready feed entries and log lines.
All functions are pure with no side effects.
"""

from typing import Any

from src.core.geo import format_distance
from src.core.message import Coordinate, Message


def format_location(coordinate: Coordinate) -> str:
    """Format a coordinate as shown on the message list.

    Pure function.
    """
    return f"{coordinate.latitude:.4f}, {coordinate.longitude:.4f}"


def format_feed_entry(
    message: Message,
    distance_km: float | None = None,
) -> dict[str, Any]:
    """Format a message as a feed entry payload.

    Pure function.

    Args:
        message: Message to format
        distance_km: Distance from the viewer, None if unknown

    Returns:
        JSON-serializable dict
    """
    location = None
    if message.location is not None:
        location = {
            "lat": message.location.latitude,
            "lng": message.location.longitude,
            "label": format_location(message.location),
        }

    return {
        "id": message.id,
        "message": message.text,
        "userName": message.author_name,
        "userEmail": message.author_contact,
        "userPhotoURL": message.author_photo_url,
        "createdAt": message.created_at.isoformat() if message.created_at else None,
        "location": location,
        "distanceKm": distance_km,
        "distanceLabel": format_distance(distance_km) if distance_km is not None else None,
    }


def format_feed_summary(fetched: int, shown: int, query: str = "") -> str:
    """Format a one-line summary of a feed request.

    Pure function.
    """
    summary = f"Fetched {fetched} messages, showing {shown}"
    if query and query.strip():
        summary += f" for '{query.strip()}'"
    return summary
