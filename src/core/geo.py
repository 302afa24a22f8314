"""Geographic calculations - Pure functions.

This module provides distance calculations, distance formatting and
distance/date ordering for message lists.
All functions are pure with no side effects.
"""

import math

from src.core.message import Coordinate, Message


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function. Input is not range-checked; NaN propagates.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Float error can push a slightly past 1 for antipodal points
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_between(a: Coordinate, b: Coordinate) -> float:
    """Distance in kilometers between two coordinates."""
    return calculate_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def distance_to_message(viewer: Coordinate, message: Message) -> float | None:
    """Calculate distance from the viewer to a message.

    Pure function.

    Returns:
        Distance in kilometers, or None if the message has no location
    """
    if message.location is None:
        return None
    return distance_between(viewer, message.location)


def format_distance(distance_km: float) -> str:
    """Render a distance for display.

    Pure function.

    Under 1 km the distance is shown in whole meters, otherwise in
    kilometers with one decimal place. A distance that rounds to 1000
    meters is shown as "1.0 km".

    Args:
        distance_km: Distance in kilometers

    Returns:
        e.g. "500 meters" or "2.3 km"
    """
    if distance_km < 1:
        # Round half up; 999.5 m and above reads as 1.0 km
        meters = math.floor(distance_km * 1000 + 0.5)
        if meters < 1000:
            return f"{meters} meters"
    return f"{distance_km:.1f} km"


def sort_by_distance(
    messages: list[Message],
    viewer: Coordinate,
    descending: bool = False,
) -> list[Message]:
    """Sort messages by distance from the viewer.

    Pure function. The sort is stable, and messages without a location
    always come last in their original relative order.

    Args:
        messages: Messages to sort
        viewer: Viewer coordinate
        descending: Farthest first when True

    Returns:
        New sorted list
    """
    located = [m for m in messages if m.location is not None]
    unlocated = [m for m in messages if m.location is None]

    ordered = sorted(
        located,
        key=lambda m: distance_between(viewer, m.location),
        reverse=descending,
    )
    return ordered + unlocated


def sort_by_date(messages: list[Message], newest_first: bool = True) -> list[Message]:
    """Sort messages by creation time.

    Pure function. Messages without a timestamp come last.
    """
    dated = [m for m in messages if m.created_at is not None]
    undated = [m for m in messages if m.created_at is None]

    ordered = sorted(
        dated,
        key=lambda m: m.created_at,
        reverse=newest_first,
    )
    return ordered + undated


def filter_by_radius(
    messages: list[Message],
    viewer: Coordinate,
    radius_km: float,
) -> list[Message]:
    """Filter messages to those within a radius of the viewer.

    Pure function. Messages without a location are dropped.

    Args:
        messages: Messages to filter
        viewer: Center point
        radius_km: Radius in kilometers (inclusive)

    Returns:
        Messages within the radius
    """
    return [
        m for m in messages
        if m.location is not None and distance_between(viewer, m.location) <= radius_km
    ]
