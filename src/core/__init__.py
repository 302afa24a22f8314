"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Message parsing and post validation
- Geo/distance calculations and ordering
- Free-text search matching
- Feed formatting

All functions here are deterministic and have no I/O.
"""

from src.core.message import Coordinate, Message, parse_message, parse_messages
from src.core.geo import calculate_distance, format_distance, sort_by_distance
from src.core.search import MatcherSettings, filter_messages, matches_query
from src.core.formatter import format_feed_entry, format_feed_summary

__all__ = [
    # Message
    "Coordinate",
    "Message",
    "parse_message",
    "parse_messages",
    # Geo
    "calculate_distance",
    "format_distance",
    "sort_by_distance",
    # Search
    "MatcherSettings",
    "filter_messages",
    "matches_query",
    # Formatter
    "format_feed_entry",
    "format_feed_summary",
]
