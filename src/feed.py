"""Nearby Feed - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the message store. It's the "glue" behind the HTTP entry points.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.core.config import Config
from src.core.formatter import format_feed_entry, format_feed_summary
from src.core.geo import distance_to_message, filter_by_radius, sort_by_date, sort_by_distance
from src.core.message import (
    Coordinate,
    Message,
    build_message_document,
    parse_messages,
    validate_new_message,
)
from src.core.search import filter_messages
from src.core.validation import ValidationError
from src.shell.firestore_client import FirestoreConfig, MessageStore


logger = logging.getLogger(__name__)


class SortOrder(str, Enum):
    """How to order the feed."""
    DATE = "date"
    DISTANCE_ASC = "distance_asc"
    DISTANCE_DESC = "distance_desc"


@dataclass
class FeedRequest:
    """Parameters of a single feed request.

    Attributes:
        viewer: Viewer location, None if unknown
        query: Free-text search, empty for no filtering
        sort: Sort order
        radius_km: Only show messages within this radius (None = no limit)
    """
    viewer: Coordinate | None = None
    query: str = ""
    sort: SortOrder = SortOrder.DATE
    radius_km: float | None = None


@dataclass
class FeedEntry:
    """A message with its distance from the viewer."""
    message: Message
    distance_km: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return format_feed_entry(self.message, self.distance_km)


@dataclass
class FeedResult:
    """Result of building a feed.

    Attributes:
        messages_fetched: Valid messages read from the store
        entries: Messages to show, in display order
        errors: Any errors that occurred
        query: Search text the feed was filtered by
    """
    messages_fetched: int
    entries: list[FeedEntry]
    errors: list[str] = field(default_factory=list)
    query: str = ""

    @property
    def success(self) -> bool:
        """Returns True if no errors occurred."""
        return len(self.errors) == 0

    @property
    def summary(self) -> str:
        """Human-readable summary of the feed."""
        return format_feed_summary(self.messages_fetched, len(self.entries), self.query)


@dataclass
class PostResult:
    """Result of posting a message.

    Attributes:
        message_id: ID of the stored message, None on failure
        errors: Validation errors (empty if the payload was valid)
    """
    message_id: str | None = None
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.message_id is not None


class NearbyFeed:
    """Builds the nearby-messages feed and handles new posts.

    This class wires together:
    - Message store (reads and writes Firestore)
    - Core functions (parsing, search, distance, formatting)
    """

    def __init__(
        self,
        config: Config,
        message_store: MessageStore | None = None,
    ) -> None:
        """Initialize feed with configuration.

        Args:
            config: Application configuration
            message_store: Message store (created if not provided)
        """
        self.config = config
        self.message_store = message_store or MessageStore(
            FirestoreConfig(
                database=config.firestore_database,
                collection=config.messages_collection,
            )
        )

    def _order(self, messages: list[Message], request: FeedRequest) -> list[Message]:
        """Apply the requested sort order."""
        if request.sort == SortOrder.DATE:
            return sort_by_date(messages)

        if request.viewer is None:
            logger.warning("Sort %s requested without a viewer location, using date", request.sort.value)
            return sort_by_date(messages)

        return sort_by_distance(
            messages,
            request.viewer,
            descending=request.sort == SortOrder.DISTANCE_DESC,
        )

    def build(self, request: FeedRequest) -> FeedResult:
        """Build the feed for one viewer.

        This is the main entry point that:
        1. Fetches messages from the store
        2. Filters them by the search query
        3. Optionally filters by radius
        4. Sorts by date or distance
        5. Attaches distances

        Args:
            request: Feed parameters

        Returns:
            FeedResult with entries in display order
        """
        # Step 1: Fetch messages
        try:
            documents = self.message_store.fetch_messages(limit=self.config.fetch_limit)
        except Exception as e:
            error_msg = f"Failed to fetch messages: {e}"
            logger.error(error_msg)
            return FeedResult(
                messages_fetched=0,
                entries=[],
                errors=[error_msg],
                query=request.query,
            )

        messages = parse_messages(documents)
        logger.info("Parsed %d messages (of %d documents)", len(messages), len(documents))

        # Step 2: Search filter (pure core function)
        shown = filter_messages(messages, request.query, self.config.matcher)

        # Step 3: Radius filter
        if request.radius_km is not None and request.viewer is not None:
            shown = filter_by_radius(shown, request.viewer, request.radius_km)

        # Step 4: Order
        shown = self._order(shown, request)

        # Step 5: Distances
        entries = [
            FeedEntry(
                message=m,
                distance_km=distance_to_message(request.viewer, m) if request.viewer else None,
            )
            for m in shown
        ]

        result = FeedResult(
            messages_fetched=len(messages),
            entries=entries,
            query=request.query,
        )
        logger.info("Completed: %s", result.summary)
        return result

    def post(self, data: dict[str, Any]) -> PostResult:
        """Validate and store a new message.

        Args:
            data: Request payload

        Returns:
            PostResult with the new ID or validation errors
        """
        errors = validate_new_message(data)
        if errors:
            logger.info("Rejected post: %s", "; ".join(e.message for e in errors))
            return PostResult(errors=errors)

        document = build_message_document(data)
        message_id = self.message_store.add_message(document)

        if message_id is None:
            logger.error("Failed to store message from %s", document["userName"])

        return PostResult(message_id=message_id)
