"""Firestore Client - Imperative Shell.

This module reads and writes posted messages in Google Cloud Firestore.

All I/O is contained here; parsing and validation are in the core module.
"""

import logging
from dataclasses import dataclass
from typing import Any

from google.cloud import firestore


logger = logging.getLogger(__name__)


# Default collection name for posted messages
DEFAULT_COLLECTION = "messages"


@dataclass
class FirestoreConfig:
    """Configuration for Firestore client.

    Attributes:
        project_id: GCP project ID (None for default)
        database: Firestore database name (None for default database)
        collection: Firestore collection name
    """
    project_id: str | None = None
    database: str | None = None
    collection: str = DEFAULT_COLLECTION


class MessageStore:
    """Client for reading and posting messages in Firestore.

    This is part of the imperative shell - it handles database I/O.

    Document structure:
    {
        "message": "text",
        "location": {"lat": 40.71, "lng": -74.0},
        "userId": "...", "userEmail": "...", "userName": "...",
        "userPhotoURL": "...",
        "createdAt": <server timestamp>,
        "isFound": false
    }
    """

    def __init__(self, config: FirestoreConfig | None = None) -> None:
        """Initialize Firestore client.

        Args:
            config: Firestore configuration
        """
        self.config = config or FirestoreConfig()
        self._client: firestore.Client | None = None

    @property
    def client(self) -> firestore.Client:
        """Lazy initialization of Firestore client."""
        if self._client is None:
            kwargs = {}
            if self.config.project_id:
                kwargs['project'] = self.config.project_id
            if self.config.database:
                kwargs['database'] = self.config.database
            self._client = firestore.Client(**kwargs)
        return self._client

    def _get_collection_ref(self) -> Any:
        """Get reference to the messages collection."""
        return self.client.collection(self.config.collection)

    def fetch_messages(self, limit: int | None = None) -> list[tuple[str, dict[str, Any]]]:
        """Fetch stored messages, newest first.

        This method performs database I/O.

        Args:
            limit: Maximum number of documents to read (None for all)

        Returns:
            List of (document ID, document fields) pairs
        """
        logger.info("Fetching messages from Firestore")

        try:
            query = self._get_collection_ref().order_by(
                "createdAt",
                direction=firestore.Query.DESCENDING,
            )
            if limit:
                query = query.limit(limit)

            documents = [(doc.id, doc.to_dict() or {}) for doc in query.stream()]

            logger.info("Fetched %d messages from Firestore", len(documents))
            return documents

        except Exception as e:
            logger.error("Failed to fetch messages: %s", str(e))
            raise

    def add_message(self, document: dict[str, Any]) -> str | None:
        """Store a new message.

        This method performs database I/O.

        Args:
            document: Document fields, without a creation timestamp

        Returns:
            New document ID, or None if the write failed
        """
        logger.info("Adding message to Firestore")

        try:
            _, doc_ref = self._get_collection_ref().add({
                **document,
                "createdAt": firestore.SERVER_TIMESTAMP,
            })

            logger.info("Successfully added message %s", doc_ref.id)
            return doc_ref.id

        except Exception as e:
            logger.error("Failed to add message: %s", str(e))
            return None
