"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Firestore message store (database)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.firestore_client import FirestoreConfig, MessageStore
from src.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "FirestoreConfig",
    "MessageStore",
    "load_config",
    "load_config_from_env",
]
