"""
Storage Services Package

Provides the abstract snapshot store interface and the TOML file
implementation used by default.
"""

from meeting_cost_tracker.services.storage.interface import (
    SnapshotStoreInterface,
    StorageError,
    StorageParseError,
    StorageReadError,
    StorageSerializationError,
    StorageWriteError,
)
from meeting_cost_tracker.services.storage.toml_store import (
    TomlSnapshotStore,
    load_attendee_snapshot,
    load_categories,
    save_attendee_snapshot,
    save_categories,
)

__all__ = [
    # Interfaces
    "SnapshotStoreInterface",
    # Exceptions
    "StorageError",
    "StorageParseError",
    "StorageReadError",
    "StorageSerializationError",
    "StorageWriteError",
    # TOML implementation
    "TomlSnapshotStore",
    "load_attendee_snapshot",
    "load_categories",
    "save_attendee_snapshot",
    "save_categories",
]
