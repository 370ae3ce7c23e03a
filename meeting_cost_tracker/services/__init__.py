"""Services package."""

from meeting_cost_tracker.services.storage import (
    SnapshotStoreInterface,
    StorageError,
    StorageParseError,
    StorageReadError,
    StorageSerializationError,
    StorageWriteError,
    TomlSnapshotStore,
    load_attendee_snapshot,
    load_categories,
    save_attendee_snapshot,
    save_categories,
)

__all__ = [
    # Storage services
    "SnapshotStoreInterface",
    "StorageError",
    "StorageParseError",
    "StorageReadError",
    "StorageSerializationError",
    "StorageWriteError",
    "TomlSnapshotStore",
    "load_attendee_snapshot",
    "load_categories",
    "save_attendee_snapshot",
    "save_categories",
]
