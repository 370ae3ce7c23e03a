"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for snapshot storage.
This allows us to:
1. Swap the TOML files for another format later
2. Use in-memory storage for testing
3. Keep the session decoupled from file paths

Categories and attendee snapshots are independent documents. Each save
replaces the whole document, and a document that does not exist yet reads
as an empty list.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from meeting_cost_tracker.models.attendee import AttendeeSnapshot
from meeting_cost_tracker.models.category import SalaryCategory


class SnapshotStoreInterface(ABC):
    """
    Abstract interface for category and attendee persistence.
    
    Any storage implementation must implement these methods.
    """
    
    @abstractmethod
    def load_categories(self) -> list[SalaryCategory]:
        """
        Load the salary category list.
        
        Returns:
            The stored categories, or an empty list if nothing is stored yet
        
        Raises:
            StorageParseError: If stored content is malformed
            StorageReadError: If stored content cannot be read
        """
        pass
    
    @abstractmethod
    def save_categories(self, categories: Iterable[SalaryCategory]) -> None:
        """
        Replace the stored category list.
        
        Raises:
            StorageSerializationError: If the categories cannot be encoded
            StorageWriteError: If the write fails
        """
        pass
    
    @abstractmethod
    def load_attendee_snapshot(self) -> list[AttendeeSnapshot]:
        """
        Load the saved attendee snapshot.
        
        Returns:
            The stored snapshot, or an empty list if nothing is stored yet
        
        Raises:
            StorageParseError: If stored content is malformed
            StorageReadError: If stored content cannot be read
        """
        pass
    
    @abstractmethod
    def save_attendee_snapshot(self, snapshot: Iterable[AttendeeSnapshot]) -> None:
        """
        Replace the saved attendee snapshot.
        
        Raises:
            StorageSerializationError: If the snapshot cannot be encoded
            StorageWriteError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored content exists but could not be read."""
    pass


class StorageParseError(StorageError):
    """Stored content could not be decoded or failed validation."""
    pass


class StorageWriteError(StorageError):
    """Content could not be written to storage."""
    pass


class StorageSerializationError(StorageError):
    """In-memory state could not be encoded for storage."""
    pass
