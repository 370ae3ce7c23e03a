"""
TOML Snapshot Storage

Categories and attendee snapshots live in two small TOML files:

    # categories.toml
    [[categories]]
    title = "Engineer"
    salary = 120000.0
    
    # attendees.toml
    [[attendees]]
    title = "Engineer"
    count = 3

TRADEOFFS:
- Human-editable, which is the point: users tweak salaries in an editor
- Whole-file rewrites on every save (fine, the files are tiny)
- No locking (one local user, one session)

The module-level functions take an explicit location each time.
TomlSnapshotStore binds them to a configured data directory.
"""

import os
import tomllib
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import tomli_w
from pydantic import (
    BaseModel,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
    model_validator,
)

from meeting_cost_tracker.config import StorageSettings
from meeting_cost_tracker.models.attendee import AttendeeSnapshot
from meeting_cost_tracker.models.category import SalaryCategory
from meeting_cost_tracker.observability import get_logger
from meeting_cost_tracker.services.storage.interface import (
    SnapshotStoreInterface,
    StorageParseError,
    StorageReadError,
    StorageSerializationError,
    StorageWriteError,
)


Location = Union[str, os.PathLike]

logger = get_logger(__name__)


# =============================================================================
# FILE SCHEMAS
# =============================================================================

class CategoryRecord(BaseModel):
    """One [[categories]] table."""
    
    title: str
    salary: Union[StrictInt, StrictFloat]
    
    @classmethod
    def from_category(cls, category: SalaryCategory) -> "CategoryRecord":
        return cls(title=category.title, salary=category.annual_salary)
    
    def to_category(self) -> SalaryCategory:
        return SalaryCategory(title=self.title, annual_salary=self.salary)


class CategoryDocument(BaseModel):
    """Top level of the category file."""
    
    categories: list[CategoryRecord] = Field(...)
    
    @model_validator(mode='after')
    def validate_unique_titles(self) -> 'CategoryDocument':
        """Titles are the category key, so they must not repeat."""
        seen = set()
        for record in self.categories:
            title = record.title.strip()
            if title in seen:
                raise ValueError(f"Duplicate category title: {title}")
            seen.add(title)
        return self


class AttendeeDocument(BaseModel):
    """Top level of the attendee snapshot file."""
    
    attendees: list[AttendeeSnapshot] = Field(...)


# =============================================================================
# FILE HELPERS
# =============================================================================

def _read_toml(path: Path) -> Optional[dict[str, Any]]:
    """Read and decode a TOML file. Returns None when the file does not exist."""
    if not path.exists():
        return None
    
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.error("storage_read_failed", path=str(path), error=str(e))
        raise StorageReadError(f"Failed to read {path}: {e}") from e
    
    try:
        return tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("storage_parse_failed", path=str(path), error=str(e))
        raise StorageParseError(f"Malformed TOML in {path}: {e}") from e


def _write_toml(path: Path, payload: dict[str, Any]) -> None:
    """Encode payload and overwrite path with it."""
    try:
        text = tomli_w.dumps(payload)
    except (TypeError, ValueError) as e:
        logger.error("storage_serialize_failed", path=str(path), error=str(e))
        raise StorageSerializationError(f"Failed to encode {path}: {e}") from e
    
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        logger.error("storage_write_failed", path=str(path), error=str(e))
        raise StorageWriteError(f"Failed to write {path}: {e}") from e


# =============================================================================
# PUBLIC FUNCTIONS
# =============================================================================

def load_categories(location: Location) -> list[SalaryCategory]:
    """
    Load salary categories from a TOML file.
    
    If the file does not exist an empty list is returned.
    
    Raises:
        StorageReadError: If the file exists but cannot be read
        StorageParseError: If the file is not valid TOML, lacks the
            `categories` field, or holds an invalid or duplicate category
    """
    path = Path(location)
    data = _read_toml(path)
    if data is None:
        logger.info("categories_file_missing", path=str(path))
        return []
    
    try:
        document = CategoryDocument.model_validate(data)
        categories = [record.to_category() for record in document.categories]
    except ValidationError as e:
        logger.error("storage_parse_failed", path=str(path), error=str(e))
        raise StorageParseError(f"Invalid category data in {path}: {e}") from e
    
    logger.info("categories_loaded", path=str(path), count=len(categories))
    return categories


def save_categories(location: Location, categories: Iterable[SalaryCategory]) -> None:
    """
    Write salary categories to a TOML file, replacing any existing content.
    
    Raises:
        StorageSerializationError: If the list holds duplicate titles
        StorageWriteError: If the file cannot be written
    """
    path = Path(location)
    try:
        document = CategoryDocument(
            categories=[CategoryRecord.from_category(c) for c in categories]
        )
    except ValidationError as e:
        logger.error("storage_serialize_failed", path=str(path), error=str(e))
        raise StorageSerializationError(f"Cannot store categories: {e}") from e
    
    _write_toml(path, document.model_dump())
    logger.info("categories_saved", path=str(path), count=len(document.categories))


def load_attendee_snapshot(location: Location) -> list[AttendeeSnapshot]:
    """
    Load a saved attendee snapshot from a TOML file.
    
    If the file does not exist an empty list is returned.
    
    Raises:
        StorageReadError: If the file exists but cannot be read
        StorageParseError: If the file is not valid TOML, lacks the
            `attendees` field, or holds an invalid record
    """
    path = Path(location)
    data = _read_toml(path)
    if data is None:
        logger.info("attendees_file_missing", path=str(path))
        return []
    
    try:
        document = AttendeeDocument.model_validate(data)
    except ValidationError as e:
        logger.error("storage_parse_failed", path=str(path), error=str(e))
        raise StorageParseError(f"Invalid attendee data in {path}: {e}") from e
    
    logger.info("attendees_loaded", path=str(path), count=len(document.attendees))
    return list(document.attendees)


def save_attendee_snapshot(location: Location, snapshot: Iterable[AttendeeSnapshot]) -> None:
    """
    Write an attendee snapshot to a TOML file, replacing any existing content.
    
    Raises:
        StorageSerializationError: If a record is not a valid snapshot
        StorageWriteError: If the file cannot be written
    """
    path = Path(location)
    try:
        document = AttendeeDocument(attendees=list(snapshot))
    except ValidationError as e:
        logger.error("storage_serialize_failed", path=str(path), error=str(e))
        raise StorageSerializationError(f"Cannot store attendees: {e}") from e
    
    _write_toml(path, document.model_dump())
    logger.info("attendees_saved", path=str(path), count=len(document.attendees))


# =============================================================================
# STORE
# =============================================================================

class TomlSnapshotStore(SnapshotStoreInterface):
    """
    TOML-file implementation of snapshot storage.
    
    Bound to an explicit data directory at construction.
    """
    
    def __init__(
        self,
        data_dir: Location,
        categories_file: str = "categories.toml",
        attendees_file: str = "attendees.toml",
    ):
        self._data_dir = Path(data_dir)
        self._categories_path = self._data_dir / categories_file
        self._attendees_path = self._data_dir / attendees_file
    
    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "TomlSnapshotStore":
        """Build a store from storage settings."""
        return cls(
            data_dir=settings.data_dir,
            categories_file=settings.categories_file,
            attendees_file=settings.attendees_file,
        )
    
    @property
    def categories_path(self) -> Path:
        return self._categories_path
    
    @property
    def attendees_path(self) -> Path:
        return self._attendees_path
    
    def load_categories(self) -> list[SalaryCategory]:
        return load_categories(self._categories_path)
    
    def save_categories(self, categories: Iterable[SalaryCategory]) -> None:
        save_categories(self._categories_path, categories)
    
    def load_attendee_snapshot(self) -> list[AttendeeSnapshot]:
        return load_attendee_snapshot(self._attendees_path)
    
    def save_attendee_snapshot(self, snapshot: Iterable[AttendeeSnapshot]) -> None:
        save_attendee_snapshot(self._attendees_path, snapshot)
