"""
Session Orchestrator for Meeting Cost Tracker

This module ties the components together for a front end:
1. Load categories (and optionally the last attendee snapshot) from storage
2. Manage the category list (add / delete by title)
3. Drive the meeting by category title instead of category object
4. Persist categories and attendees on demand or on exit

DESIGN DECISION: The session is the validation boundary for user input.
Counts and category titles are checked here, so the Meeting itself can
stay a plain state machine. The session renders nothing and reads no keys.
A terminal or web front end calls these methods and draws the results.
"""

from typing import Iterable, Optional

from meeting_cost_tracker.config import Settings, get_settings, validate_all_settings
from meeting_cost_tracker.meeting import Clock, Meeting
from meeting_cost_tracker.models.attendee import AttendeeSnapshot
from meeting_cost_tracker.models.category import (
    CategoryValidationError,
    SalaryCategory,
    validate_count,
)
from meeting_cost_tracker.observability import configure_logging, get_logger
from meeting_cost_tracker.services.storage import (
    SnapshotStoreInterface,
    TomlSnapshotStore,
)


logger = get_logger(__name__)


class UnknownCategoryError(KeyError):
    """No category with the given title exists in the session."""
    pass


class DuplicateCategoryError(CategoryValidationError):
    """A category with the given title already exists in the session."""
    pass


class MeetingSession:
    """
    One user's meeting plus the category list it is priced from.
    
    Without a store the session works purely in memory and the
    persistence methods do nothing.
    """
    
    def __init__(
        self,
        store: Optional[SnapshotStoreInterface] = None,
        meeting: Optional[Meeting] = None,
        categories: Optional[Iterable[SalaryCategory]] = None,
    ):
        self._store = store
        self._meeting = meeting or Meeting()
        self._categories: list[SalaryCategory] = []
        for category in categories or []:
            self._append_category(category)
    
    @property
    def meeting(self) -> Meeting:
        return self._meeting
    
    @property
    def categories(self) -> tuple[SalaryCategory, ...]:
        return tuple(self._categories)
    
    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------
    
    def find_category(self, title: str) -> Optional[SalaryCategory]:
        """Look up a category by title (surrounding whitespace ignored)."""
        title = title.strip()
        for category in self._categories:
            if category.title == title:
                return category
        return None
    
    def add_category(self, title: str, annual_salary: float) -> SalaryCategory:
        """
        Create and register a new category.
        
        Raises:
            EmptyTitleError: If the title is blank
            InvalidSalaryError: If the salary is not positive
            DuplicateCategoryError: If the title is already taken
        """
        category = SalaryCategory.create(title, annual_salary)
        self._append_category(category)
        logger.info("category_added", title=category.title, salary=category.annual_salary)
        return category
    
    def delete_category(self, title: str) -> bool:
        """
        Remove a category from the list.
        
        Attendees already in the meeting keep their frozen salary.
        
        Returns:
            True if a category was removed
        """
        category = self.find_category(title)
        if category is None:
            return False
        self._categories.remove(category)
        logger.info("category_deleted", title=category.title)
        return True
    
    # -------------------------------------------------------------------------
    # Attendees
    # -------------------------------------------------------------------------
    
    def add_attendees(self, title: str, count: int) -> None:
        """
        Add attendees of a registered category to the meeting.
        
        Raises:
            InvalidCountError: If count is not a non-negative integer
            UnknownCategoryError: If no category has this title
        """
        count = validate_count(count)
        category = self.find_category(title)
        if category is None:
            raise UnknownCategoryError(title)
        self._meeting.add_attendee(category, count)
    
    def remove_attendees(self, title: str, count: int) -> None:
        """
        Remove attendees from the meeting. Unknown titles are ignored.
        
        Raises:
            InvalidCountError: If count is not a non-negative integer
        """
        count = validate_count(count)
        self._meeting.remove_attendee(title.strip(), count)
    
    def apply_snapshot(self, snapshot: Iterable[AttendeeSnapshot]) -> list[AttendeeSnapshot]:
        """
        Replace the meeting's attendees with a saved composition.
        
        Salaries come from the current category list. Records whose title
        has no matching category are skipped.
        
        Returns:
            The skipped records
        """
        self._meeting.clear_attendees()
        skipped = []
        for record in snapshot:
            category = self.find_category(record.title)
            if category is None:
                skipped.append(record)
                continue
            self._meeting.add_attendee(category, record.count)
        
        if skipped:
            logger.warning(
                "snapshot_titles_unknown",
                titles=[record.title for record in skipped],
            )
        return skipped
    
    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------
    
    def load(self, restore_attendees: bool = False) -> None:
        """
        Load categories, and optionally the saved attendees, from the store.
        
        Storage errors propagate to the caller and leave the current
        categories in place, so a later save cannot clobber the file.
        """
        if self._store is None:
            return
        loaded: list[SalaryCategory] = []
        for category in self._store.load_categories():
            if any(c.title == category.title for c in loaded):
                raise DuplicateCategoryError(f"Category already exists: {category.title}")
            loaded.append(category)
        self._categories = loaded
        if restore_attendees:
            self.apply_snapshot(self._store.load_attendee_snapshot())
    
    def save_categories(self) -> None:
        if self._store is None:
            return
        self._store.save_categories(self._categories)
    
    def save_attendees(self) -> None:
        if self._store is None:
            return
        self._store.save_attendee_snapshot(self._meeting.to_snapshot())
    
    def close(self, save_attendees: bool = False) -> None:
        """Stop the meeting and persist state, as a front end does on exit."""
        self._meeting.stop()
        self.save_categories()
        if save_attendees:
            self.save_attendees()
    
    def _append_category(self, category: SalaryCategory) -> None:
        if self.find_category(category.title) is not None:
            raise DuplicateCategoryError(f"Category already exists: {category.title}")
        self._categories.append(category)


def create_app_components(
    settings: Optional[Settings] = None,
    clock: Optional[Clock] = None,
) -> MeetingSession:
    """
    Factory function to create a ready-to-use session.
    
    Configures logging, binds a TOML store to the configured data
    directory and loads stored state.
    
    Args:
        settings: Settings to use. Defaults to get_settings().
        clock: Time source for the meeting. Defaults to the monotonic clock.
    
    Returns:
        A loaded MeetingSession
    
    Raises:
        ValidationError: If the environment holds an invalid setting
        StorageError: If stored data exists but cannot be read or parsed
    """
    if settings is None:
        checks = validate_all_settings()
        errors = {k: v for k, v in checks.items() if k.endswith("_error")}
        if errors:
            logger.error("settings_invalid", **errors)
        settings = get_settings()
    app_settings = settings.app
    storage_settings = settings.storage
    
    configure_logging(app_settings.log_level, app_settings.json_logs)
    
    store = TomlSnapshotStore.from_settings(storage_settings)
    session = MeetingSession(store=store, meeting=Meeting(clock=clock))
    session.load(restore_attendees=app_settings.restore_attendees)
    
    logger.info(
        "session_ready",
        environment=app_settings.app_environment,
        data_dir=str(storage_settings.data_dir),
        categories=len(session.categories),
    )
    return session
