"""
Tests for MeetingSession and create_app_components.

Storage is real TOML under tmp_path; time is a ManualClock.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from meeting_cost_tracker.config import Settings
from meeting_cost_tracker.meeting import Meeting
from meeting_cost_tracker.models import (
    AttendeeSnapshot,
    EmptyTitleError,
    InvalidCountError,
    InvalidSalaryError,
    SalaryCategory,
)
from meeting_cost_tracker.orchestrator import (
    DuplicateCategoryError,
    MeetingSession,
    UnknownCategoryError,
    create_app_components,
)
from meeting_cost_tracker.services.storage import (
    StorageParseError,
    TomlSnapshotStore,
    load_attendee_snapshot,
    load_categories,
    save_attendee_snapshot,
    save_categories,
)


@pytest.fixture
def store(tmp_path) -> TomlSnapshotStore:
    return TomlSnapshotStore(tmp_path)


@pytest.fixture
def session(store, meeting) -> MeetingSession:
    return MeetingSession(store=store, meeting=meeting)


class TestCategoryManagement:
    """Tests for the session's category list."""
    
    def test_add_category(self, session):
        """Test a new category is validated and registered."""
        category = session.add_category(" Engineer ", 120_000)
        assert category == SalaryCategory.create("Engineer", 120_000)
        assert session.categories == (category,)
    
    def test_add_category_validation(self, session):
        """Test invalid input surfaces the category validation errors."""
        with pytest.raises(EmptyTitleError):
            session.add_category("", 100)
        with pytest.raises(InvalidSalaryError):
            session.add_category("Dev", 0)
        assert session.categories == ()
    
    def test_duplicate_title_rejected(self, session):
        """Test category titles are unique within the session."""
        session.add_category("Dev", 100_000)
        with pytest.raises(DuplicateCategoryError):
            session.add_category("Dev", 200_000)
        assert len(session.categories) == 1
    
    def test_duplicate_in_initial_list_rejected(self):
        """Test the constructor enforces unique titles too."""
        dev = SalaryCategory.create("Dev", 1)
        with pytest.raises(DuplicateCategoryError):
            MeetingSession(categories=[dev, SalaryCategory.create("Dev", 2)])
    
    def test_delete_category(self, session):
        """Test deleting by title and deleting an unknown title."""
        session.add_category("Dev", 100_000)
        assert session.delete_category("Dev") is True
        assert session.delete_category("Dev") is False
        assert session.categories == ()
    
    def test_delete_category_keeps_attendees(self, session):
        """Test deleting a category does not touch people already in the meeting."""
        session.add_category("Dev", 100_000)
        session.add_attendees("Dev", 2)
        session.delete_category("Dev")
        assert session.meeting.attendee_count("Dev") == 2
    
    def test_categories_property_is_a_copy(self, session):
        """Test callers cannot mutate the session's list through the property."""
        session.add_category("Dev", 100_000)
        categories = session.categories
        assert isinstance(categories, tuple)


class TestSessionAttendees:
    """Tests for driving the meeting by category title."""
    
    def test_add_attendees_by_title(self, session):
        """Test adding attendees looks up the registered category."""
        session.add_category("Dev", 100_000)
        session.add_attendees(" Dev ", 3)
        (entry,) = session.meeting.attendees()
        assert entry == ("Dev", 100_000, 3)
    
    def test_add_attendees_unknown_title(self, session):
        """Test adding for an unregistered title raises UnknownCategoryError."""
        with pytest.raises(UnknownCategoryError):
            session.add_attendees("Ghost", 1)
    
    @pytest.mark.parametrize("count", [-1, 2.5, "2"])
    def test_counts_validated_at_boundary(self, session, count):
        """Test bad counts are rejected before reaching the meeting."""
        session.add_category("Dev", 100_000)
        with pytest.raises(InvalidCountError):
            session.add_attendees("Dev", count)
        with pytest.raises(InvalidCountError):
            session.remove_attendees("Dev", count)
        assert session.meeting.attendees() == ()
    
    def test_remove_attendees(self, session):
        """Test removing attendees by title."""
        session.add_category("Dev", 100_000)
        session.add_attendees("Dev", 3)
        session.remove_attendees("Dev", 1)
        assert session.meeting.attendee_count("Dev") == 2
        session.remove_attendees("Dev", 10)
        assert session.meeting.attendee_count("Dev") is None
    
    def test_apply_snapshot_prices_from_current_categories(self, session):
        """Test a snapshot is restored with salaries from the category list."""
        session.add_category("Dev", 100_000)
        session.add_category("PM", 120_000)
        skipped = session.apply_snapshot([
            AttendeeSnapshot(title="Dev", count=2),
            AttendeeSnapshot(title="PM", count=1),
            AttendeeSnapshot(title="Ghost", count=4),
        ])
        assert skipped == [AttendeeSnapshot(title="Ghost", count=4)]
        assert set(session.meeting.attendees()) == {
            ("Dev", 100_000, 2),
            ("PM", 120_000, 1),
        }
    
    def test_apply_snapshot_replaces_attendees(self, session):
        """Test applying a snapshot clears the previous composition."""
        session.add_category("Dev", 100_000)
        session.add_category("PM", 120_000)
        session.add_attendees("PM", 5)
        session.apply_snapshot([AttendeeSnapshot(title="Dev", count=1)])
        assert session.meeting.attendee_count("PM") is None
        assert session.meeting.attendee_count("Dev") == 1


class TestSessionPersistence:
    """Tests for loading and saving through the store."""
    
    def test_load_categories_from_store(self, tmp_path, session):
        """Test load() replaces the category list with the stored one."""
        stored = [SalaryCategory.create("Dev", 100_000)]
        save_categories(tmp_path / "categories.toml", stored)
        session.add_category("Temp", 1)
        session.load()
        assert session.categories == tuple(stored)
    
    def test_load_restores_attendees_when_asked(self, tmp_path, session):
        """Test load(restore_attendees=True) reapplies the saved snapshot."""
        save_categories(tmp_path / "categories.toml", [SalaryCategory.create("Dev", 100_000)])
        save_attendee_snapshot(tmp_path / "attendees.toml", [AttendeeSnapshot(title="Dev", count=2)])
        session.load()
        assert session.meeting.attendees() == ()
        session.load(restore_attendees=True)
        assert session.meeting.attendee_count("Dev") == 2
    
    def test_load_propagates_parse_errors(self, tmp_path, session):
        """Test a malformed file is reported, not swallowed."""
        (tmp_path / "categories.toml").write_text("not = = toml", encoding="utf-8")
        with pytest.raises(StorageParseError):
            session.load()
    
    def test_failed_load_keeps_categories(self, tmp_path, session):
        """Test a failed load leaves the current categories untouched."""
        dev = session.add_category("Dev", 100_000)
        (tmp_path / "categories.toml").write_text("not = = toml", encoding="utf-8")
        with pytest.raises(StorageParseError):
            session.load()
        assert session.categories == (dev,)
    
    def test_close_after_failed_load_does_not_empty_file(self, tmp_path, session):
        """Test saving after a failed load writes the categories the session still has."""
        session.add_category("Dev", 100_000)
        session.save_categories()
        (tmp_path / "categories.toml").write_text("not = = toml", encoding="utf-8")
        with pytest.raises(StorageParseError):
            session.load()
        session.close()
        assert load_categories(tmp_path / "categories.toml") == [
            SalaryCategory.create("Dev", 100_000)
        ]
    
    def test_save_and_close(self, tmp_path, session, clock):
        """Test close() stops the meeting and persists categories and attendees."""
        session.add_category("Dev", 100_000)
        session.add_attendees("Dev", 2)
        session.meeting.start()
        clock.advance_ms(100)
        session.close(save_attendees=True)
        
        assert not session.meeting.is_running()
        assert session.meeting.duration() == timedelta(milliseconds=100)
        assert load_categories(tmp_path / "categories.toml") == [
            SalaryCategory.create("Dev", 100_000)
        ]
        assert load_attendee_snapshot(tmp_path / "attendees.toml") == [
            AttendeeSnapshot(title="Dev", count=2)
        ]
    
    def test_close_without_attendees(self, tmp_path, session):
        """Test attendees are only written when requested."""
        session.add_category("Dev", 100_000)
        session.close()
        assert (tmp_path / "categories.toml").exists()
        assert not (tmp_path / "attendees.toml").exists()
    
    def test_in_memory_session(self, clock):
        """Test a session without a store works and persists nothing."""
        session = MeetingSession(meeting=Meeting(clock=clock))
        session.add_category("Dev", 100_000)
        session.load()
        session.close(save_attendees=True)
        assert len(session.categories) == 1


class TestCreateAppComponents:
    """Tests for the factory."""
    
    def test_creates_loaded_session(self, tmp_path, monkeypatch, clock):
        """Test the factory binds storage to the configured data directory."""
        save_categories(tmp_path / "categories.toml", [SalaryCategory.create("Dev", 100_000)])
        monkeypatch.setenv("MCT_STORAGE_DATA_DIR", str(tmp_path))
        
        session = create_app_components(settings=Settings(), clock=clock)
        
        assert [c.title for c in session.categories] == ["Dev"]
        assert session.meeting.attendees() == ()
        session.meeting.start()
        clock.advance_ms(20)
        assert session.meeting.duration() == timedelta(milliseconds=20)
    
    def test_restores_attendees_from_settings(self, tmp_path, monkeypatch):
        """Test MCT_RESTORE_ATTENDEES reloads the saved snapshot on startup."""
        save_categories(tmp_path / "categories.toml", [SalaryCategory.create("Dev", 100_000)])
        save_attendee_snapshot(tmp_path / "attendees.toml", [AttendeeSnapshot(title="Dev", count=3)])
        monkeypatch.setenv("MCT_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("MCT_RESTORE_ATTENDEES", "true")
        
        session = create_app_components()
        
        assert session.meeting.attendee_count("Dev") == 3
    
    def test_empty_data_dir(self, tmp_path, monkeypatch):
        """Test a fresh data directory gives an empty session."""
        monkeypatch.setenv("MCT_STORAGE_DATA_DIR", str(tmp_path / "new"))
        session = create_app_components()
        assert session.categories == ()
    
    def test_invalid_environment_rejected(self, tmp_path, monkeypatch):
        """Test a bad setting stops startup before any storage is touched."""
        monkeypatch.setenv("MCT_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("MCT_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            create_app_components()
        assert list(tmp_path.iterdir()) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
