"""
Unit tests for habit repositories
Tests: CRUD operations, JSON columns, error taxonomy
"""
import sqlite3
from datetime import date, datetime, timedelta, timezone

import pytest

from declutter.core.errors import DecodeError, NotFoundError, StorageError
from declutter.Modules.habit_module import (
    Compare,
    DurationKind,
    Frequency,
    HabitCategory,
    HabitEntryUpdate,
    HabitName,
    HabitUpdate,
    UnitSystem,
    User,
    UserUpdate,
    Weekday,
)


class TestHabitCRUD:
    """Test Habit CRUD operations"""

    def test_create_and_find_roundtrip(self, habit_db, test_user):
        """Test creating a habit and reading it back"""
        frequency = Frequency.new(DurationKind.DAILY, UnitSystem.MINUTES, 30, None, Compare.GREATER_OR_EQUAL)
        reminders = [datetime(2024, 3, 1, 7, 30), datetime(2024, 3, 1, 20, 0)]

        habit = habit_db.habits.create(
            user_id=test_user.id,
            name="meditation",
            description="Practice mindfulness and meditation.",
            categories=[HabitCategory.MIND, HabitCategory.HEALTH],
            icon="lotus",
            frequency=frequency,
            reminder_times=reminders,
            note="morning",
        )

        found = habit_db.habits.find(habit.id)
        assert found == habit
        assert found.frequency.weekdays == list(Weekday)
        assert found.archived is False
        assert found.updated_at is None

    def test_create_defaults(self, habit_db, test_user):
        habit = habit_db.habits.create(test_user.id, "journaling")
        found = habit_db.habits.find(habit.id)

        assert found.frequency == Frequency.new()
        assert found.categories is None
        assert found.reminder_times is None
        assert found.description is None

    def test_create_returns_distinct_ids(self, habit_db, test_user):
        first = habit_db.habits.create(test_user.id, "reading")
        second = habit_db.habits.create(test_user.id, "writing")
        assert first.id != second.id
        assert habit_db.habits.find(first.id).name == "reading"
        assert habit_db.habits.find(second.id).name == "writing"

    def test_update_archived_keeps_archived_date(self, habit_db, sample_habit):
        """Test update replaces columns and stamps updated_at"""
        patch = HabitUpdate.from_habit(sample_habit, archived=True)
        habit_db.habits.update(sample_habit, patch)

        found = habit_db.habits.find(sample_habit.id)
        assert found.archived is True
        assert found.archived_date is None
        assert found.updated_at is not None
        assert sample_habit.archived is True
        assert sample_habit.updated_at == found.updated_at

    def test_update_replaces_every_column(self, habit_db, sample_habit):
        patch = HabitUpdate.from_habit(
            sample_habit,
            name="running",
            description=None,
            categories=[HabitCategory.BODY],
            frequency=Frequency.new(DurationKind.WEEKLY, UnitSystem.KILOMETERS, 20),
        )
        habit_db.habits.update(sample_habit, patch)

        found = habit_db.habits.find(sample_habit.id)
        assert found.name == "running"
        assert found.description is None
        assert found.categories == [HabitCategory.BODY]
        assert found.frequency.weekdays is None
        assert found.frequency.unit is UnitSystem.KILOMETERS
        assert found == sample_habit

    def test_update_unknown_field(self, sample_habit):
        with pytest.raises(ValueError):
            HabitUpdate.from_habit(sample_habit, created_at=datetime.now())

    def test_update_deleted_habit_raises(self, habit_db, sample_habit):
        habit_db.habits.delete(sample_habit)
        with pytest.raises(NotFoundError):
            habit_db.habits.update(sample_habit, HabitUpdate.from_habit(sample_habit, note="x"))

    def test_archive(self, habit_db, sample_habit):
        habit_db.habits.archive(sample_habit, reason="done")

        found = habit_db.habits.find(sample_habit.id)
        assert found.archived is True
        assert found.archived_reason == "done"
        assert found.archived_date is not None

    def test_find_missing_raises(self, habit_db):
        with pytest.raises(NotFoundError) as exc_info:
            habit_db.habits.find(999)
        assert exc_info.value.entity_id == 999

    def test_find_all_newest_first(self, habit_db, test_user):
        ids = [habit_db.habits.create(test_user.id, name).id for name in ("reading", "writing", "music")]
        assert [h.id for h in habit_db.habits.find_all()] == sorted(ids, reverse=True)

    def test_find_by_user(self, habit_db, test_user, sample_habit):
        other_user = habit_db.users.create("Other", datetime(2000, 1, 1))
        habit_db.habits.create(other_user.id, "cooking")
        archived = habit_db.habits.create(test_user.id, "drawing")
        habit_db.habits.archive(archived)

        all_habits = habit_db.habits.find_by_user(test_user.id)
        active = habit_db.habits.find_by_user(test_user.id, include_archived=False)

        assert [h.id for h in all_habits] == [archived.id, sample_habit.id]
        assert [h.id for h in active] == [sample_habit.id]

    def test_delete(self, habit_db, sample_habit):
        habit_db.habits.delete(sample_habit)
        with pytest.raises(NotFoundError):
            habit_db.habits.find(sample_habit.id)
        # Ponowne usunięcie nie zgłasza błędu
        habit_db.habits.delete(sample_habit)

    def test_created_habit_does_not_share_catalogue_frequency(self, habit_db, test_user):
        info = HabitName.EXERCISE.info()
        habit = habit_db.habits.create(test_user.id, "exercise", frequency=info.frequency)

        habit.frequency.target_value = 45
        habit.frequency.weekdays.remove(Weekday.SUNDAY)

        assert info.frequency.target_value == 30
        defaults = HabitName.EXERCISE.info().frequency
        assert (defaults.target_value, len(defaults.weekdays)) == (30, 7)

    def test_update_copies_patch_values(self, habit_db, sample_habit):
        categories = [HabitCategory.BODY]
        frequency = Frequency.new(unit=UnitSystem.MINUTES, target_value=15)
        habit_db.habits.update(
            sample_habit,
            HabitUpdate.from_habit(sample_habit, categories=categories, frequency=frequency),
        )

        categories.append(HabitCategory.MIND)
        frequency.target_value = 99

        assert sample_habit.categories == [HabitCategory.BODY]
        assert sample_habit.frequency.target_value == 15
        assert habit_db.habits.find(sample_habit.id) == sample_habit

    def test_delete_habit_with_entries(self, habit_db, test_user, sample_habit):
        habit_db.entries.create(test_user.id, sample_habit.id, value=10)
        habit_db.entries.create(test_user.id, sample_habit.id, value=20)

        with pytest.raises(StorageError):
            habit_db.habits.delete(sample_habit)
        assert habit_db.habits.find(sample_habit.id).id == sample_habit.id

        assert habit_db.entries.delete_by_habit(sample_habit.id) == 2
        habit_db.habits.delete(sample_habit)
        with pytest.raises(NotFoundError):
            habit_db.habits.find(sample_habit.id)

    def test_habit_name_property(self, sample_habit):
        assert sample_habit.habit_name is HabitName.READING


class TestStorageErrors:
    """Test error taxonomy at the storage boundary"""

    def test_unknown_user_raises_storage_error(self, habit_db):
        with pytest.raises(StorageError):
            habit_db.habits.create(user_id=12345, name="reading")
        assert habit_db.habits.find_all() == []

    def test_delete_user_with_habits_raises(self, habit_db, test_user, sample_habit):
        with pytest.raises(StorageError):
            habit_db.users.delete(test_user)
        assert habit_db.users.find(test_user.id).name == "Test User"

    def test_malformed_frequency_raises_decode_error(self, habit_db, database, sample_habit):
        conn = sqlite3.connect(str(database.db_path))
        conn.execute("UPDATE habit SET frequency = ? WHERE id = ?", ("{not json", sample_habit.id))
        conn.commit()
        conn.close()

        with pytest.raises(DecodeError) as exc_info:
            habit_db.habits.find(sample_habit.id)
        assert exc_info.value.column == "frequency"

    def test_malformed_categories_raises_decode_error(self, habit_db, database, sample_habit):
        conn = sqlite3.connect(str(database.db_path))
        conn.execute("UPDATE habit SET categories = ? WHERE id = ?", ('["sports"]', sample_habit.id))
        conn.commit()
        conn.close()

        with pytest.raises(DecodeError):
            habit_db.habits.find_all()


class TestHabitEntryCRUD:
    """Test HabitEntry CRUD operations"""

    def test_create_stamps_now(self, habit_db, test_user, sample_habit):
        before = datetime.now().astimezone()
        entry = habit_db.entries.create(test_user.id, sample_habit.id, value=25, note="chapter 3")

        assert entry.entry_time >= before
        assert habit_db.entries.find(entry.id) == entry

    def test_update(self, habit_db, test_user, sample_habit):
        entry = habit_db.entries.create(test_user.id, sample_habit.id, value=10)
        habit_db.entries.update(entry, HabitEntryUpdate.from_entry(entry, value=45, note="long session"))

        found = habit_db.entries.find(entry.id)
        assert found.value == 45
        assert found.note == "long session"
        assert found.entry_time == entry.entry_time

    def test_find_by_habit(self, habit_db, test_user, sample_habit):
        other = habit_db.habits.create(test_user.id, "walking")
        habit_db.entries.create(test_user.id, sample_habit.id, value=20, entry_time=datetime(2024, 3, 2, 9, 0))
        habit_db.entries.create(test_user.id, other.id, value=5000)
        habit_db.entries.create(test_user.id, sample_habit.id, value=40, entry_time=datetime(2024, 3, 1, 9, 0))

        entries = habit_db.entries.find_by_habit(sample_habit.id)
        assert [e.value for e in entries] == [40, 20]

    def test_find_by_habit_orders_across_offsets(self, habit_db, test_user, sample_habit):
        warsaw = timezone(timedelta(hours=2))
        new_york = timezone(timedelta(hours=-4))
        # 08:00+02:00 = 06:00 UTC, 04:00-04:00 = 08:00 UTC
        habit_db.entries.create(test_user.id, sample_habit.id, value=2, entry_time=datetime(2024, 3, 1, 4, 0, tzinfo=new_york))
        habit_db.entries.create(test_user.id, sample_habit.id, value=1, entry_time=datetime(2024, 3, 1, 8, 0, tzinfo=warsaw))

        entries = habit_db.entries.find_by_habit(sample_habit.id)
        assert [e.value for e in entries] == [1, 2]
        assert all(e.entry_time.utcoffset() == timedelta(0) for e in entries)
        assert entries[0].entry_time == datetime(2024, 3, 1, 6, 0, tzinfo=timezone.utc)

    def test_find_all_and_delete(self, habit_db, test_user, sample_habit):
        first = habit_db.entries.create(test_user.id, sample_habit.id, value=1)
        second = habit_db.entries.create(test_user.id, sample_habit.id, value=2)
        assert [e.id for e in habit_db.entries.find_all()] == [second.id, first.id]

        habit_db.entries.delete(first)
        with pytest.raises(NotFoundError):
            habit_db.entries.find(first.id)

    def test_entry_for_unknown_habit_raises(self, habit_db, test_user):
        with pytest.raises(StorageError):
            habit_db.entries.create(test_user.id, 999, value=1)


class TestUserCRUD:
    """Test User CRUD operations and age"""

    def test_create_find_count(self, habit_db, test_user):
        assert habit_db.users.count() == 1
        found = habit_db.users.find(test_user.id)
        assert found.name == "Test User"
        assert found.date_of_birth == datetime(1990, 6, 15)

    def test_find_all_insertion_order(self, habit_db, test_user):
        second = habit_db.users.create("Second", datetime(1985, 1, 1))
        assert [u.id for u in habit_db.users.find_all()] == [test_user.id, second.id]

    def test_update_partial(self, habit_db, test_user):
        habit_db.users.update(test_user, UserUpdate(name="Renamed"))

        found = habit_db.users.find(test_user.id)
        assert found.name == "Renamed"
        assert found.date_of_birth == datetime(1990, 6, 15)

    def test_delete(self, habit_db, test_user):
        habit_db.users.delete(test_user)
        assert habit_db.users.count() == 0

    @pytest.mark.parametrize("today, expected", [
        (date(2024, 6, 14), 33),
        (date(2024, 6, 15), 34),
        (date(2024, 12, 31), 34),
        (date(2025, 1, 1), 34),
    ])
    def test_age(self, today, expected):
        user = User(id=1, name="A", date_of_birth=datetime(1990, 6, 15))
        assert user.age(today) == expected
