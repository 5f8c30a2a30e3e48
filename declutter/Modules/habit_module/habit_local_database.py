"""
Habit Local Database - repozytoria nawyków, wpisów i użytkowników
Operacje CRUD na tabelach habit / habit_entry / user w lokalnej bazie SQLite.
"""
from dataclasses import fields, replace
from datetime import datetime
from typing import List, Optional

from loguru import logger

from ...core.database import Database
from ...core.errors import NotFoundError
from ...core.serialize import encode_datetime_list, encode_json, format_datetime, now_local, to_utc
from .frequency import Frequency
from .habit_enums import HabitCategory
from .habit_models import (
    Habit,
    HabitEntry,
    HabitEntryUpdate,
    HabitUpdate,
    User,
    UserUpdate,
    encode_categories,
)


class HabitLocalDatabase:
    """Punkt dostępu do repozytoriów modułu nawyków"""

    def __init__(self, database: Database):
        """
        Args:
            database: Otwarta lokalna baza (schemat już utworzony)
        """
        self.database = database
        self.habits = HabitRepository(self)
        self.entries = HabitEntryRepository(self)
        self.users = UserRepository(self)
        logger.info(f"[HABIT DB] Repositories ready at {database.db_path}")

    def connection(self):
        return self.database.connection()


class HabitRepository:
    """CRUD dla tabeli habit"""

    def __init__(self, db: HabitLocalDatabase):
        self.db = db

    def create(
        self,
        user_id: int,
        name: str,
        frequency: Optional[Frequency] = None,
        description: Optional[str] = None,
        categories: Optional[List[HabitCategory]] = None,
        icon: Optional[str] = None,
        reminder_times: Optional[List[datetime]] = None,
        note: Optional[str] = None,
    ) -> Habit:
        """
        Dodaj nawyk i zwróć rekord z nadanym ID.

        Raises:
            StorageError: naruszenie ograniczeń (np. nieistniejący user_id)
        """
        if frequency is None:
            frequency = Frequency.new()
        created_at = now_local()

        with self.db.connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO habit (
                    user_id, name, description, categories, icon, frequency,
                    created_at, reminder_times, note, archived
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, 0)
            """, (
                user_id,
                name,
                description,
                encode_categories(categories),
                icon,
                encode_json(frequency.to_dict()),
                format_datetime(created_at),
                encode_datetime_list(reminder_times),
                note,
            ))
            habit_id = cursor.lastrowid

        logger.info(f"[HABIT DB] Created habit '{name}' (ID: {habit_id}, user: {user_id})")
        return Habit(
            id=habit_id,
            user_id=user_id,
            name=name,
            description=description,
            categories=list(categories) if categories is not None else None,
            icon=icon,
            frequency=replace(frequency),
            created_at=created_at,
            reminder_times=list(reminder_times) if reminder_times is not None else None,
            note=note,
        )

    def find(self, habit_id: int) -> Habit:
        """
        Raises:
            NotFoundError: brak nawyku o podanym ID
            DecodeError: uszkodzona kolumna JSON
        """
        with self.db.connection() as conn:
            row = conn.execute("SELECT * FROM habit WHERE id = ?", (habit_id,)).fetchone()

        if row is None:
            raise NotFoundError('Habit', habit_id)
        return Habit.from_row(row)

    def find_all(self) -> List[Habit]:
        with self.db.connection() as conn:
            rows = conn.execute("SELECT * FROM habit ORDER BY id DESC").fetchall()

        habits = [Habit.from_row(row) for row in rows]
        logger.debug(f"[HABIT DB] Retrieved {len(habits)} habits")
        return habits

    def find_by_user(self, user_id: int, include_archived: bool = True) -> List[Habit]:
        query = "SELECT * FROM habit WHERE user_id = ?"
        if not include_archived:
            query += " AND archived = 0"
        query += " ORDER BY id DESC"

        with self.db.connection() as conn:
            rows = conn.execute(query, (user_id,)).fetchall()
        return [Habit.from_row(row) for row in rows]

    def update(self, habit: Habit, patch: HabitUpdate):
        """
        Zastąp wszystkie kolumny zmienialne i ustaw updated_at na teraz.

        Rekord w pamięci jest odświeżany wartościami z łatki.

        Raises:
            NotFoundError: wiersz już nie istnieje
            StorageError: naruszenie ograniczeń
        """
        updated_at = now_local()

        with self.db.connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                UPDATE habit SET
                    user_id = ?,
                    name = ?,
                    description = ?,
                    categories = ?,
                    icon = ?,
                    frequency = ?,
                    updated_at = ?,
                    reminder_times = ?,
                    note = ?,
                    archived = ?,
                    archived_date = ?,
                    archived_reason = ?
                WHERE id = ?
            """, patch.to_params(updated_at) + (habit.id,))
            updated = cursor.rowcount

        if updated == 0:
            logger.warning(f"[HABIT DB] Habit {habit.id} not found or already deleted")
            raise NotFoundError('Habit', habit.id)

        for f in fields(HabitUpdate):
            value = getattr(patch, f.name)
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, Frequency):
                value = replace(value)
            setattr(habit, f.name, value)
        habit.updated_at = updated_at
        logger.info(f"[HABIT DB] Updated habit ID: {habit.id}")

    def archive(self, habit: Habit, reason: Optional[str] = None):
        """Oznacz nawyk jako zarchiwizowany (data = teraz)"""
        patch = HabitUpdate.from_habit(
            habit,
            archived=True,
            archived_date=now_local(),
            archived_reason=reason,
        )
        self.update(habit, patch)

    def delete(self, habit: Habit):
        """
        Raises:
            StorageError: nawyk ma jeszcze wpisy (najpierw entries.delete_by_habit)
        """
        with self.db.connection() as conn:
            cursor = conn.execute("DELETE FROM habit WHERE id = ?", (habit.id,))
            deleted = cursor.rowcount

        if deleted:
            logger.info(f"[HABIT DB] Deleted habit ID: {habit.id}")
        else:
            logger.warning(f"[HABIT DB] Habit {habit.id} not found or already deleted")


class HabitEntryRepository:
    """CRUD dla tabeli habit_entry"""

    def __init__(self, db: HabitLocalDatabase):
        self.db = db

    def create(
        self,
        user_id: int,
        habit_id: int,
        value: int = 0,
        note: Optional[str] = None,
        entry_time: Optional[datetime] = None,
    ) -> HabitEntry:
        """Zapisz wpis (domyślnie z bieżącym czasem)"""
        if entry_time is None:
            entry_time = now_local()
        # Jedna strefa (UTC), żeby ORDER BY entry_time porządkował chronologicznie
        entry_time = to_utc(entry_time)

        with self.db.connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO habit_entry (user_id, habit_id, entry_time, note, value)
                VALUES (?, ?, ?, ?, ?)
            """, (user_id, habit_id, format_datetime(entry_time), note, value))
            entry_id = cursor.lastrowid

        logger.debug(f"[HABIT DB] Created entry {entry_id} for habit {habit_id}: {value}")
        return HabitEntry(
            id=entry_id,
            user_id=user_id,
            habit_id=habit_id,
            entry_time=entry_time,
            note=note,
            value=value,
        )

    def find(self, entry_id: int) -> HabitEntry:
        with self.db.connection() as conn:
            row = conn.execute("SELECT * FROM habit_entry WHERE id = ?", (entry_id,)).fetchone()

        if row is None:
            raise NotFoundError('HabitEntry', entry_id)
        return HabitEntry.from_row(row)

    def find_all(self) -> List[HabitEntry]:
        with self.db.connection() as conn:
            rows = conn.execute("SELECT * FROM habit_entry ORDER BY id DESC").fetchall()
        return [HabitEntry.from_row(row) for row in rows]

    def find_by_habit(self, habit_id: int) -> List[HabitEntry]:
        """Wpisy nawyku od najstarszego"""
        with self.db.connection() as conn:
            rows = conn.execute(
                "SELECT * FROM habit_entry WHERE habit_id = ? ORDER BY entry_time, id",
                (habit_id,)
            ).fetchall()

        entries = [HabitEntry.from_row(row) for row in rows]
        logger.debug(f"[HABIT DB] Retrieved {len(entries)} entries for habit {habit_id}")
        return entries

    def update(self, entry: HabitEntry, patch: HabitEntryUpdate):
        with self.db.connection() as conn:
            cursor = conn.execute("""
                UPDATE habit_entry SET
                    user_id = ?,
                    habit_id = ?,
                    note = ?,
                    value = ?
                WHERE id = ?
            """, (patch.user_id, patch.habit_id, patch.note, patch.value, entry.id))
            updated = cursor.rowcount

        if updated == 0:
            raise NotFoundError('HabitEntry', entry.id)

        entry.user_id = patch.user_id
        entry.habit_id = patch.habit_id
        entry.note = patch.note
        entry.value = patch.value

    def delete(self, entry: HabitEntry):
        with self.db.connection() as conn:
            conn.execute("DELETE FROM habit_entry WHERE id = ?", (entry.id,))
        logger.debug(f"[HABIT DB] Deleted entry ID: {entry.id}")

    def delete_by_habit(self, habit_id: int) -> int:
        """
        Usuń wszystkie wpisy nawyku (przed usunięciem samego nawyku).

        Returns:
            Liczba usuniętych wpisów
        """
        with self.db.connection() as conn:
            cursor = conn.execute("DELETE FROM habit_entry WHERE habit_id = ?", (habit_id,))
            deleted = cursor.rowcount

        logger.info(f"[HABIT DB] Deleted {deleted} entries for habit {habit_id}")
        return deleted


class UserRepository:
    """CRUD dla tabeli user"""

    def __init__(self, db: HabitLocalDatabase):
        self.db = db

    def create(self, name: str, date_of_birth: datetime) -> User:
        created_at = now_local()

        with self.db.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                'INSERT INTO "user" (name, date_of_birth, created_at) VALUES (?, ?, ?)',
                (name, format_datetime(date_of_birth), format_datetime(created_at))
            )
            user_id = cursor.lastrowid

        logger.info(f"[HABIT DB] Created user '{name}' (ID: {user_id})")
        return User(id=user_id, name=name, date_of_birth=date_of_birth, created_at=created_at)

    def find(self, user_id: int) -> User:
        with self.db.connection() as conn:
            row = conn.execute('SELECT * FROM "user" WHERE id = ?', (user_id,)).fetchone()

        if row is None:
            raise NotFoundError('User', user_id)
        return User.from_row(row)

    def find_all(self) -> List[User]:
        with self.db.connection() as conn:
            rows = conn.execute('SELECT * FROM "user" ORDER BY id').fetchall()
        return [User.from_row(row) for row in rows]

    def count(self) -> int:
        with self.db.connection() as conn:
            return conn.execute('SELECT COUNT(*) FROM "user"').fetchone()[0]

    def update(self, user: User, patch: UserUpdate):
        updated_user = patch.apply_to(user)

        with self.db.connection() as conn:
            cursor = conn.execute(
                'UPDATE "user" SET name = ?, date_of_birth = ? WHERE id = ?',
                (updated_user.name, format_datetime(updated_user.date_of_birth), user.id)
            )
            updated = cursor.rowcount

        if updated == 0:
            raise NotFoundError('User', user.id)

        user.name = updated_user.name
        user.date_of_birth = updated_user.date_of_birth
        logger.info(f"[HABIT DB] Updated user ID: {user.id}")

    def delete(self, user: User):
        """
        Raises:
            StorageError: użytkownik ma jeszcze nawyki lub wpisy
        """
        with self.db.connection() as conn:
            conn.execute('DELETE FROM "user" WHERE id = ?', (user.id,))
        logger.info(f"[HABIT DB] Deleted user ID: {user.id}")
