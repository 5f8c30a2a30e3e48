"""
Habit Models - Modele danych dla nawyków, wpisów i użytkowników
Rekordy odpowiadają wierszom tabel habit / habit_entry / user.
"""
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from typing import Any, Dict, List, Optional
import sqlite3

from ...core.errors import DecodeError, ValidationError
from ...core.serialize import (
    decode_datetime_list,
    decode_json,
    encode_datetime_list,
    encode_json,
    format_datetime,
    now_local,
    parse_datetime,
    parse_optional_datetime,
)
from .frequency import Frequency
from .habit_enums import HabitCategory
from .habit_names import HabitName


def encode_categories(categories: Optional[List[HabitCategory]]) -> Optional[str]:
    if categories is None:
        return None
    return encode_json([c.as_str() for c in categories])


def decode_categories(raw: Optional[str]) -> Optional[List[HabitCategory]]:
    if raw is None:
        return None

    data = decode_json(raw, 'categories')
    if not isinstance(data, list):
        raise DecodeError("Column 'categories' must hold a JSON list", column='categories', raw=raw)

    try:
        return [HabitCategory.parse(item) for item in data]
    except ValidationError as e:
        raise DecodeError(str(e), column='categories', raw=raw) from e


def _decode_frequency(raw: str) -> Frequency:
    data = decode_json(raw, 'frequency')
    if not isinstance(data, dict):
        raise DecodeError("Column 'frequency' must hold a JSON object", column='frequency', raw=raw)
    return Frequency.from_dict(data)


@dataclass
class Habit:
    """Model nawyku (tabela habit)"""
    id: int
    user_id: int
    name: str
    frequency: Frequency
    created_at: datetime
    description: Optional[str] = None
    categories: Optional[List[HabitCategory]] = None
    icon: Optional[str] = None
    updated_at: Optional[datetime] = None
    reminder_times: Optional[List[datetime]] = None
    note: Optional[str] = None
    archived: bool = False
    archived_date: Optional[datetime] = None
    archived_reason: Optional[str] = None

    @property
    def habit_name(self) -> HabitName:
        """Nazwa z katalogu (CUSTOM dla nazw własnych)"""
        return HabitName.lookup(self.name)

    def to_dict(self) -> dict:
        """Konwertuj na słownik (kolumny złożone jako struktury JSON)"""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'description': self.description,
            'categories': [c.as_str() for c in self.categories] if self.categories is not None else None,
            'icon': self.icon,
            'frequency': self.frequency.to_dict(),
            'created_at': self.created_at.isoformat(),
            'updated_at': format_datetime(self.updated_at),
            'reminder_times': [t.isoformat() for t in self.reminder_times] if self.reminder_times is not None else None,
            'note': self.note,
            'archived': self.archived,
            'archived_date': format_datetime(self.archived_date),
            'archived_reason': self.archived_reason,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Habit':
        categories = data.get('categories')
        reminder_times = data.get('reminder_times')
        return Habit(
            id=data['id'],
            user_id=data['user_id'],
            name=data['name'],
            description=data.get('description'),
            categories=[HabitCategory.parse(c) for c in categories] if categories is not None else None,
            icon=data.get('icon'),
            frequency=Frequency.from_dict(data['frequency']),
            created_at=parse_datetime(data['created_at'], 'created_at'),
            updated_at=parse_optional_datetime(data.get('updated_at'), 'updated_at'),
            reminder_times=[parse_datetime(t, 'reminder_times') for t in reminder_times] if reminder_times is not None else None,
            note=data.get('note'),
            archived=bool(data.get('archived', False)),
            archived_date=parse_optional_datetime(data.get('archived_date'), 'archived_date'),
            archived_reason=data.get('archived_reason'),
        )

    @staticmethod
    def from_row(row: sqlite3.Row) -> 'Habit':
        """
        Zmapuj wiersz tabeli habit na model.

        Raises:
            DecodeError: uszkodzony JSON w categories / frequency / reminder_times
        """
        return Habit(
            id=row['id'],
            user_id=row['user_id'],
            name=row['name'],
            description=row['description'],
            categories=decode_categories(row['categories']),
            icon=row['icon'],
            frequency=_decode_frequency(row['frequency']),
            created_at=parse_datetime(row['created_at'], 'created_at'),
            updated_at=parse_optional_datetime(row['updated_at'], 'updated_at'),
            reminder_times=decode_datetime_list(row['reminder_times'], 'reminder_times'),
            note=row['note'],
            archived=bool(row['archived']),
            archived_date=parse_optional_datetime(row['archived_date'], 'archived_date'),
            archived_reason=row['archived_reason'],
        )


@dataclass
class HabitUpdate:
    """
    Pełny zestaw kolumn zmienialnych nawyku.

    Update zastępuje wszystkie kolumny, więc łatkę najwygodniej budować
    z istniejącego rekordu: ``HabitUpdate.from_habit(habit, archived=True)``.
    """
    user_id: int
    name: str
    frequency: Frequency
    description: Optional[str] = None
    categories: Optional[List[HabitCategory]] = None
    icon: Optional[str] = None
    reminder_times: Optional[List[datetime]] = None
    note: Optional[str] = None
    archived: bool = False
    archived_date: Optional[datetime] = None
    archived_reason: Optional[str] = None

    @classmethod
    def from_habit(cls, habit: Habit, **changes) -> 'HabitUpdate':
        values = {f.name: getattr(habit, f.name) for f in fields(cls)}
        unknown = set(changes) - set(values)
        if unknown:
            raise ValidationError(f"Not an updatable habit field: {', '.join(sorted(unknown))}")
        values.update(changes)
        return cls(**values)

    def to_params(self, updated_at: datetime) -> tuple:
        """Parametry dla UPDATE habit (bez id)"""
        return (
            self.user_id,
            self.name,
            self.description,
            encode_categories(self.categories),
            self.icon,
            encode_json(self.frequency.to_dict()),
            format_datetime(updated_at),
            encode_datetime_list(self.reminder_times),
            self.note,
            int(self.archived),
            format_datetime(self.archived_date),
            self.archived_reason,
        )


@dataclass
class HabitEntry:
    """Model wpisu nawyku (tabela habit_entry)"""
    id: int
    user_id: int
    habit_id: int
    entry_time: datetime
    note: Optional[str] = None
    value: int = 0

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'habit_id': self.habit_id,
            'entry_time': self.entry_time.isoformat(),
            'note': self.note,
            'value': self.value,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'HabitEntry':
        return HabitEntry(
            id=data['id'],
            user_id=data['user_id'],
            habit_id=data['habit_id'],
            entry_time=parse_datetime(data['entry_time'], 'entry_time'),
            note=data.get('note'),
            value=int(data.get('value', 0)),
        )

    @staticmethod
    def from_row(row: sqlite3.Row) -> 'HabitEntry':
        return HabitEntry.from_dict(dict(row))


@dataclass
class HabitEntryUpdate:
    """Kolumny zmienialne wpisu"""
    user_id: int
    habit_id: int
    note: Optional[str] = None
    value: int = 0

    @classmethod
    def from_entry(cls, entry: HabitEntry, **changes) -> 'HabitEntryUpdate':
        values = {f.name: getattr(entry, f.name) for f in fields(cls)}
        unknown = set(changes) - set(values)
        if unknown:
            raise ValidationError(f"Not an updatable entry field: {', '.join(sorted(unknown))}")
        values.update(changes)
        return cls(**values)


@dataclass
class User:
    """Model użytkownika (tabela user)"""
    id: int
    name: str
    date_of_birth: datetime
    created_at: datetime = field(default_factory=now_local)

    def age(self, today: Optional[date] = None) -> int:
        """
        Pełne lata od daty urodzenia.

        Args:
            today: Dzień odniesienia (domyślnie dzisiaj)
        """
        if today is None:
            today = now_local().date()
        born = self.date_of_birth.date() if isinstance(self.date_of_birth, datetime) else self.date_of_birth

        years = today.year - born.year
        if (today.month, today.day) < (born.month, born.day):
            years -= 1
        return years

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'date_of_birth': self.date_of_birth.isoformat(),
            'created_at': self.created_at.isoformat(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'User':
        return User(
            id=data['id'],
            name=data['name'],
            date_of_birth=parse_datetime(data['date_of_birth'], 'date_of_birth'),
            created_at=parse_datetime(data['created_at'], 'created_at'),
        )

    @staticmethod
    def from_row(row: sqlite3.Row) -> 'User':
        return User.from_dict(dict(row))


@dataclass
class UserUpdate:
    """Zmiany użytkownika; None = bez zmian"""
    name: Optional[str] = None
    date_of_birth: Optional[datetime] = None

    def apply_to(self, user: User) -> User:
        changes = {}
        if self.name is not None:
            changes['name'] = self.name
        if self.date_of_birth is not None:
            changes['date_of_birth'] = self.date_of_birth
        return replace(user, **changes)
