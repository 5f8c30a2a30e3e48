"""
Habit Enums - zamknięte słowniki wartości opisujące cel nawyku
Compare, DurationKind, UnitSystem, HabitCategory, Weekday
"""
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from ...core.errors import ValidationError


class CodecEnum(Enum):
    """
    Enum z kanonicznym zapisem snake_case.

    Wartość członka jest jego tekstem kanonicznym; porządek wyznacza
    kolejność deklaracji.
    """

    @classmethod
    def parse(cls, text: str):
        """Utwórz z tekstu kanonicznego, np. 'greater_or_equal'"""
        try:
            return cls(text)
        except ValueError as e:
            raise ValidationError(f"Invalid {cls.__name__}: {text!r}", text) from e

    @classmethod
    def default(cls):
        return cls._default_member()

    @classmethod
    def _default_member(cls):
        raise NotImplementedError

    @classmethod
    def all(cls) -> list:
        return list(cls)

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    def _position(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other: Any):
        if type(other) is not type(self):
            return NotImplemented
        return self._position() < other._position()

    def __le__(self, other: Any):
        if type(other) is not type(self):
            return NotImplemented
        return self._position() <= other._position()

    def __gt__(self, other: Any):
        if type(other) is not type(self):
            return NotImplemented
        return self._position() > other._position()

    def __ge__(self, other: Any):
        if type(other) is not type(self):
            return NotImplemented
        return self._position() >= other._position()


class Compare(CodecEnum):
    """Operator porównania"""
    GREATER = "greater"
    GREATER_OR_EQUAL = "greater_or_equal"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    LESS_OR_EQUAL = "less_or_equal"
    LESS = "less"

    @classmethod
    def _default_member(cls):
        return cls.EQUAL

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional['Compare']:
        """'>=' -> GREATER_OR_EQUAL; None dla nieznanego symbolu"""
        return _SYMBOL_TO_COMPARE.get(symbol)

    def to_symbol(self) -> str:
        return _COMPARE_TO_SYMBOL[self]

    def compare(self, a: Any, b: Any) -> bool:
        """Zastosuj operator do pary (a, b)"""
        if self is Compare.GREATER:
            return a > b
        if self is Compare.GREATER_OR_EQUAL:
            return a >= b
        if self is Compare.EQUAL:
            return a == b
        if self is Compare.NOT_EQUAL:
            return a != b
        if self is Compare.LESS_OR_EQUAL:
            return a <= b
        return a < b


_COMPARE_TO_SYMBOL = {
    Compare.GREATER: ">",
    Compare.GREATER_OR_EQUAL: ">=",
    Compare.EQUAL: "==",
    Compare.NOT_EQUAL: "!=",
    Compare.LESS_OR_EQUAL: "<=",
    Compare.LESS: "<",
}
_SYMBOL_TO_COMPARE = {symbol: member for member, symbol in _COMPARE_TO_SYMBOL.items()}


class DurationKind(CodecEnum):
    """Okres, w którym mierzony jest cel nawyku"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def _default_member(cls):
        return cls.DAILY

    @property
    def seconds(self) -> int:
        return _DURATION_SECONDS[self]

    def to_duration(self, quantity: float) -> timedelta:
        """Ilość okresów -> timedelta (pełne sekundy, miesiąc = 30 dni)"""
        return timedelta(seconds=int(quantity * self.seconds))

    def from_duration(self, duration: timedelta) -> float:
        return duration.total_seconds() / self.seconds


_DURATION_SECONDS = {
    DurationKind.DAILY: 86400,
    DurationKind.WEEKLY: 604800,
    DurationKind.MONTHLY: 2592000,
}


class UnitSystem(CodecEnum):
    """Jednostka wartości docelowej (tylko etykieta, bez przeliczeń)"""
    # Ogólne
    COUNT = "count"
    # Czas
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    # Tekst
    PAGES = "pages"
    WORDS = "words"
    # Finanse
    CURRENCY = "currency"
    # Objętość
    MILLILITERS = "milliliters"
    LITERS = "liters"
    GALLONS = "gallons"
    # Dystans
    METERS = "meters"
    KILOMETERS = "kilometers"
    YARDS = "yards"
    MILES = "miles"
    # Waga
    GRAMS = "grams"
    KILOGRAMS = "kilograms"
    POUNDS = "pounds"
    OUNCES = "ounces"
    CALORIES = "calories"
    STEPS = "steps"
    UNIT = "unit"

    @classmethod
    def _default_member(cls):
        return cls.UNIT


class HabitCategory(CodecEnum):
    """Kategoria tematyczna nawyku"""
    BODY = "body"
    MIND = "mind"
    HEALTH = "health"
    STUDY = "study"
    PRODUCTIVITY = "productivity"
    FINANCE = "finance"
    SOCIAL = "social"
    ABSTRACTION = "abstraction"
    OTHER = "other"

    @classmethod
    def _default_member(cls):
        return cls.OTHER


class Weekday(CodecEnum):
    """Dzień tygodnia (kolejność ISO: poniedziałek = 1)"""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def _default_member(cls):
        return cls.MONDAY

    @classmethod
    def from_iso_weekday(cls, number: int) -> 'Weekday':
        if not 1 <= number <= 7:
            raise ValidationError(f"Invalid ISO weekday number: {number}", number)
        return list(cls)[number - 1]

    @classmethod
    def from_datetime(cls, value: date) -> 'Weekday':
        """Dzień tygodnia z daty/timestampu"""
        return cls.from_iso_weekday(value.isoweekday())

    @classmethod
    def from_short_str(cls, short: str) -> Optional['Weekday']:
        """'Mon' -> MONDAY; None gdy nieznany"""
        for day in cls:
            if day.as_short_str() == short:
                return day
        return None

    @classmethod
    def from_short_str_uppercase(cls, short: str) -> Optional['Weekday']:
        """'MON' -> MONDAY; None gdy nieznany"""
        for day in cls:
            if day.as_short_str_uppercase() == short:
                return day
        return None

    @classmethod
    def range(cls, start: 'Weekday', end: 'Weekday') -> List['Weekday']:
        """
        Dni od start do end włącznie, idąc do przodu.

        Zakres "wstecz" zawija się przez koniec tygodnia, np.
        range(THURSDAY, MONDAY) == [THU, FRI, SAT, SUN, MON].
        """
        days = []
        current = start
        while current is not end:
            days.append(current)
            current = current.next()
        days.append(end)
        return days

    @classmethod
    def range_datetime(cls, start: date, end: date) -> Dict[date, 'Weekday']:
        """Mapa dzień -> Weekday dla kolejnych dni od start do end"""
        days = {}
        current = start
        while current < end:
            days[current] = cls.from_datetime(current)
            current = current + timedelta(days=1)
        days[end] = cls.from_datetime(end)
        return days

    def iso_number(self) -> int:
        return self._position() + 1

    def as_short_str(self) -> str:
        return self.value[:3].capitalize()

    def as_short_str_uppercase(self) -> str:
        return self.value[:3].upper()

    def next(self) -> 'Weekday':
        return self.next_n(1)

    def previous(self) -> 'Weekday':
        return self.previous_n(1)

    def next_n(self, n: int) -> 'Weekday':
        days = list(Weekday)
        return days[(self._position() + n) % 7]

    def previous_n(self, n: int) -> 'Weekday':
        days = list(Weekday)
        return days[(self._position() - n) % 7]


FULL_WEEK = tuple(Weekday)
