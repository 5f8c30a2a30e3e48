"""
Frequency - reguła celu nawyku (jak często / ile)
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...core.errors import DecodeError
from .habit_enums import FULL_WEEK, Compare, DurationKind, UnitSystem, Weekday


@dataclass
class Frequency:
    """
    Cel nawyku: okres, jednostka, wartość docelowa, aktywne dni i komparator.

    Dni tygodnia mają sens tylko dla okresu dziennego: dla WEEKLY/MONTHLY
    ``weekdays`` jest zawsze None, a dla DAILY bez podanych dni
    uzupełniany jest pełny tydzień.
    """
    duration_kind: DurationKind = DurationKind.DAILY
    unit: UnitSystem = UnitSystem.COUNT
    target_value: int = 1
    weekdays: Optional[List[Weekday]] = field(default=None)
    comparator: Compare = Compare.GREATER_OR_EQUAL

    def __post_init__(self):
        if self.duration_kind is not DurationKind.DAILY:
            self.weekdays = None
        elif self.weekdays is None:
            self.weekdays = list(FULL_WEEK)
        else:
            self.weekdays = list(self.weekdays)

    @classmethod
    def new(
        cls,
        duration_kind: Optional[DurationKind] = None,
        unit: Optional[UnitSystem] = None,
        target_value: Optional[int] = None,
        weekdays: Optional[List[Weekday]] = None,
        comparator: Optional[Compare] = None,
    ) -> 'Frequency':
        """Utwórz z wartościami domyślnymi dla brakujących argumentów"""
        return cls(
            duration_kind=duration_kind if duration_kind is not None else DurationKind.DAILY,
            unit=unit if unit is not None else UnitSystem.COUNT,
            target_value=target_value if target_value is not None else 1,
            weekdays=weekdays,
            comparator=comparator if comparator is not None else Compare.GREATER_OR_EQUAL,
        )

    def is_one_time(self) -> bool:
        return self.target_value == 1

    def is_abstraction(self) -> bool:
        """Nawyk bez mierzalnej wartości (np. 'nie pal')"""
        return self.target_value == 0

    def is_scheduled_on(self, weekday: Weekday) -> bool:
        if self.weekdays is None:
            return True
        return weekday in self.weekdays

    def is_met(self, value: Any) -> bool:
        """Czy zebrana wartość spełnia cel wg komparatora"""
        return self.comparator.compare(value, self.target_value)

    def to_dict(self) -> dict:
        """Konwertuj na słownik (format kolumny habit.frequency)"""
        return {
            'duration_kind': self.duration_kind.as_str(),
            'unit': self.unit.as_str(),
            'target_value': self.target_value,
            'weekdays': [day.as_str() for day in self.weekdays] if self.weekdays is not None else None,
            'comparator': self.comparator.as_str(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Frequency':
        """
        Utwórz ze słownika zapisanego w bazie.

        Raises:
            DecodeError: brak klucza lub nieznana wartość enuma
        """
        try:
            weekdays = data.get('weekdays')
            return Frequency(
                duration_kind=DurationKind.parse(data['duration_kind']),
                unit=UnitSystem.parse(data['unit']),
                target_value=int(data['target_value']),
                weekdays=[Weekday.parse(day) for day in weekdays] if weekdays is not None else None,
                comparator=Compare.parse(data['comparator']),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            # ValidationError dziedziczy po ValueError
            raise DecodeError(f"Invalid frequency data: {e}", column='frequency') from e
