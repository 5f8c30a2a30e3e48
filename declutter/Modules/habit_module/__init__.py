"""
Moduł Habit - Nawyki, cele i wpisy
==================================
"""

from .habit_enums import (
    Compare,
    DurationKind,
    UnitSystem,
    HabitCategory,
    Weekday,
    FULL_WEEK,
)

from .frequency import Frequency

from .habit_names import (
    HabitName,
    HabitInfo,
)

from .habit_category_map import HabitCategoryMap

from .habit_models import (
    Habit,
    HabitUpdate,
    HabitEntry,
    HabitEntryUpdate,
    User,
    UserUpdate,
)

from .habit_local_database import (
    HabitLocalDatabase,
    HabitRepository,
    HabitEntryRepository,
    UserRepository,
)

from .habit_list_model import HabitListModel

__all__ = [
    # Enums
    'Compare',
    'DurationKind',
    'UnitSystem',
    'HabitCategory',
    'Weekday',
    'FULL_WEEK',

    # Frequency / katalog
    'Frequency',
    'HabitName',
    'HabitInfo',
    'HabitCategoryMap',

    # Models
    'Habit',
    'HabitUpdate',
    'HabitEntry',
    'HabitEntryUpdate',
    'User',
    'UserUpdate',

    # Database
    'HabitLocalDatabase',
    'HabitRepository',
    'HabitEntryRepository',
    'UserRepository',

    # Collaborators
    'HabitListModel',
]
