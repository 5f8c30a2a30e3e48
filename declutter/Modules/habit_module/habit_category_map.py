"""
Habit Category Map - dwukierunkowy indeks nawyk <-> kategoria
"""
from typing import Dict, Iterable, List, Optional

from loguru import logger

from .habit_enums import HabitCategory
from .habit_names import HabitName


# Wbudowana taksonomia: kategoria -> nawyki
_SEED_TAXONOMY = {
    HabitCategory.BODY: [HabitName.EXERCISE, HabitName.WALKING, HabitName.RUNNING],
    HabitCategory.MIND: [HabitName.MEDITATION, HabitName.READING],
    HabitCategory.HEALTH: [
        HabitName.NO_SMOKING, HabitName.NO_DRINKING, HabitName.NO_SUGAR, HabitName.NO_FAST_FOOD,
    ],
    HabitCategory.STUDY: [HabitName.LEARNING, HabitName.ONLINE_COURSE, HabitName.LEARNING_LANGUAGE],
    HabitCategory.PRODUCTIVITY: [HabitName.PROGRAMMING, HabitName.WRITING],
    HabitCategory.FINANCE: [HabitName.INVESTING, HabitName.SAVING_MONEY],
    HabitCategory.SOCIAL: [HabitName.SOCIALIZING],
    HabitCategory.ABSTRACTION: [HabitName.DRAWING, HabitName.MUSIC, HabitName.JOURNALING],
    HabitCategory.OTHER: [
        HabitName.COOKING, HabitName.CLEANING, HabitName.GARDENING, HabitName.SWIMMING, HabitName.YOGA,
    ],
}


class HabitCategoryMap:
    """
    Relacja wiele-do-wielu między nawykami a kategoriami.

    ``add`` i ``remove`` utrzymują oba indeksy symetrycznie i bez duplikatów.
    ``insert_*`` nadpisują listę po stronie klucza, a po drugiej stronie
    tylko dopisują, więc powtórne wywołanie może zostawić duplikaty
    w indeksie odwrotnym.
    """

    def __init__(self, seed: bool = True):
        self.categories_per_habit: Dict[HabitName, List[HabitCategory]] = {}
        self.habits_per_category: Dict[HabitCategory, List[HabitName]] = {}

        if seed:
            for category, habits in _SEED_TAXONOMY.items():
                self.habits_per_category[category] = list(habits)
                for habit in habits:
                    self.categories_per_habit.setdefault(habit, []).append(category)

    @classmethod
    def empty(cls) -> 'HabitCategoryMap':
        """Mapa bez żadnych kluczy"""
        return cls(seed=False)

    def add(self, habit: HabitName, category: HabitCategory):
        categories = self.categories_per_habit.setdefault(habit, [])
        if category not in categories:
            categories.append(category)

        habits = self.habits_per_category.setdefault(category, [])
        if habit not in habits:
            habits.append(habit)

    def insert_habit_with_categories(self, habit: HabitName, categories: Iterable[HabitCategory]):
        categories = list(categories)
        self.categories_per_habit[habit] = categories
        for category in categories:
            self.habits_per_category.setdefault(category, []).append(habit)

    def insert_category_with_habits(self, category: HabitCategory, habits: Iterable[HabitName]):
        habits = list(habits)
        self.habits_per_category[category] = habits
        for habit in habits:
            self.categories_per_habit.setdefault(habit, []).append(category)

    def remove(self, habit: HabitName, category: HabitCategory):
        """Usuń parę z obu indeksów (klucze zostają, brak pary = no-op)"""
        removed = False

        categories = self.categories_per_habit.get(habit)
        if categories is not None and category in categories:
            categories[:] = [c for c in categories if c is not category]
            removed = True

        habits = self.habits_per_category.get(category)
        if habits is not None and habit in habits:
            habits[:] = [h for h in habits if h is not habit]
            removed = True

        if removed:
            logger.debug(f"[CATEGORY MAP] Removed pairing {habit} / {category}")

    def get_categories(self, habit: HabitName) -> Optional[List[HabitCategory]]:
        categories = self.categories_per_habit.get(habit)
        return list(categories) if categories is not None else None

    def get_habits(self, category: HabitCategory) -> Optional[List[HabitName]]:
        habits = self.habits_per_category.get(category)
        return list(habits) if habits is not None else None
