"""
Habit List Model - lista nawyków z powiadomieniami o zmianach dla widoku
"""
from typing import Callable, Iterable, List, Optional

from loguru import logger

from .habit_models import Habit


# callback(index, removed, added)
ItemsChangedCallback = Callable[[int, int, int], None]


class HabitListModel:
    """
    Uporządkowana lista nawyków.

    Każda zmiana wywołuje zarejestrowane callbacki z pozycją zmiany,
    liczbą usuniętych i liczbą dodanych elementów.
    """

    def __init__(self, items: Optional[Iterable[Habit]] = None):
        self._items: List[Habit] = list(items) if items is not None else []
        self._callbacks: List[ItemsChangedCallback] = []

    def connect_items_changed(self, callback: ItemsChangedCallback):
        """Zarejestruj callback wywoływany po każdej zmianie listy"""
        self._callbacks.append(callback)

    def _emit_items_changed(self, index: int, removed: int, added: int):
        for callback in self._callbacks:
            callback(index, removed, added)

    def append(self, item: Habit):
        index = len(self._items)
        self._items.append(item)
        self._emit_items_changed(index, 0, 1)

    def extend(self, items: Iterable[Habit]):
        items = list(items)
        if not items:
            return
        index = len(self._items)
        self._items.extend(items)
        self._emit_items_changed(index, 0, len(items))

    def remove(self, index: int):
        """
        Usuń element na pozycji.

        Raises:
            IndexError: pozycja poza listą
        """
        if not 0 <= index < len(self._items):
            raise IndexError(f"Habit list index out of range: {index}")
        del self._items[index]
        self._emit_items_changed(index, 1, 0)

    def clear(self):
        removed = len(self._items)
        if removed == 0:
            return
        self._items.clear()
        self._emit_items_changed(0, removed, 0)
        logger.debug(f"[HABIT LIST] Cleared {removed} habits")

    def item(self, position: int) -> Optional[Habit]:
        """Element na pozycji albo None poza zakresem"""
        if 0 <= position < len(self._items):
            return self._items[position]
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, position: int) -> Habit:
        return self._items[position]

    def __iter__(self):
        return iter(self._items)
