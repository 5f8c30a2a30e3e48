"""
Settings Store - ustawienia aplikacji (geometria okna, aktywny użytkownik, jednostka)
Wartości trzymane w tabeli settings lokalnej bazy.
"""
from typing import Callable, Dict, List, Union

from loguru import logger

from .database import Database
from .errors import ValidationError
from .serialize import format_datetime, now_local
from ..Modules.habit_module.habit_enums import UnitSystem


WINDOW_WIDTH = "window-width"
WINDOW_HEIGHT = "window-height"
WINDOW_IS_MAXIMIZED = "window-is-maximized"
ACTIVE_USER_ID = "active-user-id"
UNIT_SYSTEM = "unit-system"

# Znane klucze i ich wartości domyślne (typ wartości = typ klucza)
DEFAULTS: Dict[str, Union[int, bool, UnitSystem]] = {
    WINDOW_WIDTH: 1024,
    WINDOW_HEIGHT: 768,
    WINDOW_IS_MAXIMIZED: False,
    ACTIVE_USER_ID: 0,
    UNIT_SYSTEM: UnitSystem.default(),
}

# callback(unit_system)
UnitSystemChangedCallback = Callable[[UnitSystem], None]


class SettingsStore:
    """Odczyt i zapis nazwanych ustawień typu int/bool oraz preferowanej jednostki"""

    def __init__(self, database: Database):
        self.database = database
        self._unit_system_callbacks: List[UnitSystemChangedCallback] = []

    def _check_key(self, key: str, expected: type):
        if key not in DEFAULTS:
            raise ValidationError(f"Unknown setting: {key}", key)
        if type(DEFAULTS[key]) is not expected:
            raise ValidationError(f"Setting {key} is not of type {expected.__name__}", key)

    def _get_raw(self, key: str):
        with self.database.connection() as conn:
            row = conn.execute(
                "SELECT setting_value FROM settings WHERE setting_key = ?",
                (key,)
            ).fetchone()
        return row[0] if row else None

    def _set_raw(self, key: str, value: str):
        with self.database.connection() as conn:
            conn.execute("""
                INSERT INTO settings (setting_key, setting_value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(setting_key)
                DO UPDATE SET
                    setting_value = excluded.setting_value,
                    updated_at = excluded.updated_at
            """, (key, value, format_datetime(now_local())))
        logger.debug(f"[SETTINGS] Set setting: {key} = {value}")

    def get_int(self, key: str) -> int:
        self._check_key(key, int)
        raw = self._get_raw(key)
        if raw is None:
            return DEFAULTS[key]
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"[SETTINGS] Invalid value for {key}: {raw!r}, using default")
            return DEFAULTS[key]

    def set_int(self, key: str, value: int):
        self._check_key(key, int)
        self._set_raw(key, str(int(value)))

    def get_bool(self, key: str) -> bool:
        self._check_key(key, bool)
        raw = self._get_raw(key)
        if raw is None:
            return DEFAULTS[key]
        return raw == "1"

    def set_bool(self, key: str, value: bool):
        self._check_key(key, bool)
        self._set_raw(key, "1" if value else "0")

    @property
    def window_width(self) -> int:
        return self.get_int(WINDOW_WIDTH)

    @property
    def window_height(self) -> int:
        return self.get_int(WINDOW_HEIGHT)

    @property
    def window_is_maximized(self) -> bool:
        return self.get_bool(WINDOW_IS_MAXIMIZED)

    @property
    def active_user_id(self) -> int:
        return self.get_int(ACTIVE_USER_ID)

    @active_user_id.setter
    def active_user_id(self, user_id: int):
        self.set_int(ACTIVE_USER_ID, user_id)

    def get_unit_system(self) -> UnitSystem:
        self._check_key(UNIT_SYSTEM, UnitSystem)
        raw = self._get_raw(UNIT_SYSTEM)
        if raw is None:
            return DEFAULTS[UNIT_SYSTEM]
        try:
            return UnitSystem.parse(raw)
        except ValidationError:
            logger.warning(f"[SETTINGS] Invalid value for {UNIT_SYSTEM}: {raw!r}, using default")
            return DEFAULTS[UNIT_SYSTEM]

    def set_unit_system(self, value: UnitSystem):
        """Zapisz preferowaną jednostkę i powiadom zarejestrowane callbacki"""
        self._check_key(UNIT_SYSTEM, UnitSystem)
        if not isinstance(value, UnitSystem):
            raise ValidationError(f"Setting {UNIT_SYSTEM} requires a UnitSystem, got {value!r}", value)
        self._set_raw(UNIT_SYSTEM, value.as_str())
        for callback in self._unit_system_callbacks:
            callback(value)

    def connect_unit_system_changed(self, callback: UnitSystemChangedCallback):
        """Zarejestruj callback wywoływany po zmianie jednostki"""
        self._unit_system_callbacks.append(callback)

    @property
    def unit_system(self) -> UnitSystem:
        return self.get_unit_system()

    @unit_system.setter
    def unit_system(self, value: UnitSystem):
        self.set_unit_system(value)
