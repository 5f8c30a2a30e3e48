"""
Pytest fixtures for Declutter tests
"""
from datetime import datetime

import pytest

from declutter.core.config import AppConfig
from declutter.core.database import Database
from declutter.core.settings_store import SettingsStore
from declutter.Modules.habit_module import (
    Frequency,
    HabitCategory,
    HabitLocalDatabase,
    UnitSystem,
)


@pytest.fixture
def app_config(tmp_path):
    """Konfiguracja z katalogiem danych w katalogu tymczasowym"""
    return AppConfig(DATA_DIR=tmp_path / "data", LOG_LEVEL="DEBUG")


@pytest.fixture(scope="function")
def database(tmp_path):
    """Create a fresh database for each test"""
    return Database(tmp_path / "test_declutter.db")


@pytest.fixture
def habit_db(database):
    return HabitLocalDatabase(database)


@pytest.fixture
def settings(database):
    return SettingsStore(database)


@pytest.fixture
def test_user(habit_db):
    """Użytkownik, do którego należą nawyki w testach"""
    return habit_db.users.create("Test User", datetime(1990, 6, 15))


@pytest.fixture
def sample_habit(habit_db, test_user):
    """Sample habit: 30 minut czytania dziennie"""
    return habit_db.habits.create(
        user_id=test_user.id,
        name="reading",
        description="Read any book or blog.",
        categories=[HabitCategory.MIND],
        frequency=Frequency.new(unit=UnitSystem.MINUTES, target_value=30),
    )
