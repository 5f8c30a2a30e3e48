"""
Main entry point for Declutter
"""
import sys

from loguru import logger

from declutter.core.config import AppConfig, ensure_directories
from declutter.core.database import Database
from declutter.core.logging_setup import setup_logging
from declutter.core.serialize import now_local
from declutter.core.settings_store import SettingsStore
from declutter.Modules.habit_module import HabitListModel, HabitLocalDatabase


def create_initial_user(habit_db: HabitLocalDatabase, settings: SettingsStore, config: AppConfig) -> int:
    """Utwórz pierwszego użytkownika i ustaw go jako aktywnego"""
    user = habit_db.users.create(config.DEFAULT_USER_NAME, now_local())
    settings.active_user_id = user.id
    logger.info(f"Created initial user (ID: {user.id})")
    return user.id


def main() -> int:
    """Main application entry point"""
    try:
        # Setup
        config = AppConfig()
        ensure_directories(config)
        setup_logging(config)

        database = Database(config.db_path)
        settings = SettingsStore(database)
        habit_db = HabitLocalDatabase(database)

        user_id = settings.active_user_id
        if user_id <= 0:
            user_id = create_initial_user(habit_db, settings, config)

        habits = HabitListModel(habit_db.habits.find_by_user(user_id, include_archived=False))
        logger.info(f"Active user {user_id}: {len(habits)} active habits")
        for habit in habits:
            frequency = habit.frequency
            logger.info(
                f"  {habit.name}: {frequency.comparator.to_symbol()} {frequency.target_value} "
                f"{frequency.unit} ({frequency.duration_kind})"
            )

        logger.info("Application initialized successfully")
        return 0

    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
