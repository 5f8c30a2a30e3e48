"""
Database - lokalna baza SQLite (local-first)
Tworzy schemat tabel habit / habit_entry / user / settings i wydaje połączenia.
"""
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from loguru import logger

from .errors import StorageError


# Kolumny opcjonalne dodane po pierwszej wersji schematu (migracja ALTER TABLE)
_HABIT_OPTIONAL_COLUMNS = {
    'categories': 'TEXT',
    'icon': 'TEXT',
    'reminder_times': 'TEXT',
    'note': 'TEXT',
    'archived_date': 'TEXT',
    'archived_reason': 'TEXT',
}


class Database:
    """
    Lokalna baza danych SQLite.

    Każda operacja otwiera własne połączenie (jeden proces, jeden plik),
    więc obiekt można bezpiecznie współdzielić między repozytoriami.
    """

    def __init__(self, db_path: Path):
        """
        Inicjalizacja lokalnej bazy danych

        Args:
            db_path: Ścieżka do pliku bazy SQLite
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_database()

    def _get_connection(self) -> sqlite3.Connection:
        """Utwórz połączenie z bazą danych"""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row  # Wyniki jako słowniki
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """
        Połączenie z commit/rollback i zamknięciem.

        Raises:
            StorageError: gdy SQLite zgłosi błąd (constraint, I/O)
        """
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            logger.error(f"[DB] Cannot open {self.db_path}: {e}")
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e

        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"[DB] Query failed: {e}")
            raise StorageError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_database(self):
        """Inicjalizuj strukturę bazy danych"""
        with self.connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS "user" (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    date_of_birth TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS habit (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id INTEGER NOT NULL REFERENCES "user"(id),
                    name TEXT NOT NULL,
                    description TEXT,
                    categories TEXT,
                    icon TEXT,
                    frequency TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT,
                    reminder_times TEXT,
                    note TEXT,
                    archived INTEGER NOT NULL DEFAULT 0,
                    archived_date TEXT,
                    archived_reason TEXT
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS habit_entry (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id INTEGER NOT NULL REFERENCES "user"(id),
                    habit_id INTEGER NOT NULL REFERENCES habit(id),
                    entry_time TEXT NOT NULL,
                    note TEXT,
                    value INTEGER NOT NULL DEFAULT 0
                )
            """)

            # Ustawienia aplikacji (klucz/wartość)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    setting_key TEXT PRIMARY KEY,
                    setting_value TEXT,
                    updated_at TEXT
                )
            """)

            cursor.execute("CREATE INDEX IF NOT EXISTS idx_habit_user ON habit(user_id)")
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_habit_entry_habit ON habit_entry(habit_id)")

            self._migrate_existing_tables(cursor)

        logger.info(f"[DB] Database initialized at {self.db_path}")

    def _migrate_existing_tables(self, cursor: sqlite3.Cursor):
        """Dodaje brakujące kolumny opcjonalne w starszych plikach bazy"""
        cursor.execute("PRAGMA table_info(habit)")
        columns = [col[1] for col in cursor.fetchall()]

        for name, sql_type in _HABIT_OPTIONAL_COLUMNS.items():
            if name not in columns:
                cursor.execute(f"ALTER TABLE habit ADD COLUMN {name} {sql_type}")
                logger.info(f"[DB] Added {name} to habit")

    def reset(self):
        """Usuń plik bazy i utwórz pusty schemat od nowa"""
        if self.db_path.exists():
            self.db_path.unlink()
            logger.warning(f"[DB] Removed database file {self.db_path}")
        self._init_database()
