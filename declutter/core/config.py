"""
Configuration Module for Declutter
Konfiguracja aplikacji z wykorzystaniem zmiennych środowiskowych (prefix DECLUTTER_)
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Konfiguracja aplikacji"""

    # Application
    APP_NAME: str = "Declutter"
    APP_VERSION: str = "0.1.0"
    DEFAULT_USER_NAME: str = "User"

    # Database
    DATA_DIR: Path = Path.home() / ".declutter"
    DB_FILENAME: str = "declutter.db"

    # Logging
    LOGS_DIR: Optional[Path] = None  # domyślnie DATA_DIR / "logs"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
    )
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "14 days"

    model_config = SettingsConfigDict(
        env_prefix="DECLUTTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def db_path(self) -> Path:
        """Pełna ścieżka do pliku bazy SQLite"""
        return self.DATA_DIR / self.DB_FILENAME

    @property
    def logs_dir(self) -> Path:
        return self.LOGS_DIR or self.DATA_DIR / "logs"


def ensure_directories(config: AppConfig) -> None:
    """Utwórz katalogi danych i logów"""
    config.DATA_DIR.mkdir(parents=True, exist_ok=True)
    config.logs_dir.mkdir(parents=True, exist_ok=True)
