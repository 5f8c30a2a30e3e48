"""
Logging setup (loguru)
"""
import sys

from loguru import logger

from .config import AppConfig


def setup_logging(config: AppConfig) -> None:
    """Configure application logging"""
    # Remove default logger
    logger.remove()

    # Add console logger
    logger.add(
        sys.stderr,
        format=config.LOG_FORMAT,
        level=config.LOG_LEVEL,
        colorize=True,
    )

    # Add file logger
    log_file = config.logs_dir / "declutter.log"
    logger.add(
        log_file,
        format=config.LOG_FORMAT,
        level=config.LOG_LEVEL,
        rotation=config.LOG_ROTATION,
        retention=config.LOG_RETENTION,
        encoding="utf-8",
    )

    logger.info(f"Starting {config.APP_NAME} v{config.APP_VERSION}")
