"""
Structured logging configuration for the exoplanet classifier.
Provides JSON-formatted per-component logs plus a colorized console sink.
"""

import logging
import os
import sys
from pathlib import Path

from loguru import logger


class LogConfig:
    """Centralized logging configuration."""

    LOG_DIR = Path(os.environ.get("EXOCLASSIFIER_LOG_DIR", "data/logs"))
    LOG_FORMAT = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )
    COMPONENTS = (
        "predictions",
        "validation",
    )

    @classmethod
    def setup(cls, log_level: str = "INFO", enable_json: bool = True):
        """
        Set up logging for the entire application.

        Args:
            log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            enable_json: Whether to enable JSON logging to files
        """
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

        # Remove default and previously configured sinks
        logger.remove()

        logger.add(
            sys.stderr,
            format=cls.LOG_FORMAT,
            level=log_level,
            colorize=True,
        )

        if enable_json:
            for component in cls.COMPONENTS:
                logger.add(
                    cls.LOG_DIR / f"{component}.jsonl",
                    format="{message}",
                    level="INFO",
                    rotation="1 day",
                    retention="30 days",
                    compression="zip",
                    serialize=True,
                    enqueue=True,
                    filter=lambda record, comp=component: record["extra"].get("component") == comp,
                )

        logger.add(
            cls.LOG_DIR / "application.log",
            format=cls.LOG_FORMAT,
            level=log_level,
            rotation="500 MB",
            retention="7 days",
            compression="zip",
            enqueue=True,
        )

        logger.info(f"Logging initialized at level {log_level}")


def get_logger(component: str):
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., 'predictions', 'validation')

    Returns:
        Configured logger instance

    Example:
        >>> from exoclassifier.utils.logging_config import get_logger
        >>> logger = get_logger("predictions")
        >>> logger.info("Classified KOI", predicted_class="Confirmed")
    """
    return logger.bind(component=component)


# Initialize logging on module import with default settings
# Can be reconfigured by calling LogConfig.setup() explicitly
try:
    LogConfig.setup(log_level="INFO", enable_json=True)
except OSError as e:
    # Log directory not writable; keep loguru's default stderr sink
    logging.basicConfig(level=logging.INFO)
    logging.warning(f"Failed to initialize file logging: {e}")
