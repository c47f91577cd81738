import logging
import sys

NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "sqlalchemy.engine", "aiosqlite", "asyncio")


def configure_logging(
    level: str = "INFO",
    fmt: str = "%(levelname)s - %(asctime)s - %(name)s - %(message)s",
) -> None:
    """Configure logging for the application."""
    # Configure root logger to capture all logs
    logging.basicConfig(
        level=level.upper(),
        format=fmt,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,  # Override any existing configuration
    )

    # Set specific log levels for noisy libraries
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Handlers and levels come from the root logger set up by configure_logging.

    Args:
        name: The name of the logger (e.g., __name__)

    Returns:
        A logger instance.
    """
    return logging.getLogger(name)
