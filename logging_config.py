"""
Logging configuration for the receipts application.
"""
import logging
import sys
from typing import Optional

# Top-level packages whose loggers share the app handlers
APP_LOGGERS = ("code128", "services", "api", "ui", "main")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach a console handler (and optionally a file handler) to every
    application logger namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to also write logs to.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in APP_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Avoid duplicate output when the app factory runs twice (reloader, tests)
        if logger.hasHandlers():
            logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("main").info("Logging initialized.")
