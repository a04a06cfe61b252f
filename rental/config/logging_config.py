"""
Logger factory bound to the application settings.
"""

import logging

from rental.config import settings
from rental.utils.logging_utils import setup_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger configured from the logging settings.

    Args:
        name: Logger name, usually the module's __name__

    Returns:
        Configured logger
    """
    return setup_logger(
        name,
        level=settings.effective_log_level(),
        log_format=settings.logging.format,
        console_enabled=settings.logging.console_enabled,
        file_enabled=settings.logging.file_enabled,
        log_dir=settings.logs_dir,
    )
