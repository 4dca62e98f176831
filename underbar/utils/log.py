"""
Logger configuration for the underbar package.

Library modules log through get_logger() and never install output handlers on
their own. setup_logger() is for applications that want the package's
formatted stdout output instead of their own root configuration.
"""

import logging
import sys

from underbar.config.settings import LoggingSettings

__all__ = ["setup_logger", "get_logger"]

ROOT_LOGGER_NAME = "underbar"


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Settings not passed explicitly come from LoggingSettings.from_env()
    (UNDERBAR_LOG_LEVEL, UNDERBAR_LOG_FORMAT).

    Args:
        name: Logger name (typically the package name)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    if level is None or format_string is None:
        settings = LoggingSettings.from_env()
        level = level or settings.level
        format_string = format_string or settings.format_string

    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(fmt=format_string, datefmt="%Y-%m-%d %H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, level.upper()))
        logger.propagate = False

    return logger


def get_logger(module_name: str) -> logging.Logger:
    """
    Return a child of the package logger for a module.

    The package logger only carries a NullHandler and keeps propagating, so
    records reach whatever handlers the application configured on the root
    logger. Call setup_logger() to opt into the package's own stdout output.
    """
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())
    if module_name == ROOT_LOGGER_NAME or module_name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(module_name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")
