"""Logging infrastructure for the redis counter package.

This module provides a centralized logging configuration and factory
for all redis counter components.

Example:
    >>> from redis_counter.logging import configure_logging, get_logger
    >>> configure_logging(level=logging.DEBUG)
    >>> logger = get_logger("invocation")
    >>> logger.debug("Batch sent")
"""

import logging
from typing import Optional


REDIS_COUNTER_ROOT_LOGGER = "redis_counter"


class CounterLoggerFactory:
    """Factory for creating and managing component loggers.

    Provides hierarchical loggers under the 'redis_counter' namespace,
    allowing fine-grained control over logging levels per component.
    """

    @classmethod
    def get_logger(cls, name: str = "") -> logging.Logger:
        """Get a logger for a component.

        Args:
            name: Component name (e.g., 'connection', 'invocation').
                  If empty, returns the root redis_counter logger.

        Returns:
            A logger instance for the specified component.
        """
        if name:
            logger_name = f"{REDIS_COUNTER_ROOT_LOGGER}.{name}"
        else:
            logger_name = REDIS_COUNTER_ROOT_LOGGER
        return logging.getLogger(logger_name)

    @classmethod
    def configure(
        cls,
        level: int = logging.INFO,
        format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handler: Optional[logging.Handler] = None,
    ) -> logging.Logger:
        """Configure the logging system.

        Args:
            level: Logging level (e.g., logging.DEBUG, logging.INFO).
            format_string: Format string for log messages.
            handler: Optional custom handler. If None, a StreamHandler is used.

        Returns:
            The configured root logger.
        """
        logger = logging.getLogger(REDIS_COUNTER_ROOT_LOGGER)
        logger.setLevel(level)

        if not logger.handlers:
            if handler is None:
                handler = logging.StreamHandler()
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter(format_string))
            logger.addHandler(handler)

        return logger

    @classmethod
    def set_level(cls, level: int, component: str = "") -> None:
        """Set logging level for a specific component or the root logger."""
        cls.get_logger(component).setLevel(level)


def get_logger(name: str = "") -> logging.Logger:
    """Get a logger for a component.

    Args:
        name: Component name (e.g., 'connection', 'client', 'proxy').

    Returns:
        Logger instance for the component.
    """
    return CounterLoggerFactory.get_logger(name)


def configure_logging(
    level: int = logging.INFO,
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Configure the logging system.

    This is the primary entry point for setting up logging. Nothing is
    emitted to a handler until this is called or the application
    configures the ``redis_counter`` logger itself.
    """
    return CounterLoggerFactory.configure(level, format_string, handler)


def set_level(level: int, component: str = "") -> None:
    """Set logging level for a component."""
    CounterLoggerFactory.set_level(level, component)
