"""Logging infrastructure for OmniBOR Core.

Key components:
    get_omnibor_logger: Factory function for creating library loggers
    setup_logging: Configure library loggers from settings or a YAML file
    LoggingConfig: Configuration class for logging settings

Example:
    >>> from omnibor_core.logging import get_omnibor_logger
    >>>
    >>> logger = get_omnibor_logger(__name__)
    >>> logger.info("Hashing dependencies")

Note:
    Never import Python's logging module directly. Always use
    get_omnibor_logger() for consistent Prefect integration.
"""

from .logging_config import LoggingConfig, get_omnibor_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "setup_logging",
    "get_omnibor_logger",
]
