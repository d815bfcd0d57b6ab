"""Logging setup for OmniBOR Core.

Library loggers come from Prefect's ``get_logger``, which places them under the
``prefect`` hierarchy (``omnibor_core.session`` becomes
``prefect.omnibor_core.session``). The default configuration gives the
library's subtree its own stderr handler, leaving stdout to the build tool.

Usage:
    >>> from omnibor_core.logging import get_omnibor_logger
    >>> logger = get_omnibor_logger(__name__)
    >>> logger.info("Writing OmniBOR document")

Configuration comes from ``omnibor_core.settings``:
    OMNIBOR_LOG_LEVEL: Level of the library loggers (INFO, DEBUG, ...)
    OMNIBOR_LOGGING_CONFIG: YAML dictConfig file used instead of the default
"""

import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from prefect.logging import get_logger

from omnibor_core.settings import LOG_LEVELS, settings

LIBRARY_LOGGER = "omnibor_core"

_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s"


def library_logger_name() -> str:
    """Full name of the library's root logger as Prefect registers it."""
    return get_logger(LIBRARY_LOGGER).name


class LoggingConfig:
    """Logging configuration for one ``setup_logging`` call.

    A YAML file is used when one is given, either explicitly or through
    ``OMNIBOR_LOGGING_CONFIG``, and exists. Otherwise the library subtree gets a
    stderr handler at ``level``.

    Args:
        config_path: YAML ``dictConfig`` file. Defaults to ``settings.logging_config``.
        level: Library log level. Defaults to ``settings.log_level``.

    Raises:
        ValueError: If ``level`` is not a standard level name.
    """

    def __init__(self, config_path: Optional[Path] = None, level: Optional[str] = None):
        if config_path is None and settings.logging_config:
            config_path = Path(settings.logging_config)
        self.config_path = config_path
        self.level = (level or settings.log_level).upper()
        if self.level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{level}', expected one of {', '.join(LOG_LEVELS)}")
        self._config: Optional[Dict[str, Any]] = None

    @property
    def uses_file(self) -> bool:
        return self.config_path is not None and self.config_path.is_file()

    def load_config(self) -> Dict[str, Any]:
        """Return the ``dictConfig`` mapping, reading the YAML file at most once.

        Raises:
            ValueError: If the YAML file does not hold a mapping.
        """
        if self._config is None:
            if self.uses_file:
                with open(self.config_path, "r") as f:
                    loaded = yaml.safe_load(f)
                if not isinstance(loaded, dict):
                    raise ValueError(f"Logging config '{self.config_path}' is not a mapping")
                self._config = loaded
            else:
                self._config = self._default_config()
        return self._config

    def _default_config(self) -> Dict[str, Any]:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": _FORMAT, "datefmt": "%H:%M:%S"},
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                library_logger_name(): {
                    "level": self.level,
                    "handlers": ["stderr"],
                    "propagate": False,
                },
            },
        }

    def apply(self) -> None:
        """Install the configuration. A YAML file is applied as is, then the level override."""
        logging.config.dictConfig(self.load_config())
        if self.uses_file:
            get_logger(LIBRARY_LOGGER).setLevel(self.level)


_logging_config: Optional[LoggingConfig] = None


def setup_logging(config_path: Optional[Path] = None, level: Optional[str] = None) -> LoggingConfig:
    """Configure the library's loggers and return the applied configuration.

    Example:
        >>> setup_logging(level="DEBUG")
    """
    global _logging_config

    config = LoggingConfig(config_path, level)
    config.apply()
    _logging_config = config
    return config


def get_omnibor_logger(name: str):
    """Prefect logger for ``name``, configuring logging on first use."""
    if _logging_config is None:
        setup_logging()

    return get_logger(name)
