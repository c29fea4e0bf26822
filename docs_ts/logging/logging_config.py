"""Centralized logging configuration for docs-ts.

Loggers come from Prefect's logging hierarchy (``prefect.docs_ts...``) and
are configured either from a YAML file or from built-in defaults.

Usage:
    >>> from docs_ts.logging import get_docs_logger
    >>> logger = get_docs_logger(__name__)
    >>> logger.info("Printing module docs/index.ts.md")

Environment variables:
    DOCS_TS_LOGGING_CONFIG: Path to a custom logging.yml
    DOCS_TS_LOG_LEVEL: Default log level (INFO, DEBUG, etc.)
"""

import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from prefect.logging import get_logger

LOGGER_NAME = "prefect.docs_ts"


class LoggingConfig:
    """Loads and applies the logging configuration.

    Configuration precedence:
        1. Explicit config_path parameter
        2. DOCS_TS_LOGGING_CONFIG environment variable
        3. Default configuration

    Configuration is loaded lazily and cached after the first access.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self._get_default_config_path()
        self._config: Optional[Dict[str, Any]] = None

    @staticmethod
    def _get_default_config_path() -> Optional[Path]:
        if env_path := os.environ.get("DOCS_TS_LOGGING_CONFIG"):
            return Path(env_path)
        return None

    def load_config(self) -> Dict[str, Any]:
        """Return the dictConfig mapping from the YAML file, or the defaults when there is none."""
        if self._config is None:
            if self.config_path and self.config_path.exists():
                with open(self.config_path, "r") as f:
                    self._config = yaml.safe_load(f)
            else:
                self._config = self._get_default_config()
        assert self._config is not None
        return self._config

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Console output on stderr, "HH:MM:SS.mmm | LEVEL | logger.name - message"."""
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                LOGGER_NAME: {
                    "level": os.environ.get("DOCS_TS_LOG_LEVEL", "INFO"),
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }

    def apply(self):
        logging.config.dictConfig(self.load_config())


_logging_config: Optional[LoggingConfig] = None


def setup_logging(config_path: Optional[Path] = None, level: Optional[str] = None):
    """Configure logging for docs-ts.

    Args:
        config_path: Optional YAML logging configuration. If None, uses
            DOCS_TS_LOGGING_CONFIG or the defaults.
        level: Optional level override (INFO, DEBUG, WARNING, ...), applied
            after the configuration.
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        logging.getLogger(LOGGER_NAME).setLevel(level.upper())


def get_docs_logger(name: str):
    """Return the Prefect logger for a docs-ts component, configuring logging on first use."""
    if _logging_config is None:
        setup_logging()

    return get_logger(name)
