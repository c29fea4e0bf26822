"""Logging infrastructure for docs-ts.

Always obtain loggers through get_docs_logger() so they share one
configuration:

    >>> from docs_ts.logging import get_docs_logger
    >>> logger = get_docs_logger(__name__)
    >>> logger.info("Detected directory src/data")
"""

from .logging_config import LoggingConfig, get_docs_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "get_docs_logger",
    "setup_logging",
]
