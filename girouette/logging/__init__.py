"""
Logging Package
Structured logging helpers

Provides a drop-in replacement for logging.getLogger that keeps every
girouette logger under one configurable hierarchy.
"""
from girouette.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
)
import logging
from typing import Optional

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'getLogger',
    'INFO',
    'DEBUG',
    'WARNING',
    'ERROR',
    'CRITICAL',
]

# Export logging levels for convenience
INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Only allows logger names that are:
    - None (the package logger)
    - Configured in app.ALLOWED_LOGGING_HANDLERS
    - Module-based names (containing '.') like 'girouette.scanner'

    Any other bare name falls back to the package logger, so handlers
    configured with LoggerConfig.setup_logger('girouette') see it.

    Example:
        from girouette.logging import getLogger
        logger = getLogger(__name__)

        logger.debug("Registered route", extra={'route': 'posts.index'})
        logger.error("Controller failed to load", exc_info=True)
    """
    from girouette.defaults import DEFAULT_LOGGER_NAME

    if name is None:
        return logging.getLogger(DEFAULT_LOGGER_NAME)

    if '.' not in name and name != DEFAULT_LOGGER_NAME:
        from girouette.support import Config
        allowed_handlers = Config.get('app.ALLOWED_LOGGING_HANDLERS', {}) or {}

        allowed_names = [
            handler_config.get('name')
            for handler_config in allowed_handlers.values()
            if handler_config.get('name') is not None
        ]

        if name not in allowed_names:
            name = DEFAULT_LOGGER_NAME

    return logging.getLogger(name)
