"""
Logging Configuration
Structured logging for route discovery and registration
"""
import logging
import logging.handlers
import json
from pathlib import Path
from typing import List, Optional, Union
from datetime import datetime


# LogRecord attributes that are not user supplied extras
_RESERVED_RECORD_KEYS = frozenset([
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
    'getMessage', 'message', 'taskName',
])


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging

    Outputs logs in JSON format for easy parsing and analysis
    """

    def __init__(self, include_fields: Optional[List[str]] = None):
        """
        Initialize JSON formatter

        Args:
            include_fields: Additional fields to include in JSON output
        """
        super().__init__()
        self.include_fields = include_fields or []

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON

        Args:
            record: Log record to format

        Returns:
            JSON formatted log string
        """
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data['stack'] = record.stack_info

        for field in self.include_fields:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        # Extras passed with logger.info(..., extra={...})
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS and key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=repr)


class LoggerConfig:
    """
    Centralized logging configuration
    """

    @staticmethod
    def setup_logger(
        name: str,
        format_type: str = 'json',
        log_file: Optional[Union[str, Path]] = None,
        max_bytes: int = None,
        backup_count: int = None,
    ) -> logging.Logger:
        """
        Setup a logger with an optional rotating file handler

        The level follows app.APP_ENV; a console handler is attached when
        app.APP_DEBUG is true or when no log file is given.

        Args:
            name: Logger name
            format_type: Format type ('json' or 'text')
            log_file: Path of the log file, None for console only
            max_bytes: Max bytes before rotation (default: 10MB)
            backup_count: Number of backup files to keep

        Returns:
            Configured logger

        Example:
            logger = LoggerConfig.setup_logger('girouette', format_type='text')
        """
        from girouette.defaults import DEFAULT_LOG_MAX_BYTES, DEFAULT_LOG_BACKUP_COUNT
        from girouette.support import Config

        if max_bytes is None:
            max_bytes = DEFAULT_LOG_MAX_BYTES
        if backup_count is None:
            backup_count = DEFAULT_LOG_BACKUP_COUNT

        app_env = Config.get('app.APP_ENV', 'local')
        app_debug = Config.get('app.APP_DEBUG', False)

        logger = logging.getLogger(name)
        logger.setLevel(LoggerConfig.get_level_by_environment(app_env))

        # Clear existing handlers
        logger.handlers.clear()

        if format_type == 'json':
            formatter = JSONFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        if log_file is not None:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        if app_debug or log_file is None:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

        return logger

    @staticmethod
    def get_level_by_environment(environment: str) -> int:
        """
        Get logging level based on environment

        Args:
            environment: Environment name ('production', 'development', 'testing')

        Returns:
            Logging level
        """
        levels = {
            'production': logging.WARNING,
            'staging': logging.INFO,
            'development': logging.DEBUG,
            'local': logging.DEBUG,
            'testing': logging.ERROR,
        }
        return levels.get(str(environment).lower(), logging.INFO)

    @staticmethod
    def configure_from_config() -> List[logging.Logger]:
        """
        Configure the package logger and every allowed logging handler

        Reads:
            app.LOG_FORMAT: 'text' (default) or 'json'
            app.LOG_FILE: Log file of the package logger, None for console
            app.ALLOWED_LOGGING_HANDLERS: {key: {'name', 'format', 'file_name'}}

        Level and console echo follow app.APP_ENV and app.APP_DEBUG, see
        setup_logger().
        """
        from girouette.defaults import DEFAULT_LOGGER_NAME
        from girouette.support import Config

        format_type = Config.get('app.LOG_FORMAT', 'text')
        loggers = [
            LoggerConfig.setup_logger(
                DEFAULT_LOGGER_NAME,
                format_type=format_type,
                log_file=Config.get('app.LOG_FILE'),
            )
        ]

        allowed_handlers = Config.get('app.ALLOWED_LOGGING_HANDLERS', {}) or {}
        for handler_key, handler_config in allowed_handlers.items():
            loggers.append(LoggerConfig.setup_logger(
                handler_config.get('name', handler_key),
                format_type=handler_config.get('format', format_type),
                log_file=handler_config.get('file_name'),
            ))

        return loggers
