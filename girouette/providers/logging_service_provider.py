"""
Logging Service Provider
Applies the app.* logging configuration before any other provider runs
"""
from girouette.logging.logger_config import LoggerConfig
from girouette.service_provider import ServiceProvider


class LoggingServiceProvider(ServiceProvider):
    """Logging service provider - sets up the girouette loggers"""

    def register(self):
        LoggerConfig.configure_from_config()
