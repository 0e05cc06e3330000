"""
Service Providers
"""
from girouette.providers.girouette_service_provider import GirouetteServiceProvider
from girouette.providers.logging_service_provider import LoggingServiceProvider

__all__ = ['GirouetteServiceProvider', 'LoggingServiceProvider']
