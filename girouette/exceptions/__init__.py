"""
Exceptions Package
"""
from girouette.exceptions.custom import (
    GirouetteException,
    DiscoveryError,
    LoadError,
    ResourceRegistrationError,
    DeclarationError,
)

__all__ = [
    'GirouetteException',
    'DiscoveryError',
    'LoadError',
    'ResourceRegistrationError',
    'DeclarationError',
]
