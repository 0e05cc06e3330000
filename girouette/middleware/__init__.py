"""
Middleware Package
"""
from girouette.middleware.base_middleware import Middleware

__all__ = ['Middleware']
