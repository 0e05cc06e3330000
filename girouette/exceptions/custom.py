"""
Custom Exception Classes
Exceptions raised while declaring, discovering and registering routes
"""
from typing import Optional


class GirouetteException(Exception):
    """Base exception for all girouette exceptions"""
    message = "An error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.__class__.message
        super().__init__(self.message)


class DiscoveryError(GirouetteException):
    """
    Controllers root cannot be read

    Fatal: aborts boot, there is no fallback directory.

    Example:
        raise DiscoveryError("Controllers directory not found: /srv/app")
    """
    message = "Controllers directory cannot be read"

    def __init__(self, message: Optional[str] = None, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class LoadError(GirouetteException):
    """
    A controller file failed to import or to register

    Caught per file by the scanner; the file contributes no routes.
    """
    message = "Controller file could not be loaded"

    def __init__(self, message: Optional[str] = None, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ResourceRegistrationError(GirouetteException):
    """
    The router rejected a resource declaration

    Only the resource routes of that controller are lost.
    """
    message = "Resource routes could not be registered"

    def __init__(self, message: Optional[str] = None, controller: Optional[type] = None):
        super().__init__(message)
        self.controller = controller


class DeclarationError(GirouetteException):
    """
    Invalid declaration on a controller

    Example:
        raise DeclarationError("PostsController already declares an 'only' filter")
    """
    message = "Invalid route declaration"
