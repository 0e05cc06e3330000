"""
Girouette
Declarative controller routing: decorate controller classes, scan a
directory, and get a configured router.

    from girouette import Get, Group, Resource, ApiOnly

    @Group(name='admin', prefix='/admin')
    class AdminController:
        @Get('dashboard')
        async def index(self, request):
            ...
"""
from girouette.decorators import (
    Any,
    ApiOnly,
    Delete,
    Except,
    Get,
    Group,
    GroupDomain,
    GroupMiddleware,
    Middleware,
    Only,
    Patch,
    Post,
    Put,
    Resource,
    ResourceMiddleware,
    Where,
)
from girouette.metadata_store import MetadataStore, metadata
from girouette.registrar import Girouette
from girouette.routing.router import Router
from girouette.scanner import ControllerScanner

__version__ = '1.0.0'

__all__ = [
    'Get', 'Post', 'Put', 'Patch', 'Delete', 'Any',
    'Where', 'Middleware',
    'Group', 'GroupDomain', 'GroupMiddleware',
    'Resource', 'ApiOnly', 'Only', 'Except', 'ResourceMiddleware',
    'MetadataStore', 'metadata',
    'Girouette', 'Router', 'ControllerScanner',
]
