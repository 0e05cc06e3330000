"""
Controller Decorators
"""
from girouette.decorators.methods import Get, Post, Put, Patch, Delete, Any
from girouette.decorators.where import Where
from girouette.decorators.middleware import Middleware
from girouette.decorators.group import Group, GroupDomain, GroupMiddleware
from girouette.decorators.resource import Resource, ApiOnly, Only, Except, ResourceMiddleware

__all__ = [
    'Get', 'Post', 'Put', 'Patch', 'Delete', 'Any',
    'Where',
    'Middleware',
    'Group', 'GroupDomain', 'GroupMiddleware',
    'Resource', 'ApiOnly', 'Only', 'Except', 'ResourceMiddleware',
]
