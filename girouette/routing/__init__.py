"""
Routing Package
"""
from girouette.routing.route import Route
from girouette.routing.route_collection import RouteCollection
from girouette.routing.route_resource import RouteResource
from girouette.routing.router import Router
from girouette.routing.route_middleware_registry import RouteMiddlewareRegistry
from girouette.routing.group_resolver import GroupResolver
from girouette.routing.resource_expander import ResourceExpander

__all__ = [
    'Route',
    'RouteCollection',
    'RouteResource',
    'Router',
    'RouteMiddlewareRegistry',
    'GroupResolver',
    'ResourceExpander',
]
