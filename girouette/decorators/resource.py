"""
Resource Decorators
Turn a controller into a RESTful resource and shape its actions

Usage:
    @Resource('posts.comments', params={'posts': 'post', 'comments': 'comment'})
    @ApiOnly()
    @ResourceMiddleware(['store', 'update', 'destroy'], 'auth')
    class CommentsController:
        async def index(self, request, post):
            ...
"""
from typing import Any, Callable, Dict, Optional, Sequence, Union

from girouette.routing.declarations import (
    API_ONLY,
    EXCEPT,
    ONLY,
    record_class_declaration,
)


def Resource(
    pattern: Union[str, Dict[str, Any]],
    name: Optional[str] = None,
    params: Optional[Dict[str, str]] = None,
) -> Callable:
    """
    Declare the resource of a controller

    Args:
        pattern: Resource pattern ('posts', 'posts.comments'), or a dict with
            'pattern', 'name' and 'params' keys
        name: Override for the derived resource name
        params: Parameter renames keyed by resource segment
    """
    if isinstance(pattern, dict):
        options = pattern
        pattern = options['pattern']
        name = options.get('name', name)
        params = options.get('params', params)

    def decorator(cls):
        record_class_declaration(cls, 'resource', pattern=pattern, name=name, params=params)
        return cls

    return decorator


def ApiOnly() -> Callable:
    """Drop the create and edit form actions"""
    def decorator(cls):
        record_class_declaration(cls, 'resource_filter', kind=API_ONLY)
        return cls

    return decorator


def Only(actions: Sequence[str]) -> Callable:
    def decorator(cls):
        record_class_declaration(cls, 'resource_filter', kind=ONLY, actions=actions)
        return cls

    return decorator


def Except(actions: Sequence[str]) -> Callable:
    def decorator(cls):
        record_class_declaration(cls, 'resource_filter', kind=EXCEPT, actions=actions)
        return cls

    return decorator


def ResourceMiddleware(actions: Union[str, Sequence[str]], middleware: Any) -> Callable:
    """
    Append middleware to resource actions

    Args:
        actions: One action, a list of actions, or '*' for all of them
        middleware: Middleware reference or list of references
    """
    def decorator(cls):
        record_class_declaration(cls, 'resource_middleware', actions=actions, middleware=middleware)
        return cls

    return decorator
