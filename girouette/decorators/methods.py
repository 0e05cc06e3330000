"""
Route Method Decorators
Declare the HTTP verb and pattern of a controller method

Usage:
    class PostsController:
        @Get('/', 'posts.index')
        async def index(self, request):
            ...

        @Post('/')
        async def store(self, request):
            ...
"""
from typing import Callable, Optional

from girouette.exceptions import DeclarationError
from girouette.routing.declarations import record_declaration


def _route_decorator(method: str, pattern: str, name: Optional[str] = None) -> Callable:
    def decorator(func):
        target = getattr(func, '__func__', func)
        if not callable(target):
            raise DeclarationError(
                f"@{method.capitalize()}('{pattern}') can only decorate a method, got {type(func).__name__}"
            )
        record_declaration(target, 'route', method, pattern, name)
        return func

    return decorator


def Get(pattern: str, name: Optional[str] = None) -> Callable:
    return _route_decorator('GET', pattern, name)


def Post(pattern: str, name: Optional[str] = None) -> Callable:
    return _route_decorator('POST', pattern, name)


def Put(pattern: str, name: Optional[str] = None) -> Callable:
    return _route_decorator('PUT', pattern, name)


def Patch(pattern: str, name: Optional[str] = None) -> Callable:
    return _route_decorator('PATCH', pattern, name)


def Delete(pattern: str, name: Optional[str] = None) -> Callable:
    return _route_decorator('DELETE', pattern, name)


def Any(pattern: str, name: Optional[str] = None) -> Callable:
    """Match every HTTP method"""
    return _route_decorator('ANY', pattern, name)
