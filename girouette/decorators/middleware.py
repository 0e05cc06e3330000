"""
Middleware Decorator
Attach route middleware to a controller method
"""
from typing import Any, Callable

from girouette.routing.declarations import record_declaration


def Middleware(middleware: Any) -> Callable:
    """Append a middleware reference (or a list of them) to the route"""
    def decorator(func):
        record_declaration(getattr(func, '__func__', func), 'middleware', middleware)
        return func

    return decorator
