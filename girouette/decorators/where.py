"""
Where Decorator
Constrain a route parameter
"""
from typing import Any, Callable

from girouette.routing.declarations import record_declaration


def Where(key: str, matcher: Any) -> Callable:
    """
    Add a constraint on a route parameter; may be stacked

    Args:
        key: Parameter name without the leading colon
        matcher: Regex string, compiled pattern or callable

    Example:
        @Get('/:id')
        @Where('id', r'^\\d+$')
        async def show(self, request, id):
            ...
    """
    def decorator(func):
        record_declaration(getattr(func, '__func__', func), 'where', key, matcher)
        return func

    return decorator
