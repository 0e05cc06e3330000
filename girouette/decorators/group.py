"""
Group Decorators
Controller-level name prefix, path prefix, domain and middleware
"""
from typing import Any, Callable, Optional

from girouette.routing.declarations import record_class_declaration


def Group(
    name: Optional[str] = None,
    prefix: Optional[str] = None,
    domain: Optional[str] = None,
    middleware: Any = None,
) -> Callable:
    """
    Group every route of a controller

    Example:
        @Group(name='admin', prefix='/admin', middleware=['auth'])
        class AdminController:
            @Get('dashboard')
            async def index(self, request):
                ...
        # GET /admin/dashboard named admin.index, behind 'auth'
    """
    def decorator(cls):
        record_class_declaration(cls, 'group', name=name, prefix=prefix, domain=domain, middleware=middleware)
        return cls

    return decorator


def GroupDomain(domain: str) -> Callable:
    def decorator(cls):
        record_class_declaration(cls, 'group', domain=domain)
        return cls

    return decorator


def GroupMiddleware(middleware: Any) -> Callable:
    def decorator(cls):
        record_class_declaration(cls, 'group', middleware=middleware)
        return cls

    return decorator
