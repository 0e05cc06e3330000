"""
Sanic Route Binder
Mounts committed routes onto a Sanic application
"""
import inspect
import re
from typing import Any, Callable, Dict, Optional

from girouette.logging import getLogger
from girouette.routing.route import Route
from girouette.routing.route_middleware_registry import RouteMiddlewareRegistry
from girouette.routing.router import Router
from girouette.support import Str

logger = getLogger(__name__)


class SanicRouteBinder:
    """
    Register every committed route of a Router with a Sanic app

    Controller handlers ((controller, method_name) pairs) get a fresh
    controller instance per request; plain callables are registered as-is.

    Usage:
        binder = SanicRouteBinder(router, app, middleware_registry=registry)
        binder.mount()
    """

    PARAMETER_PATTERN = re.compile(r':(\w+)\??')

    # Constraint -> Sanic parameter type
    CONSTRAINT_TYPES = {
        r'[0-9]+': 'int',
        r'\d+': 'int',
        r'[a-zA-Z0-9\-]+': 'slug',
        r'[a-z0-9-]+': 'slug',
        r'.*': 'path',
        r'.+': 'path',
    }

    def __init__(
        self,
        router: Router,
        sanic_app,
        middleware_registry: Optional[RouteMiddlewareRegistry] = None,
        controller_factory: Optional[Callable[[type], Any]] = None,
    ):
        self.router = router
        self.sanic_app = sanic_app
        self.middleware_registry = middleware_registry or RouteMiddlewareRegistry()
        self.controller_factory = controller_factory or (lambda controller: controller())

    def mount(self) -> int:
        """
        Register the router's committed routes

        Returns:
            Number of routes registered with Sanic
        """
        if not self.router.is_committed():
            self.router.commit()

        route_count = 0
        for route in self.router.get_routes():
            self.add(route)
            route_count += 1

        logger.info(f"Mounted {route_count} routes on Sanic app")
        return route_count

    def add(self, route: Route):
        handler = self.make_handler(route)
        if route.get_middleware():
            handler = self.middleware_registry.wrap_handler(handler, route.get_middleware())

        options: Dict[str, Any] = {
            'methods': route.get_methods(),
            'name': self.route_name(route),
        }
        if route.get_domain():
            options['host'] = route.get_domain()

        self.sanic_app.add_route(handler, self.compile_uri(route), **options)

    def make_handler(self, route: Route) -> Callable:
        target = route.get_handler()
        if not isinstance(target, tuple):
            return target

        controller, method_name = target
        factory = self.controller_factory

        async def controller_handler(request, *args, **kwargs):
            instance = factory(controller)
            result = getattr(instance, method_name)(request, *args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result

        controller_handler.__name__ = f"{Str.snake(controller.__name__)}_{method_name}"
        controller_handler.__qualname__ = f"{controller.__qualname__}.{method_name}"
        return controller_handler

    @staticmethod
    def route_name(route: Route) -> str:
        """Sanic requires unique names; unnamed routes fall back to Controller@method"""
        if route.get_name():
            return route.get_name()
        methods = '_'.join(route.get_methods()).lower()
        return f"{route.get_action_name().replace('@', '.')}.{methods}"

    @classmethod
    def constraint_type(cls, matcher: Any) -> Optional[str]:
        if isinstance(matcher, re.Pattern):
            matcher = matcher.pattern
        if not isinstance(matcher, str):
            return None
        return cls.CONSTRAINT_TYPES.get(matcher.lstrip('^').rstrip('$'))

    @classmethod
    def compile_uri(cls, route: Route) -> str:
        """
        Convert ':param' segments to Sanic's '<param>' syntax

        Known constraints map to Sanic types ('<id:int>'); other matchers
        leave the parameter as a plain string. A '*' segment becomes a
        catch-all '<path:path>'.

        Example:
            '/posts/:post_id/comments/:id' -> '/posts/<post_id>/comments/<id>'
        """
        wheres = route.get_wheres()

        def convert_param(match):
            param_name = match.group(1)
            param_type = cls.constraint_type(wheres[param_name]) if param_name in wheres else None
            if param_type is None:
                return f"<{param_name}>"
            return f"<{param_name}:{param_type}>"

        segments = []
        for segment in route.get_pattern().split('/'):
            if segment == '*':
                segments.append('<path:path>')
            else:
                segments.append(cls.PARAMETER_PATTERN.sub(convert_param, segment))

        return '/'.join(segments) or '/'
