"""
Route Middleware Registry
Resolves route middleware references and wraps handlers with them
"""
import inspect
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

from girouette.logging import getLogger
from girouette.middleware.base_middleware import Middleware

logger = getLogger(__name__)


class RouteMiddlewareRegistry:
    """
    Named route middleware

    A route's middleware list may hold names (resolved here), Middleware
    instances, plain async callables taking the request, or nested lists
    of those.
    """

    def __init__(self):
        """Initialize empty registry"""
        self._middleware: Dict[str, Any] = {}

    def register(self, name: str, middleware_instance: Any):
        self._middleware[name] = middleware_instance

    def get(self, name: str) -> Optional[Any]:
        return self._middleware.get(name)

    def has(self, name: str) -> bool:
        return name in self._middleware

    def get_registered(self) -> List[str]:
        return list(self._middleware.keys())

    @staticmethod
    def flatten(middleware: List[Any]) -> List[Any]:
        flat: List[Any] = []
        for entry in middleware:
            if isinstance(entry, (list, tuple)):
                flat.extend(RouteMiddlewareRegistry.flatten(list(entry)))
            else:
                flat.append(entry)
        return flat

    def resolve(self, reference: Any) -> Optional[Any]:
        if isinstance(reference, str):
            middleware = self.get(reference)
            if middleware is None:
                logger.warning("Route middleware '%s' not found in registry", reference)
            return middleware
        return reference

    def wrap_handler(self, handler: Callable, middleware: List[Any]) -> Callable:
        if not middleware:
            return handler

        # Apply in reverse order so execution order matches list order
        # ['auth', 'verified'] becomes: auth(verified(handler))
        wrapped = handler
        for reference in reversed(self.flatten(middleware)):
            resolved = self.resolve(reference)
            if resolved is not None:
                wrapped = self._create_wrapper(wrapped, resolved)

        return wrapped

    def _create_wrapper(self, handler: Callable, middleware: Any) -> Callable:
        @wraps(handler)
        async def wrapper(request, *args, **kwargs):
            if isinstance(middleware, Middleware) or hasattr(middleware, 'before_request'):
                result = await middleware.before_request(request)
            else:
                result = middleware(request)
                if inspect.isawaitable(result):
                    result = await result

            if result is not None:
                # Middleware answered early; stop the pipeline here
                return result

            response = await handler(request, *args, **kwargs)

            if hasattr(middleware, 'after_response'):
                response = await middleware.after_response(request, response)

            return response

        return wrapper
