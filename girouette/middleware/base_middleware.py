"""
Base Middleware Class
Abstract base class for route middleware
"""
from abc import ABC, abstractmethod
from sanic import Request


class Middleware(ABC):
    """
    Base middleware class

    Route middleware can:
    - Inspect/modify requests before they reach the controller
    - Inspect/modify responses before they're sent
    - Short-circuit requests (return response early)

    Register instances by name in a RouteMiddlewareRegistry and refer to
    them by that name in @Middleware, @GroupMiddleware or @ResourceMiddleware.
    """

    @abstractmethod
    async def before_request(self, request: Request):
        """
        Called before the request reaches the route handler

        Returns:
            None: Continue to next middleware/route
            HTTPResponse: Short-circuit and return response immediately
        """
        pass

    async def after_response(self, request: Request, response):
        """
        Called after the route handler, before sending response

        Returns:
            response: Modified or original response
        """
        return response
