"""
Router
In-process router that collects route and resource handles and commits them
"""
from typing import Any, Dict, List, Optional, Union

from girouette.routing.route import Handler, Route
from girouette.routing.route_collection import RouteCollection
from girouette.routing.route_resource import RouteResource


class Router:
    """
    Route registration with deferred commit

    Handles returned by route() and resource() stay configurable until
    commit() flattens them into the route collection; resource actions
    removed by a filter are skipped at that point.

    Usage:
        router = Router()
        router.route('/posts', ['GET'], (PostsController, 'index')).as_('posts.index')
        router.resource('photos', PhotosController).api_only()
        router.commit()
        router.get_route_by_name('photos.store')
    """

    def __init__(self):
        self.routes = RouteCollection()
        self._pending: List[Union[Route, RouteResource]] = []
        self._committed = False

    # =========================================================================
    # Route Registration Methods
    # =========================================================================

    def route(self, pattern: str, methods: List[str], handler: Handler) -> Route:
        """
        Register a route for the given HTTP methods

        Args:
            pattern: Route pattern, e.g. '/posts/:id'
            methods: List of HTTP methods ('ANY' for all of them)
            handler: (controller, method_name) pair or callable
        """
        route = Route(methods, pattern, handler)
        self._pending.append(route)
        return route

    def get(self, pattern: str, handler: Handler) -> Route:
        """Register a GET route"""
        return self.route(pattern, ['GET', 'HEAD'], handler)

    def post(self, pattern: str, handler: Handler) -> Route:
        """Register a POST route"""
        return self.route(pattern, ['POST'], handler)

    def put(self, pattern: str, handler: Handler) -> Route:
        """Register a PUT route"""
        return self.route(pattern, ['PUT'], handler)

    def patch(self, pattern: str, handler: Handler) -> Route:
        """Register a PATCH route"""
        return self.route(pattern, ['PATCH'], handler)

    def delete(self, pattern: str, handler: Handler) -> Route:
        """Register a DELETE route"""
        return self.route(pattern, ['DELETE'], handler)

    def any(self, pattern: str, handler: Handler) -> Route:
        """Register a route for all HTTP methods"""
        return self.route(pattern, ['ANY'], handler)

    # =========================================================================
    # Resource Routes
    # =========================================================================

    def resource(self, resource: str, controller: type) -> RouteResource:
        """
        Register the seven resource routes for a controller

        Args:
            resource: Resource pattern (e.g., 'photos', 'posts.comments')
            controller: Controller class handling the actions

        Returns:
            The resource handle

        Raises:
            ValueError: If the resource pattern is empty
        """
        resource_handle = RouteResource(resource, controller)
        self._pending.append(resource_handle)
        return resource_handle

    def discard(self, entry: Union[Route, RouteResource]):
        """Drop a pending route or resource handle so commit() never sees it"""
        self._pending = [pending for pending in self._pending if pending is not entry]

    # =========================================================================
    # Commit & Resolution
    # =========================================================================

    def commit(self) -> RouteCollection:
        """
        Flatten pending handles into the route collection

        Safe to call more than once; the collection is rebuilt each time.
        """
        self.routes.clear()

        for entry in self._pending:
            if isinstance(entry, RouteResource):
                for route in entry.get_routes():
                    self.routes.add(route)
            elif not entry.is_deleted():
                self.routes.add(entry)

        self._committed = True
        return self.routes

    def is_committed(self) -> bool:
        return self._committed

    def get_routes(self) -> List[Route]:
        """Get all committed routes as a list"""
        return self.routes.get_routes()

    def get_collection(self) -> RouteCollection:
        return self.routes

    def get_route_by_name(self, name: str) -> Optional[Route]:
        return self.routes.get_by_name(name)

    def has(self, name: str) -> bool:
        """Check if a named route exists"""
        return self.routes.has_named_route(name)

    def to_dict(self) -> Dict[str, Any]:
        return self.routes.to_dict()

    def __repr__(self) -> str:
        return f"<Router ({len(self._pending)} pending, {len(self.routes)} committed)>"
