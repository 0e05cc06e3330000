"""
Route Collection
Committed routes in registration order, indexed by name
"""
from typing import Any, Dict, List, Optional

from girouette.routing.route import Route


class RouteCollection:
    """
    Ordered routes with a name index

    Names are indexed last-write-wins; two routes sharing a name or pattern
    both stay in the collection.
    """

    def __init__(self):
        self._routes: List[Route] = []
        self._routes_by_name: Dict[str, Route] = {}

    def add(self, route: Route) -> Route:
        self._routes.append(route)

        if route.get_name():
            self._routes_by_name[route.get_name()] = route

        return route

    def get_by_name(self, name: str) -> Optional[Route]:
        return self._routes_by_name.get(name)

    def has_named_route(self, name: str) -> bool:
        return name in self._routes_by_name

    def get_routes(self) -> List[Route]:
        return self._routes

    def clear(self):
        self._routes.clear()
        self._routes_by_name.clear()

    def __iter__(self):
        return iter(self._routes)

    def __len__(self):
        return len(self._routes)

    def to_dict(self) -> Dict[str, Any]:
        """Route count plus each route's dict, as route:list prints them"""
        return {
            'total': len(self._routes),
            'routes': [route.to_dict() for route in self._routes],
        }

    def __repr__(self):
        return f"<RouteCollection ({len(self._routes)} routes)>"
