"""
Route Resource
Registers the seven RESTful resource routes for a controller

Resource patterns use dots for nesting:

    'posts'           -> /posts, /posts/:id, ...
    'posts.comments'  -> /posts/:post_id/comments, /posts/:post_id/comments/:id, ...
"""
from typing import Any, Dict, List, Sequence, Union

from girouette.defaults import (
    ALL_ACTIONS_SELECTOR,
    API_ONLY_ACTIONS,
    DEFAULT_RESOURCE_PARAMETER,
    RESOURCE_ACTIONS,
)
from girouette.routing.route import Route
from girouette.support import Str


class RouteResource:
    """
    A resource handle: the generated routes plus the fluent API that
    renames, filters and decorates them.

    Usage:
        resource = RouteResource('posts', PostsController)
        resource.params({'posts': 'post'}).only(['index', 'show']).as_('blog.posts')
    """

    # action -> (methods, path suffix, takes the leaf parameter)
    ACTION_DEFINITIONS = {
        'index':   (['GET', 'HEAD'], '', False),
        'create':  (['GET', 'HEAD'], '/create', False),
        'store':   (['POST'], '', False),
        'show':    (['GET', 'HEAD'], '', True),
        'edit':    (['GET', 'HEAD'], '/edit', True),
        'update':  (['PUT', 'PATCH'], '', True),
        'destroy': (['DELETE'], '', True),
    }

    def __init__(self, resource: str, controller: type):
        """
        Args:
            resource: Resource pattern, e.g. 'posts' or 'posts.comments'

        Raises:
            ValueError: If the resource pattern is empty
        """
        segments = [segment.strip('/') for segment in resource.strip().strip('/').split('.')]
        if not segments or not all(segments):
            raise ValueError(f"Invalid resource pattern: '{resource}'")

        self.resource = resource
        self.controller = controller
        self._segments = segments
        self._params: Dict[str, str] = {}
        self._resource_name = self._default_name(segments)
        self.routes: Dict[str, Route] = {}

        for action in RESOURCE_ACTIONS:
            methods, _, _ = self.ACTION_DEFINITIONS[action]
            route = Route(methods, self._build_pattern(action), (controller, action))
            route.as_(f"{self._resource_name}.{action}")
            self.routes[action] = route

    @staticmethod
    def _default_name(segments: List[str]) -> str:
        tokens = []
        for segment in segments:
            tokens.extend(Str.snake(part) for part in segment.split('/') if part)
        return '.'.join(tokens)

    def _parameter_for(self, segment: str, is_leaf: bool) -> str:
        if segment in self._params:
            return self._params[segment]
        if is_leaf:
            return DEFAULT_RESOURCE_PARAMETER
        last_part = segment.split('/')[-1]
        return f"{Str.singular(Str.snake(last_part))}_{DEFAULT_RESOURCE_PARAMETER}"

    def _build_pattern(self, action: str) -> str:
        _, suffix, takes_parameter = self.ACTION_DEFINITIONS[action]

        parents, leaf = self._segments[:-1], self._segments[-1]
        path = ''.join(f"/{parent}/:{self._parameter_for(parent, False)}" for parent in parents)
        path += f"/{leaf}"

        if takes_parameter:
            path += f"/:{self._parameter_for(leaf, True)}"

        return path + suffix

    def _select(self, actions: Union[str, Sequence[str]]) -> List[Route]:
        if actions == ALL_ACTIONS_SELECTOR:
            return list(self.routes.values())
        if isinstance(actions, str):
            actions = [actions]
        return [self.routes[action] for action in actions if action in self.routes]

    # =========================================================================
    # Fluent configuration
    # =========================================================================

    def params(self, mapping: Dict[str, str]) -> 'RouteResource':
        """
        Rename the parameter of one or more resource segments

        Example:
            RouteResource('posts.comments', C).params({'posts': 'post', 'comments': 'comment'})
            # /posts/:post/comments/:comment
        """
        self._params.update(mapping)
        for action, route in self.routes.items():
            route.set_pattern(self._build_pattern(action))
        return self

    def middleware(self, actions: Union[str, Sequence[str]], middleware: Any) -> 'RouteResource':
        """Append middleware to the given action(s), or '*' for every action"""
        for route in self._select(actions):
            route.use(middleware)
        return self

    def only(self, actions: Sequence[str]) -> 'RouteResource':
        """Keep only the given actions"""
        for action, route in self.routes.items():
            if action not in actions:
                route.mark_as_deleted()
        return self

    def except_(self, actions: Sequence[str]) -> 'RouteResource':
        """Drop the given actions"""
        for action, route in self.routes.items():
            if action in actions:
                route.mark_as_deleted()
        return self

    def api_only(self) -> 'RouteResource':
        """Drop the form actions (create, edit)"""
        return self.only(API_ONLY_ACTIONS)

    def where(self, key: str, matcher: Any) -> 'RouteResource':
        for route in self.routes.values():
            route.where(key, matcher)
        return self

    def as_(self, name: str) -> 'RouteResource':
        """Replace the derived resource name in every action name"""
        self._resource_name = name
        for action, route in self.routes.items():
            route.as_(f"{name}.{action}")
        return self

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_name(self) -> str:
        return self._resource_name

    def get_routes(self) -> List[Route]:
        """Routes that survived filtering, in canonical action order"""
        return [route for route in self.routes.values() if not route.is_deleted()]

    def __repr__(self) -> str:
        return f"<RouteResource {self.resource} ({len(self.get_routes())} routes)>"
