"""
Group Resolver
Applies a controller's group (name, prefix, middleware) to its route declarations
"""
from typing import Optional, Tuple

from girouette.routing.declarations import GroupDeclaration, ResolvedRoute, RouteDeclaration


class GroupResolver:
    """
    Merges a GroupDeclaration into each RouteDeclaration of a controller

    Usage:
        resolver = GroupResolver()
        group = GroupDeclaration(name='admin', prefix='/admin', middleware='auth')
        route = RouteDeclaration(method='GET', pattern='dashboard')
        resolved = resolver.resolve(route, (AdminController, 'index'), group)
        # pattern '/admin/dashboard', name 'admin.index', middleware ('auth',)
    """

    def resolve(
        self,
        route: RouteDeclaration,
        handler: Tuple[type, str],
        group: Optional[GroupDeclaration] = None,
    ) -> ResolvedRoute:
        """
        Resolve one route declaration against an optional group

        Args:
            route: The stored declaration (never modified)
            handler: (controller, method_name) of the route
            group: The controller's group, if any

        Returns:
            A new ResolvedRoute
        """
        domain = group.domain if group else None

        if not self.has_group_configuration(group):
            return ResolvedRoute.from_declaration(route, handler, domain)

        pattern = route.pattern
        if group.prefix:
            pattern = self.prefix_pattern(route.pattern, group.prefix)

        name = route.name
        if group.name:
            name = self.prefix_name(route.name or handler[1], group.name)

        return ResolvedRoute(
            pattern=pattern,
            method=route.method,
            handler=handler,
            name=name,
            where=route.where,
            middleware=(*group.middleware_list, *route.middleware),
            domain=domain,
        )

    @staticmethod
    def has_group_configuration(group: Optional[GroupDeclaration]) -> bool:
        """A domain alone does not transform routes; it is applied at configuration time"""
        if group is None:
            return False
        return bool(group.name or group.prefix or group.middleware_list)

    @staticmethod
    def prefix_pattern(pattern: str, prefix: str) -> str:
        """
        Join a group prefix and a route pattern with exactly one slash

        Example:
            prefix_pattern('dashboard', '/admin')   # '/admin/dashboard'
            prefix_pattern('/dashboard', 'admin/')  # '/admin/dashboard'
            prefix_pattern('/', '/posts')           # '/posts'
        """
        clean_prefix = prefix.rstrip('/')
        if not clean_prefix.startswith('/'):
            clean_prefix = f"/{clean_prefix}"

        clean_pattern = pattern[1:] if pattern.startswith('/') else pattern
        if not clean_pattern:
            return clean_prefix or '/'

        return f"{clean_prefix.rstrip('/')}/{clean_pattern}"

    @staticmethod
    def prefix_name(name: str, group_name: str) -> str:
        """Prefix a route name with the group name, once"""
        if name.startswith(f"{group_name}."):
            return name
        return f"{group_name}.{name}"
