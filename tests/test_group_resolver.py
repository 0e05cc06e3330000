import pytest

from girouette.routing.declarations import GroupDeclaration, ResolvedRoute, RouteDeclaration, WhereClause
from girouette.routing.group_resolver import GroupResolver


class AdminController:
    pass


@pytest.fixture
def resolver():
    return GroupResolver()


def test_no_group_is_identity(resolver):
    route = RouteDeclaration(
        method='GET',
        pattern='/dashboard',
        where=(WhereClause('id', r'^\d+$'),),
        middleware=('auth',),
    )

    resolved = resolver.resolve(route, (AdminController, 'index'))

    assert resolved == ResolvedRoute.from_declaration(route, (AdminController, 'index'))
    assert resolved.name is None


def test_domain_only_group_keeps_route_unchanged(resolver):
    route = RouteDeclaration(method='GET', pattern='/dashboard')
    group = GroupDeclaration(domain='admin.example.com')

    resolved = resolver.resolve(route, (AdminController, 'index'), group)

    assert resolved.pattern == '/dashboard'
    assert resolved.name is None
    assert resolved.domain == 'admin.example.com'


def test_prefix_and_name(resolver):
    route = RouteDeclaration(method='GET', pattern='dashboard')
    group = GroupDeclaration(name='admin', prefix='/admin')

    resolved = resolver.resolve(route, (AdminController, 'index'), group)

    assert resolved.pattern == '/admin/dashboard'
    assert resolved.name == 'admin.index'


def test_name_prefix_is_idempotent(resolver):
    route = RouteDeclaration(method='GET', pattern='/', name='admin.index')
    group = GroupDeclaration(name='admin')

    resolved = resolver.resolve(route, (AdminController, 'home'), group)

    assert resolved.name == 'admin.index'


def test_explicit_name_is_prefixed(resolver):
    route = RouteDeclaration(method='GET', pattern='/', name='home')
    group = GroupDeclaration(name='admin')

    assert resolver.resolve(route, (AdminController, 'index'), group).name == 'admin.home'


def test_prefix_without_name_keeps_declared_name(resolver):
    route = RouteDeclaration(method='GET', pattern='/stats')
    group = GroupDeclaration(prefix='/admin')

    resolved = resolver.resolve(route, (AdminController, 'stats'), group)

    assert resolved.pattern == '/admin/stats'
    assert resolved.name is None


@pytest.mark.parametrize('prefix, pattern, expected', [
    ('/admin', 'dashboard', '/admin/dashboard'),
    ('admin/', '/dashboard', '/admin/dashboard'),
    ('/admin/', '/dashboard/', '/admin/dashboard/'),
    ('/posts', '/', '/posts'),
    ('/posts', '', '/posts'),
    ('/', '/dashboard', '/dashboard'),
    ('/posts', '/:id', '/posts/:id'),
])
def test_prefix_pattern(prefix, pattern, expected):
    assert GroupResolver.prefix_pattern(pattern, prefix) == expected


def test_group_middleware_precedes_route_middleware(resolver):
    route = RouteDeclaration(method='POST', pattern='/', middleware=('throttle', 'log'))
    group = GroupDeclaration(middleware=['auth', 'verified'])

    resolved = resolver.resolve(route, (AdminController, 'store'), group)

    assert resolved.middleware == ('auth', 'verified', 'throttle', 'log')


def test_stored_declaration_is_not_modified(resolver):
    route = RouteDeclaration(method='GET', pattern='dashboard')
    resolver.resolve(route, (AdminController, 'index'), GroupDeclaration(name='admin', prefix='/admin'))

    assert route.pattern == 'dashboard'
    assert route.name is None
