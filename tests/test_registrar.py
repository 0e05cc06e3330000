import logging
import os

import pytest

from girouette import ApiOnly, Get, Group, Resource, Where
from girouette.defaults import HTTP_METHODS
from girouette.exceptions import DeclarationError
from girouette.metadata_store import MetadataStore
from girouette.registrar import Girouette
from girouette.routing.group_resolver import GroupResolver
from girouette.routing.router import Router
from girouette.routing.route_resource import RouteResource
from girouette.support import Config


def names(routes):
    return sorted(route['name'] for route in routes)


# =============================================================================
# Scanned controllers
# =============================================================================

@pytest.mark.asyncio
async def test_group_routes(load_routes):
    routes = await load_routes('group')

    assert len(routes) == 2
    assert all(route['pattern'].startswith('/posts') for route in routes)
    assert all(route['name'].startswith('posts.') for route in routes)
    assert all(route['domain'] == 'admin.example.com' for route in routes)

    by_name = {route['name']: route for route in routes}
    assert by_name['posts.index']['pattern'] == '/posts'
    assert by_name['posts.id']['pattern'] == '/posts/:id'


@pytest.mark.asyncio
async def test_group_middleware_routes(load_routes):
    routes = await load_routes('group_middleware')

    by_pattern = {route['pattern']: route for route in routes}
    assert by_pattern['/posts']['middleware'] == ['auth', 'throttle']
    assert by_pattern['/posts/drafts']['middleware'] == ['auth']
    assert all(route['name'] is None for route in routes)


@pytest.mark.asyncio
async def test_method_routes(load_routes):
    routes = await load_routes('methods')

    assert len(routes) == 6
    assert all(route['pattern'].startswith('/posts') for route in routes)
    assert all(method in HTTP_METHODS for route in routes for method in route['methods'])

    by_action = {route['action']: route for route in routes}
    assert by_action['PostsController@index']['methods'] == ['GET']
    assert by_action['PostsController@index']['name'] == 'posts.index'
    assert by_action['PostsController@store']['name'] is None
    assert by_action['PostsController@publish']['methods'] == ['PATCH']
    assert by_action['PostsController@webhook']['methods'] == list(HTTP_METHODS)


@pytest.mark.asyncio
async def test_route_middleware(load_routes):
    routes = await load_routes('route_middleware')

    assert len(routes) == 1
    assert routes[0]['pattern'] == '/posts'
    assert routes[0]['middleware'] == ['fake_middleware']


@pytest.mark.asyncio
async def test_where_routes(load_routes):
    routes = await load_routes('where')

    assert routes[0]['constraints'] == {'slug': r'^[0-9]+$'}


@pytest.mark.asyncio
async def test_resource_routes(load_routes):
    routes = await load_routes('resource')

    assert names(routes) == sorted(f'posts.{action}' for action in RouteResource.ACTION_DEFINITIONS)


@pytest.mark.asyncio
async def test_resource_params(load_routes):
    routes = await load_routes('resource_params')

    patterns = [route['pattern'] for route in routes]
    assert all(':post' in pattern for pattern in patterns)
    assert any('comments/:comment' in pattern for pattern in patterns)
    assert not any(':id' in pattern for pattern in patterns)


@pytest.mark.asyncio
async def test_resource_middleware(load_routes):
    routes = await load_routes('resource_middleware')

    by_name = {route['name']: route for route in routes}
    assert by_name['articles.index']['middleware'] == ['log']
    assert by_name['articles.store']['middleware'] == ['log', 'auth']
    assert by_name['articles.destroy']['middleware'] == ['log', 'auth']
    assert by_name['articles.index']['pattern'] == '/posts'


@pytest.mark.asyncio
async def test_resource_api_only(load_routes):
    routes = await load_routes('resource_api_only')

    assert names(routes) == ['posts.destroy', 'posts.index', 'posts.show', 'posts.store', 'posts.update']


@pytest.mark.asyncio
async def test_resource_only(load_routes):
    routes = await load_routes('resource_only')

    assert names(routes) == ['posts.destroy', 'posts.update']


@pytest.mark.asyncio
async def test_resource_except(load_routes):
    routes = await load_routes('resource_except')

    assert names(routes) == ['posts.destroy', 'posts.edit', 'posts.index', 'posts.store', 'posts.update']


@pytest.mark.asyncio
async def test_custom_regex(load_routes):
    routes = await load_routes('custom_regex', r'_controller_domain\.py$')

    assert names(routes) == ['posts.custom_regex.index']


@pytest.mark.asyncio
async def test_default_rule_ignores_custom_files(load_routes):
    routes = await load_routes('custom_regex')

    assert names(routes) == ['ignored.index']


@pytest.mark.asyncio
async def test_broken_files_do_not_block_siblings(load_routes):
    routes = await load_routes('broken')

    assert names(routes) == ['admin.index', 'articles.feed', 'articles.index', 'articles.show', 'posts.index']


@pytest.mark.asyncio
async def test_routes_and_resource_on_one_controller(load_routes):
    routes = await load_routes('mixed')

    by_name = {route['name']: route for route in routes}
    assert by_name['photos.download']['domain'] == 'media.example.com'
    assert by_name['photos.download']['constraints'] == {'id': r'^\d+$'}
    assert by_name['photos.show']['middleware'] == ['cache']
    assert len(routes) == 8


@pytest.mark.asyncio
async def test_load_uses_configured_path(router, controllers_path):

    Config.set('girouette.CONTROLLERS_PATH', os.path.join(controllers_path, 'resource_only'))
    controllers = await Girouette(router).load()
    router.commit()

    assert [controller.__name__ for controller in controllers] == ['PostsController']
    assert len(router.get_routes()) == 2


# =============================================================================
# Static registration
# =============================================================================

def test_register_without_scanner(router):
    @Group(name='admin', prefix='/admin')
    class AdminController:
        @Get('/users/:id')
        @Where('id', r'^\d+$')
        async def show(self, request, id):
            pass

    @Resource('photos')
    class PhotosController:
        pass

    girouette = Girouette(router)
    girouette.register(AdminController)
    girouette.register(PhotosController, 'app/photos_controller.py')
    router.commit()

    show = router.get_route_by_name('admin.show')
    assert show.get_pattern() == '/admin/users/:id'
    assert show.get_wheres() == {'id': r'^\d+$'}
    assert show.get_handler() == (AdminController, 'show')
    assert router.has('photos.edit')
    assert list(girouette.controllers.values()) == [AdminController, PhotosController]
    assert 'app/photos_controller.py' in girouette.controllers


def test_incomplete_declaration_is_skipped(router, caplog):
    class UsersController:
        @Where('id', r'^\d+$')
        async def show(self, request, id):
            pass

    with caplog.at_level(logging.WARNING, logger='girouette'):
        Girouette(router).register(UsersController)
    router.commit()

    assert router.get_routes() == []
    assert 'no verb decorator' in caplog.text


def test_rejected_resource_keeps_ordinary_routes(router, caplog):
    @Resource('..')
    class BrokenController:
        @Get('/health', 'health')
        async def health(self, request):
            pass

    with caplog.at_level(logging.ERROR, logger='girouette'):
        Girouette(router).register(BrokenController)
    router.commit()

    assert [route.get_name() for route in router.get_routes()] == ['health']
    assert 'rejected' in caplog.text


def test_failing_route_is_skipped(caplog):
    class FlakyRouter:
        def __init__(self):
            self.patterns = []

        def route(self, pattern, methods, handler):
            if pattern == '/boom':
                raise RuntimeError('boom')
            self.patterns.append(pattern)
            return _NullHandle()

        def resource(self, pattern, controller):
            raise AssertionError('no resource declared')

    class _NullHandle:
        def as_(self, name):
            return self

        def where(self, key, matcher):
            return self

        def use(self, middleware):
            return self

        def domain(self, domain):
            return self

    class StatusController:
        @Get('/boom')
        async def boom(self, request):
            pass

        @Get('/ok')
        async def ok(self, request):
            pass

    flaky = FlakyRouter()
    with caplog.at_level(logging.DEBUG, logger='girouette'):
        Girouette(flaky).register(StatusController)

    assert flaky.patterns == ['/ok']
    assert 'not registered' in caplog.text


def test_register_many_accepts_types_and_pairs(router):
    class UsersController:
        @Get('/users', 'users.index')
        async def index(self, request):
            pass

    @Resource('teams')
    class TeamsController:
        pass

    girouette = Girouette(router)
    girouette.register_many([UsersController, ('app/teams_controller.py', TeamsController)])
    router.commit()

    assert router.has('users.index')
    assert router.has('teams.show')
    assert list(girouette.controllers) == [
        f'{UsersController.__module__}.{UsersController.__qualname__}',
        'app/teams_controller.py',
    ]


class _FailingFilterResource(RouteResource):
    def api_only(self):
        raise RuntimeError('filter exploded')


class _FailingFilterRouter(Router):
    def resource(self, resource, controller):
        handle = _FailingFilterResource(resource, controller)
        self._pending.append(handle)
        return handle


def test_resource_failing_during_configuration_is_contained(caplog):
    @Resource('posts')
    @ApiOnly()
    class PostsController:
        @Get('/health', 'health')
        async def health(self, request):
            pass

    router = _FailingFilterRouter()
    with caplog.at_level(logging.ERROR, logger='girouette'):
        girouette = Girouette(router)
        girouette.register(PostsController)
    router.commit()

    assert [route.get_name() for route in router.get_routes()] == ['health']
    assert 'filter exploded' in caplog.text
    assert list(girouette.controllers.values()) == [PostsController]


def test_failed_controller_leaves_no_routes(router):
    class _StrictResolver(GroupResolver):
        def resolve(self, declaration, handler, group=None):
            if handler[1] == 'broken':
                raise DeclarationError('unresolvable route')
            return super().resolve(declaration, handler, group)

    class StatusController:
        @Get('/ok', 'ok')
        async def ok(self, request):
            pass

        @Get('/broken')
        async def broken(self, request):
            pass

    girouette = Girouette(router, group_resolver=_StrictResolver())
    with pytest.raises(DeclarationError):
        girouette.register(StatusController)
    router.commit()

    assert router.get_routes() == []
    assert girouette.controllers == {}


def test_router_discard_drops_pending_handle(router):
    kept = router.get('/kept', lambda request: None).as_('kept')
    dropped = router.get('/dropped', lambda request: None).as_('dropped')

    router.discard(dropped)
    router.commit()

    assert router.get_routes() == [kept]


def test_class_decorators_apply_with_a_private_store(router):
    @Group(name='admin', prefix='/admin')
    class UsersController:
        @Get('/users', 'users')
        async def index(self, request):
            pass

    @Resource('photos')
    @ApiOnly()
    class PhotosController:
        pass

    Girouette(router, store=MetadataStore()).register_many([UsersController, PhotosController])
    router.commit()

    assert router.get_route_by_name('admin.users').get_pattern() == '/admin/users'
    assert router.has('photos.store')
    assert not router.has('photos.create')
