from unittest.mock import MagicMock

import pytest

from girouette.middleware import Middleware
from girouette.routing.route import Route
from girouette.routing.route_middleware_registry import RouteMiddlewareRegistry
from girouette.routing.sanic_binding import SanicRouteBinder


class PostsController:
    instances = 0

    def __init__(self):
        PostsController.instances += 1

    async def show(self, request, id):
        return f'show {id}'

    def index(self, request):
        return 'index'


class RecordingMiddleware(Middleware):
    def __init__(self, label, calls, response=None):
        self.label = label
        self.calls = calls
        self.response = response

    async def before_request(self, request):
        self.calls.append(f'before {self.label}')
        return self.response

    async def after_response(self, request, response):
        self.calls.append(f'after {self.label}')
        return f'{response}+{self.label}'


# =============================================================================
# URI compilation
# =============================================================================

@pytest.mark.parametrize('pattern, wheres, expected', [
    ('/posts/:post_id/comments/:id', {}, '/posts/<post_id>/comments/<id>'),
    ('/posts/:id', {'id': r'^[0-9]+$'}, '/posts/<id:int>'),
    ('/posts/:id', {'id': r'\d+'}, '/posts/<id:int>'),
    ('/posts/:slug', {'slug': r'[a-zA-Z0-9\-]+'}, '/posts/<slug:slug>'),
    ('/posts/:slug', {'slug': r'^[a-z]{3}$'}, '/posts/<slug>'),
    ('/files/*', {}, '/files/<path:path>'),
    ('/', {}, '/'),
])
def test_compile_uri(pattern, wheres, expected):
    route = Route(['GET'], pattern, (PostsController, 'show')).where(wheres)

    assert SanicRouteBinder.compile_uri(route) == expected


def test_callable_matcher_stays_plain_string():
    route = Route(['GET'], '/posts/:id', (PostsController, 'show')).where('id', str.isdigit)

    assert SanicRouteBinder.compile_uri(route) == '/posts/<id>'


# =============================================================================
# Mounting
# =============================================================================

def test_mount_registers_every_route(router):
    router.get('/posts/:id', (PostsController, 'show')).as_('posts.show').domain('blog.example.com')
    router.post('/posts', (PostsController, 'store'))
    app = MagicMock()

    count = SanicRouteBinder(router, app).mount()

    assert count == 2
    assert router.is_committed()

    first, second = app.add_route.call_args_list
    assert first.args[1] == '/posts/<id>'
    assert first.kwargs == {'methods': ['GET', 'HEAD'], 'name': 'posts.show', 'host': 'blog.example.com'}
    assert second.args[1] == '/posts'
    assert second.kwargs == {'methods': ['POST'], 'name': 'PostsController.store.post'}


@pytest.mark.asyncio
async def test_controller_is_instantiated_per_request(router):
    router.get('/posts/:id', (PostsController, 'show'))
    router.get('/posts', (PostsController, 'index'))
    app = MagicMock()
    SanicRouteBinder(router, app).mount()

    show = app.add_route.call_args_list[0].args[0]
    index = app.add_route.call_args_list[1].args[0]
    before = PostsController.instances

    assert await show(MagicMock(), id='7') == 'show 7'
    assert await show(MagicMock(), id='8') == 'show 8'
    assert await index(MagicMock()) == 'index'
    assert PostsController.instances == before + 3
    assert show.__name__ == 'posts_controller_show'


@pytest.mark.asyncio
async def test_plain_callable_handler_is_registered_as_is(router):
    async def health(request):
        return 'ok'

    router.get('/health', health).as_('health')
    app = MagicMock()
    SanicRouteBinder(router, app).mount()

    assert app.add_route.call_args.args[0] is health


# =============================================================================
# Route middleware
# =============================================================================

@pytest.mark.asyncio
async def test_middleware_runs_in_list_order():
    calls = []
    registry = RouteMiddlewareRegistry()
    registry.register('auth', RecordingMiddleware('auth', calls))
    registry.register('log', RecordingMiddleware('log', calls))

    async def handler(request):
        calls.append('handler')
        return 'response'

    wrapped = registry.wrap_handler(handler, ['auth', ['log']])
    response = await wrapped(MagicMock())

    assert calls == ['before auth', 'before log', 'handler', 'after log', 'after auth']
    assert response == 'response+log+auth'


@pytest.mark.asyncio
async def test_middleware_short_circuits():
    calls = []
    registry = RouteMiddlewareRegistry()
    registry.register('auth', RecordingMiddleware('auth', calls, response='denied'))

    async def handler(request):
        calls.append('handler')
        return 'response'

    response = await registry.wrap_handler(handler, ['auth'])(MagicMock())

    assert response == 'denied'
    assert calls == ['before auth']


@pytest.mark.asyncio
async def test_unknown_middleware_is_skipped_and_callables_are_used(caplog):
    seen = []

    async def tag(request):
        seen.append('tag')

    async def handler(request):
        return 'response'

    registry = RouteMiddlewareRegistry()
    wrapped = registry.wrap_handler(handler, ['missing', tag])

    assert await wrapped(MagicMock()) == 'response'
    assert seen == ['tag']
    assert "'missing' not found" in caplog.text


def test_registry_lookups():
    registry = RouteMiddlewareRegistry()
    middleware = RecordingMiddleware('auth', [])
    registry.register('auth', middleware)

    assert registry.has('auth')
    assert registry.get('auth') is middleware
    assert registry.get_registered() == ['auth']
    assert registry.wrap_handler(test_registry_lookups, []) is test_registry_lookups


@pytest.mark.asyncio
async def test_mount_wraps_route_middleware(router):
    calls = []
    registry = RouteMiddlewareRegistry()
    registry.register('auth', RecordingMiddleware('auth', calls))
    router.get('/posts/:id', (PostsController, 'show')).use('auth')
    app = MagicMock()

    SanicRouteBinder(router, app, middleware_registry=registry).mount()
    handler = app.add_route.call_args.args[0]

    assert await handler(MagicMock(), id='1') == 'show 1+auth'
    assert calls == ['before auth', 'after auth']
