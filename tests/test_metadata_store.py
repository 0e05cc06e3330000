import gc

from girouette.metadata_store import MetadataStore


class PostsController:
    pass


class DraftsController(PostsController):
    pass


def test_get_returns_default_when_unset(store):
    assert store.get(PostsController, 'resource') is None
    assert store.get(PostsController, 'resource', 'missing') == 'missing'
    assert not store.has(PostsController, 'resource')
    assert PostsController not in store


def test_set_overwrites(store):
    store.set(PostsController, 'resource', 'posts')
    store.set(PostsController, 'resource', 'articles')

    assert store.get(PostsController, 'resource') == 'articles'
    assert store.has(PostsController, 'resource')
    assert PostsController in store


def test_append_never_mutates_previous_list(store):
    store.append(PostsController, 'resourceMiddleware', 'auth')
    first = store.get(PostsController, 'resourceMiddleware')

    store.append(PostsController, 'resourceMiddleware', 'log')

    assert first == ['auth']
    assert store.get(PostsController, 'resourceMiddleware') == ['auth', 'log']


def test_subclass_has_independent_bag(store):
    store.set(PostsController, 'group', 'posts')

    assert store.get(DraftsController, 'group') is None
    assert store.all(DraftsController) == {}


def test_all_returns_a_copy(store):
    store.set(PostsController, 'resource', 'posts')
    bag = store.all(PostsController)
    bag['resource'] = 'changed'

    assert store.get(PostsController, 'resource') == 'posts'


def test_clear(store):
    store.set(PostsController, 'resource', 'posts')
    assert len(store) == 1

    store.clear()

    assert len(store) == 0
    assert store.get(PostsController, 'resource') is None


def test_stores_are_isolated():
    first, second = MetadataStore(), MetadataStore()
    first.set(PostsController, 'resource', 'posts')

    assert second.get(PostsController, 'resource') is None


def test_collected_controller_releases_its_bag(store):
    class TemporaryController:
        pass

    store.set(TemporaryController, 'resource', 'posts')
    store.set(PostsController, 'resource', 'articles')
    assert len(store) == 2

    del TemporaryController
    gc.collect()

    assert len(store) == 1
    assert store.get(PostsController, 'resource') == 'articles'
