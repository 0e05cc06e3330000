"""
Route Declarations
Declaration shapes stored per controller, and the builder API that writes them

The decorators in girouette.decorators are thin wrappers over the
declare_* functions below; hosts that prefer not to use decorators can call
them directly once per controller at startup:

    declare_group(AdminController, name='admin', prefix='/admin')
    declare_route(AdminController, 'index', 'GET', '/')
    declare_where(AdminController, 'show', 'id', r'^\\d+$')
"""
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from girouette.defaults import ALL_ACTIONS_SELECTOR, RESOURCE_ACTIONS
from girouette.exceptions import DeclarationError
from girouette.metadata_store import MetadataStore, metadata

# Metadata keys
ROUTES_KEY = 'routes'
GROUP_KEY = 'group'
RESOURCE_KEY = 'resource'
RESOURCE_FILTER_KEY = 'resourceFilter'
RESOURCE_MIDDLEWARE_KEY = 'resourceMiddleware'
COLLECTED_KEY = 'collected'

# Attributes holding declarations recorded by method and class decorators
PENDING_ATTRIBUTE = '__girouette_declarations__'
CLASS_PENDING_ATTRIBUTE = '__girouette_class_declarations__'

# Resource filter kinds
API_ONLY = 'api_only'
ONLY = 'only'
EXCEPT = 'except'
FILTER_KINDS = (API_ONLY, ONLY, EXCEPT)


@dataclass(frozen=True)
class WhereClause:
    """A parameter constraint: regex string, compiled pattern or callable"""
    key: str
    matcher: Any


@dataclass(frozen=True)
class RouteDeclaration:
    """
    Everything declared for one controller method

    Scalars (method, pattern, name) are filled once and never overwritten;
    where and middleware only grow.
    """
    method: Optional[str] = None
    pattern: Optional[str] = None
    name: Optional[str] = None
    where: Tuple[WhereClause, ...] = ()
    middleware: Tuple[Any, ...] = ()

    @property
    def is_complete(self) -> bool:
        """A route can only be registered once it has a verb and a pattern"""
        return self.method is not None and self.pattern is not None


@dataclass(frozen=True)
class GroupDeclaration:
    """Shared name prefix, path prefix, domain and middleware of a controller"""
    name: Optional[str] = None
    prefix: Optional[str] = None
    domain: Optional[str] = None
    middleware: Any = None

    @property
    def middleware_list(self) -> List[Any]:
        if self.middleware is None:
            return []
        if isinstance(self.middleware, (list, tuple)):
            return list(self.middleware)
        return [self.middleware]


@dataclass(frozen=True)
class ResourceFilter:
    kind: str
    actions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResourceMiddlewareRule:
    """Middleware for one action, a list of actions, or '*'"""
    actions: Union[str, Tuple[str, ...]]
    middleware: Any


@dataclass(frozen=True)
class ResourceDeclaration:
    pattern: str
    name: Optional[str] = None
    params: Optional[Dict[str, str]] = None
    filter: Optional[ResourceFilter] = None
    middleware: Tuple[ResourceMiddlewareRule, ...] = ()


@dataclass(frozen=True)
class ResolvedRoute:
    """
    Router-ready route: the final pattern, name, constraints and middleware

    handler is the (controller, method_name) pair passed to router.route().
    """
    pattern: str
    method: str
    handler: Tuple[type, str]
    name: Optional[str] = None
    where: Tuple[WhereClause, ...] = ()
    middleware: Tuple[Any, ...] = ()
    domain: Optional[str] = None

    @property
    def methods(self) -> List[str]:
        return [self.method]

    @classmethod
    def from_declaration(
        cls,
        declaration: RouteDeclaration,
        handler: Tuple[type, str],
        domain: Optional[str] = None,
    ) -> 'ResolvedRoute':
        return cls(
            pattern=declaration.pattern,
            method=declaration.method,
            handler=handler,
            name=declaration.name,
            where=declaration.where,
            middleware=declaration.middleware,
            domain=domain,
        )


# =============================================================================
# Builder API
# =============================================================================

def _update_route(
    controller: type,
    method_name: str,
    update: Callable[[RouteDeclaration], RouteDeclaration],
    store: MetadataStore,
):
    routes = dict(store.get(controller, ROUTES_KEY, {}))
    routes[method_name] = update(routes.get(method_name, RouteDeclaration()))
    store.set(controller, ROUTES_KEY, routes)


def declare_route(
    controller: type,
    method_name: str,
    method: str,
    pattern: str,
    name: Optional[str] = None,
    store: MetadataStore = metadata,
):
    """
    Declare the verb, pattern and optional name of a controller method

    Fields already present on the declaration win: a second call for the
    same method only fills in what is still missing.
    """
    def merge(existing: RouteDeclaration) -> RouteDeclaration:
        return replace(
            existing,
            method=existing.method if existing.method is not None else method.upper(),
            pattern=existing.pattern if existing.pattern is not None else pattern,
            name=existing.name if existing.name is not None else name,
        )

    _update_route(controller, method_name, merge, store)


def declare_where(
    controller: type,
    method_name: str,
    key: str,
    matcher: Any,
    store: MetadataStore = metadata,
):
    """Append a parameter constraint to a controller method"""
    _update_route(
        controller,
        method_name,
        lambda existing: replace(existing, where=(*existing.where, WhereClause(key, matcher))),
        store,
    )


def declare_middleware(
    controller: type,
    method_name: str,
    middleware: Any,
    store: MetadataStore = metadata,
):
    """Append middleware (a single reference or a list) to a controller method"""
    _update_route(
        controller,
        method_name,
        lambda existing: replace(existing, middleware=(*existing.middleware, middleware)),
        store,
    )


def declare_group(
    controller: type,
    name: Optional[str] = None,
    prefix: Optional[str] = None,
    domain: Optional[str] = None,
    middleware: Any = None,
    store: MetadataStore = metadata,
):
    """
    Declare (or update) the group of a controller

    Every field given here replaces the previous value; fields left as None
    keep what an earlier declaration set.
    """
    existing = store.get(controller, GROUP_KEY) or GroupDeclaration()
    updates = {
        key: value
        for key, value in (('name', name), ('prefix', prefix), ('domain', domain), ('middleware', middleware))
        if value is not None
    }
    store.set(controller, GROUP_KEY, replace(existing, **updates))


def declare_resource(
    controller: type,
    pattern: str,
    name: Optional[str] = None,
    params: Optional[Dict[str, str]] = None,
    store: MetadataStore = metadata,
):
    """Declare the resource of a controller (last write wins)"""
    store.set(controller, RESOURCE_KEY, {
        'pattern': pattern,
        'name': name,
        'params': dict(params) if params else None,
    })


def _validate_actions(controller: type, actions: Sequence[str], allow_wildcard: bool = False):
    for action in actions:
        if allow_wildcard and action == ALL_ACTIONS_SELECTOR:
            continue
        if action not in RESOURCE_ACTIONS:
            raise DeclarationError(
                f"{controller.__name__}: unknown resource action '{action}' "
                f"(expected one of {', '.join(RESOURCE_ACTIONS)})"
            )


def _as_action_tuple(actions: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    if isinstance(actions, str):
        return (actions,)
    return tuple(actions)


def declare_resource_filter(
    controller: type,
    kind: str,
    actions: Union[str, Sequence[str]] = (),
    store: MetadataStore = metadata,
):
    """
    Restrict the actions of a resource with api_only, only or except

    A resource accepts exactly one filter; declaring a second one raises
    DeclarationError instead of silently combining them.
    """
    if kind not in FILTER_KINDS:
        raise DeclarationError(f"Unknown resource filter '{kind}'")

    existing = store.get(controller, RESOURCE_FILTER_KEY)
    if existing is not None:
        raise DeclarationError(
            f"{controller.__name__} already declares a '{existing.kind}' resource filter; "
            f"a resource accepts only one of api_only, only, except"
        )

    actions = _as_action_tuple(actions)
    _validate_actions(controller, actions)
    store.set(controller, RESOURCE_FILTER_KEY, ResourceFilter(kind, actions))


def declare_resource_middleware(
    controller: type,
    actions: Union[str, Sequence[str]],
    middleware: Any,
    store: MetadataStore = metadata,
):
    """Append middleware for the given resource action(s), or '*' for all"""
    if isinstance(actions, str):
        _validate_actions(controller, (actions,), allow_wildcard=True)
        selector: Union[str, Tuple[str, ...]] = actions
    else:
        selector = tuple(actions)
        _validate_actions(controller, selector)

    store.append(controller, RESOURCE_MIDDLEWARE_KEY, ResourceMiddlewareRule(selector, middleware))


# =============================================================================
# Decorator replay
# =============================================================================

def record_declaration(func: Callable, kind: str, *args: Any):
    """
    Record a method-level declaration on the function itself

    Method decorators run before the class exists, so they cannot key the
    store by controller. collect_declarations() replays these later.
    """
    pending = list(getattr(func, PENDING_ATTRIBUTE, ()))
    pending.append((kind, args))
    setattr(func, PENDING_ATTRIBUTE, pending)


_REPLAYERS = {
    'route': declare_route,
    'where': declare_where,
    'middleware': declare_middleware,
}

_CLASS_REPLAYERS = {
    'group': declare_group,
    'resource': declare_resource,
    'resource_filter': declare_resource_filter,
    'resource_middleware': declare_resource_middleware,
}


def record_class_declaration(controller: type, kind: str, /, **options: Any):
    """
    Record a class-level declaration on the controller itself

    The declarations are replayed into whichever store reads the controller
    first. They are validated on the spot against a scratch store, so an
    invalid combination (e.g. two resource filters) raises DeclarationError
    at decoration time and nothing is recorded.
    """
    pending = [*vars(controller).get(CLASS_PENDING_ATTRIBUTE, ()), (kind, options)]

    scratch = MetadataStore()
    for pending_kind, pending_options in pending:
        _CLASS_REPLAYERS[pending_kind](controller, store=scratch, **pending_options)

    setattr(controller, CLASS_PENDING_ATTRIBUTE, pending)


def collect_declarations(controller: type, store: MetadataStore = metadata):
    """
    One-time declaration pass over a controller and the methods defined on it

    Only the class's own namespace is inspected, so neither inherited
    methods nor a parent's class decorators contribute to a subclass.
    """
    if store.get(controller, COLLECTED_KEY):
        return

    for kind, options in vars(controller).get(CLASS_PENDING_ATTRIBUTE, ()):
        _CLASS_REPLAYERS[kind](controller, store=store, **options)

    for method_name, member in vars(controller).items():
        func = getattr(member, '__func__', member)
        for kind, args in getattr(func, PENDING_ATTRIBUTE, ()):
            _REPLAYERS[kind](controller, method_name, *args, store=store)

    store.set(controller, COLLECTED_KEY, True)


# =============================================================================
# Readers
# =============================================================================

def get_route_declarations(controller: type, store: MetadataStore = metadata) -> Dict[str, RouteDeclaration]:
    collect_declarations(controller, store)
    return dict(store.get(controller, ROUTES_KEY, {}))


def get_group_declaration(controller: type, store: MetadataStore = metadata) -> Optional[GroupDeclaration]:
    collect_declarations(controller, store)
    return store.get(controller, GROUP_KEY)


def get_resource_declaration(controller: type, store: MetadataStore = metadata) -> Optional[ResourceDeclaration]:
    """
    Assemble the resource declaration from its slots

    Filters and middleware may be declared before the resource itself
    (class decorators apply bottom-up), so they live under separate keys.
    """
    collect_declarations(controller, store)
    resource = store.get(controller, RESOURCE_KEY)
    if not resource:
        return None

    return ResourceDeclaration(
        pattern=resource['pattern'],
        name=resource['name'],
        params=resource['params'],
        filter=store.get(controller, RESOURCE_FILTER_KEY),
        middleware=tuple(store.get(controller, RESOURCE_MIDDLEWARE_KEY, [])),
    )
