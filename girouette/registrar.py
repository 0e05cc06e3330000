"""
Girouette Registration Engine
Turns controller declarations into router registrations
"""
from typing import Any, Dict, Iterable, List, Optional, Pattern, Tuple, Union

from girouette.defaults import DEFAULT_CONTROLLERS_PATH
from girouette.exceptions import ResourceRegistrationError
from girouette.logging import getLogger
from girouette.metadata_store import MetadataStore, metadata
from girouette.routing.contracts import RouterContract
from girouette.routing.declarations import (
    ResolvedRoute,
    get_group_declaration,
    get_resource_declaration,
    get_route_declarations,
)
from girouette.routing.group_resolver import GroupResolver
from girouette.routing.resource_expander import ResourceExpander
from girouette.scanner import ControllerScanner
from girouette.support import Config

logger = getLogger(__name__)


class Girouette:
    """
    Registration engine

    Each controller is registered independently: its ordinary routes are
    resolved against its group and submitted to router.route(), and its
    resource declaration (if any) is handed to router.resource() and
    configured by the ResourceExpander. A controller may have both.

    Usage:
        router = Router()
        girouette = Girouette(router)
        await girouette.load('app/controllers')
        router.commit()

        # Or without scanning
        girouette.register(PostsController)
    """

    def __init__(
        self,
        router: RouterContract,
        store: MetadataStore = metadata,
        group_resolver: Optional[GroupResolver] = None,
        resource_expander: Optional[ResourceExpander] = None,
    ):
        self.router = router
        self.store = store
        self.group_resolver = group_resolver or GroupResolver()
        self.resource_expander = resource_expander or ResourceExpander()
        self._controllers: Dict[str, type] = {}

    @property
    def controllers(self) -> Dict[str, type]:
        """Registered controllers in registration order, keyed by source path (or qualified name)"""
        return dict(self._controllers)

    # =========================================================================
    # Loading
    # =========================================================================

    async def load(
        self,
        path: Optional[str] = None,
        pattern: Optional[Union[str, Pattern]] = None,
    ) -> List[type]:
        """
        Scan a controllers directory and register everything it declares

        Args:
            path: Controllers root (default: girouette.CONTROLLERS_PATH)
            pattern: File name regex overriding the '_controller.py' rule
                (default: girouette.CONTROLLERS_PATTERN)

        Returns:
            The controllers that registered

        Raises:
            DiscoveryError: If the root directory cannot be read
        """
        path = path or Config.get('girouette.CONTROLLERS_PATH', DEFAULT_CONTROLLERS_PATH)
        if pattern is None:
            pattern = Config.get('girouette.CONTROLLERS_PATTERN')

        scanner = ControllerScanner(path, pattern)
        found = await scanner.scan(self.register)

        logger.info(f"Registered {len(found)} controllers from {scanner.root}")
        return [controller for _, controller in found]

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, controller: type, path: Optional[str] = None):
        """
        Register the routes and resource of one controller

        Declaration errors propagate; the scanner turns them into a logged
        LoadError for the file. Whatever the controller already submitted
        to the router is discarded first, so a failed controller leaves no
        routes behind.
        """
        handles: List[Any] = []
        try:
            self.register_routes(controller, handles)
            self.register_resource(controller)
        except Exception:
            for handle in handles:
                self._discard(handle)
            raise

        self._controllers[path or f"{controller.__module__}.{controller.__qualname__}"] = controller

    def register_many(self, controllers: Iterable[Union[type, Tuple[str, type]]]):
        """
        Register a statically assembled controller list

        Entries are controller types or (path, controller) pairs, as
        returned by ControllerScanner.scan().
        """
        for entry in controllers:
            if isinstance(entry, tuple):
                path, controller = entry
                self.register(controller, path)
            else:
                self.register(entry)

    def register_routes(self, controller: type, handles: Optional[List[Any]] = None) -> List[ResolvedRoute]:
        """
        Register the ordinary routes of a controller

        Args:
            controller: Controller class
            handles: Optional list receiving every handle submitted to the router
        """
        group = get_group_declaration(controller, self.store)
        registered: List[ResolvedRoute] = []

        for method_name, declaration in get_route_declarations(controller, self.store).items():
            if not declaration.is_complete:
                logger.warning(
                    f"{controller.__name__}.{method_name} has route options but no verb decorator; skipped"
                )
                continue

            resolved = self.group_resolver.resolve(declaration, (controller, method_name), group)
            try:
                handle = self.register_single_route(resolved)
            except Exception as e:
                logger.debug(
                    f"Route {resolved.method} {resolved.pattern} of {controller.__name__} not registered: {e}",
                    exc_info=True,
                )
                continue

            registered.append(resolved)
            if handles is not None:
                handles.append(handle)

        return registered

    def register_single_route(self, resolved: ResolvedRoute):
        """Submit one resolved route; a handle that fails to configure is discarded"""
        handle = self.router.route(resolved.pattern, resolved.methods, resolved.handler)

        try:
            if resolved.name:
                handle.as_(resolved.name)

            for clause in resolved.where:
                handle.where(clause.key, clause.matcher)

            for middleware in resolved.middleware:
                handle.use(middleware)

            if resolved.domain:
                handle.domain(resolved.domain)
        except Exception:
            self._discard(handle)
            raise

        return handle

    def register_resource(self, controller: type):
        """
        Register and configure the resource of a controller

        Any failure, from the router or while applying params, name, filter
        or middleware, is logged as a ResourceRegistrationError and the
        partially configured handle is discarded. The controller's ordinary
        routes are unaffected.
        """
        declaration = get_resource_declaration(controller, self.store)
        if declaration is None:
            return None

        handle = None
        try:
            handle = self.router.resource(declaration.pattern, controller)
            return self.resource_expander.configure(handle, declaration)
        except Exception as e:
            error = ResourceRegistrationError(
                f"Resource '{declaration.pattern}' of {controller.__name__} rejected: {e}",
                controller=controller,
            )
            logger.error(error.message, exc_info=e)
            if handle is not None:
                self._discard(handle)
            return None

    def _discard(self, handle: Any):
        # Only routers that keep handles pending can take them back
        discard = getattr(self.router, 'discard', None)
        if discard is not None:
            discard(handle)
