"""
Girouette Service Provider
Binds the router and registration engine and loads controllers at startup
"""
from girouette.logging import getLogger
from girouette.registrar import Girouette
from girouette.routing.route_middleware_registry import RouteMiddlewareRegistry
from girouette.routing.router import Router
from girouette.routing.sanic_binding import SanicRouteBinder
from girouette.service_provider import ServiceProvider
from girouette.support import Config

logger = getLogger(__name__)


class GirouetteServiceProvider(ServiceProvider):
    """
    Register the routing services

    Bindings:
        router               Router (singleton)
        route.middleware     RouteMiddlewareRegistry (singleton)
        girouette            Girouette engine bound to the router (singleton)

    Config:
        girouette.CONTROLLERS_PATH     controllers root
        girouette.CONTROLLERS_PATTERN  file name regex override
    """

    def register(self):
        self.app.singleton('router', lambda app: Router())
        self.app.singleton('route.middleware', lambda app: RouteMiddlewareRegistry())
        self.app.singleton('girouette', lambda app: Girouette(app.make('router')))

    async def start(self):
        """Scan controllers, commit the router and mount it on Sanic if attached"""
        girouette = self.app.make('girouette')
        router = self.app.make('router')

        await girouette.load(
            Config.get('girouette.CONTROLLERS_PATH'),
            Config.get('girouette.CONTROLLERS_PATTERN'),
        )
        router.commit()
        logger.info(f"Committed {len(router.get_routes())} routes")

        if self.app.has_sanic():
            binder = SanicRouteBinder(
                router,
                self.app.get_sanic(),
                middleware_registry=self.app.make('route.middleware'),
            )
            binder.mount()
