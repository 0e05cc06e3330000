"""
Application Class
Service container and provider lifecycle around the router
"""
from sanic import Sanic
from typing import Any, Callable, Dict, List, Optional
import inspect

from girouette.logging import getLogger
from girouette.providers.logging_service_provider import LoggingServiceProvider

logger = getLogger(__name__)


class Application:
    """
    Service container with provider lifecycle

    Logging is configured from app.* settings as soon as the application
    is created; pass configure_logging=False to leave loggers untouched.

    Lifecycle:
        app = Application(sanic_app=Sanic('blog'))
        app.register_provider(GirouetteServiceProvider)
        app.boot()
        await app.start()   # scans controllers and mounts routes
    """

    def __init__(
        self,
        sanic_app: Optional[Sanic] = None,
        name: str = 'girouette',
        configure_logging: bool = True,
    ):
        self.name = name
        self.sanic_app = sanic_app
        self.providers: List[Any] = []
        self.bindings: Dict[str, Dict[str, Any]] = {}
        self.booted = False
        self.started = False

        if configure_logging:
            self.register_provider(LoggingServiceProvider)

    def get_sanic(self) -> Sanic:
        """Get the attached Sanic app, creating one on first use"""
        if self.sanic_app is None:
            self.sanic_app = Sanic(self.name)
        return self.sanic_app

    def has_sanic(self) -> bool:
        return self.sanic_app is not None

    # =========================================================================
    # Container
    # =========================================================================

    def singleton(self, key: str, factory_or_instance):
        """
        Register a singleton binding
        If factory: Will be called once with the app and cached
        If instance: Will be stored directly
        """
        if inspect.isfunction(factory_or_instance) or inspect.ismethod(factory_or_instance):
            self.bindings[key] = {'type': 'singleton', 'factory': factory_or_instance, 'instance': None}
        else:
            self.bindings[key] = {'type': 'singleton', 'factory': None, 'instance': factory_or_instance}

    def bind(self, key: str, factory: Callable[['Application'], Any]):
        """Register a factory binding (called every time)"""
        self.bindings[key] = {'type': 'factory', 'factory': factory}

    def make(self, key: str) -> Any:
        """Resolve a binding from the container"""
        if key not in self.bindings:
            raise KeyError(f"Binding '{key}' not found in container")

        binding = self.bindings[key]
        if binding['type'] == 'singleton':
            if binding['instance'] is None:
                binding['instance'] = binding['factory'](self)
            return binding['instance']

        return binding['factory'](self)

    def has(self, key: str) -> bool:
        return key in self.bindings

    # =========================================================================
    # Providers
    # =========================================================================

    def register_provider(self, provider_class):
        """Register a service provider"""
        provider = provider_class(self)
        register = provider.register()
        if register is not False:
            self.providers.append(provider)
        return provider

    def boot(self):
        """Boot all service providers"""
        if self.booted:
            return

        for provider in self.providers:
            provider.boot()

        self.booted = True

    async def start(self):
        """Run the async startup hook of every provider (boots first if needed)"""
        if self.started:
            return

        self.boot()
        for provider in self.providers:
            await provider.start()
            logger.debug(f"Started provider {provider.__class__.__name__}")

        self.started = True

    def run(self, host: str = '127.0.0.1', port: int = 8000, **kwargs):
        """Run the Sanic server, starting providers before it serves"""
        sanic_app = self.get_sanic()
        sanic_app.before_server_start(lambda _app: self.start())
        sanic_app.run(host=host, port=port, **kwargs)
