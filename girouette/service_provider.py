"""
Service Provider Base Class
Providers register services in the container and bootstrap them
"""
from abc import ABC
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from girouette.application import Application


class ServiceProvider(ABC):
    """
    Base Service Provider class

    register() binds services, boot() runs once every provider is
    registered, and the async start() runs before the server accepts
    requests.
    """

    def __init__(self, app: 'Application'):
        self.app = app

    def register(self):
        """
        Register services in the container
        Called when the provider is registered (before booting)

        Example:
            self.app.singleton('router', lambda app: Router())
        """
        pass

    def boot(self):
        """Bootstrap services (after all providers are registered)"""
        pass

    async def start(self):
        """Async startup work such as scanning controllers"""
        pass
