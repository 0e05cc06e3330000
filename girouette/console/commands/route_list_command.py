"""
Route List Command
Display the routes a controllers directory produces
"""
from girouette.console.command import Command
from girouette.exceptions import DiscoveryError
from girouette.registrar import Girouette
from girouette.routing.router import Router


class RouteListCommand(Command):
    """List all routes declared by the controllers under a directory"""

    name = "route:list"
    description = "List all routes declared by the controllers"
    signature = "route:list [path] [--pattern=REGEX]"

    async def handle(self, path: str = None, pattern: str = None, **kwargs):
        router = Router()
        girouette = Girouette(router)

        try:
            await girouette.load(path, pattern)
        except DiscoveryError as e:
            self.error(e.message)
            return 1

        routes = router.commit().to_dict()
        if not routes['total']:
            self.error("No routes registered")
            return 1

        table_data = []
        for route in routes['routes']:
            table_data.append([
                '|'.join(route['methods']),
                route['pattern'],
                route['name'] or '-',
                route['action'],
                ', '.join(route['middleware']) if route['middleware'] else '-',
            ])
        table_data.sort(key=lambda row: row[1])

        self.table(
            ['Method', 'URI', 'Name', 'Action', 'Middleware'],
            table_data,
            max_widths=[20, 50, 30, 40, 30],
        )
        self.line()
        self.success(f"Showing {routes['total']} routes")
        return 0
