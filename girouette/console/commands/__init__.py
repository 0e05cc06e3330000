from girouette.console.commands.route_list_command import RouteListCommand

__all__ = ['RouteListCommand']
