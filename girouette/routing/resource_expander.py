"""
Resource Expander
Configures a router resource handle from a ResourceDeclaration
"""
from girouette.logging import getLogger
from girouette.routing.contracts import ResourceHandle
from girouette.routing.declarations import API_ONLY, EXCEPT, ONLY, ResourceDeclaration

logger = getLogger(__name__)


class ResourceExpander:
    """
    Applies params, the action filter, per-action middleware and the name
    override to a resource handle, always in that order.

    The seven canonical actions and their default parameter names come from
    the router's resource primitive; nothing here re-derives REST
    conventions.
    """

    def configure(self, handle: ResourceHandle, declaration: ResourceDeclaration) -> ResourceHandle:
        if declaration.params:
            handle.params(declaration.params)

        self.apply_filter(handle, declaration)

        for rule in declaration.middleware:
            actions = rule.actions if isinstance(rule.actions, str) else list(rule.actions)
            handle.middleware(actions, rule.middleware)

        if declaration.name:
            handle.as_(declaration.name)

        return handle

    @staticmethod
    def apply_filter(handle: ResourceHandle, declaration: ResourceDeclaration):
        resource_filter = declaration.filter
        if resource_filter is None:
            return

        if resource_filter.kind == API_ONLY:
            handle.api_only()
        elif resource_filter.kind == ONLY:
            handle.only(list(resource_filter.actions))
        elif resource_filter.kind == EXCEPT:
            handle.except_(list(resource_filter.actions))

        logger.debug(
            "Applied resource filter",
            extra={'resource': declaration.pattern, 'filter': resource_filter.kind},
        )
