"""
Router Contracts
The narrow surface the registration engine needs from a router

Any router can be plugged in as long as it provides these handles;
girouette.routing.router.Router is the in-process implementation.
"""
from typing import Any, Dict, List, Protocol, Sequence, Tuple, Union


class RouteHandle(Protocol):
    def as_(self, name: str) -> 'RouteHandle': ...

    def where(self, key: str, matcher: Any) -> 'RouteHandle': ...

    def use(self, middleware: Any) -> 'RouteHandle': ...

    def domain(self, domain: str) -> 'RouteHandle': ...


class ResourceHandle(Protocol):
    def params(self, mapping: Dict[str, str]) -> 'ResourceHandle': ...

    def middleware(self, actions: Union[str, List[str]], middleware: Any) -> 'ResourceHandle': ...

    def api_only(self) -> 'ResourceHandle': ...

    def only(self, actions: Sequence[str]) -> 'ResourceHandle': ...

    def except_(self, actions: Sequence[str]) -> 'ResourceHandle': ...

    def as_(self, name: str) -> 'ResourceHandle': ...


class RouterContract(Protocol):
    def route(self, pattern: str, methods: List[str], handler: Tuple[type, str]) -> RouteHandle: ...

    def resource(self, pattern: str, controller: type) -> ResourceHandle: ...
