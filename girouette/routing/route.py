"""
Route Class
Represents a single route with a fluent configuration API
"""
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import re

from girouette.defaults import HTTP_METHODS

Handler = Union[Tuple[type, str], Callable]


class Route:
    """
    Route class with fluent API for defining routes

    Usage:
        route = Route(['GET'], '/users/:id', (UsersController, 'show'))
        route.as_('users.show').where('id', r'^\\d+$').use('auth')
    """

    PARAMETER_PATTERN = re.compile(r':(\w+)\??')

    def __init__(self, methods: List[str], pattern: str, handler: Handler):
        """
        Initialize a Route instance

        Args:
            methods: HTTP methods (GET, POST, etc.); 'ANY' expands to all of them
            pattern: Route pattern, e.g. '/posts/:id'
            handler: (controller, method_name) pair or a plain callable
        """
        self.methods = self._normalize_methods(methods)
        self.handler = handler
        self._pattern = self.normalize_pattern(pattern)
        self._name: Optional[str] = None
        self._middleware: List[Any] = []
        self._wheres: Dict[str, Any] = {}
        self._domain: Optional[str] = None
        self._deleted = False

    @staticmethod
    def _normalize_methods(methods: List[str]) -> List[str]:
        normalized: List[str] = []
        for method in methods:
            expanded = HTTP_METHODS if method.upper() == 'ANY' else (method.upper(),)
            normalized.extend(m for m in expanded if m not in normalized)
        return normalized

    @staticmethod
    def normalize_pattern(pattern: str) -> str:
        """'posts/' -> '/posts', '' -> '/'"""
        return '/' + pattern.strip('/')

    # =========================================================================
    # Fluent configuration
    # =========================================================================

    def as_(self, name: str) -> 'Route':
        """
        Set the route name

        Args:
            name: Route name

        Returns:
            Self for method chaining
        """
        self._name = name
        return self

    def name(self, name: str) -> 'Route':
        """Alias of as_()"""
        return self.as_(name)

    def use(self, middleware: Union[Any, List[Any]]) -> 'Route':
        """
        Append middleware to the route

        Args:
            middleware: Middleware reference or list of references

        Returns:
            Self for method chaining
        """
        if isinstance(middleware, (list, tuple)):
            self._middleware.extend(middleware)
        else:
            self._middleware.append(middleware)
        return self

    def middleware(self, middleware: Union[Any, List[Any]]) -> 'Route':
        """Alias of use()"""
        return self.use(middleware)

    def where(self, parameter: Union[str, Dict[str, Any]], matcher: Any = None) -> 'Route':
        """
        Add parameter constraints

        Args:
            parameter: Parameter name or dict of constraints
            matcher: Regex string, compiled pattern or callable (if parameter is a string)

        Returns:
            Self for method chaining

        Usage:
            route.where('id', r'^\\d+$')
            route.where({'id': r'^\\d+$', 'slug': re.compile('^[a-z-]+$')})
        """
        if isinstance(parameter, dict):
            self._wheres.update(parameter)
        elif matcher is not None:
            self._wheres[parameter] = matcher
        return self

    def domain(self, domain: str) -> 'Route':
        """
        Set the domain constraint for the route

        Args:
            domain: Domain pattern (e.g., 'admin.example.com')

        Returns:
            Self for method chaining
        """
        self._domain = domain
        return self

    def set_pattern(self, pattern: str) -> 'Route':
        self._pattern = self.normalize_pattern(pattern)
        return self

    def mark_as_deleted(self) -> 'Route':
        """Deleted routes are skipped when the router commits"""
        self._deleted = True
        return self

    # =========================================================================
    # Accessors
    # =========================================================================

    def is_deleted(self) -> bool:
        return self._deleted

    def get_pattern(self) -> str:
        return self._pattern

    def get_name(self) -> Optional[str]:
        return self._name

    def get_methods(self) -> List[str]:
        return self.methods

    def get_handler(self) -> Handler:
        return self.handler

    def get_middleware(self) -> List[Any]:
        return self._middleware

    def get_wheres(self) -> Dict[str, Any]:
        return self._wheres

    def get_domain(self) -> Optional[str]:
        return self._domain

    def get_parameter_names(self) -> List[str]:
        return self.PARAMETER_PATTERN.findall(self._pattern)

    def get_action_name(self) -> str:
        """Controller@method for controller handlers, the function name otherwise"""
        if isinstance(self.handler, tuple):
            controller, method = self.handler
            return f"{getattr(controller, '__name__', controller)}@{method}"
        return getattr(self.handler, '__name__', 'Closure')

    def to_dict(self) -> Dict[str, Any]:
        route_dict = {
            'name': self._name,
            'pattern': self._pattern,
            'methods': self.methods,
            'action': self.get_action_name(),
            'middleware': [self._describe(m) for m in self._middleware],
            'parameters': self.get_parameter_names(),
        }

        if self._domain:
            route_dict['domain'] = self._domain

        if self._wheres:
            route_dict['constraints'] = {key: self._describe(value) for key, value in self._wheres.items()}

        return route_dict

    @staticmethod
    def _describe(value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, re.Pattern):
            return value.pattern
        return getattr(value, '__name__', type(value).__name__)

    def __repr__(self) -> str:
        methods_str = '|'.join(self.methods)
        name_str = f" (name: {self._name})" if self._name else ""
        return f"<Route [{methods_str}] {self._pattern}{name_str}>"
