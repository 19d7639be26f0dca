"""
View registry

The default template-render collaborator. Views are plain callables
registered under a name; rendering a view calls its handler with the data
mapping. Applications with a real template engine pass their own renderer
exposing render(name, data) instead.
"""

from typing import Any, Callable, Dict, List, Optional

from ..models.views import ViewSpec
from ..models.errors import ViewNotFoundError
from .log import LOG


class BoundView:
    """
    A view name bound to its data, rendered on demand

    Passing a BoundView as builder content marks the result as already
    rendered markup.
    """

    def __init__(self, registry: 'ViewRegistry', name: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.registry = registry
        self.name = name
        self.data = data or {}

    def render(self) -> str:
        return self.registry.render(self.name, self.data)

    def __repr__(self) -> str:
        return f"BoundView({self.name!r})"


class ViewRegistry:
    """
    Registry of named views

    Maps view names (and aliases) to ViewSpec objects holding the handler.
    """

    def __init__(self) -> None:
        self.specs: Dict[str, ViewSpec] = {}

    def register(self, spec: ViewSpec) -> None:
        """Register a view specification"""
        self.specs[spec.name] = spec
        # Also register aliases
        for alias in spec.aliases:
            self.specs[alias] = spec

    def view_register(
        self, name: str, aliases: Optional[List[str]] = None, description: str = ""
    ) -> Callable[[Callable[[Dict[str, Any]], str]], Callable[[Dict[str, Any]], str]]:
        """
        Decorator form of register()

        Example:
            >>> views = ViewRegistry()
            >>> @views.view_register('comments/_comment')
            ... def comment(data):
            ...     return f"<div>{data['comment'].body}</div>"
        """
        def decorator(handler: Callable[[Dict[str, Any]], str]) -> Callable[[Dict[str, Any]], str]:
            self.register(ViewSpec(name=name, handler=handler, description=description, aliases=aliases or []))
            return handler
        return decorator

    def get(self, name: str) -> Optional[Callable[[Dict[str, Any]], str]]:
        """Get view handler by name, or None if not registered"""
        spec = self.spec_get(name)
        return spec.handler if spec else None

    def spec_get(self, name: str) -> Optional[ViewSpec]:
        """Get full view specification by name"""
        return self.specs.get(name)

    def render(self, name: str, data: Optional[Dict[str, Any]] = None) -> str:
        """
        Render a registered view

        Raises:
            ViewNotFoundError: If no view is registered under name
        """
        handler = self.get(name)
        if handler is None:
            raise ViewNotFoundError.forName(name)
        LOG(f"Rendering view '{name}'", level=3)
        return handler(dict(data or {}))

    def view(self, name: str, data: Optional[Dict[str, Any]] = None) -> BoundView:
        """Bind a view to data without rendering it yet"""
        return BoundView(self, name, data)
