"""
Collaborator protocols consumed by the builder

turbostream does not know about any ORM. Entities, naming conventions and
template rendering are reached through the structural protocols below, so
any object with the right methods plugs in.
"""

from typing import Any, Dict, Protocol, runtime_checkable

from .directives import TemplateReference


@runtime_checkable
class StreamableEntity(Protocol):
    """
    Lifecycle introspection of a data-model instance

    Methods:
        exists: Whether the entity is currently persisted
        isSoftDeleted: Whether the entity carries a soft-delete marker
        wasJustCreated: Whether the entity was created in the current operation
        primaryKey: Primary key, or None when not yet persisted
        typeName: Class-style name of the entity type (e.g., "TestModel")
    """

    def exists(self) -> bool: ...

    def isSoftDeleted(self) -> bool: ...

    def wasJustCreated(self) -> bool: ...

    def primaryKey(self) -> Any: ...

    def typeName(self) -> str: ...


class Naming(Protocol):
    """Convention-based identifiers derived from entities"""

    def singularIdentifierFor(self, entity: StreamableEntity) -> str: ...

    def pluralIdentifierFor(self, entity: StreamableEntity) -> str: ...

    def templateReferenceFor(self, entity: StreamableEntity) -> TemplateReference: ...


class TemplateRenderer(Protocol):
    """Renders a named view with a data mapping into markup text"""

    def render(self, name: str, data: Dict[str, Any]) -> str: ...


class Fragment(Protocol):
    """A pre-rendered content object (e.g., a bound view) that renders itself"""

    def render(self) -> str: ...
