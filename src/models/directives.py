"""
Stream directive models

Defines the actions, destinations and content sources a stream directive
is built from, and the Directive state accumulated by StreamBuilder.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .entity import StreamableEntity


class StreamAction(str, Enum):
    """
    Conventional stream actions

    The action field of a directive is a plain string, so custom actions
    are allowed; these are the ones the builder has shortcuts for.
    """
    APPEND = "append"
    PREPEND = "prepend"
    BEFORE = "before"
    AFTER = "after"
    UPDATE = "update"
    REPLACE = "replace"
    REMOVE = "remove"


# Actions whose entity destination resolves to the collection identifier
COLLECTION_ACTIONS: Set[str] = {
    StreamAction.APPEND.value,
    StreamAction.PREPEND.value,
}

# Actions that derive a template reference from an entity destination
CONTENT_DERIVING_ACTIONS: Set[str] = {
    StreamAction.APPEND.value,
    StreamAction.UPDATE.value,
    StreamAction.REPLACE.value,
}


def action_normalize(action: Union[str, StreamAction]) -> str:
    """Plain string value of an action"""
    if isinstance(action, StreamAction):
        return action.value
    return action


@dataclass(frozen=True)
class ExplicitTarget:
    """A destination given as an identifier string; never reinterpreted"""
    value: str


@dataclass(frozen=True)
class EntityTarget:
    """
    A destination given as an entity instance

    Attributes:
        entity: The entity to derive an identifier from
        collection: Resolve to the plural collection identifier instead of
                    the per-instance DOM id
    """
    entity: 'StreamableEntity'
    collection: bool = False


Destination = Union[ExplicitTarget, EntityTarget]


def destination_wrap(value: Any, collection: bool = False) -> Destination:
    """
    Wrap a builder argument into a Destination variant

    This is the single point where strings and entities are told apart;
    everything downstream dispatches on the variant.
    """
    if isinstance(value, (ExplicitTarget, EntityTarget)):
        return value
    if isinstance(value, str):
        return ExplicitTarget(value)
    return EntityTarget(value, collection=collection)


@dataclass
class TemplateReference:
    """A named view plus the data mapping it is rendered with"""
    name: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class InlineContent:
    """
    Content supplied directly to the builder

    Attributes:
        value: Literal markup text, or a fragment object (exposing render()
               or __html__()) when safe is True
        safe: True for fragments; they are rendered when the directive is
              rendered and their output is used as markup without escaping
    """
    value: Any
    safe: bool = False


ContentSource = Optional[Union[TemplateReference, InlineContent]]


@dataclass
class Directive:
    """
    State of one stream directive under construction

    Attributes:
        action: Action name, or None until one is set
        target: Singular destination identifier (exclusive with targets)
        targets: Collection or selector destination (exclusive with target)
        content: Template reference, inline content, or None
    """
    action: Optional[str] = None
    target: Optional[str] = None
    targets: Optional[str] = None
    content: ContentSource = None

    def content_has(self) -> bool:
        """True when a usable content source is set (empty inline text counts as none)"""
        if isinstance(self.content, TemplateReference):
            return bool(self.content.name)
        if isinstance(self.content, InlineContent):
            return self.content.safe or bool(self.content.value)
        return False

    def copy(self) -> 'Directive':
        return Directive(
            action=self.action,
            target=self.target,
            targets=self.targets,
            content=self.content,
        )


@dataclass(frozen=True)
class Classification:
    """
    Default directive decided from an entity's lifecycle flags

    Attributes:
        action: Action to stream
        collection: True when target is the plural collection identifier
        target: Resolved destination identifier
        content: Derived template reference, or None for remove
    """
    action: str
    collection: bool
    target: str
    content: Optional[TemplateReference] = None
