"""
Fluent builder for stream directives

StreamBuilder accumulates one directive (action, destination, content)
across a chain of calls and renders it to markup or to a response.

Example:
    >>> StreamBuilder().append('comments', '<p>Hi</p>').toMarkup()
    '<turbo-stream target="comments" action="append">...'

    >>> StreamBuilder().target('flash').action('update').partial('layouts/_flash', {'msg': 'Saved'})

    >>> StreamBuilder.forEntity(comment).toResponse()
"""

from typing import Any, Dict, Optional, Union

from ..config import AppSettings
from ..models.directives import (
    COLLECTION_ACTIONS,
    CONTENT_DERIVING_ACTIONS,
    ContentSource,
    Directive,
    EntityTarget,
    InlineContent,
    StreamAction,
    TemplateReference,
    action_normalize,
    destination_wrap,
)
from ..models.entity import Naming, StreamableEntity, TemplateRenderer
from ..models.state import StreamResponse
from .classifier import entity_classify
from .naming import TargetResolver
from .renderer import DirectiveRenderer
from .response import response_make
from .log import LOG


Target = Union[str, StreamableEntity]


def content_wrap(content: Any) -> Optional[InlineContent]:
    """
    Wrap inline builder content

    Strings are kept as-is. Objects that render themselves (bound views,
    pre-rendered fragments) are stored unrendered and marked safe; the
    renderer renders them with the directive.
    """
    if content is None:
        return None
    if isinstance(content, InlineContent):
        return content
    if isinstance(content, str):
        return InlineContent(content)
    if callable(getattr(content, 'render', None)) or callable(getattr(content, '__html__', None)):
        return InlineContent(content, safe=True)
    return InlineContent(str(content))


class StreamBuilder:
    """
    Builder for a single stream directive

    Every public method returns the builder itself. Destination setters are
    mutually exclusive (target clears targets and vice versa); the action
    shortcuts reset action, destination and content in one go.

    Attributes:
        directive: Directive state under construction
        resolver: TargetResolver turning entities into identifiers
        renderer: DirectiveRenderer producing markup
    """

    def __init__(
        self,
        naming: Optional[Naming] = None,
        templates: Optional[TemplateRenderer] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        self.directive = Directive()
        self.resolver = TargetResolver(naming)
        self.renderer = DirectiveRenderer(templates, settings)

    @classmethod
    def forEntity(
        cls,
        entity: StreamableEntity,
        action: Optional[Union[str, StreamAction]] = None,
        naming: Optional[Naming] = None,
        templates: Optional[TemplateRenderer] = None,
        settings: Optional[AppSettings] = None,
    ) -> "StreamBuilder":
        """
        Build the conventional directive for an entity's current state

        Args:
            entity: Entity that was created, updated or deleted
            action: Override for created/updated entities
            naming, templates, settings: Optional collaborators

        Returns:
            A fully configured builder (remove, append or replace)
        """
        builder = cls(naming=naming, templates=templates, settings=settings)
        classification = entity_classify(entity, action, builder.resolver.naming)
        builder.directive = Directive(
            action=classification.action,
            target=classification.target,
            content=classification.content,
        )
        return builder

    # ------------------------------------------------------------------
    # Individual setters
    # ------------------------------------------------------------------

    def target(self, target: Target, asCollection: bool = False) -> "StreamBuilder":
        self.directive.target = self.resolver.resolve(target, asCollection)
        self.directive.targets = None
        return self

    def targets(self, targets: Target) -> "StreamBuilder":
        self.directive.target = None
        self.directive.targets = self.resolver.resolve(targets, asCollection=True)
        return self

    def action(self, action: Union[str, StreamAction]) -> "StreamBuilder":
        self.directive.action = action_normalize(action)
        return self

    def view(self, view: str, data: Optional[Dict[str, Any]] = None) -> "StreamBuilder":
        """Render content from a named view; replaces any inline content"""
        self.directive.content = TemplateReference(name=view, data=dict(data or {}))
        return self

    def partial(self, view: str, data: Optional[Dict[str, Any]] = None) -> "StreamBuilder":
        return self.view(view, data)

    def content(self, content: Any) -> "StreamBuilder":
        """Use inline content; replaces any view reference"""
        self.directive.content = content_wrap(content)
        return self

    # ------------------------------------------------------------------
    # Action shortcuts
    # ------------------------------------------------------------------

    def append(self, target: Target, content: Any = None) -> "StreamBuilder":
        return self.action_build(StreamAction.APPEND.value, target, content)

    def appendAll(self, targets: Target, content: Any = None) -> "StreamBuilder":
        return self.actionAll_build(StreamAction.APPEND.value, targets, content)

    def prepend(self, target: Target, content: Any = None) -> "StreamBuilder":
        return self.action_build(StreamAction.PREPEND.value, target, content)

    def prependAll(self, targets: Target, content: Any = None) -> "StreamBuilder":
        return self.actionAll_build(StreamAction.PREPEND.value, targets, content)

    def before(self, target: Target, content: Any = None) -> "StreamBuilder":
        return self.action_build(StreamAction.BEFORE.value, target, content)

    def beforeAll(self, targets: Target, content: Any = None) -> "StreamBuilder":
        return self.actionAll_build(StreamAction.BEFORE.value, targets, content)

    def after(self, target: Target, content: Any = None) -> "StreamBuilder":
        return self.action_build(StreamAction.AFTER.value, target, content)

    def afterAll(self, targets: Target, content: Any = None) -> "StreamBuilder":
        return self.actionAll_build(StreamAction.AFTER.value, targets, content)

    def update(self, target: Target, content: Any = None) -> "StreamBuilder":
        return self.action_build(StreamAction.UPDATE.value, target, content)

    def updateAll(self, targets: Target, content: Any = None) -> "StreamBuilder":
        return self.actionAll_build(StreamAction.UPDATE.value, targets, content)

    def replace(self, target: Target, content: Any = None) -> "StreamBuilder":
        return self.action_build(StreamAction.REPLACE.value, target, content)

    def replaceAll(self, targets: Target, content: Any = None) -> "StreamBuilder":
        return self.actionAll_build(StreamAction.REPLACE.value, targets, content)

    def remove(self, target: Target) -> "StreamBuilder":
        return self.action_build(StreamAction.REMOVE.value, target)

    def removeAll(self, targets: Target) -> "StreamBuilder":
        return self.actionAll_build(StreamAction.REMOVE.value, targets)

    def action_build(self, action: str, target: Target, content: Any = None) -> "StreamBuilder":
        """
        Reset the directive to a single-target action

        Entity destinations of append/prepend resolve to the collection id.
        Without explicit content, append/update/replace on an entity derive
        the entity's partial.
        """
        destination = destination_wrap(target, collection=action in COLLECTION_ACTIONS)

        source: ContentSource = content_wrap(content)
        if source is None and isinstance(destination, EntityTarget) and action in CONTENT_DERIVING_ACTIONS:
            source = self.resolver.naming.templateReferenceFor(destination.entity)

        self.directive = Directive(
            action=action,
            target=self.resolver.resolve(destination),
            content=source,
        )
        LOG(f"Built '{action}' stream for target '{self.directive.target}'", level=2)
        return self

    def actionAll_build(self, action: str, targets: Target, content: Any = None) -> "StreamBuilder":
        """Reset the directive to a multi-target action; content is never derived"""
        self.directive = Directive(
            action=action,
            targets=self.resolver.resolve(targets, asCollection=True),
            content=content_wrap(content),
        )
        LOG(f"Built '{action}' stream for targets '{self.directive.targets}'", level=2)
        return self

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def toMarkup(self) -> str:
        """
        Render the directive to markup

        Raises:
            MissingContentError: Action is not remove and no content is set
            MissingActionError: No action was set
        """
        return self.renderer.directive_render(self.directive)

    def toResponse(self, status: int = 200) -> StreamResponse:
        """Render the directive into a stream response payload"""
        return response_make([self.directive], self.renderer, status=status)

    def __str__(self) -> str:
        return self.toMarkup()

    def __repr__(self) -> str:
        d = self.directive
        return f"StreamBuilder(action={d.action!r}, target={d.target!r}, targets={d.targets!r})"
