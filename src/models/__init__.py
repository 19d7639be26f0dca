"""
Models package for turbostream

Contains data structures, collaborator protocols and exceptions.
"""

from .state import ResponseState, StreamResponse, pipeline
from .directives import (
    StreamAction,
    Directive,
    Classification,
    ExplicitTarget,
    EntityTarget,
    TemplateReference,
    InlineContent,
    COLLECTION_ACTIONS,
    CONTENT_DERIVING_ACTIONS,
)
from .entity import StreamableEntity, Naming, TemplateRenderer, Fragment
from .parser import ElementMatch, ParsedDirective, MatcherState
from .errors import (
    StreamError,
    MissingContentError,
    MissingActionError,
    ViewNotFoundError,
    TextAssertionFailure,
)

__all__ = [
    "ResponseState",
    "StreamResponse",
    "pipeline",
    "StreamAction",
    "Directive",
    "Classification",
    "ExplicitTarget",
    "EntityTarget",
    "TemplateReference",
    "InlineContent",
    "COLLECTION_ACTIONS",
    "CONTENT_DERIVING_ACTIONS",
    "StreamableEntity",
    "Naming",
    "TemplateRenderer",
    "Fragment",
    "ElementMatch",
    "ParsedDirective",
    "MatcherState",
    "StreamError",
    "MissingContentError",
    "MissingActionError",
    "ViewNotFoundError",
    "TextAssertionFailure",
]
