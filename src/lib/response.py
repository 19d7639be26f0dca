"""
Stream response assembly

Builds StreamResponse payloads by running the directives through a small
functional pipeline:

    content_validate -> markup_render -> response_assemble

Each stage takes a ResponseState and returns a new one. A failing stage
raises before any markup is produced.
"""

from typing import Any, Dict, Iterable, List, Optional

from ..config import appsettings
from ..models.directives import Directive
from ..models.state import ResponseState, StreamResponse, pipeline
from .log import LOG, state_connectToLogger, verbosity_current
from .renderer import DirectiveRenderer, directive_validate


def content_validate(inputstate: ResponseState) -> ResponseState:
    """
    Validate every directive before anything is rendered.

    Raises:
        MissingActionError, MissingContentError: First invalid directive
    """
    state = inputstate.copy()
    for directive in state.directives:
        directive_validate(directive)
    state.validated = True
    LOG(f"Validated {len(state.directives)} stream(s)", level=3)
    return state


def markup_render(inputstate: ResponseState) -> ResponseState:
    """Render each directive to markup, in order."""
    state = inputstate.copy()
    renderer: DirectiveRenderer = state.renderer or DirectiveRenderer()
    state.markup = [renderer.directive_render(directive) for directive in state.directives]
    return state


def response_assemble(inputstate: ResponseState) -> ResponseState:
    """Join rendered fragments into the response payload."""
    state = inputstate.copy()
    body = "\n\n".join(state.markup)
    content_type = appsettings.content_type
    if state.renderer is not None:
        content_type = state.renderer.settings.content_type
    state.response = StreamResponse(
        body=body,
        content_type=content_type,
        headers={'Content-Type': content_type},
    )
    LOG(f"Assembled stream response with {len(state.markup)} stream(s)", level=2)
    return state


def response_make(
    directives: List[Directive],
    renderer: Optional[DirectiveRenderer] = None,
    status: int = 200,
) -> StreamResponse:
    """
    Render directives into a StreamResponse

    Args:
        directives: Directives in output order
        renderer: DirectiveRenderer to use (a default one when omitted)
        status: HTTP status code

    Returns:
        StreamResponse with the stream content type
    """
    state = ResponseState.state_createFromDirectives(
        directives, renderer or DirectiveRenderer(), verbosity_current()
    )
    state_connectToLogger(state)
    final_state = pipeline(state, content_validate, markup_render, response_assemble)
    final_state.response.status = status
    return final_state.response


def streams_combine(*builders: Any, status: int = 200) -> StreamResponse:
    """
    Combine several builders into one response

    The first builder's renderer is used for all directives. Builders are
    rendered in argument order; any invalid builder fails the whole response.

    Example:
        >>> streams_combine(
        ...     StreamBuilder().remove('comment_1'),
        ...     StreamBuilder().update('comments_count', '2'),
        ... )
    """
    items: Iterable[Any] = builders[0] if len(builders) == 1 and isinstance(builders[0], (list, tuple)) else builders
    items = list(items)
    renderer = items[0].renderer if items else None
    return response_make([builder.directive for builder in items], renderer, status=status)


def stream_view(
    views: Any,
    name: str,
    data: Optional[Dict[str, Any]] = None,
    status: int = 200,
) -> StreamResponse:
    """
    Respond with a whole view rendered as stream markup

    For views that already contain one or more stream elements.

    Args:
        views: Template renderer exposing render(name, data)
        name: View name
        data: View data
    """
    body = views.render(name, dict(data or {}))
    LOG(f"Streaming view '{name}'", level=2)
    return StreamResponse(
        body=body,
        content_type=appsettings.content_type,
        status=status,
        headers={'Content-Type': appsettings.content_type},
    )
