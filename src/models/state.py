"""
Response state model and pipeline helper

Defines ResponseState dataclass for the functional pipeline pattern used to
turn built directives into a response payload, and the pipeline() helper
for composing transformation stages.
"""

from typing import Any, Callable, Dict, List, Optional, Type, TypeVar
from dataclasses import dataclass, field

from .directives import Directive


RS = TypeVar("RS", bound="ResponseState")


@dataclass
class StreamResponse:
    """
    Response payload carrying stream markup

    The host application's transport copies these fields into its own
    response object.

    Attributes:
        body: Markup text
        content_type: Value for the Content-Type header
        status: HTTP status code
        headers: Additional headers (Content-Type included)
    """
    body: str
    content_type: str
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class ResponseState:
    """
    Central state container for the response pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: directives, verbosity
        - content_validate: validated
        - markup_render: markup
        - response_assemble: response

    Attributes:
        directives: Directives to stream, in output order
        renderer: DirectiveRenderer used by markup_render
        verbosity: Logging verbosity level
        validated: Every directive passed validation
        markup: Rendered markup, one fragment per directive
        response: Final response payload
    """

    directives: List[Directive] = field(default_factory=list)
    renderer: Optional[Any] = field(default=None)
    verbosity: int = field(default=1)

    # Pipeline state
    validated: bool = field(default=False)
    markup: List[str] = field(default_factory=list)
    response: Optional[StreamResponse] = field(default=None)

    @classmethod
    def state_createFromDirectives(
        cls: Type["ResponseState"], directives: List[Directive], renderer: Any, verbosity: int
    ) -> "ResponseState":
        """
        Create ResponseState for a list of built directives.

        Args:
            directives: Directives to stream; copied so later builder calls
                        do not leak into the response
            renderer: DirectiveRenderer for the markup stage
            verbosity: Logging verbosity level

        Returns:
            ResponseState ready for the first pipeline stage
        """
        return cls(
            directives=[directive.copy() for directive in directives],
            renderer=renderer,
            verbosity=verbosity,
        )

    def copy(self: RS) -> RS:
        """
        Creates a shallow copy of the ResponseState instance.

        Returns:
            A new ResponseState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ResponseState, *stages: Callable[[ResponseState], ResponseState]
) -> ResponseState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ResponseState) -> ResponseState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            content_validate,
            markup_render,
            response_assemble,
        )

    This is equivalent to:
        response_assemble(markup_render(content_validate(initial_state)))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
