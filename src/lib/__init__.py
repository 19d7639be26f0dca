"""
turbostream - Turbo Stream response builder and test matcher

Builds stream-update markup from data-model changes and parses it back
into queryable records for assertions.
"""

__version__ = "1.0.0"

from .builder import StreamBuilder
from .classifier import entity_classify
from .naming import ConventionNaming, TargetResolver
from .renderer import DirectiveRenderer
from .parser import StreamParser, streams_parse
from .matcher import StreamMatcher
from .response import response_make, streams_combine, stream_view
from .views import ViewRegistry
from .log import LOG, state_connectToLogger, logging_configure

__all__ = [
    "StreamBuilder",
    "entity_classify",
    "ConventionNaming",
    "TargetResolver",
    "DirectiveRenderer",
    "StreamParser",
    "streams_parse",
    "StreamMatcher",
    "response_make",
    "streams_combine",
    "stream_view",
    "ViewRegistry",
    "LOG",
    "state_connectToLogger",
    "logging_configure",
    "__version__",
]
