"""
turbostream - Turbo Stream response builder and test matcher

Converts create/update/delete changes of data-model entities into Turbo
Stream markup, and parses that markup back into records for tests.
"""

__version__ = "1.0.0"

from .lib import (
    StreamBuilder,
    StreamParser,
    StreamMatcher,
    ViewRegistry,
    entity_classify,
    streams_combine,
    stream_view,
    LOG,
    state_connectToLogger,
)
from .models import StreamResponse, MissingContentError, TextAssertionFailure

__all__ = [
    "StreamBuilder",
    "StreamParser",
    "StreamMatcher",
    "ViewRegistry",
    "entity_classify",
    "streams_combine",
    "stream_view",
    "StreamResponse",
    "MissingContentError",
    "TextAssertionFailure",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
