"""
Exceptions raised by turbostream

Builders are permissive while being configured; errors surface only when a
directive is rendered, a view is looked up, or a matcher is evaluated.
"""


class StreamError(RuntimeError):
    """Base class for stream building errors"""


class MissingContentError(StreamError):
    """A non-remove directive was rendered without any content"""

    @classmethod
    def missingView(cls) -> "MissingContentError":
        return cls(
            'Missing View: All Turbo Stream Actions Except "remove" need a view '
            'template or inline content, but none were passed.'
        )


class MissingActionError(StreamError):
    """A directive was rendered before any action was set"""

    @classmethod
    def missingAction(cls) -> "MissingActionError":
        return cls('Missing Action: call action() or one of the action methods before rendering.')


class ViewNotFoundError(StreamError, LookupError):
    """The view registry has no view registered under the requested name"""

    @classmethod
    def forName(cls, name: str) -> "ViewNotFoundError":
        return cls(f"View not found: '{name}'")


class TextAssertionFailure(AssertionError):
    """
    Expected text was not found inside a stream directive

    Subclasses AssertionError so test runners report it as a failed
    expectation rather than an error.
    """

    @classmethod
    def forText(cls, expected: str, actual: str, line_number: int = 0) -> "TextAssertionFailure":
        location = f" (stream at line {line_number})" if line_number else ""
        return cls(
            f"Failed asserting that the stream content{location} contains '{expected}'.\n"
            f"Actual content:\n{actual}"
        )
