"""
Test helpers for stream responses

Converts response bodies into StreamMatcher lists and provides assertion
helpers built on them. The helpers raise AssertionError explicitly, so
they keep working when Python runs with -O. Intended for use inside pytest tests.

Example:
    >>> streams = streams_fromResponse(response)
    >>> assert len(streams_filter(streams, action='append')) == 2
    >>> assert_streamed(response, lambda m: m.where('target', 'item_1').see('First Item').matches())
"""

from typing import Any, Callable, List, Optional, Union

from ..config import appsettings
from ..models.state import StreamResponse
from .matcher import StreamMatcher
from .parser import StreamParser


def body_extract(response: Union[StreamResponse, str, bytes, Any]) -> str:
    """Text body of a StreamResponse, a string, bytes, or any object with .body/.text"""
    if isinstance(response, StreamResponse):
        return response.body
    if isinstance(response, bytes):
        return response.decode('utf-8')
    if isinstance(response, str):
        return response
    for attribute in ('body', 'text', 'content'):
        value = getattr(response, attribute, None)
        if isinstance(value, bytes):
            return value.decode('utf-8')
        if isinstance(value, str):
            return value
    raise TypeError(f"Cannot read a response body from {type(response).__name__}")


def streams_fromResponse(response: Union[StreamResponse, str, bytes, Any]) -> List[StreamMatcher]:
    """Parse a response body into one StreamMatcher per stream element"""
    return [StreamMatcher(record) for record in StreamParser(body_extract(response)).parse()]


def streams_filter(matchers: List[StreamMatcher], **attributes: Optional[str]) -> List[StreamMatcher]:
    """
    Matchers whose record has every given attribute value

    Each matcher is copied first, so the originals keep their filters.

    Example:
        >>> streams_filter(streams, action='remove', target='item_3')
    """
    selected = []
    for matcher in matchers:
        candidate = matcher.copy()
        for name, expected in attributes.items():
            candidate.where(name, expected)
        if candidate.matches():
            selected.append(matcher)
    return selected


def assert_streamed(
    response: Union[StreamResponse, str, bytes, Any],
    callback: Optional[Callable[[StreamMatcher], bool]] = None,
    count: Optional[int] = None,
    **attributes: Optional[str],
) -> List[StreamMatcher]:
    """
    Assert that the response holds matching streams

    Args:
        response: Response or body text
        callback: Optional predicate applied to a copy of each matcher
        count: Exact number of expected matches; at least one when omitted
        **attributes: Attribute equality filters (action=..., target=...)

    Returns:
        The matching matchers
    """
    if isinstance(response, StreamResponse):
        if response.content_type != appsettings.content_type:
            raise AssertionError(
                f"Expected content type '{appsettings.content_type}', got '{response.content_type}'."
            )

    matched = streams_filter(streams_fromResponse(response), **attributes)
    if callback is not None:
        matched = [matcher for matcher in matched if callback(matcher.copy())]

    if count is None:
        if not matched:
            raise AssertionError(f"Expected a stream matching {attributes or 'the callback'}, found none.")
    else:
        if len(matched) != count:
            raise AssertionError(
                f"Expected {count} stream(s) matching {attributes or 'the callback'}, found {len(matched)}."
            )
    return matched


def assert_notStreamed(
    response: Union[StreamResponse, str, bytes, Any],
    callback: Optional[Callable[[StreamMatcher], bool]] = None,
    **attributes: Optional[str],
) -> None:
    """Assert that no stream in the response matches"""
    matched = streams_filter(streams_fromResponse(response), **attributes)
    if callback is not None:
        matched = [matcher for matcher in matched if callback(matcher.copy())]
    if matched:
        raise AssertionError(f"Expected no stream matching {attributes or 'the callback'}, found {len(matched)}.")
