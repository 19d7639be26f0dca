"""
Query object over one parsed stream directive

StreamMatcher has two entry points that fail differently on purpose:

- where()/matches() form a silent boolean filter, for narrowing a list of
  streams with a comprehension or filter().
- see() is a hard assertion: once the where() filters hold, a missing
  substring raises TextAssertionFailure, which the test runner reports.

Example:
    >>> appends = [m for m in matchers if m.copy().where('action', 'append').matches()]
    >>> matcher.where('target', 'item_1').see('First Item').matches()
    True
"""

import copy
from typing import Optional

from ..models.errors import TextAssertionFailure
from ..models.parser import MatcherState, ParsedDirective


class StreamMatcher:
    """
    Accumulates checks against a single ParsedDirective

    Attributes:
        record: The parsed directive being queried
        state: Filters and text assertions accumulated so far
    """

    def __init__(self, record: ParsedDirective, state: Optional[MatcherState] = None) -> None:
        self.record = record
        self.state = state or MatcherState()

    def where(self, attribute: str, expected: Optional[str]) -> "StreamMatcher":
        """Require an attribute (action, target, targets, or any other) to equal expected"""
        self.state.filters.append((attribute, expected))
        return self

    def see(self, text: str) -> "StreamMatcher":
        """Require the directive's content to contain text"""
        self.state.textAssertions.append(text)
        return self

    def matches(self) -> bool:
        """
        Evaluate accumulated checks

        Returns:
            False when any where() filter fails; True when all hold and
            every see() text is present.

        Raises:
            TextAssertionFailure: Filters hold but a see() text is missing
        """
        for attribute, expected in self.state.filters:
            if self.record.attribute_get(attribute) != expected:
                return False

        for text in self.state.textAssertions:
            if text not in self.record.innerText:
                raise TextAssertionFailure.forText(text, self.record.innerText, self.record.line_number)

        return True

    def copy(self) -> "StreamMatcher":
        """Independent matcher over the same record with a copy of the checks"""
        return type(self)(self.record, self.state.copy())

    def __copy__(self) -> "StreamMatcher":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "StreamMatcher":
        return type(self)(self.record, copy.deepcopy(self.state, memo))

    @property
    def action(self) -> Optional[str]:
        return self.record.action

    @property
    def target(self) -> Optional[str]:
        return self.record.target

    @property
    def targets(self) -> Optional[str]:
        return self.record.targets

    @property
    def innerText(self) -> str:
        return self.record.innerText

    def __repr__(self) -> str:
        return (
            f"StreamMatcher(action={self.record.action!r}, target={self.record.target!r}, "
            f"targets={self.record.targets!r}, filters={len(self.state.filters)})"
        )
