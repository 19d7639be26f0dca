"""
Parser-specific data models

Type-safe structures for parser operations and return values.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ElementMatch:
    """
    Result of finding an opening stream tag in source text

    Attributes:
        attributes: Raw attribute text between the tag name and '>'
        start: Position of the '<' of the opening tag
        end: Position just past the '>' of the opening tag
        selfClosing: True for ``<turbo-stream ... />``

    Example:
        For source '<turbo-stream action="remove" target="a"/>':
        ElementMatch(attributes=' action="remove" target="a"', start=0,
                     end=42, selfClosing=True)
    """
    attributes: str
    start: int
    end: int
    selfClosing: bool = False


@dataclass(frozen=True)
class ParsedDirective:
    """
    One stream directive recovered from markup

    Constructed once per parsed element and read-only thereafter.

    Attributes:
        action: Value of the action attribute, or None
        target: Value of the target attribute, or None
        targets: Value of the targets attribute, or None
        innerText: Content with the template wrapper removed, trimmed
        attributes: Every attribute on the element, HTML-unescaped
        line_number: Source line of the opening tag
    """
    action: Optional[str]
    target: Optional[str]
    targets: Optional[str]
    innerText: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    line_number: int = 1

    def attribute_get(self, name: str) -> Optional[str]:
        """Value of any attribute by name; None when absent"""
        if name in ('action', 'target', 'targets'):
            return getattr(self, name)
        if name == 'innerText':
            return self.innerText
        return self.attributes.get(name)


@dataclass
class MatcherState:
    """
    Accumulated checks of one StreamMatcher

    Attributes:
        filters: (attribute name, expected value) pairs, in call order
        textAssertions: Substrings expected in the directive's innerText
    """
    filters: List[Tuple[str, Optional[str]]] = field(default_factory=list)
    textAssertions: List[str] = field(default_factory=list)

    def copy(self) -> 'MatcherState':
        return MatcherState(
            filters=list(self.filters),
            textAssertions=list(self.textAssertions),
        )
