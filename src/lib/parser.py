"""
Parser for stream markup

Recovers stream directives from response bodies so tests can query them.

The parser operates in two phases:
1. Scanning: Locate opening stream tags and their closing tags
2. Processing: Extract attributes and unwrap the template content

Key features:
- Document-order output, one record per top-level stream element
- Attribute values in double, single or no quotes, HTML-unescaped
- Self-closing and empty elements yield empty innerText
- Permissive: malformed markup never raises

Example:
    >>> parser = StreamParser('<turbo-stream action="remove" target="a"></turbo-stream>')
    >>> records = parser.parse()
    >>> records[0].action, records[0].target
    ('remove', 'a')
"""

import html
import re
from typing import Dict, List, Optional

from ..config import appsettings, AppSettings
from ..models.parser import ElementMatch, ParsedDirective
from .log import LOG


ATTRIBUTE_PATTERN = re.compile(
    r'''([^\s=/>"']+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?'''
)


class StreamParser:
    """
    Parser for stream directive markup

    Attributes:
        source: Raw markup text being parsed
        settings: AppSettings providing stream and template tag names
        position: Current character position in source (for scanning)
    """

    def __init__(self, source: str, settings: Optional[AppSettings] = None) -> None:
        self.source = source or ""
        self.settings = settings or appsettings
        self.position = 0

        tag = re.escape(self.settings.stream_tag)
        wrapper = re.escape(self.settings.template_tag)
        # Quoted attribute values may contain '>' (e.g., targets="#list > li")
        self.opening_pattern = re.compile(
            rf'''<{tag}(?=[\s/>])((?:"[^"]*"|'[^']*'|[^'">])*?)(/?)>''', re.IGNORECASE
        )
        self.closing_pattern = re.compile(rf'</{tag}\s*>', re.IGNORECASE)
        self.wrapper_pattern = re.compile(
            rf'^\s*<{wrapper}(?=[\s>])[^>]*>(.*)</{wrapper}\s*>\s*$', re.IGNORECASE | re.DOTALL
        )

    def parse(self) -> List[ParsedDirective]:
        """
        Parse source text into directive records

        Returns:
            One ParsedDirective per stream element, in document order.
            Returns empty list when no stream element is present.

        Example:
            >>> StreamParser(body).parse()
            [ParsedDirective(action='append', target='item_1', ...), ...]
        """
        records: List[ParsedDirective] = []
        self.position = 0

        while self.position < len(self.source):
            match = self.element_find()
            if not match:
                break

            inner = self.inner_extract(match)
            attributes = self.attributes_extract(match.attributes)
            record = ParsedDirective(
                action=attributes.get('action'),
                target=attributes.get('target'),
                targets=attributes.get('targets'),
                innerText=self.content_unwrap(inner),
                attributes=attributes,
                line_number=self.source.count('\n', 0, match.start) + 1,
            )
            LOG(
                f"Parsed stream at line {record.line_number}: "
                f"action={record.action!r} target={record.target!r} targets={record.targets!r}",
                level=3,
            )
            records.append(record)

        LOG(f"Parsed {len(records)} stream(s)", level=2)
        return records

    def element_find(self) -> Optional[ElementMatch]:
        """
        Find next opening stream tag from current position

        Returns:
            ElementMatch with attribute text and tag bounds, or None if
            no more stream elements
        """
        match = self.opening_pattern.search(self.source, self.position)
        if not match:
            self.position = len(self.source)
            return None
        return ElementMatch(
            attributes=match.group(1),
            start=match.start(),
            end=match.end(),
            selfClosing=match.group(2) == '/',
        )

    def inner_extract(self, match: ElementMatch) -> str:
        """
        Extract raw content between an opening tag and its balancing closing tag

        Nested stream elements (e.g., inside the template of another one)
        are tracked by depth so they stay part of the outer content.
        Advances self.position past the element. An element without a
        balancing closing tag takes the rest of the source as its content.

        Depth tracking:
            <turbo-stream>1 <template> <turbo-stream>2 </turbo-stream>1 </template> </turbo-stream>0
        """
        if match.selfClosing:
            self.position = match.end
            return ""

        depth = 1
        scan_pos = match.end
        while True:
            opening = self.opening_pattern.search(self.source, scan_pos)
            closing = self.closing_pattern.search(self.source, scan_pos)
            if not closing:
                self.position = len(self.source)
                return self.source[match.end:]

            if opening and opening.start() < closing.start():
                if opening.group(2) != '/':
                    depth += 1
                scan_pos = opening.end()
                continue

            depth -= 1
            if depth == 0:
                self.position = closing.end()
                return self.source[match.end:closing.start()]
            scan_pos = closing.end()

    def attributes_extract(self, text: str) -> Dict[str, str]:
        """
        Extract attributes from the text of an opening tag

        Attribute names are lowercased; valueless attributes map to "".

        Example:
            Input: ' action="append" target=\'item_1\' data-x=1 hidden'
            Result: {'action': 'append', 'target': 'item_1', 'data-x': '1', 'hidden': ''}
        """
        attributes: Dict[str, str] = {}
        for match in ATTRIBUTE_PATTERN.finditer(text):
            name = match.group(1).lower()
            value = next((group for group in match.groups()[1:] if group is not None), "")
            # First occurrence wins, as in HTML
            attributes.setdefault(name, html.unescape(value))
        return attributes

    def content_unwrap(self, inner: str) -> str:
        """Strip the template wrapper (if any) and surrounding whitespace"""
        wrapped = self.wrapper_pattern.match(inner)
        if wrapped:
            return wrapped.group(1).strip()
        return inner.strip()


def streams_parse(source: str, settings: Optional[AppSettings] = None) -> List[ParsedDirective]:
    """Parse stream markup into directive records"""
    return StreamParser(source, settings).parse()
