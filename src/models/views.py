"""
View specification models

Defines the metadata a named view is registered with in the ViewRegistry.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List


@dataclass
class ViewSpec:
    """
    Specification for a named view

    Attributes:
        name: View name (e.g., "comments/_comment")
        handler: Rendering function (data) -> str
        description: Human-readable description
        aliases: Alternative names for the view
    """
    name: str
    handler: Callable[[Dict[str, Any]], str]
    description: str = ""
    aliases: List[str] = field(default_factory=list)
