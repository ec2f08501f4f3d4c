"""Data models for the fetch/select collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Union


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class HTMLElement:
    """One element matched by a selector during a page visit.

    ``index`` is the element's position among the matches of its selector,
    in document order, starting at 0.
    """

    index: int
    text: str
    request_url: str
    attrs: Dict[str, Union[str, List[str]]] = field(default_factory=dict)

    def attr(self, name: str) -> str:
        """Return attribute *name*, or an empty string when it is absent."""
        value = self.attrs.get(name, "")
        if isinstance(value, list):
            # BeautifulSoup keeps multi-valued attributes (class, rel) as lists
            return " ".join(value)
        return value
