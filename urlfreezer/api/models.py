"""
Data models for link resolution requests and responses.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any


class LinkAction(str, Enum):
    """How a consumer should treat a resolved link."""
    REDIRECT = "Redirect"
    CONTENT = "Content"


@dataclass(frozen=True)
class LinkToFetch:
    """
    A link the caller wants resolved.

    Attributes:
        link (str): Original URL, forwarded to the service as-is
        label (Optional[str]): Free-text annotation echoed back by the service
    """
    link: str
    label: Optional[str] = None


@dataclass(frozen=True)
class LinkInfo:
    """
    A resolved link.

    Attributes:
        original (str): URL as submitted
        page (Optional[str]): Page context supplied by the caller
        label (Optional[str]): Label echoed by the service
        link (str): Absolute service-hosted URL
        action (LinkAction): Redirect or Content
    """
    original: str
    page: Optional[str]
    label: Optional[str]
    link: str
    action: LinkAction


@dataclass(frozen=True)
class FetchLinkData:
    """Wire form of a single link in a request batch."""
    link: str
    link_label: Optional[str] = None

    @classmethod
    def from_link(cls, link: LinkToFetch) -> "FetchLinkData":
        return cls(link=link.link, link_label=link.label)


@dataclass(frozen=True)
class FetchRequestBatch:
    """Request body for the fetch links endpoint."""
    user: str
    page: Optional[str]
    links: List[FetchLinkData] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'user': self.user,
            'page': self.page,
            'links': [
                {'link': l.link, 'link_label': l.link_label}
                for l in self.links
            ]
        }


@dataclass(frozen=True)
class LinkMatch:
    """One resolved entry of a response batch."""
    link: str
    link_label: Optional[str]
    link_id: str
    action: LinkAction


@dataclass(frozen=True)
class FetchedBatch:
    """Response body of the fetch links endpoint."""
    links: List[LinkMatch]
    base: str


class UrlFreezerError(Exception):
    """Base class for all client errors."""


class InvalidHostError(UrlFreezerError):
    """Service host is not a valid absolute URL."""


@dataclass
class TransportError(UrlFreezerError):
    """Network failure or non-success HTTP status."""
    message: str
    status_code: Optional[int] = None
    response_text: str = ""

    def __str__(self) -> str:
        if self.status_code is None:
            return f"Transport error: {self.message}"
        return f"Transport error ({self.status_code}): {self.message}"


class ProtocolDecodeError(UrlFreezerError):
    """Response payload is not the expected JSON shape."""


class UrlParseError(UrlFreezerError):
    """Base URL or link id cannot be composed into an absolute URL."""


class IoError(UrlFreezerError):
    """Local file or stream access failure."""
