"""
Wire codec for the fetch links endpoint.
Builds request bodies, parses response bodies and resolves relative link ids.
"""

import json
from typing import Optional, List, Sequence, Union, Any
from urllib.parse import urljoin

from .models import (
    LinkAction, LinkToFetch, LinkInfo, FetchLinkData, FetchRequestBatch,
    LinkMatch, FetchedBatch, ProtocolDecodeError, UrlParseError
)
from ..utils.url import is_valid_url, has_invalid_chars, truncate_url

def encode(user: str, page: Optional[str], links: Sequence[LinkToFetch]) -> FetchRequestBatch:
    """Build the request batch for the given links."""
    return FetchRequestBatch(
        user=user,
        page=page,
        links=[FetchLinkData.from_link(l) for l in links]
    )

def _require(entry: dict, key: str, context: str) -> Any:
    if key not in entry:
        raise ProtocolDecodeError(f"Missing '{key}' in {context}")
    return entry[key]

def _optional_str(value: Any, key: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ProtocolDecodeError(f"'{key}' must be a string or null, got {type(value).__name__}")
    return value

def _required_str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ProtocolDecodeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value

def _decode_match(index: int, entry: Any) -> LinkMatch:
    context = f"links[{index}]"
    if not isinstance(entry, dict):
        raise ProtocolDecodeError(f"{context} must be an object")

    raw_action = _require(entry, 'action', context)
    try:
        action = LinkAction(raw_action)
    except ValueError:
        raise ProtocolDecodeError(f"Unknown action {raw_action!r} in {context}") from None

    return LinkMatch(
        link=_required_str(_require(entry, 'link', context), 'link'),
        link_label=_optional_str(entry.get('link_label'), 'link_label'),
        link_id=_required_str(_require(entry, 'link_id', context), 'link_id'),
        action=action
    )

def decode(raw_response: Union[str, bytes]) -> FetchedBatch:
    """
    Parse a response body into a FetchedBatch.
    
    Args:
        raw_response: Raw JSON body as returned by the service
        
    Returns:
        FetchedBatch: Decoded batch with a validated base URL
        
    Raises:
        ProtocolDecodeError: Body is not JSON or lacks required fields
        UrlParseError: Base is not a valid absolute URL
    """
    try:
        data = json.loads(raw_response)
    except ValueError as e:
        raise ProtocolDecodeError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ProtocolDecodeError("Response must be a JSON object")

    raw_links = _require(data, 'links', 'response')
    if not isinstance(raw_links, list):
        raise ProtocolDecodeError("'links' must be a list")
    base = _required_str(_require(data, 'base', 'response'), 'base')

    if not is_valid_url(base):
        raise UrlParseError(f"Invalid base URL: {truncate_url(base)!r}")

    return FetchedBatch(
        links=[_decode_match(i, entry) for i, entry in enumerate(raw_links)],
        base=base
    )

def resolve(base: str, page: Optional[str], match: LinkMatch) -> LinkInfo:
    """
    Resolve a single match into a LinkInfo.
    
    The link id is a relative reference, joined against base under
    RFC 3986 section 5 rules.
    
    Raises:
        UrlParseError: Link id cannot be joined against base
    """
    if has_invalid_chars(match.link_id):
        raise UrlParseError(f"Invalid characters in link id {truncate_url(match.link_id)!r}")

    try:
        link = urljoin(base, match.link_id)
    except ValueError as e:
        raise UrlParseError(f"Cannot join {match.link_id!r} against {base!r}: {e}") from e

    if not is_valid_url(link):
        raise UrlParseError(f"Link id {match.link_id!r} does not resolve to an absolute URL against {base!r}")

    return LinkInfo(
        original=match.link,
        page=page,
        label=match.link_label,
        link=link,
        action=match.action
    )

def to_link_infos(batch: FetchedBatch, page: Optional[str]) -> List[LinkInfo]:
    """Resolve every match of a batch, preserving order."""
    return [resolve(batch.base, page, match) for match in batch.links]
