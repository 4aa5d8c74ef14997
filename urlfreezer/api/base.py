"""
Base client holding the state shared by the blocking and async clients.
"""

from typing import Optional, List, Sequence, Dict, Any

from .codec import encode, decode, to_link_infos
from .models import LinkToFetch, LinkInfo, InvalidHostError
from ..utils.constants import DEFAULT_HOST, FETCH_LINKS_PATH
from ..utils.logging import get_logger
from ..utils.url import is_valid_url

logger = get_logger(__name__)

class BaseClient:
    """
    Common state and request/response mapping for the link resolution clients.
    Subclasses only implement the round trip itself.
    
    Attributes:
        host (str): Validated service base address
        user (str): User identifier sent with every batch
        endpoint (str): Fetch links endpoint, joined once at construction
    """

    def __init__(self, host: str, user_id: str):
        if not is_valid_url(host):
            raise InvalidHostError(f"Invalid service host: {host!r}")
        self.host = host
        self.user = user_id
        # Path prefixes on the host are kept
        self.endpoint = host.rstrip('/') + FETCH_LINKS_PATH

    @classmethod
    def connect(cls, user_id: str, **kwargs):
        """Create a client for the default production service."""
        return cls(DEFAULT_HOST, user_id, **kwargs)

    @classmethod
    def connect_host(cls, host: str, user_id: str, **kwargs):
        """
        Create a client for the service at host.
        
        Raises:
            InvalidHostError: If host is not an absolute http(s) URL
        """
        return cls(host, user_id, **kwargs)

    def _build_payload(self, links: Sequence[LinkToFetch], page: Optional[str]) -> Dict[str, Any]:
        return encode(self.user, page, links).to_dict()

    def _parse_response(self, body, page: Optional[str], requested: int) -> List[LinkInfo]:
        batch = decode(body)
        if batch.links and len(batch.links) != requested:
            logger.warning(
                f"Service returned {len(batch.links)} links for a batch of {requested}, mapping by position"
            )
        return to_link_infos(batch, page)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(host={self.host!r}, user={self.user!r})"
