"""
Blocking client for the link resolution service.
Each call performs one round trip on a reusable requests session.
"""

import time
from typing import Optional, List, Sequence

import requests

from .base import BaseClient
from .models import LinkToFetch, LinkInfo, TransportError
from ..utils.constants import DEFAULT_TIMEOUT
from ..utils.logging import get_logger

logger = get_logger(__name__)

class Client(BaseClient):
    """
    Blocking link resolution client.
    
    Usable as a context manager; the underlying session is closed on exit.
    """

    def __init__(
        self,
        host: str,
        user_id: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT
    ):
        super().__init__(host, user_id)
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_links(self, links: Sequence[LinkToFetch], page: Optional[str] = None) -> List[LinkInfo]:
        """
        Resolve all links in a single round trip.
        
        Args:
            links: Links to resolve
            page: URL of the page containing the links
            
        Returns:
            List[LinkInfo]: Resolved links, in request order
            
        Raises:
            TransportError: Network failure or non-2xx status
            ProtocolDecodeError: Malformed response body
            UrlParseError: Base or link id cannot form an absolute URL
        """
        payload = self._build_payload(links, page)

        start_time = time.time()
        try:
            response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"❌ Cannot reach {self.endpoint}: {e}")
            raise TransportError(str(e)) from e
        logger.debug(f"⏱️ Fetch links responded in {time.time() - start_time:.4f} seconds")

        if not 200 <= response.status_code < 300:
            logger.error(f"❌ API Error: HTTP {response.status_code} from {self.endpoint}")
            raise TransportError(
                f"HTTP {response.status_code} from {self.endpoint}",
                response.status_code,
                response.text
            )

        infos = self._parse_response(response.content, page, len(links))
        logger.info(f"Resolved {len(infos)} of {len(links)} links")
        return infos

    def fetch_link(
        self,
        link: str,
        page: Optional[str] = None,
        label: Optional[str] = None
    ) -> Optional[LinkInfo]:
        """Resolve a single link, None when the service has no match."""
        infos = self.fetch_links([LinkToFetch(link, label)], page)
        return infos[0] if infos else None

    def close(self) -> None:
        """Close the underlying session."""
        if self.session:
            self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
