"""
Asynchronous client for the link resolution service using aiohttp.
Same contract as the blocking client, the round trip suspends instead of blocking.
"""

import asyncio
import time
from typing import Optional, List, Sequence

import aiohttp

from .base import BaseClient
from .models import LinkToFetch, LinkInfo, TransportError
from ..utils.constants import DEFAULT_TIMEOUT
from ..utils.logging import get_logger

logger = get_logger(__name__)

class AsyncClient(BaseClient):
    """
    Asynchronous link resolution client.
    The aiohttp session is created lazily inside the running event loop.
    """

    def __init__(
        self,
        host: str,
        user_id: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT
    ):
        super().__init__(host, user_id)
        self.session = session
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def _ensure_session(self) -> None:
        """Ensure aiohttp session exists."""
        if not self.session:
            self.session = aiohttp.ClientSession(timeout=self.timeout)

    async def fetch_links(self, links: Sequence[LinkToFetch], page: Optional[str] = None) -> List[LinkInfo]:
        """
        Resolve all links in a single round trip.
        
        Raises:
            TransportError: Network failure or non-2xx status
            ProtocolDecodeError: Malformed response body
            UrlParseError: Base or link id cannot form an absolute URL
        """
        await self._ensure_session()
        payload = self._build_payload(links, page)

        start_time = time.time()
        try:
            async with self.session.post(self.endpoint, json=payload) as response:
                body = await response.read()
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"❌ Cannot reach {self.endpoint}: {e!r}")
            raise TransportError(str(e) or e.__class__.__name__) from e
        logger.debug(f"⏱️ Fetch links responded in {time.time() - start_time:.4f} seconds")

        if not 200 <= status < 300:
            logger.error(f"❌ API Error: HTTP {status} from {self.endpoint}")
            raise TransportError(
                f"HTTP {status} from {self.endpoint}",
                status,
                body.decode('utf-8', errors='replace')
            )

        infos = self._parse_response(body, page, len(links))
        logger.info(f"Resolved {len(infos)} of {len(links)} links")
        return infos

    async def fetch_link(
        self,
        link: str,
        page: Optional[str] = None,
        label: Optional[str] = None
    ) -> Optional[LinkInfo]:
        """Resolve a single link, None when the service has no match."""
        infos = await self.fetch_links([LinkToFetch(link, label)], page)
        return infos[0] if infos else None

    async def close(self) -> None:
        """Close the client and cleanup resources."""
        if self.session:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
