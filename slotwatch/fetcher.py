"""
HTTP access to the ticketing site's calendar pages.
"""
import logging
from typing import Optional

import httpx

from .models import FetcherConfig

logger = logging.getLogger(__name__)


class CalendarFetcher:
    """Fetches calendar pages with a shared httpx client.

    One client is opened per polling cycle and closed when the cycle ends.
    """

    def __init__(
        self,
        config: FetcherConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize with fetcher configuration."""
        self.config = config
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.setup()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.cleanup()

    async def setup(self) -> None:
        """Create the HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=self.config.timeout,
                follow_redirects=self.config.follow_redirects,
                headers={"User-Agent": self.config.user_agent},
                transport=self.transport,
            )
            logger.debug("HTTP client created")

    async def cleanup(self) -> None:
        """Close the HTTP client."""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            logger.debug("HTTP client closed")

    async def fetch(self, url: str) -> str:
        """GET *url* and return the response body.

        Raises:
            httpx.HTTPError: on transport failures and non-2xx responses.
        """
        if self.client is None:
            raise RuntimeError("HTTP client not initialized")

        response = await self.client.get(url)
        logger.debug(f"Called calendar page {url} ({response.status_code})")
        response.raise_for_status()
        return response.text
