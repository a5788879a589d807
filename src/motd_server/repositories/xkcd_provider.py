"""XKCD-based content provider.

Picks a random comic between 1 and the latest one and returns its image
URL with the alt text as caption.
"""

import logging
import secrets

import httpx
from pydantic import ValidationError

from motd_server.dto import XkcdComic
from motd_server.entities import MotdSource
from motd_server.exceptions import ProviderError

logger = logging.getLogger(__name__)


class XkcdProvider:
    """XKCD implementation of the UntaggedProvider protocol."""

    BASE_URL = "https://xkcd.com"

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the XKCD provider.

        Args:
            client: Shared HTTP client. If None, one is created lazily.
            base_url: Override for the XKCD site root.
            timeout: Request timeout in seconds for a lazily created client.
        """
        self._client = client
        self._owns_client = client is None
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._timeout = timeout

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def _fetch(self, path: str) -> XkcdComic:
        url = f"{self._base_url}{path}"
        try:
            response = await self.client.get(url)
            response.raise_for_status()
            return XkcdComic.model_validate_json(response.content)
        except httpx.HTTPError as e:
            raise ProviderError("failed to fetch xkcd comic", {"url": url, "error": str(e)}) from e
        except ValidationError as e:
            raise ProviderError("malformed xkcd response", {"url": url, "errors": e.error_count()}) from e

    async def get_random(self) -> MotdSource:
        """Fetch a random comic.

        Returns:
            MotdSource with the image URL and the alt text as caption

        Raises:
            ProviderError: If either lookup fails
        """
        latest = await self._fetch("/info.0.json")
        number = secrets.randbelow(latest.num) + 1
        comic = await self._fetch(f"/{number}/info.0.json")

        logger.debug("fetched xkcd comic %d: %s", comic.num, comic.title)
        return MotdSource(url=comic.img, caption=comic.alt or None)

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
