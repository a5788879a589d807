"""Giphy-based content provider.

Uses Giphy's random endpoint to pick a GIF for a tag and rating. When the
original rendition is larger than the configured maximum download size,
the downsized rendition is returned instead.

Requirements:
    - A Giphy API key stored in a file (default ``~/.giphy-api``)
"""

import logging
from pathlib import Path

import httpx
from pydantic import ValidationError

from motd_server.dto import GiphyRandomResponse
from motd_server.exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class GiphyProvider:
    """Giphy implementation of the TaggedProvider protocol.

    This class satisfies the protocol through structural typing - no
    explicit inheritance needed.

    Example:
        ```python
        provider = GiphyProvider.from_key_file(Path.home() / ".giphy-api", max_file_size=10 * 1024 * 1024)
        url = await provider.get_random("cats", "g")
        ```
    """

    RANDOM_URL = "http://api.giphy.com/v1/gifs/random"

    def __init__(
        self,
        api_key: str,
        max_file_size: int,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the Giphy provider.

        Args:
            api_key: Giphy API key.
            max_file_size: Largest original rendition to accept, in bytes.
            client: Shared HTTP client. If None, one is created lazily.
            timeout: Request timeout in seconds for a lazily created client.
        """
        self._api_key = api_key
        self._max_file_size = max_file_size
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    @classmethod
    def from_key_file(
        cls,
        key_file: str | Path,
        max_file_size: int,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> "GiphyProvider":
        """Factory method reading the API key from a file.

        Args:
            key_file: File whose content is the API key.
            max_file_size: Largest original rendition to accept, in bytes.
            client: Shared HTTP client.
            timeout: Request timeout in seconds.

        Returns:
            Configured GiphyProvider

        Raises:
            ConfigurationError: If the key file cannot be read or is empty
        """
        try:
            api_key = Path(key_file).read_text().strip()
        except OSError as e:
            raise ConfigurationError("failed to read giphy API key file", {"path": str(key_file)}) from e

        if not api_key:
            raise ConfigurationError("giphy API key file is empty", {"path": str(key_file)})

        return cls(api_key=api_key, max_file_size=max_file_size, client=client, timeout=timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def get_random(self, tag: str, rating: str) -> str:
        """Fetch a random GIF URL matching the tag and rating.

        Args:
            tag: Search tag
            rating: Content rating (g, pg, pg-13, r)

        Returns:
            URL of the original rendition, or the downsized one if the
            original is larger than max_file_size

        Raises:
            ProviderError: On transport errors, a non-OK status or a
                response missing the expected fields
        """
        params = {"api_key": self._api_key, "tag": tag, "rating": rating}

        try:
            response = await self.client.get(self.RANDOM_URL, params=params)
            response.raise_for_status()
            gif = GiphyRandomResponse.model_validate_json(response.content).data
        except httpx.HTTPError as e:
            raise ProviderError("failed to fetch giphy API", {"tag": tag, "error": str(e)}) from e
        except ValidationError as e:
            raise ProviderError(
                "malformed giphy API response", {"tag": tag, "errors": e.error_count()}
            ) from e

        original_url = gif.images.original.url
        size = await self._content_length(original_url)

        if size > self._max_file_size:
            logger.debug("giphy original is %d bytes, using downsized rendition", size)
            return gif.images.downsized_large.url

        return original_url

    async def _content_length(self, url: str) -> int:
        try:
            response = await self.client.head(url, follow_redirects=True)
        except httpx.HTTPError as e:
            raise ProviderError("failed to check original image size", {"url": url, "error": str(e)}) from e

        if response.status_code != httpx.codes.OK:
            raise ProviderError(
                "failed to check image size", {"url": url, "status_code": response.status_code}
            )

        try:
            return int(response.headers.get("Content-Length", ""))
        except ValueError as e:
            raise ProviderError("failed to parse content length", {"url": url}) from e

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
