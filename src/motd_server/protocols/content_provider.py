"""Content provider protocols.

Two shapes of provider feed the ingestion sweep:
- tagged providers look up a URL for a (tag, rating) query (Giphy)
- untagged providers return a URL plus caption (XKCD)
"""

from typing import Protocol, runtime_checkable

from motd_server.entities import MotdSource


@runtime_checkable
class TaggedProvider(Protocol):
    """Provider that returns a random content URL for a tag and rating."""

    async def get_random(self, tag: str, rating: str) -> str:
        """Look up a random content URL.

        Args:
            tag: Search tag
            rating: Content rating filter (e.g. "g", "pg")

        Returns:
            Direct URL of the content

        Raises:
            ProviderError: If the lookup fails or the response is malformed
        """
        ...


@runtime_checkable
class UntaggedProvider(Protocol):
    """Provider that returns a random content URL with an optional caption."""

    async def get_random(self) -> MotdSource:
        """Look up a random piece of content.

        Raises:
            ProviderError: If the lookup fails or the response is malformed
        """
        ...
