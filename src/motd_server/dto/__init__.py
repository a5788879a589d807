"""Data Transfer Objects for provider contracts.

These Pydantic models describe the JSON returned by external providers.
Each response is validated once on arrival; any missing or malformed
field becomes a single ProviderError in the provider.

Internal domain logic should use entities from the entities package.
"""

from .giphy import GiphyGif, GiphyImage, GiphyImages, GiphyRandomResponse
from .xkcd import XkcdComic

__all__ = [
    "GiphyGif",
    "GiphyImage",
    "GiphyImages",
    "GiphyRandomResponse",
    "XkcdComic",
]
