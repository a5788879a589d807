"""Response DTOs for the Giphy random endpoint."""

from pydantic import BaseModel, Field


class GiphyImage(BaseModel):
    """One rendition of a GIF."""

    url: str = Field(..., description="Direct URL of this rendition", min_length=1)


class GiphyImages(BaseModel):
    """The renditions motd-server chooses between."""

    original: GiphyImage
    downsized_large: GiphyImage


class GiphyGif(BaseModel):
    """The ``data`` object of a random GIF response."""

    id: str | None = None
    images: GiphyImages


class GiphyRandomResponse(BaseModel):
    """Response of ``GET /v1/gifs/random``.

    Giphy answers ``"data": []`` when nothing matches the tag, which fails
    validation here and surfaces as a single ProviderError.
    """

    data: GiphyGif
