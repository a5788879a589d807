"""Response DTO for the XKCD JSON interface."""

from pydantic import BaseModel, Field


class XkcdComic(BaseModel):
    """A comic from ``/info.0.json`` or ``/<num>/info.0.json``."""

    num: int = Field(..., description="Comic number", ge=1)
    img: str = Field(..., description="Image URL", min_length=1)
    alt: str = Field("", description="Alt (hover) text")
    title: str = Field("", description="Comic title")
