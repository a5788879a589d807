"""Provider lookup result entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MotdSource:
    """A content URL handed back by a provider.

    Attributes:
        url: Direct URL of the image to download
        caption: Optional text to show with it (e.g. XKCD alt text)
    """

    url: str
    caption: str | None = None
