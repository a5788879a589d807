"""Cache entry domain entity and its on-disk envelope."""

import base64
import hashlib
import time
from dataclasses import dataclass, field

ENVELOPE_PREFIX = "1337"
ENVELOPE_FORMAT = "{prefix};File=inline=1;size={size};name={name}:{payload}"

# Leaves room for the "<ns>_" prefix under the 255-byte NAME_MAX
MAX_FILENAME_IDENTITY = 200
IDENTITY_DIGEST_CHARS = 32


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for one cached piece of content.

    The rendered envelope is what terminal clients receive verbatim, so its
    layout is a compatibility contract:

        1337;File=inline=1;size=<N>;name=<b64 url>:<b64 payload>[<caption>\\n]

    Attributes:
        source_url: URL the payload was downloaded from
        payload: Raw downloaded bytes
        caption: Optional text shown after the image
        created_at: Nanosecond timestamp, used in the filename
    """

    source_url: str
    payload: bytes
    caption: str | None = None
    created_at: int = field(default_factory=time.time_ns)

    @property
    def identity(self) -> str:
        """Standard base64 of the source URL."""
        return base64.b64encode(self.source_url.encode()).decode("ascii")

    @property
    def filename(self) -> str:
        """Filename for this entry inside the cache directory.

        ``/`` is a legal base64 character but not a legal filename character,
        so it is swapped for ``_`` here only. Identities longer than
        MAX_FILENAME_IDENTITY are cut short and suffixed with a SHA-256
        digest of the URL; the envelope keeps the full identity.
        """
        identity = self.identity.replace("/", "_")
        if len(identity) > MAX_FILENAME_IDENTITY:
            digest = hashlib.sha256(self.source_url.encode()).hexdigest()[:IDENTITY_DIGEST_CHARS]
            keep = MAX_FILENAME_IDENTITY - IDENTITY_DIGEST_CHARS - 1
            identity = f"{identity[:keep]}-{digest}"
        return f"{self.created_at}_{identity}"

    def render(self) -> str:
        """Render the envelope text written to disk and served to clients."""
        content = ENVELOPE_FORMAT.format(
            prefix=ENVELOPE_PREFIX,
            size=len(self.payload),
            name=self.identity,
            payload=base64.b64encode(self.payload).decode("ascii"),
        )
        if self.caption:
            content += f"{self.caption}\n"
        return content


@dataclass(frozen=True)
class ParsedEnvelope:
    """Fields recovered from a rendered envelope."""

    size: int
    name: str
    payload: bytes
    caption: str | None


def parse_envelope(content: str) -> ParsedEnvelope:
    """Split a rendered envelope back into its fields.

    The caption may itself start with base64 characters, so the payload
    boundary comes from the declared size: padded base64 of N bytes is
    always ``4 * ceil(N / 3)`` characters long.

    Raises:
        ValueError: If the text is not an envelope
    """
    head, sep, body = content.partition(":")
    parts = head.split(";")
    if not sep or len(parts) != 4 or parts[0] != ENVELOPE_PREFIX or parts[1] != "File=inline=1":
        raise ValueError("not a cache envelope")
    if not parts[2].startswith("size=") or not parts[3].startswith("name="):
        raise ValueError("malformed envelope header")

    size = int(parts[2][len("size="):])
    end = 4 * ((size + 2) // 3)
    if len(body) < end:
        raise ValueError("truncated envelope payload")

    caption = body[end:]
    if caption.endswith("\n"):
        caption = caption[:-1]

    return ParsedEnvelope(
        size=size,
        name=parts[3][len("name="):],
        payload=base64.b64decode(body[:end], validate=True),
        caption=caption or None,
    )
