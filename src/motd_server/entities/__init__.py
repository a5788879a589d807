"""Domain entities for internal representation.

These are pure frozen dataclasses used by services and repositories.
Provider wire formats live in the dto package instead.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No I/O
"""

from .cache_entry import CacheEntryEntity, ParsedEnvelope, parse_envelope
from .motd_source import MotdSource
from .trim_result import TrimResult

__all__ = ["CacheEntryEntity", "MotdSource", "ParsedEnvelope", "TrimResult", "parse_envelope"]
