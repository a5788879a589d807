"""Exception hierarchy for motd-server.

Every error raised by the cache, providers and listener derives from
MotdError, which carries optional structured context for logging.
"""

from typing import Any


class MotdError(Exception):
    """Base exception for all motd-server errors.

    Attributes:
        message: Human-readable error message.
        context: Optional structured context (url, path, stage, ...).
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class ConfigurationError(MotdError):
    """Raised when environment configuration is invalid or missing."""


class DownloadError(MotdError):
    """Raised when content cannot be fetched from a URL.

    Context usually includes ``url`` and, for HTTP errors, ``status_code``.
    """


class EncodingError(MotdError):
    """Raised when an entry cannot be encoded.

    Base64 is total over arbitrary bytes, so nothing raises this today.
    """


class StorageError(MotdError):
    """Raised on filesystem failures in the cache directory.

    Context includes ``stage`` (create, write, sync, rename, list, read,
    delete) and ``path``.
    """


class EmptyCacheError(MotdError):
    """Raised when there are no cached entries to select from."""


class ListenerError(MotdError):
    """Raised when the TCP listener cannot bind or its accept loop dies."""


class ProviderError(MotdError):
    """Raised when a content provider lookup fails.

    This includes transport errors and missing or malformed fields in
    the provider's response.
    """
