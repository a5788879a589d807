import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from motd_server.exceptions import ConfigurationError

ENV_PREFIX = "MOTD_"


def parse_tags(raw: str) -> dict[str, str]:
    """Parse a ``tag:rating,tag2:rating2`` string into an ordered mapping.

    Args:
        raw: The raw environment value. Blank means no tags.

    Returns:
        Mapping of Giphy tag to content rating, in declaration order

    Raises:
        ConfigurationError: If a pair is not of the form ``tag:rating``
    """
    tags: dict[str, str] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        tag, sep, rating = pair.partition(":")
        if not sep or not tag.strip() or not rating.strip():
            raise ConfigurationError(
                f"{ENV_PREFIX}GIPHY_TAGS entries must look like tag:rating, got {pair!r}"
            )
        tags[tag.strip()] = rating.strip()
    return tags


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(ENV_PREFIX + name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}") from e


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(ENV_PREFIX + name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be a number, got {value!r}") from e


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Built once by the entry point and passed by construction into each
    component. Nothing in the package reads a global settings instance.
    """

    cache_dir: Path
    giphy_api_key_file: Path
    cache_max_files: int = 50
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    giphy_tags: dict[str, str] = field(default_factory=dict)

    # Intervals in seconds
    download_interval: float = 10.0
    cleanup_interval: float = 60.0

    # Listener
    listen_host: str = "localhost"
    listen_port: int = 4200

    http_timeout: float = 30.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_max_files <= 0:
            raise ConfigurationError("CACHE_MAX_FILES must be a positive integer")

        if self.max_file_size <= 0:
            raise ConfigurationError("MAX_FILE_SIZE must be a positive integer")

        if self.download_interval <= 0 or self.cleanup_interval <= 0:
            raise ConfigurationError("DOWNLOAD_INTERVAL and CLEANUP_INTERVAL must be positive")

        if not 0 <= self.listen_port <= 65535:
            raise ConfigurationError(f"LISTEN_PORT must be between 0 and 65535, got {self.listen_port}")

        if self.http_timeout <= 0:
            raise ConfigurationError("HTTP_TIMEOUT must be positive")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``MOTD_*`` environment variables.

        A ``.env`` file in the working directory is loaded first when
        reading the real process environment.

        Args:
            env: Mapping to read instead of ``os.environ`` (for testing).

        Returns:
            Validated Settings instance

        Raises:
            ConfigurationError: If a value is missing, malformed or out of range
        """
        if env is None:
            load_dotenv(find_dotenv(usecwd=True))
            env = os.environ

        home = Path(env.get("HOME") or Path.home())

        return cls(
            cache_dir=Path(env.get(ENV_PREFIX + "CACHE_DIR") or home / ".motd"),
            giphy_api_key_file=Path(env.get(ENV_PREFIX + "GIPHY_API_KEY_FILE") or home / ".giphy-api"),
            cache_max_files=_int(env, "CACHE_MAX_FILES", 50),
            max_file_size=_int(env, "MAX_FILE_SIZE", 10 * 1024 * 1024),
            giphy_tags=parse_tags(env.get(ENV_PREFIX + "GIPHY_TAGS", "")),
            download_interval=_float(env, "DOWNLOAD_INTERVAL", 10.0),
            cleanup_interval=_float(env, "CLEANUP_INTERVAL", 60.0),
            listen_host=env.get(ENV_PREFIX + "LISTEN_HOST") or "localhost",
            listen_port=_int(env, "LISTEN_PORT", 4200),
            http_timeout=_float(env, "HTTP_TIMEOUT", 30.0),
            log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or "INFO").upper(),
        )
