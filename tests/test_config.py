"""
Tests for settings loading and validation.
"""

from pathlib import Path

import pytest

from motd_server.config import Settings, parse_tags
from motd_server.exceptions import ConfigurationError


def test_defaults_from_home():
    """Unset variables fall back to the documented defaults."""
    settings = Settings.from_env({"HOME": "/home/tester"})

    assert settings.cache_dir == Path("/home/tester/.motd")
    assert settings.giphy_api_key_file == Path("/home/tester/.giphy-api")
    assert settings.cache_max_files == 50
    assert settings.max_file_size == 10 * 1024 * 1024
    assert settings.giphy_tags == {}
    assert settings.download_interval == 10
    assert settings.cleanup_interval == 60
    assert settings.listen_host == "localhost"
    assert settings.listen_port == 4200
    assert settings.log_level == "INFO"


def test_values_from_env():
    """Every MOTD_* variable is honoured."""
    env = {
        "HOME": "/home/tester",
        "MOTD_CACHE_DIR": "/var/cache/motd",
        "MOTD_GIPHY_API_KEY_FILE": "/etc/motd/giphy",
        "MOTD_CACHE_MAX_FILES": "10",
        "MOTD_MAX_FILE_SIZE": "2048",
        "MOTD_GIPHY_TAGS": "cats:g, dogs:pg-13",
        "MOTD_DOWNLOAD_INTERVAL": "2.5",
        "MOTD_CLEANUP_INTERVAL": "30",
        "MOTD_LISTEN_HOST": "0.0.0.0",
        "MOTD_LISTEN_PORT": "4300",
        "MOTD_HTTP_TIMEOUT": "5",
        "MOTD_LOG_LEVEL": "debug",
    }

    settings = Settings.from_env(env)

    assert settings.cache_dir == Path("/var/cache/motd")
    assert settings.giphy_api_key_file == Path("/etc/motd/giphy")
    assert settings.cache_max_files == 10
    assert settings.max_file_size == 2048
    assert settings.giphy_tags == {"cats": "g", "dogs": "pg-13"}
    assert settings.download_interval == 2.5
    assert settings.cleanup_interval == 30
    assert settings.listen_host == "0.0.0.0"
    assert settings.listen_port == 4300
    assert settings.http_timeout == 5
    assert settings.log_level == "DEBUG"


def test_parse_tags_keeps_order():
    """Tags are swept in the order they were declared."""
    assert list(parse_tags("zebra:g,apple:pg,mango:r")) == ["zebra", "apple", "mango"]


@pytest.mark.parametrize("raw", ["", "  ", ",", " , "])
def test_parse_tags_blank(raw: str):
    """Blank values mean no tags."""
    assert parse_tags(raw) == {}


@pytest.mark.parametrize("raw", ["cats", "cats:", ":g", "cats:g,dogs"])
def test_parse_tags_malformed(raw: str):
    """Entries must be tag:rating."""
    with pytest.raises(ConfigurationError):
        parse_tags(raw)


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("MOTD_CACHE_MAX_FILES", "many"),
        ("MOTD_CACHE_MAX_FILES", "0"),
        ("MOTD_MAX_FILE_SIZE", "-1"),
        ("MOTD_DOWNLOAD_INTERVAL", "soon"),
        ("MOTD_CLEANUP_INTERVAL", "0"),
        ("MOTD_LISTEN_PORT", "70000"),
        ("MOTD_HTTP_TIMEOUT", "0"),
    ],
)
def test_invalid_values(name: str, value: str):
    """Malformed or out-of-range values raise ConfigurationError."""
    with pytest.raises(ConfigurationError):
        Settings.from_env({"HOME": "/home/tester", name: value})
