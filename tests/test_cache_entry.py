"""
Tests for the cache entry envelope format.
"""

import base64

import pytest

from motd_server.entities import CacheEntryEntity, parse_envelope


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


def test_render_without_caption():
    """Envelope without caption matches the inline-image layout exactly."""
    url = "https://example.com/a.png"
    entry = CacheEntryEntity(source_url=url, payload=b"hello", created_at=1)

    assert entry.render() == f"1337;File=inline=1;size=5;name={b64(url.encode())}:aGVsbG8="


def test_render_with_caption():
    """A caption follows the payload and ends with a newline."""
    entry = CacheEntryEntity(source_url="https://example.com/a.png", payload=b"hello", caption="alt text")

    rendered = entry.render()
    assert rendered.endswith(":aGVsbG8=alt text\n")


def test_empty_caption_is_omitted():
    """An empty caption renders the same as no caption."""
    with_empty = CacheEntryEntity(source_url="https://x.test/", payload=b"abc", caption="", created_at=1)
    without = CacheEntryEntity(source_url="https://x.test/", payload=b"abc", created_at=1)

    assert with_empty.render() == without.render()
    assert not with_empty.render().endswith("\n")


def test_size_counts_decoded_bytes():
    """The size field is the raw payload length, not the base64 length."""
    entry = CacheEntryEntity(source_url="https://x.test/", payload=bytes(range(256)))

    assert ";size=256;" in entry.render()


def test_filename_is_timestamp_and_identity():
    """Filename is ``<created_at>_<identity>``."""
    entry = CacheEntryEntity(source_url="https://example.com/a.png", payload=b"", created_at=42)

    assert entry.filename == f"42_{entry.identity}"


def test_filename_has_no_path_separator():
    """A ``/`` in the base64 identity is replaced in the filename only."""
    entry = CacheEntryEntity(source_url="http://a/???", payload=b"x", created_at=7)

    assert entry.identity.endswith("Pz8/")
    assert "/" not in entry.filename
    assert entry.filename.endswith("Pz8_")
    assert f"name={entry.identity}:" in entry.render()


def test_created_at_defaults_to_unique_nanoseconds():
    """Entries created back to back get increasing timestamps."""
    first = CacheEntryEntity(source_url="https://x.test/", payload=b"")
    second = CacheEntryEntity(source_url="https://x.test/", payload=b"")

    assert second.created_at >= first.created_at
    assert first.created_at > 10**18


@pytest.mark.parametrize(
    ("payload", "caption"),
    [
        (b"hello", None),
        (b"", None),
        (bytes(range(256)) * 3, "binary payload"),
        (b"\x00\xff", "AAAA looks like base64"),
        (b"gif89a", "two\nlines"),
        (b"x" * 1001, "unicode caption ☃"),
    ],
)
def test_envelope_round_trip(payload: bytes, caption: str | None):
    """Parsing a rendered envelope yields the original payload and caption."""
    entry = CacheEntryEntity(source_url="https://example.com/c.png", payload=payload, caption=caption)

    parsed = parse_envelope(entry.render())

    assert parsed.payload == payload
    assert parsed.size == len(payload)
    assert parsed.name == entry.identity
    assert parsed.caption == caption


@pytest.mark.parametrize(
    "content",
    [
        "",
        "hello world",
        "1337;File=inline=1;size=5:aGVsbG8=",
        "1337;File=inline=0;size=5;name=eA==:aGVsbG8=",
        "1337;File=inline=1;size=50;name=eA==:aGVsbG8=",
    ],
)
def test_parse_rejects_non_envelopes(content: str):
    """Text that is not a complete envelope raises ValueError."""
    with pytest.raises(ValueError):
        parse_envelope(content)


def test_long_url_filename_fits_name_max():
    """Long source URLs still give a filename under 255 bytes."""
    url = "https://media.example.com/" + "a" * 400 + ".gif"
    entry = CacheEntryEntity(source_url=url, payload=b"gif", created_at=1_700_000_000_000_000_000)

    assert len(entry.filename.encode()) <= 255
    assert entry.filename.startswith("1700000000000000000_")
    assert "/" not in entry.filename


def test_long_url_envelope_keeps_full_identity():
    """Only the filename is shortened; the envelope name is the full base64 URL."""
    url = "https://media.example.com/" + "a" * 400 + ".gif"
    entry = CacheEntryEntity(source_url=url, payload=b"gif")

    assert parse_envelope(entry.render()).name == b64(url.encode())


def test_long_urls_with_shared_prefix_get_distinct_filenames():
    """URLs differing only past the cut point do not collide."""
    prefix = "https://media.example.com/" + "a" * 400
    first = CacheEntryEntity(source_url=prefix + "/1.gif", payload=b"", created_at=1)
    second = CacheEntryEntity(source_url=prefix + "/2.gif", payload=b"", created_at=1)

    assert first.filename != second.filename
