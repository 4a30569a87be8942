import pytest

from errors import InvalidUrl
from url_service import get_cache_key, normalize_url, path_segments


@pytest.mark.parametrize(
    "raw, expected",
    [
        (
            "https://steamcommunity.com/profiles/76561198000000000?x=1",
            "https://steamcommunity.com/profiles/76561198000000000",
        ),
        ("https://steamcommunity.com/id/someplayer/", "https://steamcommunity.com/id/someplayer"),
        ("https://steamcommunity.com/id/someplayer#top", "https://steamcommunity.com/id/someplayer"),
        (
            "https://steamcommunity.com/id/someplayer/inventory/?l=german",
            "https://steamcommunity.com/id/someplayer",
        ),
        ("HTTPS://SteamCommunity.com/id/SomePlayer", "https://steamcommunity.com/id/SomePlayer"),
        ("  https://steamcommunity.com/profiles/123  ", "https://steamcommunity.com/profiles/123"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "https://steamcommunity.com/profiles/76561198000000000?x=1",
        "https://steamcommunity.com/id/someplayer/games?tab=all#x",
        "http://steamcommunity.com/id/a",
    ],
)
def test_normalize_is_idempotent(raw):
    once = normalize_url(raw)
    assert normalize_url(once) == once


@pytest.mark.parametrize(
    "raw",
    [
        "not a url",
        "",
        "steamcommunity.com/id/someplayer",
        "ftp://steamcommunity.com/id/someplayer",
        "https://steamcommunity.com/",
        "https://steamcommunity.com/id",
        "https://steamcommunity.com/id/",
        "https://steamcommunity.com/groups/somegroup",
        "https://steamcommunity.com/ID/someplayer",
        "https:///id/someplayer",
    ],
)
def test_normalize_rejects_unrecognized_urls(raw):
    with pytest.raises(InvalidUrl):
        normalize_url(raw)


def test_path_segments_skips_empty_parts():
    assert path_segments("https://steamcommunity.com//id//name/") == ["id", "name"]


def test_cache_key_is_the_normalized_url():
    normalized = normalize_url("https://steamcommunity.com/id/someplayer?x=1")
    assert get_cache_key(normalized) == "https://steamcommunity.com/id/someplayer"
