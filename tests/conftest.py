import httpx
import pytest
import redis

import config

STEAM_ID = "76561198000000000"
FACEIT_PLAYER_ID = "9b2d7f4e-faceit-player"


class FakeRedis:
    """In-memory stand-in for the few Redis commands the service uses."""

    def __init__(self, fail_reads=False, fail_writes=False):
        self.store = {}
        self.ttls = {}
        self.calls = []
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get(self, key):
        self.calls.append(("get", key))
        if self.fail_reads:
            raise redis.exceptions.ConnectionError("redis is down")
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.calls.append(("setex", key, ttl))
        if self.fail_writes:
            raise redis.exceptions.ConnectionError("redis is down")
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    async def ping(self):
        return True


class FakeTracker:
    def __init__(self):
        self.events = []

    def track(self, event_name, props):
        self.events.append((event_name, props))

    def track_search_request(self, url):
        self.track("search_request", {"url": url})

    def track_cache_hit(self, url):
        self.track("cache_hit", {"url": url})

    def track_error(self, msg):
        self.track("error", {"msg": msg})

    def names(self):
        return [name for name, _ in self.events]


class UpstreamStub:
    """
    Routes requests to canned Steam/FACEIT responses and records every call.
    A route value may be an httpx.Response or an exception to raise.
    """

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.routes.get(request.url.path)
        if result is None:
            return httpx.Response(404, json={"errors": [{"message": "not found"}]})
        if isinstance(result, Exception):
            raise result
        return result

    def paths(self):
        return [request.url.path for request in self.requests]


def faceit_profile(**overrides):
    profile = {
        "player_id": FACEIT_PLAYER_ID,
        "nickname": "s1mple_fan",
        "avatar": "https://assets.faceit-cdn.net/avatars/avatar.jpg",
        "country": "de",
        "faceit_url": "https://www.faceit.com/{lang}/players/s1mple_fan",
        "activated_at": "2020-01-01T00:00:00Z",
        "steam_id_64": STEAM_ID,
        "games": {
            "cs2": {"region": "EU", "game_player_id": STEAM_ID, "skill_level": 8, "faceit_elo": 1750},
        },
    }
    profile.update(overrides)
    return profile


def match(result="1", kills="20", deaths="15", headshots="10", adr="80.0", kr="0.8", double="2", triple="1", quadro="0", penta="0"):
    return {
        "stats": {
            "ADR": adr,
            "Kills": kills,
            "Deaths": deaths,
            "Headshots": headshots,
            "K/R Ratio": kr,
            "Double Kills": double,
            "Triple Kills": triple,
            "Quadro Kills": quadro,
            "Penta Kills": penta,
            "Result": result,
            "Map": "de_mirage",
        }
    }


@pytest.fixture(autouse=True)
def api_keys(monkeypatch):
    monkeypatch.setattr(config, "STEAM_API_KEY", "steam-test-key")
    monkeypatch.setattr(config, "FACEIT_API_KEY", "faceit-test-key")


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def fake_tracker():
    return FakeTracker()


@pytest.fixture
def upstream():
    return UpstreamStub()


@pytest.fixture
async def http_client(upstream):
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as client:
        yield client
