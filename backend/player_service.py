import logging

import httpx
from pydantic_core import PydanticSerializationError

import config
import redis_service
import steam_api_client
import url_service
from errors import CacheUnavailable, ProfileLookupError, SerializationFailed
from providers import EnrichmentProvider, Enrichment, default_providers
from schemas import Player, Site
from tracking import Tracker

# Partner sites every player gets, in display order. '{steam_id}' is substituted.
BASE_SITES = [
    ("Steam", "https://steamcommunity.com/profiles/{steam_id}"),
    ("Leetify", "https://leetify.com/app/profile/{steam_id}"),
    ("CsStats", "https://csstats.gg/player/{steam_id}"),
]


def build_sites(steam_id: str, enrichments: list[tuple[EnrichmentProvider, Enrichment]]) -> list[Site]:
    sites = [Site(url=template.format(steam_id=steam_id), title=title) for title, template in BASE_SITES]
    for provider, enrichment in enrichments:
        if enrichment.site is not None:
            sites.insert(min(provider.site_position, len(sites)), enrichment.site)
    return sites


class PlayerService:
    """
    Cache-aside lookup of a player by profile URL.

    The normalized URL is checked in Redis first. On a miss the Steam ID is
    resolved, every enrichment provider runs, and the serialized player is
    stored for CACHE_EXPIRATION_SECONDS. Expiry is only set on write.
    Without a Redis client every valid lookup fails with CacheUnavailable.
    """

    def __init__(
        self,
        redis_client,
        http_client: httpx.AsyncClient,
        tracker: Tracker,
        providers: list[EnrichmentProvider] | None = None,
        cache_ttl_seconds: int = config.CACHE_EXPIRATION_SECONDS,
    ):
        self.redis_client = redis_client
        self.http_client = http_client
        self.tracker = tracker
        self.providers = providers if providers is not None else default_providers()
        self.cache_ttl_seconds = cache_ttl_seconds

    async def resolve_player(self, url: str) -> str:
        """Returns the player JSON for a profile URL. Raises a ProfileLookupError on failure."""
        self.tracker.track_search_request(url)
        try:
            normalized_url = url_service.normalize_url(url)
            cache_key = url_service.get_cache_key(normalized_url)

            if self.redis_client is None:
                raise CacheUnavailable("Redis connection not available")

            if cached := await redis_service.get_from_cache(self.redis_client, cache_key):
                self.tracker.track_cache_hit(normalized_url)
                return cached

            steam_id = await steam_api_client.resolve_steam_id(self.http_client, normalized_url)
            return await self.handle_new_player(steam_id, cache_key)
        except ProfileLookupError as e:
            logging.warning(f"Lookup failed for {url!r}: {e}")
            self.tracker.track_error(str(e))
            raise

    async def enrich(self, steam_id: str) -> list[tuple[EnrichmentProvider, Enrichment]]:
        enrichments = []
        for provider in self.providers:
            enrichment = await provider.enrich(self.http_client, steam_id)
            if enrichment.data is None:
                logging.info(f"No {provider.field_name} for steam id {steam_id}.")
            enrichments.append((provider, enrichment))
        return enrichments

    def create_player(self, steam_id: str, enrichments: list[tuple[EnrichmentProvider, Enrichment]]) -> Player:
        fields = {provider.field_name: enrichment.data for provider, enrichment in enrichments}
        return Player(steam_id=steam_id, sites=build_sites(steam_id, enrichments), **fields)

    async def handle_new_player(self, steam_id: str, cache_key: str) -> str:
        player = self.create_player(steam_id, await self.enrich(steam_id))

        try:
            payload = player.model_dump_json()
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise SerializationFailed(f"Error serializing player: {e}") from e

        if not await redis_service.set_in_cache(self.redis_client, cache_key, payload, self.cache_ttl_seconds):
            logging.warning(f"Could not cache player {steam_id} under {cache_key}.")
        return payload
