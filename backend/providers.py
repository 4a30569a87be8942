from dataclasses import dataclass
from typing import Any, Protocol

import httpx

import faceit_api_client
import stats
from schemas import Site


@dataclass
class Enrichment:
    """What one provider adds to a player: its data (or None) and its site link (or None)."""

    data: Any = None
    site: Site | None = None


class EnrichmentProvider(Protocol):
    # Name of the Player field the provider's data goes into.
    field_name: str
    # Title shown for the provider's link.
    site_title: str
    # Index in the site list where the provider's link is inserted.
    site_position: int

    async def enrich(self, client: httpx.AsyncClient, steam_id: str) -> Enrichment: ...


class FaceitProvider:
    field_name = "faceit_data"
    site_position = 1
    site_title = "Faceit"

    async def enrich(self, client: httpx.AsyncClient, steam_id: str) -> Enrichment:
        details = await faceit_api_client.get_player_details(client, steam_id)
        if details is None:
            return Enrichment()

        # Only get last matches if we have a FACEIT profile
        matches = await faceit_api_client.get_player_last_matches(client, details.player_id)
        data = stats.build_profile_data(details, stats.aggregate(matches))

        site = None
        if details.faceit_url:
            site = Site(url=details.faceit_url.replace("{lang}", "en"), title=self.site_title)
        return Enrichment(data=data, site=site)


def default_providers() -> list[EnrichmentProvider]:
    return [FaceitProvider()]
