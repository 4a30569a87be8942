import logging

import httpx

import config
from errors import MalformedDirectUrl, VanityResolutionFailed
from url_service import VANITY_SEGMENT, path_segments

RESOLVE_VANITY_PATH = "/ISteamUser/ResolveVanityURL/v1/"


def is_vanity_url(normalized_url: str) -> bool:
    """True for steamcommunity.com/id/<name>, False for /profiles/<steam_id>."""
    segments = path_segments(normalized_url)
    return bool(segments) and segments[0] == VANITY_SEGMENT


def get_steam_id_from_non_vanity_url(normalized_url: str) -> str:
    """Takes the Steam ID verbatim from a /profiles/<steam_id> URL."""
    segments = path_segments(normalized_url)
    if len(segments) < 2:
        raise MalformedDirectUrl(f"Could not resolve steam id from profile url: {normalized_url}")
    return segments[1]


async def get_steam_id_from_vanity_url(client: httpx.AsyncClient, normalized_url: str) -> str:
    """
    Resolves a /id/<name> URL through the Steam Web API.
    Raises VanityResolutionFailed on any failure; there are no retries.
    """
    segments = path_segments(normalized_url)
    if len(segments) < 2:
        raise VanityResolutionFailed(f"No vanity name in URL: {normalized_url}")
    vanity_name = segments[1]

    url = f"{config.STEAM_API_BASE_URL}{RESOLVE_VANITY_PATH}"
    params = {"key": config.STEAM_API_KEY or "", "vanityurl": vanity_name}
    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        raise VanityResolutionFailed(
            f"Could not resolve steam id from vanity URL: {normalized_url} "
            f"(Steam API returned {e.response.status_code})"
        ) from e
    except httpx.RequestError as e:
        raise VanityResolutionFailed(
            f"Could not resolve steam id from vanity URL: {normalized_url} ({type(e).__name__})"
        ) from e
    except ValueError as e:
        raise VanityResolutionFailed(
            f"Could not resolve steam id from vanity URL: {normalized_url} (invalid JSON)"
        ) from e

    steam_id = None
    if isinstance(data, dict) and isinstance(data.get("response"), dict):
        steam_id = data["response"].get("steamid")
    if not steam_id or not isinstance(steam_id, str):
        raise VanityResolutionFailed(f"Could not resolve steam id from vanity URL: {normalized_url}")

    logging.info(f"Resolved vanity name '{vanity_name}' to steam id {steam_id}")
    return steam_id


async def resolve_steam_id(client: httpx.AsyncClient, normalized_url: str) -> str:
    if is_vanity_url(normalized_url):
        return await get_steam_id_from_vanity_url(client, normalized_url)
    return get_steam_id_from_non_vanity_url(normalized_url)
