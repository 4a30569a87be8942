import logging

import httpx
from pydantic import ValidationError

import config
from schemas import FaceitPlayerDetails, MatchStats, PlayerLastMatchesResponse


def get_headers() -> dict:
    return {"Authorization": f"Bearer {config.FACEIT_API_KEY or ''}"}


async def get_player_details(client: httpx.AsyncClient, steam_id: str) -> FaceitPlayerDetails | None:
    """
    Looks up the FACEIT account linked to a Steam ID.
    Returns None if there is none or FACEIT can't be reached; that is not an error.
    """
    url = f"{config.FACEIT_API_BASE_URL}/players"
    params = {"game": "csgo", "game_player_id": steam_id}
    try:
        response = await client.get(url, params=params, headers=get_headers())
        response.raise_for_status()
        return FaceitPlayerDetails.model_validate(response.json())
    except httpx.HTTPStatusError as e:
        logging.info(f"No FACEIT profile for steam id {steam_id} (status {e.response.status_code}).")
        return None
    except httpx.RequestError as e:
        logging.warning(f"HTTP error fetching FACEIT profile for {steam_id}: {e}")
        return None
    except (ValidationError, ValueError) as e:
        logging.warning(f"Unexpected FACEIT profile payload for {steam_id}: {e}")
        return None


async def get_player_last_matches(client: httpx.AsyncClient, faceit_player_id: str) -> list[MatchStats] | None:
    """Fetches the per-match stats of the player's most recent CS2 matches."""
    url = f"{config.FACEIT_API_BASE_URL}/players/{faceit_player_id}/games/cs2/stats"
    params = {"limit": config.MATCH_HISTORY_LIMIT}
    try:
        response = await client.get(url, params=params, headers=get_headers())
        response.raise_for_status()
        data = PlayerLastMatchesResponse.model_validate(response.json())
        return [item.stats for item in data.items]
    except (httpx.RequestError, httpx.HTTPStatusError) as e:
        logging.warning(f"HTTP error fetching match history for {faceit_player_id}: {e}")
        return None
    except (ValidationError, ValueError) as e:
        logging.warning(f"Unexpected match history payload for {faceit_player_id}: {e}")
        return None
