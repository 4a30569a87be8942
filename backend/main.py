import logging
from contextlib import asynccontextmanager

import httpx
import redis.asyncio
from fastapi import Depends, FastAPI, HTTPException, Response, status
from fastapi.middleware.cors import CORSMiddleware

import config
import redis_service
from errors import (
    CacheUnavailable,
    InvalidUrl,
    MalformedDirectUrl,
    ProfileLookupError,
    SerializationFailed,
    VanityResolutionFailed,
)
from player_service import PlayerService
from tracking import Tracker

# --- APP INITIALIZATION ---
redis_client: redis.asyncio.Redis | None = None
http_client: httpx.AsyncClient | None = None
tracker: Tracker | None = None
logging.basicConfig(level=logging.INFO)

@asynccontextmanager
async def lifespan(app: FastAPI):
    global redis_client, http_client, tracker
    logging.info("FastAPI starting up...")

    # Missing configuration is fatal at startup, never per request.
    config.ensure_set()

    try:
        redis_client = await redis_service.get_redis_client()
        logging.info("Successfully connected to Redis server.")
    except CacheUnavailable as e:
        # Keep serving; lookups fail with CacheUnavailable (503) until the app restarts.
        logging.error(f"Starting without Redis: {e}")

    http_client = httpx.AsyncClient(timeout=config.HTTP_TIMEOUT_SECONDS)
    tracker = Tracker(http_client)

    yield # Application runs here

    logging.info("FastAPI shutting down.")
    await tracker.drain()
    await http_client.aclose()
    if redis_client:
        await redis_client.aclose()

app = FastAPI(lifespan=lifespan)

# --- DEPENDENCIES ---
def get_redis() -> redis.asyncio.Redis:
    """Dependency to provide the Redis client to routes."""
    if redis_client is None:
        raise HTTPException(status_code=503, detail="Redis connection not available")
    return redis_client


def get_player_service() -> PlayerService:
    if http_client is None or tracker is None:
        raise HTTPException(status_code=503, detail="Service is still starting up")
    # redis_client may be None; PlayerService reports that as CacheUnavailable.
    return PlayerService(redis_client, http_client, tracker)

# --- MIDDLEWARE ---
app.add_middleware(CORSMiddleware, allow_origins=config.CORS_ORIGINS, allow_credentials=True, allow_methods=["*"], allow_headers=["*"])


ERROR_STATUS_CODES = {
    InvalidUrl: status.HTTP_400_BAD_REQUEST,
    MalformedDirectUrl: status.HTTP_404_NOT_FOUND,
    VanityResolutionFailed: status.HTTP_404_NOT_FOUND,
    SerializationFailed: status.HTTP_500_INTERNAL_SERVER_ERROR,
    CacheUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(error: ProfileLookupError) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(status_code=status_code, detail=str(error))


# --- ENDPOINTS ---
@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check(r: redis.asyncio.Redis = Depends(get_redis)):
    """Returns 200 OK if Redis answers, 503 Service Unavailable otherwise."""
    try:
        if not await r.ping():
            raise HTTPException(status_code=503, detail="Redis connection failed (ping).")
    except redis.exceptions.RedisError as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {e}")

    return {"status": "ok", "services": ["redis"]}


@app.get("/api/v1/player/{url:path}")
async def get_player(url: str, service: PlayerService = Depends(get_player_service)):
    """
    Looks up a player by Steam profile URL (vanity /id/ or /profiles/).
    - 200 with the player JSON, from cache when available.
    - 400 if the URL is not a Steam profile URL.
    - 404 if the Steam ID can't be resolved.
    """
    try:
        payload = await service.resolve_player(url)
    except ProfileLookupError as e:
        raise to_http_exception(e) from e
    return Response(content=payload, media_type="application/json")


# Older clients still call /player/<url>.
app.add_api_route("/player/{url:path}", get_player, methods=["GET"], include_in_schema=False)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
