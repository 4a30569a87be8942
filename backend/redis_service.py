import logging

import redis.asyncio

import config
from errors import CacheUnavailable


async def get_redis_client(url: str | None = None) -> redis.asyncio.Redis:
    """
    Creates the process-wide Redis client. redis-py pools connections
    internally, so this is called once at startup and the client is shared.
    Raises CacheUnavailable if Redis can't be reached.
    """
    try:
        client = redis.asyncio.Redis.from_url(url or config.REDIS_URL, decode_responses=True)
        await client.ping()
        return client
    except (redis.exceptions.ConnectionError, ValueError) as e:
        logging.error(f"FATAL: Could not connect to Redis. {e}")
        raise CacheUnavailable(f"Could not connect to Redis: {e}") from e


# --- CACHE INTERFACE FUNCTIONS ---
# Every function accepts 'redis_client' as its first argument.

async def get_from_cache(redis_client, key: str) -> str | None:
    """Returns the cached payload exactly as stored. Errors are logged and count as a miss."""
    if not redis_client:
        return None
    try:
        return await redis_client.get(key)
    except redis.exceptions.RedisError as e:
        logging.error(f"Redis GET error for key {key}: {e}")
        return None


async def set_in_cache(redis_client, key: str, payload: str, ttl_seconds: int = config.CACHE_EXPIRATION_SECONDS) -> bool:
    """Overwrites the whole entry and sets its expiry. Returns False if the write failed."""
    if not redis_client or not payload:
        return False
    try:
        await redis_client.setex(key, ttl_seconds, payload)
        return True
    except redis.exceptions.RedisError as e:
        logging.error(f"Redis SETEX error for key {key}: {e}")
        return False
