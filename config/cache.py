# config/cache.py
import logging
from typing import Optional
from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError
from config.settings import settings

_client: Optional[Redis] = None
_log = logging.getLogger(__name__)


async def get_redis() -> Redis:
    """
    Process-wide Redis client for the claim cache, the analysis cache and the
    rate limiter. Created lazily; pings once so startup fails fast.
    """
    global _client
    if _client is None:
        client = from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=False,  # repositories get raw bytes
            socket_keepalive=True,
            health_check_interval=30,
        )
        await client.ping()
        _client = client
        _log.info("redis.connected")
    return _client


async def redis_ok() -> bool:
    try:
        r = await get_redis()
        return bool(await r.ping())
    except (RedisError, OSError):
        _log.warning("redis.ping.failed")
        return False


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
