# repository/analysis_repository.py
from typing import Optional
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from repository.namespaces import ANALYSES


class AnalysisRepository:
    """
    Redis-backed cache of analysis replies keyed by (mode, text hash).

    Entries expire after the configured cache duration.
    """

    def __init__(self, ttl_seconds: int = settings.CACHE_DURATION_SECONDS) -> None:
        self._ttl = int(ttl_seconds)

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(mode: str, text_key: str) -> str:
        return f"{ANALYSES}:{mode}:{text_key}"

    async def get(self, mode: str, text_key: str) -> Optional[str]:
        r = await self._client()
        raw = await r.get(self._key(mode, text_key))
        if raw is None:
            return None
        return raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else str(raw)

    async def put(self, mode: str, text_key: str, result: str) -> None:
        r = await self._client()
        await r.set(self._key(mode, text_key), result.encode("utf-8"), ex=self._ttl)
