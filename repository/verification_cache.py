# repository/verification_cache.py
import json
import time
from typing import Awaitable, Callable, Dict, List, Optional, Protocol
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from core.entities import CacheEntry, Claim
from repository.namespaces import CLAIMS
from util.enums import ClaimCategory


class VerificationCache(Protocol):
    async def get(self, key: str) -> Optional[List[Claim]]: ...

    async def set(self, key: str, claims: List[Claim]) -> None: ...

    async def clear(self) -> None: ...


class InMemoryVerificationCache:
    """
    Process-local claim cache. Returns the stored list object itself, so a
    repeat lookup within the TTL is identical to the first extraction result.
    """

    def __init__(
        self,
        ttl_seconds: float = settings.CACHE_DURATION_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    async def get(self, key: str) -> Optional[List[Claim]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_live(self._clock()):
            del self._entries[key]
            return None
        return entry.claims

    async def set(self, key: str, claims: List[Claim]) -> None:
        self._entries[key] = CacheEntry(
            key=key, claims=claims, expires_at=self._clock() + self._ttl
        )

    async def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def _dump_claims(claims: List[Claim]) -> bytes:
    rows = [
        {"text": c.text, "source_span": c.source_span, "category": c.category.value}
        for c in claims
    ]
    return json.dumps(rows, ensure_ascii=False).encode("utf-8")


def _load_claims(raw: bytes | str) -> List[Claim]:
    rows = json.loads(raw)
    if not isinstance(rows, list):
        raise ValueError("cached claims must be a list")
    return [
        Claim(
            text=str(r["text"]),
            source_span=str(r.get("source_span") or r["text"]),
            category=ClaimCategory(r.get("category", ClaimCategory.general.value)),
        )
        for r in rows
    ]


class RedisVerificationCache:
    """
    Flow:
    - Claim lists are stored as JSON under factcheck:claims:<sha256>.
    - Staleness is Redis' own expiry (SET ... EX cache duration).
    - Malformed entries raise ValueError; the extractor logs and re-extracts.
    """

    def __init__(
        self,
        ttl_seconds: int = settings.CACHE_DURATION_SECONDS,
        client_factory: Callable[[], Awaitable[Redis]] = get_redis,
    ) -> None:
        self._ttl = int(ttl_seconds)
        self._client_factory = client_factory

    async def _client(self) -> Redis:
        return await self._client_factory()

    @staticmethod
    def _key(key: str) -> str:
        return f"{CLAIMS}:{key}"

    async def get(self, key: str) -> Optional[List[Claim]]:
        r = await self._client()
        raw = await r.get(self._key(key))
        if raw is None:
            return None
        return _load_claims(raw)

    async def set(self, key: str, claims: List[Claim]) -> None:
        r = await self._client()
        await r.set(self._key(key), _dump_claims(claims), ex=self._ttl)

    async def clear(self) -> None:
        r = await self._client()
        keys = [k async for k in r.scan_iter(match=f"{CLAIMS}:*")]
        if keys:
            await r.delete(*keys)
