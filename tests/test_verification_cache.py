import pytest

from core.entities import Claim
from repository.namespaces import CLAIMS
from repository.verification_cache import InMemoryVerificationCache, RedisVerificationCache
from util.enums import ClaimCategory


class FakeRedis:
    def __init__(self):
        self.store = {}
        self.ttls = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        self.ttls[key] = ex

    async def scan_iter(self, match=None):
        prefix = (match or "*").rstrip("*")
        for key in list(self.store):
            if key.startswith(prefix):
                yield key

    async def delete(self, *keys):
        for key in keys:
            self.store.pop(key, None)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def redis_cache(fake_redis):
    async def _factory():
        return fake_redis

    return RedisVerificationCache(ttl_seconds=3600, client_factory=_factory)


CLAIMS_ = [
    Claim(text="Water boils at 100 degrees Celsius at sea level.", category=ClaimCategory.scientific),
    Claim(text="The Berlin Wall fell in 1989.", source_span="the wall fell in '89", category=ClaimCategory.historical),
]


class TestInMemoryVerificationCache:
    @pytest.mark.asyncio
    async def test_hit_returns_same_object(self, cache):
        await cache.set("k", CLAIMS_)
        assert await cache.get("k") is CLAIMS_

    @pytest.mark.asyncio
    async def test_expiry(self, cache, clock):
        await cache.set("k", CLAIMS_)
        clock.advance(59)
        assert await cache.get("k") is CLAIMS_
        clock.advance(1)
        assert await cache.get("k") is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_miss_and_clear(self, cache):
        assert await cache.get("missing") is None
        await cache.set("a", CLAIMS_)
        await cache.set("b", CLAIMS_)
        await cache.clear()
        assert len(cache) == 0


class TestRedisVerificationCache:
    @pytest.mark.asyncio
    async def test_round_trip(self, redis_cache, fake_redis):
        await redis_cache.set("abc", CLAIMS_)

        assert f"{CLAIMS}:abc" in fake_redis.store
        assert fake_redis.ttls[f"{CLAIMS}:abc"] == 3600
        assert await redis_cache.get("abc") == CLAIMS_

    @pytest.mark.asyncio
    async def test_miss(self, redis_cache):
        assert await redis_cache.get("nope") is None

    @pytest.mark.asyncio
    async def test_malformed_entry_raises(self, redis_cache, fake_redis):
        fake_redis.store[f"{CLAIMS}:bad"] = b'{"not": "a list"}'
        with pytest.raises(ValueError):
            await redis_cache.get("bad")

    @pytest.mark.asyncio
    async def test_clear_only_touches_claims(self, redis_cache, fake_redis):
        await redis_cache.set("a", CLAIMS_)
        fake_redis.store["factcheck:analyses:explain:x"] = b"kept"
        await redis_cache.clear()
        assert list(fake_redis.store) == ["factcheck:analyses:explain:x"]
