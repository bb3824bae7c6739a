# core/scheduler.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Dict, List, Sequence, TypeVar
from core.retry import Sleep

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class PacedScheduler:
    """
    Run one coroutine per item, in item order, with at most `concurrency` in
    flight and at least `pacing_seconds` between consecutive starts.

    With concurrency 1 each item starts only after the previous one finished
    (plus the pacing delay), which keeps per-minute upstream limits happy.
    Results come back in input order.
    """

    def __init__(
        self,
        concurrency: int = 1,
        pacing_seconds: float = 0.5,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._concurrency = max(1, int(concurrency))
        self._pacing = max(0.0, float(pacing_seconds))
        self._sleep = sleep

    @property
    def concurrency(self) -> int:
        return self._concurrency

    async def _pace(self, index: int) -> None:
        if index > 0 and self._pacing > 0:
            await self._sleep(self._pacing)

    async def map(
        self, items: Sequence[T], fn: Callable[[int, T], Awaitable[R]]
    ) -> List[R]:
        if self._concurrency == 1:
            out: List[R] = []
            for i, item in enumerate(items):
                await self._pace(i)
                out.append(await fn(i, item))
            return out

        sem = asyncio.Semaphore(self._concurrency)
        gate = asyncio.Lock()

        async def _one(i: int, item: T) -> R:
            async with sem:
                # starts are serialized through the gate so pacing holds across workers
                async with gate:
                    await self._pace(i)
                return await fn(i, item)

        logger.debug("scheduler.map n=%d conc=%d", len(items), self._concurrency)
        return list(await asyncio.gather(*(_one(i, it) for i, it in enumerate(items))))


class KeyedLocks:
    """
    One asyncio.Lock per key, dropped once nobody holds or waits on it.
    Share one instance to keep at most one task per key in flight.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}
        self._waiting: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiting[key] = self._waiting.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiting[key] -= 1
            if self._waiting[key] == 0:
                del self._waiting[key]
                self._locks.pop(key, None)
