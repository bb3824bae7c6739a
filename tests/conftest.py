"""
Shared fakes for the reasoning and evidence services.
"""

from typing import List

import pytest

from core.entities import Claim, Source
from core.retry import RetryPolicy
from repository.verification_cache import InMemoryVerificationCache
from util.enums import ClaimCategory


class FakeReasoning:
    """Replays scripted replies; an exception in the script is raised instead."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls: List[dict] = []

    async def complete(self, system_prompt, user_prompt, max_tokens, temperature):
        self.calls.append(
            {
                "system": system_prompt,
                "user": user_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        item = self.replies.pop(0) if self.replies else ""
        if isinstance(item, BaseException):
            raise item
        return item


class FakeSearch:
    def __init__(self, results=None, error: Exception | None = None):
        self.results = list(results or [])
        self.error = error
        self.queries: List[tuple] = []

    async def search(self, query, num_results):
        self.queries.append((query, num_results))
        if self.error is not None:
            raise self.error
        return self.results[:num_results]


class RecordingSleep:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def reasoning_factory():
    return FakeReasoning


@pytest.fixture
def search_factory():
    return FakeSearch


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryVerificationCache(ttl_seconds=60, clock=clock)


@pytest.fixture
def fast_retry(sleep):
    return RetryPolicy(max_attempts=3, delay_seconds=1.0, sleep=sleep)


@pytest.fixture
def sample_sources():
    return [
        Source(title="Reuters", url="https://reuters.com/a", snippet="Farley said..."),
        Source(title="CNBC", url="https://cnbc.com/b", snippet="Ford's CEO warned..."),
    ]


@pytest.fixture
def sample_claim():
    return Claim(
        text="Ford CEO Jim Farley said AI will eliminate 50% of white-collar jobs.",
        category=ClaimCategory.statistical,
    )
