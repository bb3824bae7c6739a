# core/retry.py
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Tuple, Type
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

Sleep = Callable[[float], Awaitable[None]]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded retry with a fixed delay between attempts, no delay after the last.

    `sleep` is injectable so tests can retry without waiting. Once attempts are
    exhausted the loop raises tenacity.RetryError.
    """

    max_attempts: int = 3
    delay_seconds: float = 1.0
    sleep: Sleep = field(default=asyncio.sleep, compare=False)

    def retrying(
        self, retry_on: Tuple[Type[BaseException], ...] = (Exception,)
    ) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception_type(retry_on),
            stop=stop_after_attempt(max(1, self.max_attempts)),
            wait=wait_fixed(max(0.0, self.delay_seconds)),
            sleep=self.sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
