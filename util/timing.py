# util/timing.py
import time
from contextlib import contextmanager
from typing import Any, Iterator
import logging


@contextmanager
def timed(
    logger: logging.Logger, name: str, level: int = logging.INFO, **kv: Any
) -> Iterator[None]:
    """
    Usage:
      with timed(logger, "ai.complete", model="claude"):
          ...
    Emits one line on exit: "<name>.done ms=<int> key=val ..."
    or "<name>.failed ms=<int> err=<Type> key=val ..." when the block raised.
    """
    t0 = time.perf_counter()
    failed: str | None = None
    try:
        yield
    except BaseException as e:
        failed = type(e).__name__
        raise
    finally:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        suffix = "".join(f" {k}={v}" for k, v in kv.items())
        if failed is None:
            logger.log(level, "%s.done ms=%d%s", name, dt_ms, suffix)
        else:
            logger.log(level, "%s.failed ms=%d err=%s%s", name, dt_ms, failed, suffix)
