# core/streaming.py
import asyncio
import time
from typing import AsyncIterator, Dict, Final, Optional
from core.entities import Verdict
from core.verification_pipeline import FactCheckPipeline
from model.api import ProgressPayload, StreamEvent
from model.claim import Claim, Verdict as VerdictOut, VerificationReport
from util.types import ErrorPayload, EventType
import json
import logging

LINE_SEP: Final[str] = "\n"
logger = logging.getLogger(__name__)

_DONE = object()


def ndjson_line(obj: Dict[str, object]) -> bytes:
    return (json.dumps(obj, separators=(",", ":")) + LINE_SEP).encode("utf-8")


def event_line(type_: EventType, payload: object) -> bytes:
    return ndjson_line(StreamEvent(type=type_, payload=payload).model_dump(mode="json"))


async def make_fact_check_stream(
    *, pipeline: FactCheckPipeline, text: str
) -> AsyncIterator[bytes]:
    """
    Drive one fact check and emit NDJSON events:
      - claims once extraction finishes
      - progress + verdict per finished claim (claim order)
      - report once every claim has a verdict
      - done at the end; error before done if the run blew up
    """
    claims = await pipeline.extract(text)
    yield event_line("claims", [Claim.of(c).model_dump(mode="json") for c in claims])

    queue: "asyncio.Queue[object]" = asyncio.Queue()

    async def _on_verdict(index: int, total: int, verdict: Verdict) -> None:
        await queue.put((index, total, verdict))

    async def _run():
        try:
            return await pipeline.verify(claims, on_verdict=_on_verdict)
        finally:
            await queue.put(_DONE)

    task = asyncio.create_task(_run())
    processed = 0
    try:
        while True:
            item = await queue.get()
            if item is _DONE:
                break
            index, total, verdict = item  # type: ignore[misc]
            processed += 1
            progress = ProgressPayload(processed=processed, total=total, ts=int(time.time()))
            yield event_line("progress", progress.model_dump())
            payload = VerdictOut.of(verdict).model_dump(mode="json")
            payload["index"] = index
            yield event_line("verdict", payload)

        report = await task
    except BaseException:
        task.cancel()
        raise

    logger.info("stream.report n=%d score=%d", len(claims), report.overall_score)
    yield event_line("report", VerificationReport.of(report).model_dump(mode="json"))
    yield event_line("done", {})


async def guarded_stream(
    source: AsyncIterator[bytes], *, label: Optional[str] = None
) -> AsyncIterator[bytes]:
    """Turn an exception mid-stream into an error + done pair."""
    try:
        async for chunk in source:
            yield chunk
    except Exception:
        logger.error("stream.error label=%s", label or "-", exc_info=True)
        yield event_line("error", ErrorPayload(message="Fact check failed"))
        yield event_line("done", {})
