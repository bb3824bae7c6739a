# core/verification_pipeline.py
from typing import Awaitable, Callable, List, Optional, Tuple
from config.settings import settings
from core.claim_evaluator import ClaimEvaluator, FAILURE_SUMMARY, error_verdict
from core.claim_extractor import ClaimExtractor
from core.entities import Claim, Verdict, VerificationReport
from core.result_aggregator import aggregate
from core.scheduler import PacedScheduler
from core.source_retriever import SourceRetriever
import logging
from util.timing import timed

logger = logging.getLogger(__name__)

OnVerdict = Callable[[int, int, Verdict], Awaitable[None]]


class FactCheckPipeline:
    """
    End-to-end verification:
    1) Extract claims (cache-checked)
    2) Per claim, through the scheduler: retrieve sources, then judge
    3) Aggregate into a report
    Per-claim failures become error verdicts; cancellation propagates and no
    partial report is produced.
    """

    def __init__(
        self,
        extractor: ClaimExtractor,
        retriever: SourceRetriever,
        evaluator: ClaimEvaluator,
        scheduler: Optional[PacedScheduler] = None,
    ) -> None:
        self._extractor = extractor
        self._retriever = retriever
        self._evaluator = evaluator
        self._scheduler = scheduler or PacedScheduler(
            concurrency=settings.VERIFY_CONCURRENCY,
            pacing_seconds=settings.VERIFY_PACING_SECONDS,
        )

    async def extract(self, text: str) -> List[Claim]:
        return await self._extractor.extract(text)

    async def verify_claim(self, claim: Claim) -> Verdict:
        try:
            sources = await self._retriever.search(claim.text)
            return await self._evaluator.evaluate(claim, sources)
        except Exception as e:
            logger.error("verify.claim.error err=%s", type(e).__name__, exc_info=True)
            return error_verdict(claim, FAILURE_SUMMARY)

    async def verify(
        self, claims: List[Claim], on_verdict: Optional[OnVerdict] = None
    ) -> VerificationReport:
        total = len(claims)

        async def _one(index: int, claim: Claim) -> Verdict:
            verdict = await self.verify_claim(claim)
            if on_verdict is not None:
                await on_verdict(index, total, verdict)
            return verdict

        with timed(logger, "verify.all", n=total, conc=self._scheduler.concurrency):
            verdicts = await self._scheduler.map(claims, _one)
        return aggregate(claims, verdicts)

    async def run(
        self, text: str, on_verdict: Optional[OnVerdict] = None
    ) -> Tuple[List[Claim], VerificationReport]:
        with timed(logger, "pipeline", chars=len(text)):
            claims = await self.extract(text)
            report = await self.verify(claims, on_verdict)
        return claims, report
