# service/fact_check_service.py
import logging
from typing import AsyncIterator, Callable
from config.settings import settings
from core.anthropic_client import AnthropicClient
from core.claim_evaluator import ClaimEvaluator
from core.claim_extractor import ClaimExtractor
from core.ports import EvidenceSearch, ReasoningService
from core.scheduler import KeyedLocks
from core.source_retriever import SourceRetriever
from core.streaming import guarded_stream, make_fact_check_stream
from core.verification_pipeline import FactCheckPipeline
from model.api import ExtractClaimsResponse, FactCheckResponse
from model.claim import Claim, VerificationReport
from repository.verification_cache import VerificationCache
from util.enums import Assessment, ErrorMessage
from util.errors import AppError

logger = logging.getLogger(__name__)

ReasoningFactory = Callable[[str], ReasoningService]


def resolve_api_key(api_key: str | None) -> str:
    key = (api_key or "").strip() or settings.ANTHROPIC_API_KEY
    if not key:
        raise AppError.of(ErrorMessage.MISSING_API_KEY)
    return key


class FactCheckService:
    def __init__(
        self,
        cache: VerificationCache,
        search: EvidenceSearch,
        inflight: KeyedLocks,
        reasoning_factory: ReasoningFactory = AnthropicClient,
    ) -> None:
        self._cache = cache
        self._search = search
        self._inflight = inflight
        self._reasoning_factory = reasoning_factory

    def pipeline(self, api_key: str | None) -> FactCheckPipeline:
        reasoning = self._reasoning_factory(resolve_api_key(api_key))
        return FactCheckPipeline(
            extractor=ClaimExtractor(reasoning, self._cache, inflight=self._inflight),
            retriever=SourceRetriever(self._search),
            evaluator=ClaimEvaluator(reasoning),
        )

    async def extract_claims(self, text: str, api_key: str | None) -> ExtractClaimsResponse:
        claims = await self.pipeline(api_key).extract(text)
        if not claims:
            raise AppError.of(ErrorMessage.NO_CLAIMS)
        logger.info("claims.ok count=%d", len(claims))
        return ExtractClaimsResponse(claims=[Claim.of(c) for c in claims])

    async def fact_check(self, text: str, api_key: str | None) -> FactCheckResponse:
        """
        Full run: claims + report. A report is always complete; only blank
        text (no claims at all) is reported as an error.
        """
        pipeline = self.pipeline(api_key)
        claims, report = await pipeline.run(text)
        if not claims:
            raise AppError.of(ErrorMessage.NO_CLAIMS)
        logger.info(
            "factcheck.ok claims=%d score=%d errors=%d",
            len(claims),
            report.overall_score,
            sum(1 for v in report.per_claim_verdicts if v.assessment is Assessment.error),
        )
        return FactCheckResponse(
            claims=[Claim.of(c) for c in claims],
            report=VerificationReport.of(report),
        )

    def stream_fact_check(self, text: str, api_key: str | None) -> AsyncIterator[bytes]:
        # resolve the key eagerly so a missing key is a 400, not a stream error
        pipeline = self.pipeline(api_key)
        return guarded_stream(
            make_fact_check_stream(pipeline=pipeline, text=text), label="factcheck"
        )

