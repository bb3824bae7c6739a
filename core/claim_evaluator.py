# core/claim_evaluator.py
import math
import re
from typing import Any, Dict, Final, List, Optional, Sequence, Tuple
import logging
from config.settings import settings
from core.entities import Claim, ParseFallback, ParseOk, ParseResult, Source, Verdict
from core.ports import ReasoningService
from core.response_normalizer import parse_object
from util import functions
from util.enums import JUDGED_ASSESSMENTS, Assessment
from util.errors import RateLimitError
from util.timing import timed

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE: Final[Dict[Assessment, int]] = {
    Assessment.true: 75,
    Assessment.false: 75,
    Assessment.partially_true: 60,
    Assessment.needs_context: 40,
    Assessment.unverifiable: 30,
    Assessment.error: 0,
}

DEFAULT_SUMMARY = "Unable to evaluate claim."
HEURISTIC_SUMMARY = "Unable to evaluate claim based on available sources."
RATE_LIMIT_SUMMARY = "Rate limit reached. Please try again in a moment."
FAILURE_SUMMARY = "Unable to verify this claim due to a technical error."
MAX_SUMMARY_CHARS = 150

_ERROR_PHRASES = (
    "unable to evaluate",
    "an error occurred",
    "evaluation failed",
    "failed to verify",
)
_TRUE_PHRASES = (
    '"assessment": "true"',
    '"assessment":"true"',
    "assessment is true",
    "claim is true",
    "claim is accurate",
    "claim is correct",
    "verified as true",
    "this is true",
)
_FALSE_PHRASES = (
    '"assessment": "false"',
    '"assessment":"false"',
    "assessment is false",
    "claim is false",
    "claim is incorrect",
    "verified as false",
    "this is false",
)
_PARTIAL_PHRASES = (
    "partially true",
    "partly true",
    "partially correct",
    '"assessment": "partially_true"',
)
_UNVERIFIABLE_PHRASES = (
    "unverifiable",
    "cannot verify",
    "cannot be verified",
)
_CONTEXT_PHRASES = (
    "needs context",
    "requires context",
    "need more context",
    '"assessment": "needs_context"',
)

_CONFIDENCE_PATTERNS = (
    re.compile(r"(\d{1,3})\s*%?\s*(?:confidence|certain)", re.IGNORECASE),
    re.compile(r"confidence(?:\s+(?:level|score))?(?:\s+of|:)?\s*(\d{1,3})\s*%", re.IGNORECASE),
)
_SUMMARY_FIELD = re.compile(r'"summary"\s*:\s*"([^"]+)"', re.IGNORECASE)
_SUMMARY_PATTERNS = (
    re.compile(r"(?:in summary|in conclusion|overall|therefore)[^.!?]*[.!?]", re.IGNORECASE),
    re.compile(r"(?:the claim|this claim)[^.!?]*(?:is|appears|seems)[^.!?]*[.!?]", re.IGNORECASE),
    re.compile(r"(?:evidence|sources|data)[^.!?]*(?:suggest|indicate|show)[^.!?]*[.!?]", re.IGNORECASE),
)
_FIRST_SENTENCE = re.compile(r"[^.!?]+[.!?]")


def _has_any(text: str, phrases: Sequence[str]) -> bool:
    return any(p in text for p in phrases)


def clamp_confidence(value: Any, fallback: int) -> int:
    try:
        n = float(str(value).strip().rstrip("%"))
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(n):
        return fallback
    return int(max(0, min(100, round(n))))


def infer_assessment(text: str) -> Assessment:
    """
    Keyword inference over a reply that carried no usable JSON.
    Ambiguous replies resolve to unverifiable, not error.
    """
    low = text.lower()
    if _has_any(low, _ERROR_PHRASES):
        return Assessment.error
    if _has_any(low, _TRUE_PHRASES) and "not true" not in low and "false" not in low:
        return Assessment.true
    if _has_any(low, _FALSE_PHRASES) and "not false" not in low:
        return Assessment.false
    if _has_any(low, _PARTIAL_PHRASES):
        return Assessment.partially_true
    if _has_any(low, _UNVERIFIABLE_PHRASES):
        return Assessment.unverifiable
    if _has_any(low, _CONTEXT_PHRASES):
        return Assessment.needs_context
    return Assessment.unverifiable


def infer_confidence(text: str, assessment: Assessment) -> int:
    fallback = DEFAULT_CONFIDENCE[assessment]
    for pattern in _CONFIDENCE_PATTERNS:
        m = pattern.search(text)
        if m:
            return clamp_confidence(m.group(1), fallback)
    return fallback


def infer_summary(text: str) -> str:
    summary: Optional[str] = None
    m = _SUMMARY_FIELD.search(text)
    if m:
        summary = m.group(1).strip()
    else:
        for pattern in _SUMMARY_PATTERNS:
            m = pattern.search(text)
            if m:
                summary = m.group(0).strip()
                break
    if not summary:
        first = _FIRST_SENTENCE.search(text)
        summary = first.group(0).strip() if first else text.strip()
    return functions.clip_chars(summary or HEURISTIC_SUMMARY, MAX_SUMMARY_CHARS)


def heuristic_verdict(text: str) -> Dict[str, Any]:
    assessment = infer_assessment(text or "")
    return {
        "assessment": assessment,
        "confidence": infer_confidence(text or "", assessment),
        "summary": infer_summary(text or ""),
        "supporting_sources": [],
    }


def _source_refs(value: Any, n_sources: int) -> Tuple[int, ...]:
    if not isinstance(value, list):
        return ()
    out: List[int] = []
    for v in value:
        try:
            idx = int(v)
        except (TypeError, ValueError, OverflowError):
            continue
        if 1 <= idx <= n_sources and idx not in out:
            out.append(idx)
    return tuple(out)


def render_evidence(sources: Sequence[Source]) -> str:
    if not sources:
        return "No sources found"
    return "\n".join(
        f"Source {i}: {s.title}\nURL: {s.url}\nContent: {s.snippet}\n"
        for i, s in enumerate(sources, start=1)
    )


def _user_prompt(claim: str, evidence: str) -> str:
    return (
        "RESPOND WITH ONLY JSON:\n\n"
        f'Claim to evaluate: "{claim}"\n\n'
        f"Sources:\n{evidence}\n\n"
        "TASK: Output a JSON object evaluating this claim."
    )


def interpret(reply: str) -> ParseResult:
    """
    Ok(dict) when the reply holds an object with a legal assessment,
    otherwise Fallback(dict) built from keyword inference.
    """
    parsed = parse_object(reply, "assessment")
    if isinstance(parsed, ParseOk):
        obj = parsed.value
        assessment = str(obj.get("assessment") or "").strip().lower()
        if assessment in JUDGED_ASSESSMENTS:
            return ParseOk(value={**obj, "assessment": Assessment(assessment)})
        logger.warning("evaluate.assessment.illegal value=%.32s", assessment)
    return ParseFallback(value=heuristic_verdict(reply))


class ClaimEvaluator:
    """
    Judge one claim against its sources. Never raises: transport failures and
    unreadable replies still produce a Verdict.
    """

    def __init__(
        self,
        reasoning: ReasoningService,
        *,
        max_tokens: int = 600,
        temperature: float = 0.1,
    ) -> None:
        self._reasoning = reasoning
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def evaluate(self, claim: Claim, sources: Sequence[Source]) -> Verdict:
        try:
            with timed(logger, "evaluate", k=len(sources)):
                reply = await self._reasoning.complete(
                    settings.VERIFY_SYSTEM_PROMPT,
                    _user_prompt(claim.text, render_evidence(sources)),
                    self._max_tokens,
                    self._temperature,
                )
        except RateLimitError:
            logger.warning("evaluate.rate_limited")
            return error_verdict(claim, RATE_LIMIT_SUMMARY, sources)
        except Exception as e:
            logger.error("evaluate.error err=%s", type(e).__name__)
            return error_verdict(claim, FAILURE_SUMMARY, sources)

        result = interpret(reply or "")
        data: Dict[str, Any] = result.value  # type: ignore[union-attr]
        assessment: Assessment = data["assessment"]
        if isinstance(result, ParseFallback):
            logger.info("evaluate.fallback assessment=%s", assessment.value)

        summary = str(data.get("summary") or "").strip() or DEFAULT_SUMMARY
        verdict = Verdict(
            claim_text=claim.text,
            assessment=assessment,
            confidence=clamp_confidence(
                data.get("confidence"), DEFAULT_CONFIDENCE[assessment]
            ),
            summary=summary,
            supporting_sources=_source_refs(data.get("supporting_sources"), len(sources)),
            sources=tuple(sources),
        )
        logger.info(
            "evaluate.result assessment=%s conf=%d", verdict.assessment.value, verdict.confidence
        )
        return verdict


def error_verdict(
    claim: Claim, summary: str, sources: Sequence[Source] = ()
) -> Verdict:
    return Verdict(
        claim_text=claim.text,
        assessment=Assessment.error,
        confidence=0,
        summary=summary,
        supporting_sources=(),
        sources=tuple(sources),
    )
