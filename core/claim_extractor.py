# core/claim_extractor.py
import re
from typing import Any, Iterable, List, Optional
import logging
from tenacity import RetryError
from config.settings import settings
from core import sentence_splitter
from core.entities import Claim, ParseOk
from core.ports import ReasoningService
from core.response_normalizer import parse_array
from core.retry import RetryPolicy
from core.scheduler import KeyedLocks
from repository.verification_cache import VerificationCache
from util import functions
from util.enums import ClaimCategory
from util.timing import timed

logger = logging.getLogger(__name__)

MIN_CLAIM_CHARS = 10
FALLBACK_MIN_CHARS = 20
SYNTHETIC_CLAIM_CHARS = 200

_TERMINAL = re.compile(r"[.!?]$")
_ALNUM = re.compile(r"[a-zA-Z0-9]")

_STATISTICAL = re.compile(r"\d+\s*%|\d+\s*percent", re.IGNORECASE)
_HISTORICAL = re.compile(
    r"\b\d{4}\b|\b(?:January|February|March|April|May|June|July|August|September"
    r"|October|November|December)\b",
    re.IGNORECASE,
)
_SCIENTIFIC = re.compile(r"\b(?:study|studies|research|experiment|data|evidence)\b", re.IGNORECASE)
# "AI" is matched case-sensitively so words like "said" do not count.
_TECHNOLOGICAL = re.compile(
    r"\bAI\b|(?i:\b(?:artificial intelligence|machine learning|algorithms?|technology|software|hardware)\b)"
)


class NoClaimsYet(Exception):
    """An attempt produced no usable claims."""


def _ensure_terminal(text: str) -> str:
    return text if _TERMINAL.search(text) else text + "."


def classify(sentence: str) -> ClaimCategory:
    """Keyword rules used when the reasoning service gave us nothing usable."""
    if _STATISTICAL.search(sentence):
        return ClaimCategory.statistical
    if _HISTORICAL.search(sentence):
        return ClaimCategory.historical
    if _SCIENTIFIC.search(sentence):
        return ClaimCategory.scientific
    if _TECHNOLOGICAL.search(sentence):
        return ClaimCategory.technological
    return ClaimCategory.general


def _category(value: Any) -> ClaimCategory:
    try:
        return ClaimCategory(str(value).strip().lower())
    except ValueError:
        return ClaimCategory.general


def validate_claims(entries: Iterable[Any]) -> List[Claim]:
    """
    Keep entries carrying a usable "claim" string (> 10 chars once trimmed) and
    map them to Claim, defaulting original_text to the claim and type to general.
    """
    out: List[Claim] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        raw = entry.get("claim")
        if not isinstance(raw, str):
            continue
        text = raw.strip()
        if len(text) <= MIN_CLAIM_CHARS:
            continue
        span = entry.get("original_text")
        out.append(
            Claim(
                text=_ensure_terminal(text),
                source_span=span.strip() if isinstance(span, str) and span.strip() else text,
                category=_category(entry.get("type", ClaimCategory.general.value)),
            )
        )
    return out


def rule_based_claims(text: str) -> List[Claim]:
    """
    Deterministic extraction: sentences with enough substance become claims.
    Falls back to a looser length threshold, then to one claim built from the
    start of the text, so the result is never empty for non-blank input.
    """
    sentences = sentence_splitter.split(text)
    for threshold in (FALLBACK_MIN_CHARS, MIN_CLAIM_CHARS):
        claims = [
            Claim(text=_ensure_terminal(s), source_span=s, category=classify(s))
            for s in sentences
            if len(s) > threshold and _ALNUM.search(s)
        ]
        if claims:
            return claims

    clean = functions.collapse_ws(text)
    synthetic = _ensure_terminal(functions.clip_chars(clean, SYNTHETIC_CLAIM_CHARS))
    return [Claim(text=synthetic, source_span=text, category=ClaimCategory.general)]


def _user_prompt(text: str) -> str:
    return f'Extract verifiable factual claims from this text: "{text}"'


class ClaimExtractor:
    """
    Text -> claims, with a content-hash cache in front of the reasoning service.

    Flow:
    1) live cache entry wins
    2) up to N reasoning attempts, each normalized + validated
    3) rule-based fallback once attempts are exhausted
    4) whatever we return is cached, fallback included
    """

    def __init__(
        self,
        reasoning: ReasoningService,
        cache: VerificationCache,
        retry: Optional[RetryPolicy] = None,
        *,
        inflight: Optional[KeyedLocks] = None,
        max_tokens: int = 600,
        temperature: float = 0.1,
    ) -> None:
        self._reasoning = reasoning
        self._cache = cache
        self._retry = retry or RetryPolicy(
            max_attempts=settings.EXTRACT_MAX_ATTEMPTS,
            delay_seconds=settings.EXTRACT_RETRY_DELAY_SECONDS,
        )
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._inflight = inflight if inflight is not None else KeyedLocks()

    async def _cached(self, key: str) -> Optional[List[Claim]]:
        try:
            return await self._cache.get(key)
        except Exception:
            logger.error("extract.cache.read.error key=%s", key[:12], exc_info=True)
            return None

    async def _remember(self, key: str, claims: List[Claim]) -> None:
        try:
            await self._cache.set(key, claims)
        except Exception:
            logger.error("extract.cache.write.error key=%s", key[:12], exc_info=True)

    async def _attempt(self, text: str, attempt: int) -> List[Claim]:
        try:
            with timed(logger, "extract.attempt", n=attempt):
                reply = await self._reasoning.complete(
                    settings.EXTRACT_SYSTEM_PROMPT,
                    _user_prompt(text),
                    self._max_tokens,
                    self._temperature,
                )
        except Exception as e:
            logger.warning("extract.attempt.error n=%d err=%s", attempt, type(e).__name__)
            return []

        parsed = parse_array(reply)
        if not isinstance(parsed, ParseOk):
            logger.warning("extract.attempt.unparsed n=%d chars=%d", attempt, len(reply or ""))
            return []
        claims = validate_claims(parsed.value)
        if not claims:
            logger.warning("extract.attempt.no_valid_claims n=%d", attempt)
        return claims

    async def extract(self, text: str) -> List[Claim]:
        if not text or not text.strip():
            return []

        key = functions.text_hash(text)
        # one extraction in flight per key; later callers wait and hit the cache
        async with self._inflight.hold(key):
            cached = await self._cached(key)
            if cached:
                logger.info("extract.cache.hit count=%d", len(cached))
                return cached
            claims = await self._extract_fresh(text)
            await self._remember(key, claims)
            return claims

    async def _extract_fresh(self, text: str) -> List[Claim]:
        with timed(logger, "extract", chars=len(text)):
            try:
                async for attempt in self._retry.retrying(retry_on=(NoClaimsYet,)):
                    with attempt:
                        n = attempt.retry_state.attempt_number
                        claims = await self._attempt(text, n)
                        if not claims:
                            raise NoClaimsYet(n)
                logger.info("extract.ok n=%d count=%d", n, len(claims))
                return claims
            except RetryError:
                claims = rule_based_claims(text)
                logger.info("extract.fallback count=%d", len(claims))
                return claims
