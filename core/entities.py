# core/entities.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from util.enums import Assessment, ClaimCategory


@dataclass(frozen=True)
class Claim:
    """
    A single checkable assertion. `source_span` is the passage it was derived from.
    """

    text: str
    source_span: str = ""
    category: ClaimCategory = ClaimCategory.general

    def __post_init__(self) -> None:
        if not self.source_span:
            object.__setattr__(self, "source_span", self.text)


@dataclass(frozen=True)
class Source:
    title: str
    url: str
    snippet: str


@dataclass(frozen=True)
class Verdict:
    claim_text: str
    assessment: Assessment
    confidence: int  # 0..100
    summary: str
    supporting_sources: Tuple[int, ...] = ()  # 1-based indices into `sources`
    sources: Tuple[Source, ...] = ()


@dataclass(frozen=True)
class VerificationReport:
    per_claim_verdicts: Tuple[Verdict, ...]
    summary_counts: Dict[Assessment, int]
    overall_score: int
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_claims(self) -> bool:
        return bool(self.per_claim_verdicts)


@dataclass
class CacheEntry:
    key: str
    claims: List[Claim]
    expires_at: float  # epoch seconds

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True)
class ParseOk:
    """Structured payload recovered from a service reply."""

    value: object


@dataclass(frozen=True)
class ParseFallback:
    """Value inferred heuristically when no structured payload was found."""

    value: object


@dataclass(frozen=True)
class ParseEmpty:
    reason: Optional[str] = None


ParseResult = ParseOk | ParseFallback | ParseEmpty
