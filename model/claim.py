# model/claim.py
from datetime import datetime
from typing import Dict
from pydantic import BaseModel, Field, field_validator
from core import entities
from util.enums import Assessment, ClaimCategory


class Claim(BaseModel):
    text: str
    sourceSpan: str
    category: ClaimCategory

    @classmethod
    def of(cls, c: entities.Claim) -> "Claim":
        return cls(text=c.text, sourceSpan=c.source_span, category=c.category)


class Source(BaseModel):
    title: str
    url: str
    snippet: str

    @classmethod
    def of(cls, s: entities.Source) -> "Source":
        return cls(title=s.title, url=s.url, snippet=s.snippet)


class Verdict(BaseModel):
    claimText: str
    assessment: Assessment
    confidence: int = Field(ge=0, le=100)
    summary: str
    supportingSources: list[int] = []
    sources: list[Source] = []

    @field_validator("summary")
    @classmethod
    def _one_line(cls, v: str) -> str:
        return " ".join(v.split())

    @classmethod
    def of(cls, v: entities.Verdict) -> "Verdict":
        return cls(
            claimText=v.claim_text,
            assessment=v.assessment,
            confidence=v.confidence,
            summary=v.summary,
            supportingSources=list(v.supporting_sources),
            sources=[Source.of(s) for s in v.sources],
        )


class VerificationReport(BaseModel):
    perClaimVerdicts: list[Verdict]
    summaryCounts: Dict[Assessment, int]
    overallScore: int = Field(ge=0, le=100)
    generatedAt: datetime

    @classmethod
    def of(cls, r: entities.VerificationReport) -> "VerificationReport":
        return cls(
            perClaimVerdicts=[Verdict.of(v) for v in r.per_claim_verdicts],
            summaryCounts={a: r.summary_counts.get(a, 0) for a in Assessment},
            overallScore=r.overall_score,
            generatedAt=r.generated_at,
        )
