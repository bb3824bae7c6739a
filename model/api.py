# model/api.py
from pydantic import BaseModel, Field
from config.settings import settings
from model.claim import Claim, VerificationReport
from util.enums import AnalysisMode
from util.types import EventType


class ValidateKeyRequest(BaseModel):
    apiKey: str = Field(min_length=1)


class ValidateKeyResponse(BaseModel):
    ok: bool
    warning: str | None = None


class TextRequest(BaseModel):
    text: str = Field(min_length=1, max_length=settings.MAX_TEXT_LENGTH)
    # Overrides the configured Anthropic key for this request only.
    apiKey: str | None = None


class ExtractClaimsResponse(BaseModel):
    claims: list[Claim]


class FactCheckResponse(BaseModel):
    claims: list[Claim]
    report: VerificationReport


class AnalyzeRequest(TextRequest):
    mode: AnalysisMode = AnalysisMode.explain


class AnalyzeResponse(BaseModel):
    mode: AnalysisMode
    result: str
    fromCache: bool = False


class ProgressPayload(BaseModel):
    processed: int
    total: int
    ts: int


class StreamEvent(BaseModel):
    type: EventType
    payload: dict | list
