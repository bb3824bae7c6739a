# util/enums.py
from enum import Enum
from http import HTTPStatus
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ClaimCategory(str, Enum):
    statistical = "statistical"
    historical = "historical"
    scientific = "scientific"
    technological = "technological"
    general = "general"


class Assessment(str, Enum):
    true = "true"
    false = "false"
    partially_true = "partially_true"
    unverifiable = "unverifiable"
    needs_context = "needs_context"
    error = "error"


# Values the reasoning service is allowed to emit; "error" is ours only.
JUDGED_ASSESSMENTS = frozenset(a.value for a in Assessment if a is not Assessment.error)


class AnalysisMode(str, Enum):
    explain = "explain"
    summarize = "summarize"
    key_points = "keyPoints"
    eli5 = "eli5"
    technical = "technical"
    examples = "examples"
    proscons = "proscons"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    INVALID_API_KEY = ErrorInfo("Invalid API Key", status.HTTP_401_UNAUTHORIZED)
    MISSING_API_KEY = ErrorInfo(
        "Anthropic API key not configured", status.HTTP_400_BAD_REQUEST
    )
    NO_CLAIMS = ErrorInfo(
        "No verifiable claims found in the selected text.",
        HTTPStatus.UNPROCESSABLE_ENTITY,  # starlette renamed its 422 constant
    )
    RATE_LIMITED = ErrorInfo(
        "Rate limit reached. Please try again in a moment.",
        status.HTTP_429_TOO_MANY_REQUESTS,
    )
    INTERNAL_ERROR = ErrorInfo("Internal Error", status.HTTP_502_BAD_GATEWAY)
