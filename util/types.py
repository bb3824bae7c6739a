# util/types.py
from typing import Literal, TypedDict


# Flow: Narrow types for NDJSON events.
EventType = Literal["claims", "progress", "verdict", "report", "error", "done"]


class ErrorPayload(TypedDict, total=False):
    message: str


class RawSearchResult(TypedDict, total=False):
    title: str
    url: str
    text: str
    snippet: str
