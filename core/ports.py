# core/ports.py
from typing import List, Protocol
from util.types import RawSearchResult


class ReasoningService(Protocol):
    """Remote text completion. Replies are untrusted free text."""

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str: ...


class EvidenceSearch(Protocol):
    """Remote web search returning candidate source documents."""

    async def search(self, query: str, num_results: int) -> List[RawSearchResult]: ...
