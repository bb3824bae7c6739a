# core/exa_client.py
from typing import Any, Dict, List
import httpx
import logging
from config.settings import settings
from util.errors import EvidenceServiceError
from util.timing import timed
from util.types import RawSearchResult

logger = logging.getLogger(__name__)


class ExaClient:
    """
    Evidence search backed by Exa's neural search endpoint.
    Raises EvidenceServiceError on any transport or status failure.
    """

    def __init__(
        self,
        api_key: str = settings.EXA_API_KEY,
        *,
        search_url: str = settings.EXA_SEARCH_URL,
        timeout: float = settings.EXA_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._url = search_url
        self._timeout = timeout

    async def search(self, query: str, num_results: int) -> List[RawSearchResult]:
        if not self._api_key:
            raise EvidenceServiceError("Exa API key not configured")

        payload: Dict[str, Any] = {
            "query": query,
            "num_results": num_results,
            "use_autoprompt": True,
            "type": "neural",
            "contents": {"text": True},
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            with timed(logger, "exa.search", n=num_results):
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    res = await client.post(self._url, headers=headers, json=payload)
        except httpx.RequestError as e:
            logger.error("exa.request_error err=%s", type(e).__name__)
            raise EvidenceServiceError(f"Exa request failed: {type(e).__name__}") from e

        if res.status_code != 200:
            logger.error("exa.bad_status %d", res.status_code)
            raise EvidenceServiceError(f"Exa API error: {res.status_code}")

        try:
            data = res.json()
        except ValueError as e:
            raise EvidenceServiceError("Exa returned invalid JSON") from e

        results = data.get("results") if isinstance(data, dict) else None
        return [r for r in results or [] if isinstance(r, dict)]
