# core/source_retriever.py
from typing import List
import logging
from config.settings import settings
from core.entities import Source
from core.ports import EvidenceSearch
from util import functions
from util.timing import timed
from util.types import RawSearchResult

logger = logging.getLogger(__name__)


def _to_source(item: RawSearchResult) -> Source:
    url = str(item.get("url") or "")
    title = str(item.get("title") or "").strip() or url or "Untitled source"
    body = str(item.get("text") or item.get("snippet") or "")
    return Source(title=title, url=url, snippet=functions.clip_words(body, max_words=100))


class SourceRetriever:
    """
    Thin pass-through to the evidence service. Any failure yields [] so the
    claim is judged without sources instead of breaking the pipeline.
    """

    def __init__(self, search: EvidenceSearch, limit: int = settings.SEARCH_NUM_RESULTS) -> None:
        self._search = search
        self._limit = limit

    async def search(self, query: str, limit: int | None = None) -> List[Source]:
        n = limit or self._limit
        try:
            with timed(logger, "retrieve", n=n):
                raw = await self._search.search(query, n)
        except Exception as e:
            logger.warning("retrieve.error err=%s", type(e).__name__)
            return []
        sources = [_to_source(r) for r in raw[:n]]
        logger.info("retrieve.sources count=%d", len(sources))
        return sources
