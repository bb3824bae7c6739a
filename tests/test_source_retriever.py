import pytest

from core.source_retriever import SourceRetriever
from util.errors import EvidenceServiceError


class TestSourceRetriever:
    @pytest.mark.asyncio
    async def test_maps_results(self, search_factory):
        search = search_factory(
            [
                {"title": "Reuters", "url": "https://reuters.com/a", "text": "Full article body"},
                {"title": "", "url": "https://cnbc.com/b", "snippet": "Only a snippet"},
                {"url": ""},
            ]
        )
        sources = await SourceRetriever(search, limit=5).search("Ford CEO jobs claim")

        assert [s.title for s in sources] == ["Reuters", "https://cnbc.com/b", "Untitled source"]
        assert sources[0].snippet == "Full article body"
        assert sources[1].snippet == "Only a snippet"
        assert search.queries == [("Ford CEO jobs claim", 5)]

    @pytest.mark.asyncio
    async def test_limit(self, search_factory):
        search = search_factory([{"title": f"t{i}", "url": f"u{i}"} for i in range(5)])
        sources = await SourceRetriever(search, limit=5).search("q", limit=2)
        assert len(sources) == 2
        assert search.queries == [("q", 2)]

    @pytest.mark.asyncio
    async def test_long_text_is_clipped(self, search_factory):
        search = search_factory([{"title": "t", "url": "u", "text": "word " * 300}])
        (source,) = await SourceRetriever(search).search("q")
        assert len(source.snippet.split()) <= 101

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [EvidenceServiceError("Exa API error: 500"), RuntimeError("boom")])
    async def test_failure_yields_no_sources(self, search_factory, error):
        sources = await SourceRetriever(search_factory(error=error)).search("q")
        assert sources == []
