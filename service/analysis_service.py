# service/analysis_service.py
import logging
from typing import Callable, Dict, Final
from config.settings import settings
from core.anthropic_client import AnthropicClient
from core.ports import ReasoningService
from model.api import AnalyzeResponse
from repository.analysis_repository import AnalysisRepository
from service.fact_check_service import resolve_api_key
from util import functions
from util.enums import AnalysisMode, ErrorMessage
from util.errors import AppError, RateLimitError, ReasoningServiceError

logger = logging.getLogger(__name__)

PROMPTS: Final[Dict[AnalysisMode, str]] = {
    AnalysisMode.explain: "Explain the following text in clear, simple terms:\n\n",
    AnalysisMode.summarize: "Provide a concise summary of the following text:\n\n",
    AnalysisMode.key_points: "Extract and list the key points from the following text:\n\n",
    AnalysisMode.eli5: "Explain the following text as if I'm 5 years old:\n\n",
    AnalysisMode.technical: "Provide a detailed technical analysis of the following text:\n\n",
    AnalysisMode.examples: "Provide relevant examples that illustrate the concepts in the following text:\n\n",
    AnalysisMode.proscons: "List the pros and cons or advantages and disadvantages discussed in the following text:\n\n",
}

MAX_TOKENS: Final[Dict[AnalysisMode, int]] = {
    AnalysisMode.eli5: 400,
    AnalysisMode.summarize: 300,
}


def build_prompt(text: str, mode: AnalysisMode) -> str:
    return f'{PROMPTS[mode]}"{text}"'


class AnalysisService:
    """
    Free-form analyses of a selection (explain, summarize, ...).
    Replies are cached per mode and text; cache trouble never blocks a reply.
    """

    def __init__(
        self,
        repository: AnalysisRepository,
        reasoning_factory: Callable[[str], ReasoningService] = AnthropicClient,
    ) -> None:
        self._repository = repository
        self._reasoning_factory = reasoning_factory

    async def analyze(
        self, text: str, mode: AnalysisMode, api_key: str | None
    ) -> AnalyzeResponse:
        reasoning = self._reasoning_factory(resolve_api_key(api_key))
        text_key = functions.text_hash(text)

        try:
            cached = await self._repository.get(mode.value, text_key)
        except Exception:
            logger.error("analyze.cache.read.error mode=%s", mode.value)
            cached = None
        if cached:
            logger.info("analyze.cache.hit mode=%s", mode.value)
            return AnalyzeResponse(mode=mode, result=cached, fromCache=True)

        try:
            result = await reasoning.complete(
                settings.ANALYSIS_SYSTEM_PROMPT,
                build_prompt(text, mode),
                MAX_TOKENS.get(mode, 600),
                0.7,
            )
        except RateLimitError:
            raise AppError.of(ErrorMessage.RATE_LIMITED)
        except ReasoningServiceError as e:
            logger.error("analyze.upstream.error mode=%s status=%s", mode.value, e.status_code)
            raise AppError.of(ErrorMessage.INTERNAL_ERROR)

        result = result.strip()
        if result:
            try:
                await self._repository.put(mode.value, text_key, result)
            except Exception:
                logger.error("analyze.cache.write.error mode=%s", mode.value)
        logger.info("analyze.ok mode=%s chars=%d", mode.value, len(result))
        return AnalyzeResponse(mode=mode, result=result)
