# service/api_key_validation_service.py
import logging
from typing import Callable, Optional
from fastapi import status
from core.anthropic_client import AnthropicClient
from core.ports import ReasoningService
from util.enums import ErrorMessage
from util.errors import AppError, RateLimitError, ReasoningServiceError

logger = logging.getLogger(__name__)

KEY_PREFIX = "sk-ant-"
MIN_KEY_LENGTH = 50
RATE_LIMITED_WARNING = "API key is valid but rate limited"


class ApiKeyValidationService:
    """
    Checks a user supplied Anthropic key: format rules first, then a 1-token
    completion made with the key itself. A 429 still proves the key works.
    """

    def __init__(
        self, reasoning_factory: Callable[[str], ReasoningService] = AnthropicClient
    ) -> None:
        self._reasoning_factory = reasoning_factory

    @staticmethod
    def check_format(api_key: str) -> str:
        key = (api_key or "").strip()
        if not key.startswith(KEY_PREFIX) or len(key) < MIN_KEY_LENGTH:
            logger.warning("api.key.bad_format len=%d", len(key))
            raise AppError.of(ErrorMessage.INVALID_API_KEY)
        return key

    async def validate_key(self, api_key: str) -> Optional[str]:
        """Returns a warning for a usable but throttled key, None when all is well."""
        key = self.check_format(api_key)
        try:
            await self._reasoning_factory(key).complete("", "Ping", 1, 0.0)
        except RateLimitError:
            logger.info("api.key.rate_limited")
            return RATE_LIMITED_WARNING
        except ReasoningServiceError as e:
            if e.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
                logger.warning("api.key.invalid status=%d", e.status_code)
                raise AppError.of(ErrorMessage.INVALID_API_KEY)
            logger.error("api.key.unexpected status=%s", e.status_code)
            raise AppError.of(ErrorMessage.INTERNAL_ERROR)

        logger.info("api.key.validated")
        return None
