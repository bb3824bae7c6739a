# core/anthropic_client.py
from typing import Dict, Any
import httpx
from fastapi import status
from config.settings import settings
import logging
from util.errors import RateLimitError, ReasoningServiceError
from util.timing import timed

logger = logging.getLogger(__name__)


async def _post_json(
    url: str, headers: Dict[str, str], payload: Dict[str, Any], timeout: float = 60.0
) -> Dict[str, Any]:
    """
    Make a JSON POST to `url`. Raises for non-2xx. Returns parsed JSON dict or {} on parse failure.
    """
    async with httpx.AsyncClient(timeout=timeout) as client:
        r = await client.post(url, headers=headers, json=payload)
        r.raise_for_status()
        try:
            return r.json()
        except ValueError:
            return {}


def _first_text(data: Dict[str, Any]) -> str:
    content = data.get("content") or []
    if content and isinstance(content, list):
        node = content[0]
        if isinstance(node, dict) and node.get("type") == "text":
            return node.get("text") or ""
    return ""


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase or "Unknown error"
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict) and err.get("message"):
        return str(err["message"])
    return resp.reason_phrase or "Unknown error"


class AnthropicClient:
    """
    Reasoning service backed by the Anthropic Messages API.

    - 429 becomes RateLimitError, any other failure ReasoningServiceError.
    - Returns the first text block of the reply ("" when there is none).
    """

    def __init__(
        self,
        api_key: str,
        *,
        model: str = settings.ANTHROPIC_MODEL,
        api_url: str = settings.ANTHROPIC_API_URL,
        version: str = settings.ANTHROPIC_VERSION,
        timeout: float = settings.ANTHROPIC_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._url = api_url
        self._version = version
        self._timeout = timeout

    @property
    def model(self) -> str:
        return self._model

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "anthropic-version": self._version,
            "content-type": "application/json",
        }

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        payload: Dict[str, Any] = {
            "model": self._model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": user_prompt}],
            "temperature": temperature,
        }
        if system_prompt:
            payload["system"] = system_prompt
        try:
            with timed(logger, "ai.complete", model=self._model, max_tokens=max_tokens):
                data = await _post_json(
                    self._url, self._headers(), payload, timeout=self._timeout
                )
        except httpx.HTTPStatusError as e:
            code = e.response.status_code
            if code == status.HTTP_429_TOO_MANY_REQUESTS:
                logger.warning("ai.complete.rate_limited model=%s", self._model)
                raise RateLimitError("Rate limit exceeded", code) from e
            logger.error("ai.complete.bad_status status=%d", code)
            raise ReasoningServiceError(
                f"API error ({code}): {_error_message(e.response)}", code
            ) from e
        except httpx.RequestError as e:
            logger.error("ai.complete.request_error err=%s", type(e).__name__)
            raise ReasoningServiceError(f"Request failed: {type(e).__name__}") from e

        text = _first_text(data)
        logger.info("ai.complete.reply chars=%d", len(text))
        return text
