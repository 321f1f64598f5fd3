"""Thin async client for the natural-language answering service.

Speaks the OpenAI chat-completions protocol, so any compatible endpoint can be
used through `openai_base_url`. Every SDK failure, and any response that does
not have the chat-completion shape, surfaces as RateLookupError.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
import openai

from bcvcalc.core.config import Settings
from .base import RateLookupError

logger = logging.getLogger("bcvcalc.rates.answer")


class AnswerServiceClient:
    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self._model = settings.rate_model
        self._client: Optional[openai.AsyncOpenAI] = None
        try:
            self._client = openai.AsyncOpenAI(
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
                timeout=settings.http_timeout_seconds,
                max_retries=1,
                http_client=http_client,
            )
        except openai.OpenAIError as exc:
            # Missing API key; lookups will fall back until configured
            logger.warning("answer service not configured: %s", exc)

    async def ask(self, prompt: str) -> str:
        """Send one user message and return the trimmed answer text."""
        if self._client is None:
            raise RateLookupError("answer service is not configured")
        logger.debug("answer request model=%s", self._model)
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0,
            )
        except openai.RateLimitError as exc:
            raise RateLookupError(f"rate limited by answer service: {exc}") from exc
        except openai.OpenAIError as exc:
            raise RateLookupError(f"answer service error: {exc}") from exc

        try:
            return _answer_text(response)
        except (AttributeError, TypeError, IndexError) as exc:
            raise RateLookupError(f"malformed answer service response: {exc}") from exc


def _answer_text(response: Any) -> str:
    # Non-JSON bodies come back from the SDK as plain str
    if not response.choices:
        raise RateLookupError("answer service returned no choices")
    choice = response.choices[0]
    content = choice.message.content
    if content is not None and not isinstance(content, str):
        raise TypeError(f"answer content is {type(content).__name__}, not text")
    text = content.strip() if content else ""
    logger.debug(
        "answer response has_content=%s finish_reason=%s",
        bool(text),
        choice.finish_reason,
    )
    return text
