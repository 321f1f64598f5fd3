from __future__ import annotations

"""Concrete rate providers and factory.

'answer-service' asks a natural-language answering service for the BCV rate
and pulls the first decimal out of whatever prose comes back. 'static' skips
the network entirely and serves the fallback constant, for offline use.
"""
import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Optional, Protocol

from bcvcalc.core.config import Settings
from bcvcalc.models.rates import (
    ESTIMATED_SOURCE,
    JUST_NOW,
    OFFICIAL_SOURCE,
    ExchangeRate,
)
from .answer_client import AnswerServiceClient
from .base import RateLookupError, RateProvider

logger = logging.getLogger("bcvcalc.rates")

_RATE_RE = re.compile(r"\d+(\.\d+)?")

Clock = Callable[[], datetime]


class SupportsAsk(Protocol):
    async def ask(self, prompt: str) -> str: ...


def extract_rate(text: Optional[str], fallback: Decimal) -> Decimal:
    """First `digits[.digits]` in text, or fallback when there is none."""
    match = _RATE_RE.search(text or "")
    if not match:
        return fallback
    try:
        value = Decimal(match.group(0))
    except InvalidOperation:
        return fallback
    return value if value > 0 else fallback


def _stamp(clock: Clock) -> str:
    return clock().strftime("%H:%M")


class AnswerServiceRateProvider(RateProvider):
    def __init__(
        self,
        client: SupportsAsk,
        prompt: str,
        fallback_rate: Decimal,
        clock: Clock = datetime.now,
    ):
        self._client = client
        self._prompt = prompt
        self._fallback = fallback_rate
        self._clock = clock

    def fallback(self) -> ExchangeRate:
        return ExchangeRate(
            rate=self._fallback, last_update=JUST_NOW, source=ESTIMATED_SOURCE
        )

    async def fetch_rate(self) -> ExchangeRate:
        try:
            text = await self._client.ask(self._prompt)
        except RateLookupError:
            logger.error("error fetching BCV rate", exc_info=True)
            return self.fallback()
        except Exception:
            logger.exception("unexpected failure fetching BCV rate")
            return self.fallback()
        rate = extract_rate(text, self._fallback)
        logger.info("BCV rate fetched: %s", rate, extra={"rate": str(rate)})
        return ExchangeRate(
            rate=rate, last_update=_stamp(self._clock), source=OFFICIAL_SOURCE
        )


class StaticRateProvider(RateProvider):
    def __init__(self, fallback_rate: Decimal, clock: Clock = datetime.now):
        self._fallback = fallback_rate
        self._clock = clock

    async def fetch_rate(self) -> ExchangeRate:
        return ExchangeRate(
            rate=self._fallback, last_update=_stamp(self._clock), source=OFFICIAL_SOURCE
        )


def _make_answer_service(settings: Settings) -> RateProvider:
    return AnswerServiceRateProvider(
        AnswerServiceClient(settings), settings.rate_prompt, settings.fallback_rate
    )


def _make_static(settings: Settings) -> RateProvider:
    return StaticRateProvider(settings.fallback_rate)


_PROVIDER_REGISTRY: Dict[str, Callable[[Settings], RateProvider]] = {
    "answer-service": _make_answer_service,
    "static": _make_static,
}


def make_rate_provider(kind: str, settings: Settings) -> RateProvider:
    factory = _PROVIDER_REGISTRY.get(kind)
    if not factory:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    return factory(settings)
