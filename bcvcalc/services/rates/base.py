from __future__ import annotations

"""Rate provider abstraction.

A provider yields the current VES per USD rate. Implementations must always
resolve to a usable ExchangeRate: lookup or parse failures turn into a
labeled fallback rather than an exception.
"""
from abc import ABC, abstractmethod

from bcvcalc.models.rates import ExchangeRate


class RateLookupError(Exception):
    """The external rate lookup could not produce an answer."""


class RateProvider(ABC):
    @abstractmethod
    async def fetch_rate(self) -> ExchangeRate:
        """Return the current official rate, or a labeled fallback."""
        raise NotImplementedError
