from __future__ import annotations
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

OFFICIAL_SOURCE = "BCV Oficial"
ESTIMATED_SOURCE = "Estimado (Error al conectar)"
JUST_NOW = "Justo ahora"


class ExchangeRate(BaseModel):
    """VES per 1 USD, with a display timestamp and provenance label."""

    model_config = ConfigDict(frozen=True)

    rate: Decimal = Field(..., gt=0)
    last_update: str
    source: str

    @property
    def is_estimated(self) -> bool:
        return self.source == ESTIMATED_SOURCE
