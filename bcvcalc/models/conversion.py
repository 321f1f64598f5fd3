from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from .rates import ExchangeRate


class AmountField(str, Enum):
    """Which of the two amount inputs an event refers to."""

    SOURCE = "source"
    TARGET = "target"

    @property
    def opposite(self) -> "AmountField":
        return AmountField.TARGET if self is AmountField.SOURCE else AmountField.SOURCE


@dataclass(frozen=True)
class ConversionState:
    """Snapshot of the calculator. Transitions build a new instance."""

    source_amount: str = "1.00"
    target_amount: str = ""
    official_rate: Optional[ExchangeRate] = None
    manual_rate_text: str = ""
    use_manual_rate: bool = False
    last_edited: AmountField = AmountField.SOURCE

    def amount(self, field: AmountField) -> str:
        return self.source_amount if field is AmountField.SOURCE else self.target_amount


# Events ---------------------------------------------------------------


@dataclass(frozen=True)
class EditAmount:
    field: AmountField
    text: str


@dataclass(frozen=True)
class Focus:
    field: AmountField


@dataclass(frozen=True)
class Swap:
    pass


@dataclass(frozen=True)
class SetManualRate:
    text: str


@dataclass(frozen=True)
class ToggleManualRate:
    enabled: Optional[bool] = None  # None flips the current value


@dataclass(frozen=True)
class RateLoaded:
    rate: ExchangeRate


@dataclass(frozen=True)
class QuickAmount:
    value: Decimal


Event = Union[EditAmount, Focus, Swap, SetManualRate, ToggleManualRate, RateLoaded, QuickAmount]
