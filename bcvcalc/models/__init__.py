"""Domain models for the BCV dollar calculator."""

from .rates import ExchangeRate, OFFICIAL_SOURCE, ESTIMATED_SOURCE, JUST_NOW  # re-export
from .conversion import (
    AmountField,
    ConversionState,
    EditAmount,
    Event,
    Focus,
    QuickAmount,
    RateLoaded,
    SetManualRate,
    Swap,
    ToggleManualRate,
)

__all__ = [
    "ExchangeRate",
    "OFFICIAL_SOURCE",
    "ESTIMATED_SOURCE",
    "JUST_NOW",
    "AmountField",
    "ConversionState",
    "EditAmount",
    "Event",
    "Focus",
    "QuickAmount",
    "RateLoaded",
    "SetManualRate",
    "Swap",
    "ToggleManualRate",
]
