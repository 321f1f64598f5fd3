from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from bcvcalc.models.conversion import (
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
from bcvcalc.services.money import format2, parse_decimal

"""Bidirectional USD/VES conversion engine.

Everything here is a pure function of a ConversionState: callers feed events
through `reduce`, which applies the change and then `recompute`s so that the
field that was not last edited always holds the conversion of the one that was.

Parse failures never raise: amounts degrade to 0, an unusable manual rate
falls back to the official rate, and a missing or non-positive rate to 1.
"""

ONE = Decimal("1")
ZERO = Decimal("0")


def manual_rate_value(state: ConversionState) -> Decimal | None:
    """Override rate when it is switched on and parses to a positive number."""
    if not state.use_manual_rate:
        return None
    value = parse_decimal(state.manual_rate_text)
    if value is None or value <= 0:
        return None
    return value


def resolve_active_rate(state: ConversionState) -> Decimal:
    manual = manual_rate_value(state)
    if manual is not None:
        return manual
    if state.official_rate is not None and state.official_rate.rate > 0:
        return state.official_rate.rate
    return ONE


def is_manual_rate_active(state: ConversionState) -> bool:
    return manual_rate_value(state) is not None


def _amount_or_zero(text: str) -> Decimal:
    value = parse_decimal(text)
    return ZERO if value is None else value


def recompute(state: ConversionState) -> ConversionState:
    rate = resolve_active_rate(state)
    if state.last_edited is AmountField.SOURCE:
        usd = _amount_or_zero(state.source_amount)
        return replace(state, target_amount=format2(usd * rate))
    ves = _amount_or_zero(state.target_amount)
    return replace(state, source_amount=format2(ves / rate))


def initial_state() -> ConversionState:
    return recompute(ConversionState())


def swap(state: ConversionState) -> ConversionState:
    """Exchange the two texts and hand the driving role to the other field.

    The amount the user was driving with moves across and keeps driving, so
    the recompute that follows re-derives the opposite side at the active
    rate instead of overwriting the moved value.
    """
    return replace(
        state,
        source_amount=state.target_amount,
        target_amount=state.source_amount,
        last_edited=state.last_edited.opposite,
    )


def _apply(state: ConversionState, event: Event) -> ConversionState:
    if isinstance(event, EditAmount):
        if event.field is AmountField.SOURCE:
            return replace(state, source_amount=event.text, last_edited=event.field)
        return replace(state, target_amount=event.text, last_edited=event.field)
    if isinstance(event, Focus):
        return replace(state, last_edited=event.field)
    if isinstance(event, Swap):
        return swap(state)
    if isinstance(event, SetManualRate):
        return replace(state, manual_rate_text=event.text)
    if isinstance(event, ToggleManualRate):
        enabled = not state.use_manual_rate if event.enabled is None else event.enabled
        return replace(state, use_manual_rate=enabled)
    if isinstance(event, RateLoaded):
        manual_text = state.manual_rate_text
        if not manual_text:
            manual_text = format2(event.rate.rate)
        return replace(state, official_rate=event.rate, manual_rate_text=manual_text)
    if isinstance(event, QuickAmount):
        return replace(
            state, source_amount=format2(event.value), last_edited=AmountField.SOURCE
        )
    raise TypeError(f"Unknown calculator event {event!r}")


def reduce(state: ConversionState, event: Event) -> ConversionState:
    return recompute(_apply(state, event))
