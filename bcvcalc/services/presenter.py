from __future__ import annotations

from typing import Any, Dict, Optional

from bcvcalc.models.conversion import AmountField, ConversionState
from bcvcalc.models.rates import ExchangeRate
from .conversion import is_manual_rate_active, resolve_active_rate
from .money import format2, format_display

"""Presentation helpers: strings the page, the JSON API and the exported
card share. Display text uses es-VE grouping; the stored amounts stay plain.
"""

CUSTOM_RATE_CAPTION = "Tasa Personalizada Activa"
CAPTURE_TITLE = "Conversión Dólar BCV"
CAPTURE_FOOTER = "Calculadora Dólar BCV"


def rate_headline(state: ConversionState) -> str:
    return f"1 USD = {format_display(resolve_active_rate(state))} VES"


def rate_caption(state: ConversionState) -> str:
    if is_manual_rate_active(state):
        return CUSTOM_RATE_CAPTION
    last_update = state.official_rate.last_update if state.official_rate else "..."
    return f"BCV Oficial • {last_update}"


def share_text(state: ConversionState) -> str:
    rate = format2(resolve_active_rate(state))
    return (
        f"Conversión realizada: {state.source_amount} USD = "
        f"{state.target_amount} VES (Tasa: {rate})"
    )


def calculator_view(
    state: ConversionState,
    *,
    loading: bool,
    theme: str,
    copy_feedback: Optional[AmountField],
) -> Dict[str, Any]:
    official = state.official_rate
    return {
        "source_amount": state.source_amount,
        "target_amount": state.target_amount,
        "last_edited": state.last_edited.value,
        "active_rate": format2(resolve_active_rate(state)),
        "headline": rate_headline(state),
        "caption": rate_caption(state),
        "use_manual_rate": state.use_manual_rate,
        "manual_rate_text": state.manual_rate_text,
        "manual_rate_active": is_manual_rate_active(state),
        "official_rate": rate_view(official) if official else None,
        "loading": loading,
        "theme": theme,
        "copy_feedback": copy_feedback.value if copy_feedback else None,
    }


def rate_view(rate: ExchangeRate) -> Dict[str, Any]:
    return {
        "rate": format2(rate.rate),
        "last_update": rate.last_update,
        "source": rate.source,
        "estimated": rate.is_estimated,
    }
