from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from bcvcalc.models.conversion import (
    AmountField,
    EditAmount,
    Focus,
    QuickAmount,
    SetManualRate,
    Swap,
    ToggleManualRate,
)
from bcvcalc.services.session import CalculatorSession
from .deps import get_session

"""Calculator router: every endpoint feeds one event to the session and
returns the refreshed view, so the page can re-render from a single payload.
"""

router = APIRouter(prefix="/calculator", tags=["calculator"])

QUICK_AMOUNTS = (1, 5, 10, 20)


class AmountPayload(BaseModel):
    field: AmountField
    text: str = Field("", description="Raw text typed into the field")


class FocusPayload(BaseModel):
    field: AmountField


class ManualRatePayload(BaseModel):
    text: str = Field("", description="VES per 1 USD, as typed")


class ManualRateTogglePayload(BaseModel):
    enabled: Optional[bool] = Field(None, description="Omit to flip the current value")


@router.get("", summary="Current calculator view")
async def get_view(session: CalculatorSession = Depends(get_session)) -> Dict[str, Any]:
    return session.view()


@router.post("/amount", summary="Type into the USD or VES field")
async def edit_amount(
    payload: AmountPayload, session: CalculatorSession = Depends(get_session)
) -> Dict[str, Any]:
    session.dispatch(EditAmount(payload.field, payload.text))
    return session.view()


@router.post("/focus", summary="Mark a field as the one being edited")
async def focus(
    payload: FocusPayload, session: CalculatorSession = Depends(get_session)
) -> Dict[str, Any]:
    session.dispatch(Focus(payload.field))
    return session.view()


@router.post("/swap", summary="Swap the USD and VES amounts")
async def swap(session: CalculatorSession = Depends(get_session)) -> Dict[str, Any]:
    session.dispatch(Swap())
    return session.view()


@router.post("/manual-rate", summary="Set the custom rate text")
async def set_manual_rate(
    payload: ManualRatePayload, session: CalculatorSession = Depends(get_session)
) -> Dict[str, Any]:
    session.dispatch(SetManualRate(payload.text))
    return session.view()


@router.post("/manual-rate/toggle", summary="Switch the custom rate on or off")
async def toggle_manual_rate(
    payload: Optional[ManualRateTogglePayload] = None,
    session: CalculatorSession = Depends(get_session),
) -> Dict[str, Any]:
    enabled = payload.enabled if payload else None
    session.dispatch(ToggleManualRate(enabled))
    return session.view()


@router.post("/quick/{value}", summary="Load a shortcut USD amount")
async def quick_amount(
    value: int, session: CalculatorSession = Depends(get_session)
) -> Dict[str, Any]:
    if value not in QUICK_AMOUNTS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported shortcut {value}. Valid shortcuts: {', '.join(map(str, QUICK_AMOUNTS))}",
        )
    session.dispatch(QuickAmount(Decimal(value)))
    return session.view()


@router.post("/copy/{field}", summary="Copy an amount to the clipboard")
async def copy_amount(
    field: AmountField, session: CalculatorSession = Depends(get_session)
) -> Dict[str, Any]:
    copied = await session.copy(field)
    return {
        "copied": copied,
        "text": session.state.amount(field),
        "feedback": session.view()["copy_feedback"],
    }


@router.get(
    "/capture.png",
    summary="Download an image of the conversion card",
    response_class=Response,
)
def capture(session: CalculatorSession = Depends(get_session)):
    # Plain def: FastAPI runs the Pillow render in its threadpool
    result = session.capture()
    if result is None:
        raise HTTPException(status_code=503, detail="capture could not be rendered")
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Share-Title": _header_safe(result.title),
            "X-Share-Text": _header_safe(result.text),
        },
    )


def _header_safe(text: str) -> str:
    # Header values must be latin-1
    return text.encode("latin-1", "replace").decode("latin-1")
