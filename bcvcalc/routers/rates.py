from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from bcvcalc.services.presenter import rate_view
from bcvcalc.services.session import CalculatorSession
from .deps import get_session

"""Rates router.

Endpoints:
    - GET /rates/current  -> last fetched official rate (404 before the first fetch)
    - POST /rates/refresh -> fetch now; joins a refresh that is already running
"""

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("/current", summary="Last fetched official rate")
async def current_rate(session: CalculatorSession = Depends(get_session)) -> Dict[str, Any]:
    rate = session.refresher.current
    if rate is None:
        raise HTTPException(status_code=404, detail="rate not fetched yet")
    return {**rate_view(rate), "loading": session.loading}


@router.post("/refresh", summary="Fetch the official rate again")
async def refresh_rate(session: CalculatorSession = Depends(get_session)) -> Dict[str, Any]:
    rate = await session.refresh_rate()
    return {**rate_view(rate), "view": session.view()}
