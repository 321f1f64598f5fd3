from fastapi import APIRouter, Depends

from bcvcalc.services.session import CalculatorSession
from .deps import get_session

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/theme", summary="Current light/dark theme")
async def get_theme(session: CalculatorSession = Depends(get_session)):
    return {"theme": session.theme}


@router.post("/theme/toggle", summary="Flip and persist the theme")
async def toggle_theme(session: CalculatorSession = Depends(get_session)):
    return {"theme": session.toggle_theme()}
