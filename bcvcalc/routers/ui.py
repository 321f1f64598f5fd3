from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from bcvcalc.services.session import CalculatorSession
from .calculator import QUICK_AMOUNTS
from .deps import get_session

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, session: CalculatorSession = Depends(get_session)):
    context = {
        "app_name": request.app.state.settings.app_name,
        "view": session.view(),
        "quick_amounts": QUICK_AMOUNTS,
    }
    return templates.TemplateResponse(request, "index.html", context)
