from fastapi import Request

from bcvcalc.services.session import CalculatorSession


def get_session(request: Request) -> CalculatorSession:
    return request.app.state.session
