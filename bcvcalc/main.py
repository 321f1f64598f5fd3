import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .db.schema import init_db
from .routers import calculator, health, preferences, rates, ui
from .services.session import CalculatorSession, build_session

logger = logging.getLogger("bcvcalc")


def log_startup_refresh(task: "asyncio.Future") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("startup rate refresh failed", exc_info=exc)


def create_app(
    settings_override: Settings | None = None,
    session_override: CalculatorSession | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    session_override: pre-wired session (fake provider, exporter...) for tests.
    """
    settings = settings_override or get_settings()
    init_logging(debug=settings.debug)

    try:
        init_db(settings.db_path)  # type: ignore[arg-type]
    except Exception:
        logger.exception("failed to initialize preference store on startup")
        raise

    session = session_override or build_session(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Initial fetch runs in the background; the page renders with rate 1 until it lands
        startup_refresh = asyncio.ensure_future(session.refresh_rate())
        startup_refresh.add_done_callback(log_startup_refresh)
        try:
            yield
        finally:
            if not startup_refresh.done():
                startup_refresh.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await startup_refresh
            await session.refresher.close()

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session = session

    app.middleware("http")(request_context_middleware)

    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    app.include_router(health.router)
    app.include_router(ui.router)
    app.include_router(calculator.router)
    app.include_router(rates.router)
    app.include_router(preferences.router)

    return app


def run() -> None:
    import uvicorn

    uvicorn.run("bcvcalc.main:create_app", factory=True, host="127.0.0.1", port=8000)
