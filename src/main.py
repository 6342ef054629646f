"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8080
      or: crypto-rush  (uses HOST/PORT from settings, uvloop event loop)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from config.settings import settings
from src.cr_common.database import engine
from src.cr_common.errors import AppError, InternalError, InvalidRequestError
from src.cr_common.logging_config import configure_logging
from src.cr_common.response import error_response
from src.cr_game.api.router import router as game_router
from src.cr_gateway.middleware.request_log import RequestLogMiddleware
from src.cr_leaderboard.api.router import router as leaderboard_router

VERSION = "0.1.0"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: configure logging, verify DB connection. Shutdown: dispose."""
    configure_logging(settings.LOG_LEVEL)
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info(
        "%s ready: assets=%d round=%ds start_balance=%.2f",
        settings.APP_NAME,
        len(settings.GAME_ASSETS),
        settings.GAME_ROUND_DURATION,
        settings.GAME_START_BALANCE,
    )
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=VERSION,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)


def _error_json(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(status_code=exc.http_status, content=resp.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_json(request, exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
    return _error_json(request, InvalidRequestError())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_json(request, InternalError())


app.include_router(game_router, prefix="/api")
app.include_router(leaderboard_router, prefix="/api")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": VERSION}


_BANNER = (
    f"{settings.APP_NAME} API Server is running\n"
    "API endpoints:\n"
    "- GET|POST /api/game/start\n"
    "- POST /api/game/submit\n"
    "- GET /api/leaderboard\n"
)

_web_dir = Path(settings.WEB_DIR)
if _web_dir.is_dir():
    # Mounted last: "/" would otherwise shadow the API routes.
    app.mount("/", StaticFiles(directory=_web_dir, html=True), name="web")
else:
    logger.warning("Web directory not found, serving banner at /: %s", _web_dir.resolve())

    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        return _BANNER


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.HOST,
        port=settings.PORT,
        loop="uvloop",
        log_level=settings.LOG_LEVEL.lower(),
    )
