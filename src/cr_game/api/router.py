"""cr_game REST endpoints.

GET|POST /game/start     — simulated price paths for every configured asset
POST     /game/submit    — score a finished round and record it
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cr_common.database import get_db_session
from src.cr_common.response import ApiResponse, respond
from src.cr_game.application.schemas import SubmitScoreRequest
from src.cr_game.application.service import GameApplicationService

router = APIRouter(prefix="/game", tags=["game"])

_service = GameApplicationService(settings.game_config())


@router.api_route("/start", methods=["GET", "POST"])
async def start_round(request: Request) -> ApiResponse:
    result = _service.start_round()
    return respond(request, result.model_dump())


@router.post("/submit")
async def submit_score(
    body: SubmitScoreRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.submit_score(db, body)
    return respond(request, result.model_dump())
