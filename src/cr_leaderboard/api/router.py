"""cr_leaderboard REST endpoints.

GET /leaderboard?limit=N    — top scores, best first (limit 1..100, default 10)
"""

import re
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cr_common.database import get_db_session
from src.cr_common.response import ApiResponse, respond
from src.cr_leaderboard.application.service import LeaderboardApplicationService

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])

_service = LeaderboardApplicationService()

_LIMIT_RE = re.compile(r"[+-]?[0-9]+")


def _parse_limit(raw: str | None) -> int | None:
    # A malformed limit falls back to the default rather than a 422.
    if raw is None:
        return None
    if not _LIMIT_RE.fullmatch(raw):
        return None
    return int(raw)


@router.get("")
async def get_leaderboard(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: str | None = Query(None, description="Rows to return, 1-100. Invalid values use 10."),
) -> ApiResponse:
    result = await _service.get_leaderboard(db, _parse_limit(limit))
    return respond(request, result.model_dump())
