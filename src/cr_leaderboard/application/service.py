"""LeaderboardApplicationService — read side of persisted game results.

Read-only; no commit/rollback needed. Writes go through the game service,
which owns the transaction for a score submission.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.cr_leaderboard.application.schemas import LeaderboardItem, LeaderboardResponse
from src.cr_leaderboard.domain.repository import LeaderboardRepositoryProtocol
from src.cr_leaderboard.infrastructure.persistence import LeaderboardRepository

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def normalize_limit(limit: int | None) -> int:
    """Out-of-range limits fall back to the default instead of failing."""
    if limit is None or not (1 <= limit <= MAX_LIMIT):
        return DEFAULT_LIMIT
    return limit


class LeaderboardApplicationService:
    def __init__(self, repo: LeaderboardRepositoryProtocol | None = None) -> None:
        self._repo: LeaderboardRepositoryProtocol = repo or LeaderboardRepository()

    async def get_leaderboard(
        self, db: AsyncSession, limit: int | None
    ) -> LeaderboardResponse:
        effective = normalize_limit(limit)
        entries = await self._repo.get_top_scores(db, effective)
        items = [
            LeaderboardItem.from_domain(rank, e)
            for rank, e in enumerate(entries, start=1)
        ]
        return LeaderboardResponse(items=items, limit=effective)
