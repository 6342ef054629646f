# src/cr_leaderboard/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cr_leaderboard.domain.models import GameResult, LeaderboardEntry


class LeaderboardRepositoryProtocol(Protocol):
    async def save_score(
        self,
        db: AsyncSession,
        result: GameResult,
    ) -> int: ...

    async def get_top_scores(
        self,
        db: AsyncSession,
        limit: int,
    ) -> list[LeaderboardEntry]: ...
