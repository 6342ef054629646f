"""Pydantic schemas for cr_leaderboard API responses."""

from pydantic import BaseModel

from src.cr_leaderboard.domain.models import LeaderboardEntry


class LeaderboardItem(BaseModel):
    rank: int
    id: int
    username: str
    score: float
    score_display: str
    trades: int
    created_at: str

    @classmethod
    def from_domain(cls, rank: int, e: LeaderboardEntry) -> "LeaderboardItem":
        return cls(
            rank=rank,
            id=e.id,
            username=e.username,
            score=e.score,
            score_display=f"{e.score:,.1f}",
            trades=e.trades,
            created_at=e.created_at.isoformat(),
        )


class LeaderboardResponse(BaseModel):
    items: list[LeaderboardItem]
    limit: int