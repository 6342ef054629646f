"""Domain models for cr_leaderboard — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class GameResult:
    """A finished round as submitted by a player; ``score`` is filled in server-side."""

    username: str
    final_balance: float
    trades_count: int
    score: float = 0.0


@dataclass
class LeaderboardEntry:
    id: int
    username: str
    score: float
    trades: int
    created_at: datetime
