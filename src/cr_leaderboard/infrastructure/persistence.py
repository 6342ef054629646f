"""LeaderboardRepository — concrete implementation of LeaderboardRepositoryProtocol.

All queries use raw text() SQL (no ORM).
Alembic migration 001_create_leaderboard.py is the authoritative DDL.
The caller owns the transaction: save_score does not commit.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cr_leaderboard.domain.models import GameResult, LeaderboardEntry

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_INSERT_SCORE_SQL = text("""
    INSERT INTO leaderboard (username, score, trades)
    VALUES (:username, :score, :trades)
    RETURNING id
""")

_TOP_SCORES_SQL = text("""
    SELECT id, username, score, trades, created_at
    FROM leaderboard
    ORDER BY score DESC, id ASC
    LIMIT :limit
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_entry(row: object) -> LeaderboardEntry:
    return LeaderboardEntry(
        id=row.id,  # type: ignore[attr-defined]
        username=row.username,  # type: ignore[attr-defined]
        score=row.score,  # type: ignore[attr-defined]
        trades=row.trades,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class LeaderboardRepository:
    async def save_score(self, db: AsyncSession, result: GameResult) -> int:
        """Insert one leaderboard row and return its id."""
        res = await db.execute(
            _INSERT_SCORE_SQL,
            {
                "username": result.username,
                "score": result.score,
                "trades": result.trades_count,
            },
        )
        return res.scalar_one()

    async def get_top_scores(
        self, db: AsyncSession, limit: int
    ) -> list[LeaderboardEntry]:
        result = await db.execute(_TOP_SCORES_SQL, {"limit": limit})
        return [_row_to_entry(row) for row in result.fetchall()]
