"""001: create leaderboard table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE leaderboard (
            id              BIGSERIAL           PRIMARY KEY,
            username        VARCHAR(20)         NOT NULL,
            score           DOUBLE PRECISION    NOT NULL,
            trades          INTEGER             NOT NULL,
            created_at      TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_leaderboard_username_len CHECK (LENGTH(username) >= 1),
            CONSTRAINT ck_leaderboard_trades_non_negative CHECK (trades >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_leaderboard_score ON leaderboard (score DESC);")
    op.execute("COMMENT ON TABLE leaderboard IS 'Scored game results, one row per submitted round';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS leaderboard CASCADE;")
