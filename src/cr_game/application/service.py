"""GameApplicationService — round setup and score submission.

start_round() is pure computation. submit_score() owns the transaction:
it scores the result, writes it through the leaderboard repository and
commits (or rolls back on a database error).
"""

import logging
import math
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cr_common.errors import InvalidRequestError, InvalidUsernameError, ScoreSaveError
from src.cr_game.application.schemas import (
    AssetDataOut,
    RoundStartResponse,
    SubmitScoreRequest,
    SubmitScoreResponse,
)
from src.cr_game.domain.models import GameConfig
from src.cr_game.domain.scoring import calculate_score
from src.cr_game.domain.simulator import PriceSimulator, simulate_assets
from src.cr_leaderboard.domain.models import GameResult
from src.cr_leaderboard.domain.repository import LeaderboardRepositoryProtocol
from src.cr_leaderboard.infrastructure.persistence import LeaderboardRepository

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 20


class GameApplicationService:
    def __init__(
        self,
        config: GameConfig,
        repo: LeaderboardRepositoryProtocol | None = None,
        simulator_factory: Callable[[], PriceSimulator] = PriceSimulator,
    ) -> None:
        self._config = config
        self._repo: LeaderboardRepositoryProtocol = repo or LeaderboardRepository()
        # One simulator (and generator) per round; nothing is shared between requests.
        self._simulator_factory = simulator_factory

    @property
    def config(self) -> GameConfig:
        return self._config

    def start_round(self) -> RoundStartResponse:
        simulator = self._simulator_factory()
        series = simulate_assets(
            simulator, self._config.assets, self._config.round_duration
        )
        logger.info(
            "Round started: assets=%d duration=%ds seed=%d",
            len(series), self._config.round_duration, simulator.seed,
        )
        return RoundStartResponse(
            assets=[AssetDataOut.from_domain(s) for s in series],
            start_balance=self._config.start_balance,
            duration=self._config.round_duration,
            seed=simulator.seed,
        )

    async def submit_score(
        self, db: AsyncSession, body: SubmitScoreRequest
    ) -> SubmitScoreResponse:
        username = body.username.strip()
        if not username or len(username) > MAX_USERNAME_LENGTH:
            raise InvalidUsernameError()

        result = GameResult(
            username=username,
            final_balance=body.final_balance,
            trades_count=body.trades_count,
        )
        result.score = calculate_score(
            result.final_balance, self._config.start_balance, result.trades_count
        )
        if not math.isfinite(result.score):
            # A finite balance near the float limit can still overflow the score.
            raise InvalidRequestError("Final balance out of range")

        try:
            await self._repo.save_score(db, result)
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.error("Failed to save score for %s: %s", username, exc)
            raise ScoreSaveError() from exc

        logger.info(
            "Score saved: username=%s score=%.1f trades=%d",
            username, result.score, result.trades_count,
        )
        return SubmitScoreResponse.build(result.score, result.final_balance)
