"""Unit tests for GameApplicationService using mock repository and session."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from src.cr_common.errors import InvalidRequestError, InvalidUsernameError, ScoreSaveError
from src.cr_game.application.schemas import SubmitScoreRequest
from src.cr_game.application.service import GameApplicationService
from src.cr_game.domain.models import Asset, GameConfig
from src.cr_game.domain.simulator import PriceSimulator
from src.cr_leaderboard.domain.models import GameResult


def _make_config(**kwargs) -> GameConfig:
    defaults = dict(
        assets=(
            Asset(name="Bitcoin", symbol="BTC", start_price=45000.0, volatility=0.002),
            Asset(name="Solana", symbol="SOL", start_price=100.0, volatility=0.005),
        ),
        round_duration=60,
        start_balance=10000.0,
    )
    defaults.update(kwargs)
    return GameConfig(**defaults)


@pytest.fixture
def db():
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def mock_repo():
    repo = MagicMock()
    repo.save_score = AsyncMock(return_value=1)
    return repo


class TestStartRound:
    def test_builds_payload_for_every_asset(self, mock_repo):
        svc = GameApplicationService(
            _make_config(), repo=mock_repo, simulator_factory=lambda: PriceSimulator.from_seed(5)
        )

        resp = svc.start_round()

        assert [a.symbol for a in resp.assets] == ["BTC", "SOL"]
        assert [a.name for a in resp.assets] == ["Bitcoin", "Solana"]
        assert all(len(a.prices) == 60 for a in resp.assets)
        assert resp.duration == 60
        assert resp.start_balance == 10000.0
        assert resp.seed == 5

    def test_same_seed_reproduces_prices(self, mock_repo):
        def factory() -> PriceSimulator:
            return PriceSimulator.from_seed(99)

        svc = GameApplicationService(_make_config(), repo=mock_repo, simulator_factory=factory)

        first = [[p.price for p in a.prices] for a in svc.start_round().assets]
        second = [[p.price for p in a.prices] for a in svc.start_round().assets]

        assert first == second

    def test_fresh_simulator_per_round(self, mock_repo):
        factory = MagicMock(side_effect=lambda: PriceSimulator.from_seed(1))
        svc = GameApplicationService(_make_config(), repo=mock_repo, simulator_factory=factory)

        svc.start_round()
        svc.start_round()

        assert factory.call_count == 2

    def test_default_factory_seeds_each_round(self, mock_repo):
        svc = GameApplicationService(_make_config(), repo=mock_repo)
        assert svc.start_round().seed != svc.start_round().seed

    def test_payload_is_serializable(self, mock_repo):
        svc = GameApplicationService(
            _make_config(), repo=mock_repo, simulator_factory=lambda: PriceSimulator.from_seed(1)
        )
        data = svc.start_round().model_dump()
        assert set(data) == {"assets", "start_balance", "duration", "seed"}
        assert set(data["assets"][0]["prices"][0]) == {"timestamp", "price"}


class TestSubmitScore:
    @pytest.mark.asyncio
    async def test_scores_saves_and_commits(self, db, mock_repo):
        svc = GameApplicationService(_make_config(), repo=mock_repo)
        body = SubmitScoreRequest(username="alice", final_balance=11000.0, trades_count=5)

        resp = await svc.submit_score(db, body)

        assert resp.success is True
        assert resp.score == 1010.0
        assert resp.final_balance_display == "$11,000.00"
        saved: GameResult = mock_repo.save_score.call_args.args[1]
        assert saved == GameResult(
            username="alice", final_balance=11000.0, trades_count=5, score=1010.0
        )
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_uses_configured_start_balance(self, db, mock_repo):
        svc = GameApplicationService(_make_config(start_balance=5000.0), repo=mock_repo)
        body = SubmitScoreRequest(username="bob", final_balance=5500.0, trades_count=0)

        resp = await svc.submit_score(db, body)

        assert resp.score == 1000.0

    @pytest.mark.asyncio
    async def test_username_is_stripped(self, db, mock_repo):
        svc = GameApplicationService(_make_config(), repo=mock_repo)
        body = SubmitScoreRequest(username="  carol  ", final_balance=10000.0, trades_count=0)

        await svc.submit_score(db, body)

        assert mock_repo.save_score.call_args.args[1].username == "carol"

    @pytest.mark.asyncio
    async def test_twenty_char_username_accepted(self, db, mock_repo):
        svc = GameApplicationService(_make_config(), repo=mock_repo)
        body = SubmitScoreRequest(username="x" * 20, final_balance=10000.0, trades_count=0)

        resp = await svc.submit_score(db, body)

        assert resp.score == 0.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username", ["", "   ", "x" * 21])
    async def test_invalid_username_rejected(self, db, mock_repo, username):
        svc = GameApplicationService(_make_config(), repo=mock_repo)
        body = SubmitScoreRequest(username=username, final_balance=10000.0, trades_count=0)

        with pytest.raises(InvalidUsernameError):
            await svc.submit_score(db, body)

        mock_repo.save_score.assert_not_called()

    @pytest.mark.asyncio
    async def test_db_failure_rolls_back(self, db, mock_repo):
        mock_repo.save_score = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("connection lost"))
        )
        svc = GameApplicationService(_make_config(), repo=mock_repo)
        body = SubmitScoreRequest(username="dave", final_balance=10000.0, trades_count=0)

        with pytest.raises(ScoreSaveError):
            await svc.submit_score(db, body)

        db.rollback.assert_awaited_once()
        db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_large_balance_scored_and_saved(self, db, mock_repo):
        svc = GameApplicationService(_make_config(), repo=mock_repo)
        body = SubmitScoreRequest(username="erin", final_balance=1e30, trades_count=0)

        resp = await svc.submit_score(db, body)

        assert resp.score == pytest.approx(1e30, rel=1e-12)
        mock_repo.save_score.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_score_overflow_rejected(self, db, mock_repo):
        # finite balance, but profit% x 100 overflows once scaled for rounding
        svc = GameApplicationService(_make_config(), repo=mock_repo)
        body = SubmitScoreRequest(username="frank", final_balance=1.7e308, trades_count=0)

        with pytest.raises(InvalidRequestError):
            await svc.submit_score(db, body)

        mock_repo.save_score.assert_not_called()


class TestSubmitScoreRequest:
    @pytest.mark.parametrize("balance", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_balance_rejected(self, balance):
        with pytest.raises(ValidationError):
            SubmitScoreRequest(username="gina", final_balance=balance, trades_count=0)
