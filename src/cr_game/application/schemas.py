"""Pydantic request/response schemas for cr_game.

All responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, Field

from src.cr_common.numeric import money_to_display
from src.cr_game.domain.models import AssetSeries

# ---------------------------------------------------------------------------
# Round start
# ---------------------------------------------------------------------------


class PricePointOut(BaseModel):
    timestamp: int
    price: float


class AssetDataOut(BaseModel):
    symbol: str
    name: str
    prices: list[PricePointOut]

    @classmethod
    def from_domain(cls, series: AssetSeries) -> "AssetDataOut":
        return cls(
            symbol=series.symbol,
            name=series.name,
            prices=[
                PricePointOut(timestamp=p.timestamp, price=p.price)
                for p in series.prices
            ],
        )


class RoundStartResponse(BaseModel):
    assets: list[AssetDataOut]
    start_balance: float
    duration: int
    seed: int  # replays the same price paths via PriceSimulator.from_seed


# ---------------------------------------------------------------------------
# Score submission
# ---------------------------------------------------------------------------


class SubmitScoreRequest(BaseModel):
    # Username length is checked by the service so that it maps to
    # InvalidUsernameError rather than a generic validation error.
    username: str
    # NaN and Infinity are not valid JSON numbers; reject them like any bad body.
    final_balance: float = Field(allow_inf_nan=False)
    trades_count: int = Field(0, ge=0)


class SubmitScoreResponse(BaseModel):
    success: bool = True
    score: float
    score_display: str
    final_balance_display: str

    @classmethod
    def build(cls, score: float, final_balance: float) -> "SubmitScoreResponse":
        return cls(
            score=score,
            score_display=f"{score:,.1f}",
            final_balance_display=money_to_display(final_balance),
        )
