"""Score calculation — pure, no state, safe to call concurrently."""

from src.cr_common.errors import InvalidStartBalanceError, InvalidTradesCountError
from src.cr_common.numeric import round_half_away

TRADE_BONUS_PER_TRADE = 2
TRADE_BONUS_CAP = 50
SCORE_DECIMALS = 1


def calculate_score(final_balance: float, start_balance: float, trades: int) -> float:
    """Return the round score.

    score = profit% x 100 + min(trades x 2, 50), rounded to 1 decimal.
    10% profit and no trades -> 1000.0; break-even with 25+ trades -> 50.0.
    A loss gives a negative score.
    """
    if start_balance <= 0:
        raise InvalidStartBalanceError(start_balance)
    if trades < 0:
        raise InvalidTradesCountError(trades)

    profit = final_balance - start_balance
    profit_percent = (profit / start_balance) * 100
    base_score = profit_percent * 100
    trade_bonus = min(trades * TRADE_BONUS_PER_TRADE, TRADE_BONUS_CAP)
    return round_half_away(base_score + trade_bonus, SCORE_DECIMALS)
