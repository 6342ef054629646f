"""Price simulator: random walk with occasional shock events.

Each tick (one simulated second):
  change  = z * volatility * price          z ~ N(0, 1)
  shock   : with 5% probability, change *= (1 + U[-0.2, 0.2)) * 3
  price  += change, floored at 10% of the start price
  emit      round(price, 2) half away from zero

Volatility scales with the current price, so the walk is multiplicative.
A shock multiplies the already-drawn change by a positive factor: it
amplifies the tick's direction, it never flips it.

Draws per tick are always in the same order (normal, event check, then the
multiplier only on a shock), so a seed fully determines a series.
"""

import logging
import random
import secrets
import threading
from collections.abc import Iterable

from src.cr_common.datetime_utils import unix_now
from src.cr_common.errors import (
    InvalidDurationError,
    InvalidStartPriceError,
    InvalidVolatilityError,
)
from src.cr_common.numeric import round_half_away
from src.cr_game.domain.models import Asset, AssetSeries, PricePoint, PriceSeries

logger = logging.getLogger(__name__)

SHOCK_PROBABILITY = 0.05
SHOCK_SPREAD = 0.2      # multiplier in [1 - spread, 1 + spread)
SHOCK_AMPLIFIER = 3.0
PRICE_FLOOR_RATIO = 0.1
PRICE_DECIMALS = 2


class PriceSimulator:
    """Owns one pseudorandom generator; draws are serialized by a lock.

    Build one per round with a fresh seed rather than sharing an instance
    across requests; the lock only makes sharing safe, not contention-free.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed if seed is not None else secrets.randbits(64)
        self._rng = random.Random(self._seed)
        self._lock = threading.Lock()

    @classmethod
    def from_seed(cls, seed: int) -> "PriceSimulator":
        return cls(seed=seed)

    @property
    def seed(self) -> int:
        return self._seed

    def generate_price_history(
        self,
        asset: Asset,
        duration: int,
        base_timestamp: int | None = None,
    ) -> PriceSeries:
        """Simulate ``duration`` one-second ticks for ``asset``."""
        if duration <= 0:
            raise InvalidDurationError(duration)
        if asset.start_price <= 0:
            raise InvalidStartPriceError(asset.symbol, asset.start_price)
        if asset.volatility < 0:
            raise InvalidVolatilityError(asset.symbol, asset.volatility)

        base = unix_now() if base_timestamp is None else base_timestamp
        floor = asset.start_price * PRICE_FLOOR_RATIO
        current = asset.start_price
        points: list[PricePoint] = []
        shocks = 0

        with self._lock:
            for i in range(duration):
                change = self._rng.normalvariate(0.0, 1.0) * asset.volatility * current

                if self._rng.random() < SHOCK_PROBABILITY:
                    multiplier = 1.0 + (self._rng.random() * (2 * SHOCK_SPREAD) - SHOCK_SPREAD)
                    change *= multiplier * SHOCK_AMPLIFIER
                    shocks += 1

                current += change
                if current < floor:
                    current = floor

                points.append(
                    PricePoint(
                        timestamp=base + i,
                        price=round_half_away(current, PRICE_DECIMALS),
                    )
                )

        logger.debug(
            "Simulated %s: ticks=%d shocks=%d last=%.2f",
            asset.symbol, duration, shocks, points[-1].price,
        )
        return tuple(points)


def simulate_assets(
    simulator: PriceSimulator,
    assets: Iterable[Asset],
    duration: int,
    base_timestamp: int | None = None,
) -> list[AssetSeries]:
    """Run the simulator once per asset, all series sharing one base timestamp."""
    base = unix_now() if base_timestamp is None else base_timestamp
    return [
        AssetSeries(
            symbol=asset.symbol,
            name=asset.name,
            prices=simulator.generate_price_history(asset, duration, base),
        )
        for asset in assets
    ]
