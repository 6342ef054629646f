"""Domain models for cr_game — frozen dataclasses, no business logic."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Asset:
    """Tradable asset definition, supplied by configuration."""

    name: str
    symbol: str
    start_price: float
    volatility: float


@dataclass(frozen=True)
class PricePoint:
    timestamp: int  # Unix seconds
    price: float    # rounded to 2 decimals


# One point per simulated second, ordered by tick index.
PriceSeries = tuple[PricePoint, ...]


@dataclass(frozen=True)
class AssetSeries:
    """Simulated price path for one asset within a round."""

    symbol: str
    name: str
    prices: PriceSeries


@dataclass(frozen=True)
class GameConfig:
    """Round parameters, loaded once at startup and read-only afterwards."""

    assets: tuple[Asset, ...]
    round_duration: int
    start_balance: float
