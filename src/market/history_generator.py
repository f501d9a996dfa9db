"""Synthetic pre-simulation price history."""
from typing import List, Tuple

from constants import MIN_PRICE
from market.state.sim_state import OHLCBar, SimplePricePoint
from scenarios.base import SimulationConfig, StockDefinition
from scenarios.universe import SECTOR_PROFILES

BASE_VOLUME = 200_000
VOLUME_RANGE = 800_000
DAILY_MOVE_RANGE = 0.05
UPWARD_DRIFT = 0.01  # fraction of the move range skewed upwards
WICK_RANGE = 0.02


def generate_history(length: int, initial_price: float, rng) -> List[OHLCBar]:
    """Random OHLCV walk for days ``1..length``; each bar opens at the previous close."""
    history = []
    last_close = initial_price
    for day in range(1, length + 1):
        open_price = last_close
        volume = round(BASE_VOLUME + rng.random() * VOLUME_RANGE)
        change = (rng.random() - (0.5 - UPWARD_DRIFT)) * DAILY_MOVE_RANGE
        close = max(MIN_PRICE, open_price * (1 + change))
        high = max(open_price, close) * (1 + rng.random() * WICK_RANGE)
        low = min(open_price, close) * (1 - rng.random() * WICK_RANGE)
        history.append(OHLCBar(day=day, open=open_price, high=high, low=low, close=close, volume=volume))
        last_close = close
    return history


def initial_price_and_shares(definition: StockDefinition, config: SimulationConfig, rng) -> Tuple[float, float]:
    """Starting price and share count for one stock.

    Synthetic seeding draws from the configured price band. Realistic seeding
    uses the stock's own reference values, falling back to its sector profile.
    """
    if config.use_realistic_data:
        profile = SECTOR_PROFILES.get(definition.sector)
        price = definition.reference_price
        if price is None:
            if profile is None:
                price = config.min_initial_price + rng.random() * (config.max_initial_price - config.min_initial_price)
            else:
                price = profile['min_price'] + rng.random() * (profile['max_price'] - profile['min_price'])
        shares = definition.reference_shares
        if shares is None:
            shares = profile['shares'] if profile else config.min_shares_outstanding
        return price, shares

    price = config.min_initial_price + rng.random() * (config.max_initial_price - config.min_initial_price)
    shares = config.min_shares_outstanding + rng.random() * config.shares_outstanding_range
    return price, shares


def backfill_market_index(histories: List[List[OHLCBar]]) -> List[SimplePricePoint]:
    """Equal-weighted average close for each day of the generated histories."""
    if not histories:
        return []
    points = []
    for bars in zip(*histories):
        points.append(SimplePricePoint(day=bars[0].day, price=sum(bar.close for bar in bars) / len(bars)))
    return points
