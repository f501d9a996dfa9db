"""Inputs for the corporate decision networks."""
from typing import Dict, Iterable, List

from events.event_types import ActiveEvent
from market.indicators.technical_indicators import calculate_indicators

FIFTY_TWO_WEEKS = 252
MARKET_MOMENTUM_PERIOD = 50

SHARED_SIGNALS = (
    'sector_momentum_50d',
    'region_momentum_50d',
    'event_sentiment_recent',
    'event_impact_magnitude',
    'event_type_is_macro',
    'event_type_is_corporate',
)


def market_momentum(market_index_history: List, period: int = MARKET_MOMENTUM_PERIOD) -> float:
    """Index momentum over ``period`` days; 0 when the index is too short."""
    if len(market_index_history) <= period:
        return 0.0
    current = market_index_history[-1].price
    past = market_index_history[-period - 1].price
    return current / past - 1 if past > 0 else 0.0


def calculate_corporate_indicators(
    stock,
    all_stocks: Iterable,
    market_index_history: List,
    event_history: List[ActiveEvent],
) -> Dict[str, float]:
    general = calculate_indicators(stock, all_stocks, event_history)
    indicators: Dict[str, float] = {
        'self_momentum_50d': general.get('momentum_50d', 0.0),
        'self_volatility_atr_14': general.get('volatility_atr_14', 0.0),
    }

    current_price = stock.current_price
    all_time_high = max((bar.high for bar in stock.history), default=0.0)
    indicators['price_vs_ath'] = current_price / all_time_high - 1 if all_time_high > 0 else 0.0

    if len(market_index_history) > MARKET_MOMENTUM_PERIOD:
        indicators['market_momentum_50d'] = market_momentum(market_index_history)

    # Position within the 52-week range; cheap and calm scores high
    window = stock.history[-FIFTY_TWO_WEEKS:]
    high_52w = max(bar.high for bar in window)
    low_52w = min(bar.low for bar in window)
    position = (current_price - low_52w) / (high_52w - low_52w) if high_52w > low_52w else 0.5
    indicators['opportunity_score'] = (1 - position) - indicators['self_volatility_atr_14'] * 2

    for name in SHARED_SIGNALS:
        indicators[name] = general.get(name, 0.0)
    return indicators
