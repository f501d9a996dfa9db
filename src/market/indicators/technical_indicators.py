"""Technical indicators used as network inputs.

Every function here is pure. An indicator whose lookback is longer than the
available history is omitted from the result rather than reported as zero;
``indicator_vector`` substitutes 0 for omitted names when building a network
input.
"""
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from constants import STRUCTURAL_EVENT_TYPES
from events.event_types import ActiveEvent

MOMENTUM_PERIODS = (5, 10, 20, 50)
SMA_PERIODS = (10, 20, 50, 100, 200)
EMA_PERIODS = (10, 20, 50)
RSI_PERIODS = (7, 14, 21)
STOCHASTIC_PERIOD = 14
BOLLINGER_PERIOD = 20
VOLUME_PERIOD = 20
ATR_PERIOD = 14
GROUP_MOMENTUM_PERIOD = 50

EVENT_SENTIMENT = {'positive': 1.0, 'negative': -1.0}
EVENT_SENTIMENT.update({event_type: 0.5 for event_type in STRUCTURAL_EVENT_TYPES})


def sma(values: Sequence[float], period: int) -> Optional[float]:
    if len(values) < period:
        return None
    return float(np.mean(values[-period:]))


def ema(values: Sequence[float], period: int) -> Optional[float]:
    """Exponential moving average seeded with the SMA of the first ``period`` values."""
    if len(values) < period:
        return None
    k = 2 / (period + 1)
    result = float(np.mean(values[:period]))
    for value in values[period:]:
        result = value * k + result * (1 - k)
    return result


def atr_ratio(closes: Sequence[float], period: int = ATR_PERIOD) -> Optional[float]:
    """Mean absolute close-to-close change over ``period`` days, relative to price.

    Close-only proxy for average true range.
    """
    if len(closes) <= period or closes[-1] <= 0:
        return None
    deltas = np.abs(np.diff(np.asarray(closes[-period - 1:], dtype=float)))
    return float(deltas.mean()) / closes[-1]


def group_momentum(group: List, period: int = GROUP_MOMENTUM_PERIOD) -> float:
    """Momentum of the equal-weighted average close of ``group`` over ``period`` days.

    Delisted members are left out. Returns 0 when the group is empty or too short.
    """
    members = [stock for stock in group if not stock.is_delisted]
    if not members or len(members[0].history) <= period:
        return 0.0
    current = np.mean([stock.history[-1].close for stock in members])
    past = np.mean([stock.history[-period - 1].close for stock in members])
    return float(current / past - 1) if past > 0 else 0.0


def event_signals(event_history: List[ActiveEvent]) -> Dict[str, float]:
    """Signals describing the most recent event (all zero when there is none)."""
    if not event_history:
        return {
            'event_sentiment_recent': 0.0,
            'event_impact_magnitude': 0.0,
            'event_type_is_macro': 0.0,
            'event_type_is_corporate': 0.0,
        }
    last_event = event_history[0]
    is_corporate = last_event.stock_symbol is not None
    return {
        'event_sentiment_recent': EVENT_SENTIMENT.get(last_event.type, 0.0),
        'event_impact_magnitude': abs(last_event.mean_impact() - 1) * 10,
        'event_type_is_macro': 0.0 if is_corporate else 1.0,
        'event_type_is_corporate': 1.0 if is_corporate else 0.0,
    }


def calculate_indicators(stock, all_stocks: Iterable, event_history: List[ActiveEvent]) -> Dict[str, float]:
    """Compute the agent input vocabulary for ``stock``.

    Args:
        stock: Stock to evaluate
        all_stocks: Universe used for sector and region peer groups
        event_history: Events, most recent first

    Returns:
        Mapping of indicator name to value; empty when fewer than two closes exist
    """
    prices = stock.closes()
    volumes = stock.volumes()
    if len(prices) < 2:
        return {}

    indicators: Dict[str, float] = {}
    current_price = prices[-1]
    prev_price = prices[-2]

    for period in MOMENTUM_PERIODS:
        if len(prices) > period:
            indicators[f'momentum_{period}d'] = current_price / prices[-1 - period] - 1
    if len(prices) > 5:
        avg_4d = float(np.mean(prices[-5:-1]))
        if avg_4d > 0:
            indicators['momentum_1d_vs_avg5d'] = current_price / avg_4d - 1

    smas = {}
    for period in SMA_PERIODS:
        average = sma(prices, period)
        if average is not None:
            smas[period] = average
            indicators[f'trend_price_vs_sma_{period}'] = (current_price - average) / average
    for fast, slow in ((10, 20), (20, 50), (50, 200)):
        if smas.get(fast) and smas.get(slow):
            indicators[f'trend_sma_crossover_{fast}_{slow}'] = (smas[fast] - smas[slow]) / smas[slow]

    emas = {}
    for period in EMA_PERIODS:
        average = ema(prices, period)
        if average:
            emas[period] = average
            indicators[f'trend_price_vs_ema_{period}'] = (current_price - average) / average
    for fast, slow in ((10, 20), (20, 50)):
        if emas.get(fast) and emas.get(slow):
            indicators[f'trend_ema_crossover_{fast}_{slow}'] = (emas[fast] - emas[slow]) / emas[slow]

    # Contrarian RSI: positive when oversold
    for period in RSI_PERIODS:
        if len(prices) > period:
            changes = np.diff(np.asarray(prices[-period - 1:], dtype=float))
            avg_gain = changes[changes > 0].sum() / period
            avg_loss = -changes[changes < 0].sum() / period
            if avg_loss > 0:
                rsi = 100 - 100 / (1 + avg_gain / avg_loss)
                indicators[f'oscillator_rsi_{period}_contrarian'] = (50 - rsi) / 50
            else:
                indicators[f'oscillator_rsi_{period}_contrarian'] = 0.0

    if len(prices) >= STOCHASTIC_PERIOD:
        window = prices[-STOCHASTIC_PERIOD:]
        low, high = min(window), max(window)
        k = 100 * (current_price - low) / (high - low) if high > low else 50.0
        indicators['oscillator_stochastic_k_14_contrarian'] = (50 - k) / 50

    middle = smas.get(BOLLINGER_PERIOD)
    if middle:
        std_dev = float(np.std(prices[-BOLLINGER_PERIOD:]))
        upper = middle + 2 * std_dev
        lower = middle - 2 * std_dev
        indicators['volatility_bollinger_bandwidth_20'] = (upper - lower) / middle
        if upper > lower:
            indicators['volatility_bollinger_percent_b_20'] = (current_price - lower) / (upper - lower)

    ema12 = ema(prices, 12)
    ema26 = ema(prices, 26)
    if ema12 and ema26:
        indicators['macd_histogram'] = (ema12 - ema26) / ema26

    if len(volumes) >= VOLUME_PERIOD:
        avg_volume = float(np.mean(volumes[-VOLUME_PERIOD:]))
        if avg_volume > 0:
            indicators['volume_avg_20d_spike'] = (volumes[-1] - avg_volume) / avg_volume

        obv = 0.0
        obv_values = []
        for i in range(len(prices) - VOLUME_PERIOD, len(prices)):
            if i > 0 and prices[i] > prices[i - 1]:
                obv += volumes[i]
            elif i > 0 and prices[i] < prices[i - 1]:
                obv -= volumes[i]
            obv_values.append(obv)
        obv_mean = float(np.mean(obv_values))
        if obv_mean != 0:
            indicators['volume_obv_trend_20d'] = (obv - obv_mean) / abs(obv_mean)

        # Money-flow sign compares each close with the previous close of the latest day
        money_flow = 0.0
        volume_sum = 0.0
        for i in range(len(prices) - VOLUME_PERIOD, len(prices)):
            multiplier = 1 if prices[i] - prev_price > 0 else -1
            money_flow += multiplier * volumes[i]
            volume_sum += volumes[i]
        if volume_sum > 0:
            indicators['volume_cmf_20'] = money_flow / volume_sum

    atr = atr_ratio(prices)
    if atr is not None:
        indicators['volatility_atr_14'] = atr

    peers = list(all_stocks)
    indicators['sector_momentum_50d'] = group_momentum([s for s in peers if s.sector == stock.sector])
    indicators['region_momentum_50d'] = group_momentum([s for s in peers if s.region == stock.region])

    indicators.update(event_signals(event_history))
    return indicators


def indicator_vector(indicators: Dict[str, float], names: Sequence[str]) -> List[float]:
    """Order ``indicators`` by ``names``, with 0 for missing entries."""
    return [float(indicators.get(name, 0.0)) for name in names]
