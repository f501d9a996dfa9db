import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from events.event_types import ActiveEvent
from market.indicators.corporate_indicators import calculate_corporate_indicators, market_momentum
from market.indicators.technical_indicators import (
    atr_ratio,
    calculate_indicators,
    ema,
    event_signals,
    group_momentum,
    indicator_vector,
    sma,
)
from market.state.sim_state import SimplePricePoint
from scenarios.universe import CORPORATE_NEURONS, INDICATOR_NEURONS


def _set_closes(stock, closes):
    for bar, close in zip(stock.history, closes):
        bar.open = bar.high = bar.low = bar.close = close


def test_moving_averages():
    values = [1.0, 2.0, 3.0, 4.0, 5.0]
    assert sma(values, 5) == pytest.approx(3.0)
    assert sma(values, 6) is None
    # Seeded with the SMA of the first three values, then smoothed with k = 0.5
    assert ema(values, 3) == pytest.approx(4.0)


def test_short_history_yields_no_indicators(make_stock):
    stock = make_stock(days=1)
    assert calculate_indicators(stock, [stock], []) == {}


def test_momentum_and_trend(make_stock):
    stock = make_stock(days=60)
    _set_closes(stock, [100.0 + i for i in range(60)])
    indicators = calculate_indicators(stock, [stock], [])

    assert indicators['momentum_5d'] == pytest.approx(159 / 154 - 1)
    assert indicators['trend_price_vs_sma_10'] > 0
    assert 'trend_price_vs_sma_100' not in indicators
    # No losses in the window: the RSI signal stays neutral
    assert indicators['oscillator_rsi_14_contrarian'] == pytest.approx(0.0)
    assert indicators['oscillator_stochastic_k_14_contrarian'] == pytest.approx(-1.0)


def test_rsi_contrarian_is_positive_when_oversold(make_stock):
    stock = make_stock(days=30)
    _set_closes(stock, [100.0 - i + (0.5 if i % 3 == 0 else 0.0) for i in range(30)])
    indicators = calculate_indicators(stock, [stock], [])
    assert indicators['oscillator_rsi_14_contrarian'] > 0


def test_atr_ratio_is_relative_to_price():
    closes = [10.0, 11.0] * 10
    assert atr_ratio(closes, 14) == pytest.approx(1.0 / 11.0)
    assert atr_ratio(closes[:5], 14) is None


def test_group_momentum_excludes_delisted(make_stock):
    rising = make_stock('A', days=60)
    _set_closes(rising, [100.0] * 9 + [100.0 + i for i in range(51)])
    falling = make_stock('B', days=60)
    _set_closes(falling, [100.0] * 9 + [100.0 - i for i in range(51)])

    both = group_momentum([rising, falling])
    falling.is_delisted = True
    only_rising = group_momentum([rising, falling])

    assert both == pytest.approx(0.0)
    assert only_rising == pytest.approx(150 / 100 - 1)


def test_event_signals_for_latest_event():
    assert event_signals([]) == {
        'event_sentiment_recent': 0.0,
        'event_impact_magnitude': 0.0,
        'event_type_is_macro': 0.0,
        'event_type_is_corporate': 0.0,
    }

    corporate = ActiveEvent(id='1', day=1, event_name='x', description='', type='positive',
                            stock_symbol='INNV', impact=1.05)
    macro = ActiveEvent(id='2', day=2, event_name='y', description='', type='political')
    signals = event_signals([corporate, macro])
    assert signals['event_sentiment_recent'] == 1.0
    assert signals['event_impact_magnitude'] == pytest.approx(0.5)
    assert signals['event_type_is_corporate'] == 1.0

    # No impact: mean impact 0, so the magnitude is |0 - 1| * 10
    signals = event_signals([macro])
    assert signals['event_impact_magnitude'] == pytest.approx(10.0)
    assert signals['event_type_is_macro'] == 1.0


def test_indicator_vector_fills_missing_with_zero():
    vector = indicator_vector({'momentum_5d': 0.25}, INDICATOR_NEURONS)
    assert len(vector) == len(INDICATOR_NEURONS) == 35
    assert vector[0] == 0.25
    assert all(value == 0.0 for value in vector[1:])


def test_market_momentum_needs_enough_history():
    history = [SimplePricePoint(day=d, price=100.0 + d) for d in range(51)]
    assert market_momentum(history[:50]) == 0.0
    assert market_momentum(history) == pytest.approx(150 / 100 - 1)


def test_corporate_indicators_cover_corporate_inputs(make_stock):
    stock = make_stock(days=60)
    _set_closes(stock, [100.0 + i for i in range(60)])
    index = [SimplePricePoint(day=d, price=100.0) for d in range(60)]
    indicators = calculate_corporate_indicators(stock, [stock], index, [])

    assert set(CORPORATE_NEURONS) <= set(indicators)
    assert indicators['price_vs_ath'] == pytest.approx(0.0)
    assert indicators['market_momentum_50d'] == pytest.approx(0.0)
