import random
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from agents.agent_manager.services.agent_decision_service import AgentDecisionService
from agents.investor import HyperComplexStrategy, Investor, RandomStrategy, SimpleStrategy
from agents.neural.neural_network import NeuralNetwork
from market.engine.tick_engine import TickEngine
from scenarios.universe import INDICATOR_NEURONS


@pytest.fixture
def make_engine(small_config):
    def _make(config=small_config, seed=21):
        rng = random.Random(seed)
        return TickEngine(config, rng, AgentDecisionService(config, rng, INDICATOR_NEURONS))
    return _make


def _drift(config, sector, tick_hours):
    fraction = tick_hours / 24
    return 1 - config.operating_tax_rate(sector) / 365 * fraction + config.inflation_rate * fraction


def _network_trader(cash, risk_aversion=-2.0):
    network = NeuralNetwork([len(INDICATOR_NEURONS), 4, 1], INDICATOR_NEURONS, rng=np.random.default_rng(0))
    return Investor(
        id='ai-1', name='AI Trader #1', cash=cash,
        strategy=HyperComplexStrategy(network=network, risk_aversion=risk_aversion,
                                      trade_frequency=1, learning_rate=0.01),
    )


def _at_hour(state, hour):
    return state.date_for_day(state.day).replace(hour=hour)


class TestBootstrap:
    def test_closed_region_only_drifts(self, make_engine, make_stock, make_state, small_config):
        # 09:30 UTC: North America is closed
        state = make_state([make_stock(price=100.0)])
        make_engine().run_tick(state, state.time, 1.0)
        assert state.stocks['INNV'].current_price == pytest.approx(100.0 * _drift(small_config, 'Technology', 1.0))

    def test_open_region_random_walk_is_bounded(self, make_engine, make_stock, make_state, small_config):
        state = make_state([make_stock(price=100.0, region='Europe')])
        engine = make_engine()
        assert engine.in_bootstrap(state.day)

        engine.run_tick(state, state.time, 0.5)

        volatility = small_config.bootstrap_volatility * 0.5 / 6.5
        price = state.stocks['INNV'].current_price
        assert 100.0 * (1 - volatility) * 0.999 <= price <= 100.0 * (1 + volatility) * 1.001
        assert state.stocks['INNV'].current_bar.volume == 1000

    def test_agents_sit_out_the_bootstrap(self, make_engine, make_stock, make_state):
        state = make_state([make_stock(price=100.0)])
        trader = _network_trader(cash=10_000.0)
        state.investors[trader.id] = trader

        flows = make_engine().run_tick(state, _at_hour(state, 15), 1.0)

        assert flows.trades == []
        assert trader.cash == 10_000.0


class TestAgentTrading:
    def test_buy_pressure_moves_price_up_to_the_cap(self, make_engine, make_stock, make_state, small_config):
        state = make_state([make_stock(price=100.0, shares=1_000, day=253)], day=253)
        trader = _network_trader(cash=10_000_000.0)
        state.investors[trader.id] = trader

        flows = make_engine().run_tick(state, _at_hour(state, 15), 6.5)

        # 20% of cash at $100 a share
        assert flows.volumes == {'INNV': 20_000}
        assert trader.shares_owned('INNV') == 20_000
        assert trader.cash == pytest.approx(8_000_000.0)
        stock = state.stocks['INNV']
        expected = 100.0 * _drift(small_config, 'Technology', 6.5) * (1 + small_config.max_tick_pressure)
        assert stock.current_price == pytest.approx(expected)
        assert stock.current_bar.volume == 1000 + 20_000

        recent = trader.recent_trades[0]
        assert recent.side == 'buy'
        assert recent.outcome_evaluation_day == 258
        assert len(recent.indicator_values) == len(INDICATOR_NEURONS)
        assert trader.portfolio['INNV'][0].purchase_indicators

    def test_closed_markets_get_no_orders(self, make_engine, make_stock, make_state):
        state = make_state([make_stock(price=100.0, region='Asia', day=253)], day=253)
        trader = _network_trader(cash=10_000.0)
        state.investors[trader.id] = trader

        flows = make_engine().run_tick(state, _at_hour(state, 15), 6.5)

        assert flows.trades == []
        assert trader.portfolio == {}

    def test_noise_trader_buys_with_its_cash(self, make_engine, make_stock, make_state):
        state = make_state([make_stock(price=10.0, day=253)], day=253)
        noise = Investor(id='ai-2', name='Random Walker', cash=10_000.0, strategy=RandomStrategy(trade_chance=100.0))
        state.investors[noise.id] = noise
        engine = make_engine()

        for _ in range(20):
            engine.run_tick(state, _at_hour(state, 15), 0.1)

        assert noise.shares_owned('INNV') > 0
        assert noise.cash >= 0
        assert noise.recent_trades == []

    def test_reserved_tiers_and_humans_never_trade(self, make_engine, make_stock, make_state):
        state = make_state([make_stock(price=10.0, day=253)], day=253)
        state.investors['ai-3'] = Investor(id='ai-3', name='Simple', cash=1_000.0, strategy=SimpleStrategy())
        state.investors['human-player'].strategy = RandomStrategy(trade_chance=100.0)

        flows = make_engine().run_tick(state, _at_hour(state, 15), 1.0)

        assert flows.trades == []
