import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from agents.investor import Investor, RandomStrategy
from agents.neural.neural_network import NeuralNetwork
from market.state.sim_state import CorporateAI, OHLCBar, SimplePricePoint, SimulationState, Stock
from scenarios.base import AgentPopulation, StockDefinition
from scenarios.universe import CORPORATE_NEURONS, build_default_config

START = datetime(2024, 1, 1, tzinfo=timezone.utc)

TEST_UNIVERSE = [
    StockDefinition(symbol='INNV', name='Innovate Corp', sector='Technology', region='North America'),
    StockDefinition(symbol='TECH', name='TechGen Inc.', sector='Technology', region='North America'),
    StockDefinition(symbol='HLTH', name='HealthSphere', sector='Health', region='Europe'),
    StockDefinition(symbol='QUAN', name='Quantum Leap', sector='Technology', region='Asia'),
]

TEST_POPULATION = AgentPopulation(
    ai_investor_count=4,
    noise_trader_count=1,
    advanced_count=1,
    elite_count=1,
    master_count=0,
)


@pytest.fixture
def make_config():
    """Small universe and population; no wall-clock budget so runs are deterministic"""
    def _make(**overrides):
        params = dict(stocks=TEST_UNIVERSE, population=TEST_POPULATION, max_real_time_ms=None)
        params.update(overrides)
        return build_default_config(**params)
    return _make


@pytest.fixture
def small_config(make_config):
    return make_config()


@pytest.fixture
def make_stock():
    """Stock with a flat history at ``price`` ending on ``day``"""
    def _make(symbol='INNV', price=100.0, sector='Technology', region='North America', days=60, day=252,
              shares=1_000_000.0, eps=2.0):
        np_rng = np.random.default_rng(0)
        layers = [len(CORPORATE_NEURONS), 5, 1]
        history = [
            OHLCBar(day=d, open=price, high=price, low=price, close=price, volume=1000)
            for d in range(day - days + 1, day + 1)
        ]
        return Stock(
            symbol=symbol,
            name=f"{symbol} Corp",
            sector=sector,
            region=region,
            history=history,
            corporate_ai=CorporateAI(
                next_corporate_action_day=day + 1,
                split_nn=NeuralNetwork(layers, CORPORATE_NEURONS, rng=np_rng),
                alliance_nn=NeuralNetwork(layers, CORPORATE_NEURONS, rng=np_rng),
                acquisition_nn=NeuralNetwork(layers, CORPORATE_NEURONS, rng=np_rng),
                learning_rate=0.02,
            ),
            shares_outstanding=shares,
            eps=eps,
        )
    return _make


@pytest.fixture
def make_state(make_stock):
    """Hand-built state at ``day`` 09:30 UTC holding ``stocks`` and a human with $1,000,000"""
    def _make(stocks=None, day=252, cash=1_000_000.0, hour=9.5):
        stocks = stocks if stocks is not None else [make_stock()]
        human = Investor(
            id='human-player',
            name='Human Player',
            strategy=RandomStrategy(trade_chance=0.0),
            cash=cash,
            is_human=True,
        )
        return SimulationState(
            day=day,
            time=START + timedelta(days=day, hours=hour),
            start_date=START,
            stocks={stock.symbol: stock for stock in stocks},
            investors={human.id: human},
            market_index_history=[SimplePricePoint(day=day, price=100.0)],
            next_macro_event_day=day + 1000,
        )
    return _make


@pytest.fixture
def rng():
    return random.Random(1234)


class FailingTextGenerator:
    """Text generator whose every call except ``create_model`` raises"""
    calls = 0

    def create_model(self):
        return None

    def generate(self, event, state):
        FailingTextGenerator.calls += 1
        raise RuntimeError("generator offline")

    def learn_from_outcome(self, model, generated_text, outcome):
        raise RuntimeError("learning offline")

    def refine(self, model):
        raise RuntimeError("refine offline")


class FailingImageLookup:
    def lookup(self, headline, *keywords):
        raise ConnectionError("image service unreachable")


@pytest.fixture
def failing_text_generator():
    return FailingTextGenerator()


@pytest.fixture
def failing_image_lookup():
    return FailingImageLookup()
