import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from agents.investor import HyperComplexStrategy, Investor, RecentTrade
from agents.neural.neural_network import NeuralNetwork
from market.state.sim_state import SimplePricePoint, TrackedArticle, TrackedCorporateAction
from scenarios.universe import CORPORATE_NEURONS, INDICATOR_NEURONS
from simulation.learning_service import LearningService, relative_performance, trade_target


class OutcomeRecorder:
    """Text generator that records the outcomes it is taught"""

    def __init__(self):
        self.outcomes = []

    def learn_from_outcome(self, model, generated_text, outcome):
        self.outcomes.append((generated_text, outcome))
        return model


def test_relative_performance():
    assert relative_performance(1.2, 1.1) == pytest.approx(1.2 / 1.1 - 1)
    assert relative_performance(1.2, 0.0) == pytest.approx(0.2)


def test_trade_target_sign_follows_the_side():
    assert trade_target(100.0, 110.0, 'buy') == pytest.approx(math.tanh(1.0))
    assert trade_target(100.0, 110.0, 'sell') == pytest.approx(-math.tanh(1.0))
    assert trade_target(100.0, 100.0, 'buy') == 0.0


class TestCorporateLearning:
    def _track(self, state, evaluation_day, action_type='split', symbol='INNV'):
        state.tracked_corporate_actions.append(TrackedCorporateAction(
            start_day=200,
            evaluation_day=evaluation_day,
            stock_symbol=symbol,
            action_type=action_type,
            indicator_values=[0.1] * len(CORPORATE_NEURONS),
            starting_stock_price=50.0,
            starting_market_index=100.0,
        ))

    def test_matured_action_trains_its_network(self, make_state, make_stock):
        stock = make_stock(price=100.0)
        state = make_state([stock])
        self._track(state, 253, 'alliance')
        self._track(state, 300, 'split')
        alliance_before = stock.corporate_ai.alliance_nn.clone()
        split_before = stock.corporate_ai.split_nn.clone()

        learned = LearningService(OutcomeRecorder()).learn_corporate_actions(state, 253)

        assert learned == 1
        assert stock.corporate_ai.alliance_nn != alliance_before
        assert stock.corporate_ai.split_nn == split_before
        assert [action.evaluation_day for action in state.tracked_corporate_actions] == [300]

    def test_actions_on_delisted_stocks_are_dropped(self, make_state, make_stock):
        stock = make_stock()
        stock.is_delisted = True
        state = make_state([stock])
        self._track(state, 253)
        before = stock.corporate_ai.split_nn.clone()

        assert LearningService(OutcomeRecorder()).learn_corporate_actions(state, 260) == 0
        assert state.tracked_corporate_actions == []
        assert stock.corporate_ai.split_nn == before


class TestArticleLearning:
    def _article(self, symbol=None, start_price=None):
        return TrackedArticle(
            event_id='e', evaluation_day=253, generated_text=f"about {symbol}",
            starting_market_index=100.0, stock_symbol=symbol, starting_stock_price=start_price,
        )

    def test_outcomes_are_relative_to_the_market(self, make_state, make_stock):
        gone = make_stock('TECH')
        gone.is_delisted = True
        state = make_state([make_stock('INNV', price=100.0), gone])
        state.market_index_history = [SimplePricePoint(day=252, price=110.0)]
        state.text_model = object()
        state.tracked_articles = [self._article(), self._article('INNV', 50.0), self._article('TECH', 50.0)]
        recorder = OutcomeRecorder()

        assert LearningService(recorder).learn_articles(state, 253) == 3

        outcomes = dict(recorder.outcomes)
        assert outcomes['about None'] == pytest.approx(1.1)
        assert outcomes['about INNV'] == pytest.approx(2.0 / 1.1)
        assert outcomes['about TECH'] == 1.0
        assert state.tracked_articles == []

    def test_without_a_model_articles_are_dropped(self, make_state):
        state = make_state()
        state.tracked_articles = [self._article()]
        recorder = OutcomeRecorder()

        assert LearningService(recorder).learn_articles(state, 260) == 0
        assert recorder.outcomes == []
        assert state.tracked_articles == []


class TestTradeLearning:
    def _trader(self):
        network = NeuralNetwork([len(INDICATOR_NEURONS), 4, 1], INDICATOR_NEURONS, rng=np.random.default_rng(4))
        return Investor(
            id='ai-1', name='AI Trader #1', cash=100.0,
            strategy=HyperComplexStrategy(network=network, risk_aversion=0.5, trade_frequency=1, learning_rate=0.05),
        )

    def _trade(self, evaluation_day, indicator_values=None):
        return RecentTrade(
            symbol='INNV', day=248, side='buy', shares=1, price=80.0,
            indicator_values=[0.2] * len(INDICATOR_NEURONS) if indicator_values is None else indicator_values,
            outcome_evaluation_day=evaluation_day,
        )

    def test_matured_trades_train_the_network(self, make_state, make_stock):
        state = make_state([make_stock(price=100.0)])
        trader = self._trader()
        trader.recent_trades = [self._trade(253), self._trade(253, indicator_values=[]), self._trade(254)]
        state.investors[trader.id] = trader
        before = trader.strategy.network.clone()

        assert LearningService(OutcomeRecorder()).learn_trades(state, 253) == 1

        assert trader.strategy.network != before
        assert [trade.outcome_evaluation_day for trade in trader.recent_trades] == [254]

    def test_humans_are_not_trained(self, make_state):
        state = make_state()
        human = state.investors['human-player']
        human.recent_trades = [self._trade(253)]

        assert LearningService(OutcomeRecorder()).learn_trades(state, 253) == 0
        assert len(human.recent_trades) == 1
