import sys
from datetime import timedelta
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from constants import SECONDS_PER_DAY
from market.state.sim_state import TrackedArticle
from simulation.market_simulation import MarketSimulation


class RecordingTextGenerator:
    """Text generator that only records refinement passes"""

    def __init__(self):
        self.refined = 0

    def create_model(self):
        return {'passes': 0}

    def generate(self, event, state):
        raise RuntimeError("not used")

    def learn_from_outcome(self, model, generated_text, outcome):
        return model

    def refine(self, model):
        self.refined += 1
        return {'passes': model['passes'] + 1}


@pytest.fixture
def make_advancer(make_config):
    def _make(text_generator=None, **overrides):
        simulation = MarketSimulation(config=make_config(**overrides), seed=11, text_generator=text_generator)
        return simulation.time_advancer
    return _make


def test_intraday_advance_stays_on_the_same_day(make_advancer, make_stock, make_state):
    state = make_state([make_stock()])
    advanced = make_advancer().advance(state, 3 * 3600)

    assert advanced.day == 252
    assert advanced.time == state.time + timedelta(hours=3)
    assert advanced.stocks['INNV'].current_bar.day == 252
    assert len(advanced.stocks['INNV'].history) == len(state.stocks['INNV'].history)


def test_day_and_time_stay_consistent_across_midnights(make_advancer, make_stock, make_state):
    state = make_state([make_stock()])
    advanced = make_advancer().advance(state, 1.5 * SECONDS_PER_DAY)

    # 09:30 on day 252 plus 36 hours is 21:30 on day 253
    assert advanced.time == state.time + timedelta(hours=36)
    assert advanced.day == 253 == advanced.day_from_time()
    assert [bar.day for bar in advanced.stocks['INNV'].history[-2:]] == [252, 253]


def test_one_transition_per_midnight(make_advancer, make_stock, make_state):
    state = make_state([make_stock()])
    advanced = make_advancer().advance(state, 3 * SECONDS_PER_DAY)

    assert advanced.day == 255
    assert [bar.day for bar in advanced.stocks['INNV'].history[-4:]] == [252, 253, 254, 255]
    assert [point.day for point in advanced.market_index_history] == [252, 253, 254]


def test_chunk_spanning_several_days_runs_every_transition(make_advancer, make_stock, make_state):
    state = make_state([make_stock()])
    advanced = make_advancer(time_chunk_seconds=3 * SECONDS_PER_DAY).advance(state, 3 * SECONDS_PER_DAY)

    assert advanced.day == 255 == advanced.day_from_time()
    assert [bar.day for bar in advanced.stocks['INNV'].history[-4:]] == [252, 253, 254, 255]
    assert [point.day for point in advanced.market_index_history] == [252, 253, 254]


def test_transition_runs_exactly_at_midnight(make_advancer, make_stock, make_state):
    state = make_state([make_stock()], hour=23.75)
    # One chunk of 30 minutes straddles midnight
    advanced = make_advancer(time_chunk_seconds=1800).advance(state, 1800)

    assert advanced.day == 253
    assert advanced.time == state.date_for_day(253) + timedelta(minutes=15)
    assert advanced.stocks['INNV'].current_bar.day == 253


def test_input_state_is_not_mutated(make_advancer, make_stock, make_state):
    state = make_state([make_stock()])
    close = state.stocks['INNV'].current_price
    advanced = make_advancer().advance(state, 2 * SECONDS_PER_DAY)

    assert advanced is not state
    assert state.day == 252
    assert state.stocks['INNV'].current_price == close
    assert len(state.stocks['INNV'].history) == 60


def test_non_positive_duration_returns_the_same_state(make_advancer, make_state):
    state = make_state()
    advancer = make_advancer()
    assert advancer.advance(state, 0) is state
    assert advancer.advance(state, -1) is state


def test_exhausted_wall_clock_budget_makes_no_progress(make_advancer, make_stock, make_state):
    state = make_state([make_stock()])
    advanced = make_advancer(max_real_time_ms=0).advance(state, SECONDS_PER_DAY)

    assert advanced is not state
    assert advanced.time == state.time
    assert advanced.day == state.day


def test_text_model_is_refined_once_per_call(make_advancer, make_stock, make_state):
    generator = RecordingTextGenerator()
    state = make_state([make_stock()])
    state.text_model = generator.create_model()

    advanced = make_advancer(text_generator=generator).advance(state, 2 * 3600)

    assert generator.refined == 1
    assert advanced.text_model == {'passes': 1}
    assert state.text_model == {'passes': 0}


def test_failed_refinement_keeps_the_model(make_advancer, make_stock, make_state, failing_text_generator):
    state = make_state([make_stock()])
    state.text_model = {'passes': 0}

    advanced = make_advancer(text_generator=failing_text_generator).advance(state, 600)

    assert advanced.time == state.time + timedelta(seconds=600)
    assert advanced.text_model == {'passes': 0}


def test_failed_article_learning_does_not_abort_the_day(make_advancer, make_stock, make_state,
                                                        failing_text_generator):
    state = make_state([make_stock()])
    state.text_model = {'passes': 0}
    state.tracked_articles = [TrackedArticle(
        event_id='e', evaluation_day=253, generated_text='markets rallied', starting_market_index=100.0,
    )]

    advanced = make_advancer(text_generator=failing_text_generator).advance(state, SECONDS_PER_DAY)

    assert advanced.day == 253
    assert advanced.stocks['INNV'].history[-2].day == 252
    assert [point.day for point in advanced.market_index_history] == [252]
    assert advanced.tracked_articles == []
    assert advanced.text_model == {'passes': 0}
