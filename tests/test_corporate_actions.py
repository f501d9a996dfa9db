import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from scenarios.base import CorporateActionParams
from simulation.market_simulation import MarketSimulation

NEVER = 1.0  # tanh outputs never exceed 1
ALWAYS = -2.0


@pytest.fixture
def make_service(make_config):
    def _make(**params):
        params.setdefault('split_threshold', NEVER)
        params.setdefault('alliance_threshold', NEVER)
        params.setdefault('acquisition_threshold', NEVER)
        params.setdefault('minor_event_probability', 0.0)
        config = make_config(corporate=CorporateActionParams(**params))
        return MarketSimulation(config=config, seed=5).corporate_service
    return _make


def _impacts(state):
    return {symbol: 1.0 for symbol in state.stocks}


class TestSplits:
    def test_split_rescales_history_shares_and_eps(self, make_service, make_stock, make_state):
        stock = make_stock(price=500.0, shares=1_000_000, eps=5.0)
        state = make_state([stock])

        events = make_service(split_threshold=ALWAYS).run_day(state, 253, _impacts(state))

        assert len(events) == 1
        event = events[0]
        assert event.type == 'split'
        assert event.event_name == "Announces 5-for-1 Stock Split"
        assert event.split_details.ratio == 5
        assert all(bar.close == pytest.approx(100.0) and bar.high == pytest.approx(100.0) for bar in stock.history)
        assert stock.shares_outstanding == 5_000_000
        assert stock.eps == pytest.approx(1.0)
        assert stock.market_cap == pytest.approx(500.0 * 1_000_000)

        tracked = state.tracked_corporate_actions[-1]
        assert (tracked.action_type, tracked.start_day, tracked.evaluation_day) == ('split', 253, 313)
        assert tracked.starting_stock_price == pytest.approx(100.0)
        assert 273 <= stock.corporate_ai.next_corporate_action_day < 303

    def test_low_priced_stock_does_not_split(self, make_service, make_stock, make_state):
        stock = make_stock(price=120.0)
        state = make_state([stock])

        assert make_service(split_threshold=ALWAYS).run_day(state, 253, _impacts(state)) == []
        assert stock.current_price == 120.0
        # Nothing happened, so the action day is not rescheduled
        assert stock.corporate_ai.next_corporate_action_day == 253

    def test_sub_hundred_split_ratio_falls_back_to_two(self, make_service, make_stock, make_state):
        stock = make_stock(price=80.0)
        state = make_state([stock])

        events = make_service(split_threshold=ALWAYS, min_split_price=50.0).run_day(state, 253, _impacts(state))

        assert events[0].split_details.ratio == 2
        assert stock.current_price == pytest.approx(40.0)

    def test_split_ratio_is_never_below_two(self, make_service, make_stock, make_state):
        stock = make_stock(price=150.0)
        state = make_state([stock])

        events = make_service(split_threshold=ALWAYS, min_split_price=100.0).run_day(state, 253, _impacts(state))

        assert events[0].split_details.ratio == 2
        assert events[0].event_name == "Announces 2-for-1 Stock Split"
        assert stock.current_price == pytest.approx(75.0)
        assert stock.shares_outstanding == pytest.approx(2_000_000)

    def test_action_waits_for_its_day(self, make_service, make_stock, make_state):
        stock = make_stock(price=500.0)
        stock.corporate_ai.next_corporate_action_day = 260
        state = make_state([stock])

        assert make_service(split_threshold=ALWAYS).run_day(state, 253, _impacts(state)) == []
        assert stock.current_price == 500.0


class TestAlliances:
    def test_alliance_bumps_both_partners(self, make_service, make_stock, make_state):
        state = make_state([make_stock('INNV'), make_stock('TECH'), make_stock('HLTH', sector='Health')])
        impacts = _impacts(state)

        events = make_service(alliance_threshold=ALWAYS).run_day(state, 253, impacts)

        first = events[0]
        assert first.type == 'alliance'
        assert first.alliance_details.partners == ['INNV', 'TECH']
        assert first.event_name == "Forms Alliance with TECH Corp"
        assert impacts['INNV'] == pytest.approx(1.03 * 1.03)  # TECH allies back with INNV
        assert impacts['TECH'] == pytest.approx(1.03 * 1.03)
        assert impacts['HLTH'] == 1.0
        assert [t.action_type for t in state.tracked_corporate_actions] == ['alliance', 'alliance']

    def test_no_partner_means_no_action(self, make_service, make_stock, make_state):
        stock = make_stock('HLTH', sector='Health')
        state = make_state([stock, make_stock('INNV')])
        service = make_service(alliance_threshold=ALWAYS)

        events = service.run_day(state, 253, _impacts(state))

        assert all(event.stock_symbol != 'HLTH' for event in events)
        assert stock.corporate_ai.next_corporate_action_day == 253


class TestAcquisitions:
    def test_acquirer_delists_a_smaller_peer(self, make_service, make_stock, make_state):
        acquirer = make_stock('INNV', price=100.0, shares=1_000_000)
        target = make_stock('TECH', price=10.0, shares=1_000_000)
        bystander = make_stock('HLTH', price=1.0, shares=1_000_000, sector='Health')
        state = make_state([acquirer, target, bystander])
        impacts = _impacts(state)

        events = make_service(acquisition_threshold=ALWAYS).run_day(state, 253, impacts)

        assert len(events) == 1
        event = events[0]
        assert event.type == 'merger'
        assert event.merger_details.acquiring == 'INNV'
        assert event.merger_details.acquired == 'TECH'
        assert target.is_delisted
        assert not bystander.is_delisted
        assert impacts['INNV'] == pytest.approx(1.05)
        assert impacts['TECH'] == pytest.approx(1.15)
        assert state.tracked_corporate_actions[-1].evaluation_day == 253 + 180

    def test_targets_must_be_under_half_the_acquirer_cap(self, make_service, make_stock, make_state):
        acquirer = make_stock('INNV', price=100.0, shares=1_000_000)
        peer = make_stock('TECH', price=60.0, shares=1_000_000)
        state = make_state([acquirer, peer])

        assert make_service(acquisition_threshold=ALWAYS).run_day(state, 253, _impacts(state)) == []
        assert not peer.is_delisted

    def test_delisted_stocks_take_no_actions(self, make_service, make_stock, make_state):
        stock = make_stock(price=500.0)
        stock.is_delisted = True
        state = make_state([stock])

        assert make_service(split_threshold=ALWAYS, minor_event_probability=1.0).run_day(
            state, 253, _impacts(state)) == []
        assert stock.current_price == 500.0


class TestMinorEvents:
    def test_sentiment_event_multiplies_the_daily_impact(self, make_service, make_stock, make_state):
        state = make_state([make_stock()])
        impacts = _impacts(state)

        events = make_service(minor_event_probability=1.0, minor_event_neutral_share=0.0).run_day(
            state, 253, impacts)

        assert len(events) == 1
        assert events[0].type in ('positive', 'negative')
        assert events[0].stock_symbol == 'INNV'
        assert impacts['INNV'] in (1.05, 1.08, 0.92, 0.90)

    def test_neutral_event_leaves_price_alone(self, make_service, make_stock, make_state):
        state = make_state([make_stock()])
        impacts = _impacts(state)

        events = make_service(minor_event_probability=1.0, minor_event_neutral_share=1.0).run_day(
            state, 253, impacts)

        assert events[0].type == 'neutral'
        assert events[0].event_name == "Routine Software Update"
        assert impacts['INNV'] == 1.0

    def test_unknown_sector_gets_no_news(self, make_service, make_stock, make_state):
        state = make_state([make_stock(sector='Shipping')])
        assert make_service(minor_event_probability=1.0).run_day(state, 253, _impacts(state)) == []


def test_next_action_day_window(make_service):
    service = make_service()
    days = {service.next_action_day(100) for _ in range(200)}
    assert min(days) >= 120
    assert max(days) < 150
