import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from agents.agents_api import OrderDetails
from exceptions import OrderRejected
from market.engine.services.trade_execution_service import TradeExecutionService
from market.market_hours import is_market_open, open_regions
from market.trade import Trade

MONDAY = datetime(2024, 9, 9, tzinfo=timezone.utc)


def _at(hour, minute=0, day=MONDAY):
    return day.replace(hour=hour, minute=minute)


class TestMarketHours:
    def test_regional_sessions(self):
        assert is_market_open(_at(14), 'North America')
        assert not is_market_open(_at(20), 'North America')
        assert is_market_open(_at(7), 'Europe')
        assert not is_market_open(_at(15, 30), 'Europe')
        assert is_market_open(_at(1), 'Asia')

    def test_asia_lunch_break(self):
        assert not is_market_open(_at(3), 'Asia')
        assert is_market_open(_at(3, 30), 'Asia')
        assert not is_market_open(_at(6, 25), 'Asia')

    def test_weekend_is_closed_everywhere(self):
        saturday = datetime(2024, 9, 14, 14, 0, tzinfo=timezone.utc)
        assert open_regions(saturday) == []

    def test_overlap_and_unknown_region(self):
        assert set(open_regions(_at(14))) == {'North America', 'Europe'}
        assert not is_market_open(_at(14), 'Antarctica')


class TestOrderDetails:
    def test_non_positive_quantity_is_invalid(self):
        with pytest.raises(ValueError):
            OrderDetails(decision="Buy", quantity=0, stock_id='INNV')

    def test_side(self):
        assert OrderDetails(decision="Sell", quantity=1, stock_id='INNV').side == 'sell'

    def test_trade_value(self):
        trade = Trade(investor_id='a', symbol='INNV', side='sell', shares=3, price=2.5, timestamp=MONDAY, day=1)
        assert trade.value == pytest.approx(7.5)
        assert trade.signed_shares == -3


class TestTradeExecution:
    def test_buy_then_sell_round_trip(self, make_stock, make_state):
        state = make_state([make_stock(price=50.0)])
        service = TradeExecutionService()
        moment = _at(14)

        buy = service.execute_order(state, 'human-player', OrderDetails(decision="Buy", quantity=100, stock_id='INNV'), moment)
        investor = state.get_investor('human-player')
        assert buy.value == pytest.approx(5_000)
        assert investor.cash == pytest.approx(995_000)
        assert investor.shares_owned('INNV') == 100

        service.execute_order(state, 'human-player', OrderDetails(decision="Sell", quantity=100, stock_id='INNV'), moment)
        assert investor.cash == pytest.approx(1_000_000)
        assert investor.portfolio == {}

    def test_closed_market_is_rejected(self, make_stock, make_state):
        state = make_state([make_stock(region='Asia')])
        service = TradeExecutionService()
        order = OrderDetails(decision="Buy", quantity=1, stock_id='INNV')

        with pytest.raises(OrderRejected):
            service.execute_order(state, 'human-player', order, _at(14))
        # The same order goes through when hours are not enforced
        service.execute_order(state, 'human-player', order, _at(14), enforce_market_hours=False)
        assert state.get_investor('human-player').shares_owned('INNV') == 1

    @pytest.mark.parametrize("decision,quantity,symbol", [
        ("Buy", 1_000_000, 'INNV'),   # insufficient cash
        ("Sell", 1, 'INNV'),          # no shares held
        ("Buy", 1, 'NOPE'),           # unknown symbol
    ])
    def test_invalid_orders_mutate_nothing(self, make_stock, make_state, decision, quantity, symbol):
        state = make_state([make_stock(price=50.0)])
        service = TradeExecutionService()
        order = OrderDetails(decision=decision, quantity=quantity, stock_id=symbol)

        with pytest.raises(OrderRejected):
            service.execute_order(state, 'human-player', order, _at(14))
        investor = state.get_investor('human-player')
        assert investor.cash == 1_000_000
        assert investor.portfolio == {}

    def test_delisted_stock_is_rejected(self, make_stock, make_state):
        stock = make_stock()
        stock.is_delisted = True
        state = make_state([stock])
        with pytest.raises(OrderRejected, match="delisted"):
            TradeExecutionService().execute_order(
                state, 'human-player', OrderDetails(decision="Buy", quantity=1, stock_id='INNV'), _at(14)
            )

    def test_buy_snapshots_indicators_on_the_lot(self, make_stock, make_state):
        state = make_state([make_stock(price=10.0)])
        order = OrderDetails(decision="Buy", quantity=2, stock_id='INNV', indicators={'momentum_5d': 0.1})
        TradeExecutionService().execute_order(state, 'human-player', order, _at(14))
        lot = state.get_investor('human-player').portfolio['INNV'][0]
        assert lot.purchase_indicators == {'momentum_5d': 0.1}
        assert lot.purchase_time == _at(14)
