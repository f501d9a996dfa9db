import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from agents.investor import PortfolioValuePoint
from market.data_recorder import DataRecorder
from market.market_view import METRIC_COLUMNS, market_table, stock_metrics


def _moved(make_stock, symbol, previous, current, volume=1000, **kwargs):
    stock = make_stock(symbol, price=previous, **kwargs)
    bar = stock.current_bar
    bar.close = current
    bar.high = max(bar.high, current)
    bar.low = min(bar.low, current)
    bar.volume = volume
    return stock


@pytest.fixture
def listed_state(make_state, make_stock):
    stocks = [
        _moved(make_stock, 'INNV', 100.0, 110.0, volume=5000),
        _moved(make_stock, 'TECH', 50.0, 45.0, volume=900, shares=10_000_000),
        _moved(make_stock, 'HLTH', 20.0, 20.0, volume=100, sector='Health', region='Europe'),
        _moved(make_stock, 'GONE', 10.0, 12.0),
    ]
    stocks[-1].is_delisted = True
    return make_state(stocks)


class TestStockMetrics:
    def test_daily_change_and_ratios(self, make_stock):
        metrics = stock_metrics(_moved(make_stock, 'INNV', 100.0, 110.0, eps=5.5))
        assert metrics['change'] == pytest.approx(10.0)
        assert metrics['change_percent'] == pytest.approx(0.1)
        assert metrics['pe_ratio'] == pytest.approx(20.0)
        assert metrics['high_52w'] == 110.0
        assert metrics['pct_of_52w_high'] == pytest.approx(1.0)
        assert metrics['market_cap'] == pytest.approx(110.0 * 1_000_000)

    def test_non_positive_eps_has_no_pe(self, make_stock):
        assert stock_metrics(make_stock(eps=-1.0))['pe_ratio'] == 0.0

    def test_needs_two_bars(self, make_stock):
        assert stock_metrics(make_stock(days=1)) is None


class TestMarketTable:
    def test_default_listing_is_by_market_cap(self, listed_state):
        table = market_table(listed_state)
        assert list(table.columns) == list(METRIC_COLUMNS)
        assert list(table['symbol']) == ['TECH', 'INNV', 'HLTH']

    def test_lists_sort_by_their_column(self, listed_state):
        assert list(market_table(listed_state, listing='gainers')['symbol']) == ['INNV', 'HLTH', 'TECH']
        assert list(market_table(listed_state, listing='losers')['symbol']) == ['TECH', 'HLTH', 'INNV']
        assert list(market_table(listed_state, listing='active')['symbol']) == ['INNV', 'TECH', 'HLTH']

    def test_region_and_query_filters(self, listed_state):
        assert list(market_table(listed_state, region='Europe')['symbol']) == ['HLTH']
        assert list(market_table(listed_state, query='innv corp')['symbol']) == ['INNV']
        assert market_table(listed_state, query='gone').empty

    def test_unknown_listing(self, listed_state):
        with pytest.raises(ValueError):
            market_table(listed_state, listing='hottest')


class TestDataRecorder:
    def test_snapshots_and_exports(self, listed_state, tmp_path):
        recorder = DataRecorder(tmp_path / 'data')
        recorder.record_snapshot(listed_state)

        assert recorder.snapshots[0]['listed_stocks'] == 3
        assert recorder.investor_data[0]['net_worth'] == 1_000_000
        assert len(recorder.stock_data) == 3

        recorder.save_simulation_data(listed_state)

        for name in ('snapshots.csv', 'investor_data.csv', 'stock_data.csv', 'market_index.csv',
                     'net_worth_history.csv', 'events.csv', 'stock_history.csv'):
            assert (tmp_path / 'data' / name).exists()
        summary = json.loads((tmp_path / 'data' / 'summary_statistics.json').read_text())
        assert summary['final_day'] == 252
        assert summary['delisted_stocks'] == 1

    def test_net_worth_frame_pivots_by_investor(self, listed_state):
        human = listed_state.investors['human-player']
        human.portfolio_history = [PortfolioValuePoint(day=251, value=1.0), PortfolioValuePoint(day=252, value=2.0)]
        frame = DataRecorder(Path('unused')).net_worth_frame(listed_state)
        assert list(frame.index) == [251, 252]
        assert list(frame['human-player']) == [1.0, 2.0]
