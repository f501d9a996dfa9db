import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from accounting.lot_accounting import add_lot, consume_lots_fifo, record_realized_gain
from accounting.tax_service import calculate_tax_due, settle_annual_taxes, settle_investor
from agents.investor import Investor, RandomStrategy
from scenarios.universe import TAX_REGIMES

T0 = datetime(2024, 1, 1, 14, 0, tzinfo=timezone.utc)


def _investor(cash=0.0, jurisdiction='USA_WA'):
    return Investor(id='inv', name='Investor', strategy=RandomStrategy(trade_chance=0.0),
                    cash=cash, tax_jurisdiction=jurisdiction)


class TestFifoLots:
    def test_oldest_lots_are_consumed_first(self):
        investor = _investor()
        add_lot(investor, 'INNV', 10, 5.0, T0)
        add_lot(investor, 'INNV', 10, 8.0, T0 + timedelta(days=1))

        gain = consume_lots_fifo(investor, 'INNV', 15, 10.0, T0 + timedelta(days=2))

        # 10 @ 5 then 5 @ 8
        assert gain.short_term == pytest.approx(10 * 5 + 5 * 2)
        assert gain.long_term == 0.0
        lots = investor.portfolio['INNV']
        assert len(lots) == 1
        assert lots[0].shares == 5
        assert lots[0].purchase_price == 8.0

    def test_holding_period_splits_gains(self):
        investor = _investor()
        add_lot(investor, 'INNV', 10, 10.0, T0)
        add_lot(investor, 'INNV', 10, 10.0, T0 + timedelta(days=300))

        gain = consume_lots_fifo(investor, 'INNV', 20, 12.0, T0 + timedelta(days=400))

        assert gain.long_term == pytest.approx(20.0)
        assert gain.short_term == pytest.approx(20.0)
        assert gain.total == pytest.approx(40.0)

    def test_selling_everything_removes_the_symbol(self):
        investor = _investor()
        add_lot(investor, 'INNV', 3, 10.0, T0)
        consume_lots_fifo(investor, 'INNV', 3, 9.0, T0)
        assert 'INNV' not in investor.portfolio
        assert investor.shares_owned('INNV') == 0

    def test_overselling_raises_and_leaves_lots_alone(self):
        investor = _investor()
        add_lot(investor, 'INNV', 3, 10.0, T0)
        with pytest.raises(ValueError):
            consume_lots_fifo(investor, 'INNV', 4, 9.0, T0)
        assert investor.shares_owned('INNV') == 3

    def test_realized_gains_accumulate(self):
        investor = _investor()
        add_lot(investor, 'INNV', 10, 10.0, T0)
        record_realized_gain(investor, consume_lots_fifo(investor, 'INNV', 5, 11.0, T0 + timedelta(days=1)))
        record_realized_gain(investor, consume_lots_fifo(investor, 'INNV', 5, 9.0, T0 + timedelta(days=2)))
        assert investor.annual_short_term_gains == pytest.approx(0.0)


class TestTax:
    def test_washington_capital_gains_over_exemption(self):
        result = calculate_tax_due(260_000, 0, TAX_REGIMES['USA_WA'])
        assert result['tax_due'] == pytest.approx(700.0)

    def test_washington_gains_under_exemption(self):
        assert calculate_tax_due(200_000, 0, TAX_REGIMES['USA_WA'])['tax_due'] == 0.0

    def test_washington_ignores_short_term_gains(self):
        assert calculate_tax_due(0, 500_000, TAX_REGIMES['USA_WA'])['tax_due'] == 0.0

    def test_tax_free_regime(self):
        assert calculate_tax_due(1_000_000, 1_000_000, TAX_REGIMES['TAX_FREE'])['tax_due'] == 0.0

    def test_loss_carryforward(self):
        regime = TAX_REGIMES['FLAT_15']
        first_year = calculate_tax_due(-4_000, -6_000, regime)
        assert first_year['tax_due'] == 0.0
        assert first_year['new_carryforward'] == pytest.approx(10_000)

        second_year = calculate_tax_due(0, 30_000, regime, first_year['new_carryforward'])
        assert second_year['carryforward_used'] == pytest.approx(10_000)
        assert second_year['tax_due'] == pytest.approx(20_000 * 0.15)
        assert second_year['new_carryforward'] == pytest.approx(0.0)

    def test_settlement_charges_cash_and_resets_year(self):
        investor = _investor(cash=10_000)
        investor.annual_long_term_gains = 260_000
        investor.annual_short_term_gains = 1_000

        settlement = settle_investor(investor, TAX_REGIMES['USA_WA'], day=365)

        assert settlement.tax_due == pytest.approx(700.0)
        assert investor.cash == pytest.approx(9_300)
        assert investor.total_taxes_paid == pytest.approx(700.0)
        assert investor.annual_long_term_gains == 0.0
        assert investor.annual_short_term_gains == 0.0

    def test_unknown_jurisdiction_is_skipped(self):
        known = _investor(cash=100)
        unknown = _investor(cash=100, jurisdiction='ATLANTIS')
        unknown.annual_long_term_gains = 1_000_000

        settlements = settle_annual_taxes([known, unknown], TAX_REGIMES, day=730)

        assert [s.investor_id for s in settlements] == ['inv']
        assert unknown.cash == 100
        assert unknown.annual_long_term_gains == 1_000_000
