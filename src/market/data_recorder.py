import json
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from market.market_view import market_table


class DataRecorder:
    """Collects snapshots of a running simulation and exports them.

    ``record_snapshot`` is called by the driver after each advance; the
    recorder copies out plain values, so it never holds on to state objects.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

        self.snapshots: List[Dict[str, Any]] = []
        self.investor_data: List[Dict[str, Any]] = []
        self.stock_data: List[Dict[str, Any]] = []

    def record_snapshot(self, state):
        """Record index level, investor net worth and per-stock listing data at ``state.time``"""
        timestamp = state.time.isoformat()
        prices = {symbol: stock.current_price for symbol, stock in state.stocks.items()}

        self.snapshots.append({
            'day': state.day,
            'time': timestamp,
            'market_index': state.current_market_index,
            'listed_stocks': len(state.active_stocks()),
            'active_event': state.active_event.event_name if state.active_event else None,
        })

        for investor in state.investors.values():
            self.investor_data.append({
                'day': state.day,
                'time': timestamp,
                'investor_id': investor.id,
                'name': investor.name,
                'strategy': investor.strategy.strategy_type,
                'strategy_name': investor.strategy_name or ('Human' if investor.is_human else investor.strategy.strategy_type),
                'is_human': investor.is_human,
                'cash': investor.cash,
                'portfolio_value': investor.portfolio_value(prices),
                'net_worth': investor.net_worth(prices),
                'total_taxes_paid': investor.total_taxes_paid,
            })

        listing = market_table(state)
        listing.insert(0, 'day', state.day)
        self.stock_data.extend(listing.to_dict('records'))

    # Exports

    def market_index_frame(self, state) -> pd.DataFrame:
        return pd.DataFrame(
            [{'day': point.day, 'price': point.price} for point in state.market_index_history]
        )

    def net_worth_frame(self, state) -> pd.DataFrame:
        """Daily net worth per investor, one column per investor id"""
        rows = [
            {'day': point.day, 'investor_id': investor.id, 'value': point.value}
            for investor in state.investors.values()
            for point in investor.portfolio_history
        ]
        if not rows:
            return pd.DataFrame()
        return pd.DataFrame(rows).pivot_table(index='day', columns='investor_id', values='value', aggfunc='last')

    def events_frame(self, state) -> pd.DataFrame:
        return pd.DataFrame([event.to_dict() for event in state.event_history])

    def stock_history_frame(self, state) -> pd.DataFrame:
        rows = []
        for stock in state.stocks.values():
            for bar in stock.history:
                row = bar.to_dict()
                row['symbol'] = stock.symbol
                rows.append(row)
        return pd.DataFrame(rows)

    def save_simulation_data(self, state):
        """Write every export to CSV plus summary statistics as JSON"""
        data_path = self.data_dir
        data_path.mkdir(parents=True, exist_ok=True)

        pd.DataFrame(self.snapshots).to_csv(data_path / 'snapshots.csv', index=False)
        pd.DataFrame(self.investor_data).to_csv(data_path / 'investor_data.csv', index=False)
        pd.DataFrame(self.stock_data).to_csv(data_path / 'stock_data.csv', index=False)

        self.market_index_frame(state).to_csv(data_path / 'market_index.csv', index=False)
        self.net_worth_frame(state).to_csv(data_path / 'net_worth_history.csv')
        self.events_frame(state).to_csv(data_path / 'events.csv', index=False)
        self.stock_history_frame(state).to_csv(data_path / 'stock_history.csv', index=False)

        self._save_summary_statistics(state, data_path)

    def _save_summary_statistics(self, state, data_path: Path):
        index_levels = [point.price for point in state.market_index_history]
        index_returns = np.diff(index_levels) / np.array(index_levels[:-1]) if len(index_levels) > 1 else []
        prices = {symbol: stock.current_price for symbol, stock in state.stocks.items()}
        net_worths = [investor.net_worth(prices) for investor in state.investors.values()]

        summary_data = {
            'final_day': state.day,
            'final_time': state.time.isoformat(),
            'final_market_index': state.current_market_index,
            'index_daily_volatility': float(np.std(index_returns)) if len(index_returns) else 0.0,
            'listed_stocks': len(state.active_stocks()),
            'delisted_stocks': sum(1 for stock in state.stocks.values() if stock.is_delisted),
            'events_on_record': len(state.event_history),
            'avg_net_worth': float(np.mean(net_worths)) if net_worths else 0.0,
            'total_taxes_paid': sum(investor.total_taxes_paid for investor in state.investors.values()),
        }

        with open(data_path / 'summary_statistics.json', 'w') as f:
            json.dump(summary_data, f, indent=4)
