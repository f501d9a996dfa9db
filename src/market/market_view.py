"""Per-stock market statistics for listings and screens."""
import math
from typing import Dict, Optional

import pandas as pd

from constants import GLOBAL_REGION

FIFTY_TWO_WEEKS = 252

METRIC_COLUMNS = (
    'symbol', 'name', 'sector', 'region', 'price', 'change', 'change_percent', 'volume',
    'market_cap', 'pe_ratio', 'high_52w', 'low_52w', 'pct_of_52w_high', 'pct_of_52w_low',
    'trending_score',
)

# list name -> (sort column, ascending)
MARKET_LISTS = {
    'active': ('volume', False),
    'trending': ('trending_score', False),
    'gainers': ('change_percent', False),
    'losers': ('change_percent', True),
    '52w_high': ('pct_of_52w_high', False),
    '52w_low': ('pct_of_52w_low', True),
    'market_cap': ('market_cap', False),
}


def stock_metrics(stock) -> Optional[Dict[str, float]]:
    """Listing statistics for one stock; None until it has two bars."""
    history = stock.history
    if len(history) < 2:
        return None

    current, previous = history[-1], history[-2]
    price = current.close
    change = price - previous.close
    change_percent = change / previous.close if previous.close > 0 else 0.0
    year = history[-FIFTY_TWO_WEEKS:]
    high_52w = max(bar.high for bar in year)
    low_52w = min(bar.low for bar in year)

    return {
        'symbol': stock.symbol,
        'name': stock.name,
        'sector': stock.sector,
        'region': stock.region,
        'price': price,
        'change': change,
        'change_percent': change_percent,
        'volume': current.volume,
        'market_cap': stock.shares_outstanding * price,
        'pe_ratio': price / stock.eps if stock.eps > 0 else 0.0,
        'high_52w': high_52w,
        'low_52w': low_52w,
        'pct_of_52w_high': price / high_52w if high_52w > 0 else 0.0,
        'pct_of_52w_low': price / low_52w if low_52w > 0 else 0.0,
        # large moves on heavy volume; log volume keeps outliers from dominating
        'trending_score': abs(change_percent) * math.log10(current.volume + 1),
    }


def market_table(state, region: str = GLOBAL_REGION, query: Optional[str] = None,
                 listing: str = 'market_cap') -> pd.DataFrame:
    """Listed stocks with their statistics, filtered and sorted for one market list.

    Args:
        state: SimulationState to read
        region: A region name, or 'Global' for every region
        query: Case-insensitive substring matched against symbol and name
        listing: One of ``MARKET_LISTS``
    """
    if listing not in MARKET_LISTS:
        raise ValueError(f"Unknown market list: {listing}. Available lists: {list(MARKET_LISTS)}")

    rows = []
    for stock in state.active_stocks():
        if region != GLOBAL_REGION and stock.region != region:
            continue
        metrics = stock_metrics(stock)
        if metrics is not None:
            rows.append(metrics)

    df = pd.DataFrame(rows, columns=list(METRIC_COLUMNS))
    if query:
        needle = query.lower()
        mask = df['symbol'].str.lower().str.contains(needle, regex=False) | \
            df['name'].str.lower().str.contains(needle, regex=False)
        df = df[mask]

    column, ascending = MARKET_LISTS[listing]
    return df.sort_values(column, ascending=ascending, kind='stable').reset_index(drop=True)

