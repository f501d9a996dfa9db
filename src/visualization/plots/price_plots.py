"""Price-related visualization functions."""

from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd

from visualization.plot_config import (
    EVENT_COLORS, EVENT_LINESTYLE, GRID_ALPHA, INDEX_COLOR, LIGHT_ALPHA, MAX_STOCKS_PLOTTED,
    REGION_COLORS, STANDARD_ALPHA, STANDARD_FIGSIZE, STANDARD_LINEWIDTH, THIN_LINEWIDTH, LARGE_FIGSIZE,
)


def plot_market_index(index_df: pd.DataFrame, events_df: Optional[pd.DataFrame] = None):
    """
    Plot the market index level with macro events marked.

    Args:
        index_df: DataFrame with ``day`` and ``price`` columns
        events_df: Optional event export; macro events (no stock symbol) are drawn as vertical lines

    Returns:
        Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=STANDARD_FIGSIZE)

    ax.plot(index_df['day'], index_df['price'], label='Market Index',
            color=INDEX_COLOR, linewidth=STANDARD_LINEWIDTH)

    if events_df is not None and 'stock_symbol' in events_df.columns:
        macro = events_df[events_df['stock_symbol'].isna()]
        for _, event in macro.iterrows():
            ax.axvline(event['day'], color=EVENT_COLORS.get(event['type'], 'gray'),
                       linestyle=EVENT_LINESTYLE, alpha=STANDARD_ALPHA)

    ax.set_xlabel('Day')
    ax.set_ylabel('Index Level')
    ax.set_title('Market Index')
    ax.legend(loc='best')
    ax.grid(True, alpha=GRID_ALPHA)

    return fig


def plot_stock_prices(stock_history_df: pd.DataFrame, symbols=None):
    """
    Plot closing prices for a set of stocks, normalized to their first close.

    Args:
        stock_history_df: Stock history export (``symbol``, ``day``, ``close``)
        symbols: Symbols to draw; the first few in the export when omitted

    Returns:
        Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=LARGE_FIGSIZE)

    if symbols is None:
        symbols = list(stock_history_df['symbol'].drop_duplicates())[:MAX_STOCKS_PLOTTED]

    for symbol in symbols:
        history = stock_history_df[stock_history_df['symbol'] == symbol].sort_values('day')
        if history.empty:
            continue
        ax.plot(history['day'], history['close'] / history['close'].iloc[0],
                label=symbol, linewidth=THIN_LINEWIDTH)

    ax.axhline(1.0, color='black', linestyle='--', linewidth=1, alpha=LIGHT_ALPHA)
    ax.set_xlabel('Day')
    ax.set_ylabel('Close / First Close')
    ax.set_title('Normalized Stock Prices')
    ax.legend(loc='best', ncol=2)
    ax.grid(True, alpha=GRID_ALPHA)

    return fig


def plot_regional_returns(stock_df: pd.DataFrame):
    """
    Plot the mean daily change per region over the recorded snapshots.

    Args:
        stock_df: Recorder listing export (``day``, ``region``, ``change_percent``)

    Returns:
        Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=STANDARD_FIGSIZE)

    grouped = stock_df.groupby(['day', 'region'])['change_percent'].mean().unstack()
    for region in grouped.columns:
        ax.plot(grouped.index, grouped[region] * 100, label=region,
                color=REGION_COLORS.get(region), linewidth=THIN_LINEWIDTH, marker='o')

    ax.axhline(0, color='black', linestyle='--', linewidth=1, alpha=STANDARD_ALPHA)
    ax.set_xlabel('Day')
    ax.set_ylabel('Mean Daily Change (%)')
    ax.set_title('Daily Change by Region')
    ax.legend(title='Region')
    ax.grid(True, alpha=GRID_ALPHA)

    return fig
