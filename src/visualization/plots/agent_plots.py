"""Investor-related visualization functions."""

import matplotlib.pyplot as plt
import pandas as pd

from visualization.plot_config import GRID_ALPHA, STANDARD_FIGSIZE, TALL_FIGSIZE, WEALTH_COLORS


def plot_net_worth_by_strategy(investor_df: pd.DataFrame):
    """
    Plot mean net worth over time per strategy, relative to each strategy's first snapshot.

    The human player starts with far more cash than the AI investors, so
    levels are normalized to make the curves comparable.

    Args:
        investor_df: Recorder investor export (``day``, ``strategy_name``, ``net_worth``)

    Returns:
        Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=STANDARD_FIGSIZE)

    grouped = investor_df.groupby(['day', 'strategy_name'])['net_worth'].mean().unstack()
    first = grouped.iloc[0].replace(0, float('nan'))
    (grouped / first).plot(kind='line', ax=ax)

    ax.axhline(1.0, color='black', linestyle='--', linewidth=1)
    ax.set_xlabel('Day')
    ax.set_ylabel('Net Worth / Initial')
    ax.set_title('Relative Net Worth by Strategy')
    ax.legend(title='Strategy', fontsize='small')
    ax.grid(True, alpha=GRID_ALPHA)

    return fig


def plot_wealth_composition_final(investor_df: pd.DataFrame):
    """
    Plot final cash and holdings per strategy as a stacked bar chart.

    Args:
        investor_df: Recorder investor export

    Returns:
        Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=STANDARD_FIGSIZE)

    final_day = investor_df['day'].max()
    final_data = investor_df[investor_df['day'] == final_day]
    wealth_components = final_data.groupby('strategy_name').agg({
        'cash': 'sum',
        'portfolio_value': 'sum',
    })

    wealth_components.plot(kind='bar', stacked=True, ax=ax, color=WEALTH_COLORS)

    ax.set_xlabel('Strategy')
    ax.set_ylabel('Value ($)')
    ax.set_title(f'Wealth Composition on Day {final_day}')
    ax.legend(['Cash', 'Holdings'])
    ax.grid(True, alpha=GRID_ALPHA, axis='y')
    plt.setp(ax.get_xticklabels(), rotation=30, ha='right')
    fig.tight_layout()

    return fig


def plot_top_investors(investor_df: pd.DataFrame, top_n: int = 10):
    """
    Plot the final net worth of the best AI investors.

    Args:
        investor_df: Recorder investor export
        top_n: Number of investors to show

    Returns:
        Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=TALL_FIGSIZE)

    final_day = investor_df['day'].max()
    final_data = investor_df[(investor_df['day'] == final_day) & ~investor_df['is_human']]
    top = final_data.nlargest(top_n, 'net_worth').iloc[::-1]

    ax.barh(top['name'], top['net_worth'], color=WEALTH_COLORS[0])
    ax.set_xlabel('Net Worth ($)')
    ax.set_title(f'Top {len(top)} AI Investors on Day {final_day}')
    ax.grid(True, alpha=GRID_ALPHA, axis='x')
    fig.tight_layout()

    return fig
