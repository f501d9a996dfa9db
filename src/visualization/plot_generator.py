"""Main orchestrator for generating all simulation plots."""

from pathlib import Path
from typing import List

from visualization.plot_utils import load_csv, save_plot
from visualization.plots import agent_plots, price_plots


class PlotGenerator:
    """Builds every chart from the CSV exports of a finished run."""

    def __init__(self, data_dir: Path, plots_dir: Path, scenario_name: str):
        """
        Initialize the plot generator.

        Args:
            data_dir: Directory written by ``DataRecorder.save_simulation_data``
            plots_dir: Directory to write PNG files into
            scenario_name: Appended to every file name
        """
        self.data_dir = Path(data_dir)
        self.plots_dir = Path(plots_dir)
        self.plots_dir.mkdir(parents=True, exist_ok=True)
        self.scenario_name = scenario_name
        self.saved: List[Path] = []

    def save_all_plots(self) -> List[Path]:
        """Generate and save all plots; returns the written files."""
        print("Generating plots...")

        self._generate_price_plots()
        self._generate_investor_plots()

        print("All plots generated successfully!")
        return self.saved

    def _save(self, fig, base_name: str):
        self.saved.append(save_plot(fig, base_name, self.scenario_name, self.plots_dir))

    def _generate_price_plots(self):
        """Generate index and stock price plots."""
        print("  Processing price data...")

        index_df = load_csv(self.data_dir / 'market_index.csv', "market index")
        if index_df is not None:
            events_df = load_csv(self.data_dir / 'events.csv', "events")
            self._save(price_plots.plot_market_index(index_df, events_df), 'market_index')

        history_df = load_csv(self.data_dir / 'stock_history.csv', "stock history")
        if history_df is not None:
            self._save(price_plots.plot_stock_prices(history_df), 'stock_prices')

        stock_df = load_csv(self.data_dir / 'stock_data.csv', "stock data")
        if stock_df is not None and stock_df['day'].nunique() > 1:
            self._save(price_plots.plot_regional_returns(stock_df), 'regional_returns')

    def _generate_investor_plots(self):
        """Generate investor wealth plots."""
        print("  Processing investor data...")

        investor_df = load_csv(self.data_dir / 'investor_data.csv', "investor data")
        if investor_df is None:
            return

        self._save(agent_plots.plot_net_worth_by_strategy(investor_df), 'net_worth_by_strategy')
        self._save(agent_plots.plot_wealth_composition_final(investor_df), 'wealth_composition')
        if (~investor_df['is_human']).any():
            self._save(agent_plots.plot_top_investors(investor_df), 'top_investors')
