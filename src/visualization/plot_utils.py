"""Utility functions for plot generation and data loading."""

from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt
import pandas as pd


def load_csv(file_path: Union[str, Path], file_description: str = "CSV file") -> Optional[pd.DataFrame]:
    """
    Load an exported CSV file.

    Args:
        file_path: Path to the CSV file
        file_description: Human-readable description used in messages

    Returns:
        pd.DataFrame, or None if the file is missing or holds no rows
    """
    file_path = Path(file_path)
    if not file_path.exists():
        print(f"  {file_description.capitalize()} file not found: {file_path}")
        return None

    try:
        df = pd.read_csv(file_path)
    except pd.errors.EmptyDataError:
        print(f"  {file_description.capitalize()} file is empty: {file_path}")
        return None

    if df.empty:
        print(f"  {file_description.capitalize()} file exists but has no rows")
        return None
    return df


def save_plot(fig, base_name: str, scenario_name: str, plots_dir: Path, close: bool = True) -> Path:
    """
    Save a plot as ``<base_name>_<scenario_name>.png`` under ``plots_dir``.

    Args:
        fig: Matplotlib figure to save
        base_name: Base name for the plot file (without extension)
        scenario_name: Name of the scenario (appended to filename)
        plots_dir: Output directory
        close: Whether to close the figure after saving

    Returns:
        Path of the written file
    """
    path = Path(plots_dir) / f'{base_name}_{scenario_name}.png'
    try:
        fig.savefig(path)
        print(f"  Saved plot: {base_name}")
    finally:
        if close:
            plt.close(fig)
    return path
