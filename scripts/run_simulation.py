#!/usr/bin/env python3
"""
Run a Market Simulation Scenario

Initializes a scenario, advances it day by day for the requested number of
simulated days, verifies the state after every day and exports the results.

Usage:
    python scripts/run_simulation.py                          # default scenario, 30 days
    python scripts/run_simulation.py small_universe --days 90 --seed 7
    python scripts/run_simulation.py --list                   # list scenarios

Output:
    logs/<scenario>/YYYYMMDD_HHMMSS/
    ├── simulation.log, trading.log, ...   # one log per named logger
    ├── trades.csv, events.csv, tax_settlements.csv
    ├── metadata.json
    ├── plots/                              # PNG charts (skip with --no-plots)
    └── data/
        ├── market_index.csv, net_worth_history.csv, events.csv, ...
        └── summary_statistics.json
"""

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import sys
import json
import argparse
from datetime import datetime
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from constants import SECONDS_PER_DAY
from market.data_recorder import DataRecorder
from scenarios import get_scenario, list_scenarios
from services.logging_service import LoggingService
from simulation.market_simulation import MarketSimulation
from verification import SimulationVerifier
from visualization.plot_generator import PlotGenerator


def run_scenario(scenario_name: str, days: int, seed: int = None, unbounded: bool = True,
                 plots: bool = True) -> Path:
    """Run ``scenario_name`` for ``days`` simulated days and return the run directory."""
    scenario = get_scenario(scenario_name)
    config = scenario.config
    if unbounded:
        # A scripted run has no frame budget to respect
        config = config.model_copy(update={'max_real_time_ms': None})

    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    LoggingService.initialize(f"{scenario_name}/{run_id}")
    logger = LoggingService.get_logger('simulation')
    run_dir = LoggingService.get_run_dir()

    metadata = {
        'scenario': scenario_name,
        'description': scenario.description,
        'days': days,
        'seed': seed,
        'timestamp': run_id,
    }
    with open(run_dir / 'metadata.json', 'w') as f:
        json.dump(metadata, f, indent=4)

    simulation = MarketSimulation(config=config, seed=seed)
    verifier = SimulationVerifier(max_history_length=config.max_history_length)
    recorder = DataRecorder(LoggingService.get_data_dir())

    state = simulation.initialize_state()
    recorder.record_snapshot(state)
    for _ in range(days):
        state = simulation.advance_time(state, SECONDS_PER_DAY)
        recorder.record_snapshot(state)
        violations = verifier.verify(state)
        if violations:
            logger.warning(f"Day {state.day}: {len(violations)} invariant violations")

    recorder.save_simulation_data(state)
    if plots:
        PlotGenerator(recorder.data_dir, run_dir / 'plots', scenario_name).save_all_plots()
    logger.info(f"Finished {scenario_name} at day {state.day}; results in {run_dir}")
    return run_dir


def main():
    parser = argparse.ArgumentParser(
        description='Run a market simulation scenario',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('scenario', nargs='?', default='default', help='Scenario to run (default: default)')
    parser.add_argument('--days', type=int, default=30, help='Simulated days to run')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible run')
    parser.add_argument('--list', action='store_true', help='List available scenarios')
    parser.add_argument('--realtime', action='store_true',
                        help='Keep the wall-clock budget per advance (may leave days partially simulated)')
    parser.add_argument('--no-plots', action='store_true', help='Skip chart generation')

    args = parser.parse_args()

    if args.list:
        print("\nAvailable scenarios:")
        print("-" * 50)
        for name, description in list_scenarios().items():
            print(f"  • {name}: {description}")
        return

    try:
        run_dir = run_scenario(args.scenario, args.days, args.seed, unbounded=not args.realtime,
                               plots=not args.no_plots)
    except ValueError as e:
        print(f"✗ {e}")
        sys.exit(1)
    print(f"✓ Results saved to {run_dir}")


if __name__ == '__main__':
    main()
