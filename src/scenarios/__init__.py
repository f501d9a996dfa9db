"""
Scenarios Package

Named configuration presets for the market simulation:
- get_scenario(name): Get a scenario by name
- list_scenarios(): List all available scenarios

Scenarios:
- default: the full universe and investor population
- small_universe: a handful of stocks and agents for quick runs and tests
- realistic_seed: full universe seeded from sector reference prices
"""

from typing import Dict

from .base import AgentPopulation, SimulationConfig, SimulationScenario, StockDefinition
from .universe import build_default_config

SMALL_UNIVERSE = [
    StockDefinition(symbol='INNV', name='Innovate Corp', sector='Technology', region='North America'),
    StockDefinition(symbol='TECH', name='TechGen Inc.', sector='Technology', region='North America'),
    StockDefinition(symbol='HLTH', name='HealthSphere', sector='Health', region='North America'),
    StockDefinition(symbol='ENRG', name='Syner-G', sector='Energy', region='Europe'),
    StockDefinition(symbol='FINX', name='FinEx Solutions', sector='Finance', region='Europe'),
    StockDefinition(symbol='QUAN', name='Quantum Leap', sector='Technology', region='Asia'),
    StockDefinition(symbol='AQUA', name='AquaPure', sector='Industrials', region='Asia'),
    StockDefinition(symbol='SOLR', name='Solaris Energy', sector='Energy', region='North America'),
]

SCENARIOS = {
    'default': SimulationScenario(
        name='default',
        description="Full universe with 99 AI investors, noise traders and a human player",
        config=build_default_config(),
    ),
    'small_universe': SimulationScenario(
        name='small_universe',
        description="Eight stocks across three regions with a small agent population",
        config=build_default_config(
            stocks=SMALL_UNIVERSE,
            population=AgentPopulation(
                ai_investor_count=12,
                noise_trader_count=2,
                advanced_count=2,
                elite_count=1,
                master_count=1,
            ),
        ),
    ),
    'realistic_seed': SimulationScenario(
        name='realistic_seed',
        description="Full universe seeded from sector reference prices and share counts",
        config=build_default_config(use_realistic_data=True),
    ),
}


def get_scenario(scenario_name: str) -> SimulationScenario:
    """Get a scenario by name"""
    if scenario_name not in SCENARIOS:
        raise ValueError(f"Unknown scenario: {scenario_name}. Available scenarios: {list(SCENARIOS.keys())}")
    return SCENARIOS[scenario_name]


def list_scenarios() -> Dict[str, str]:
    """List all available scenarios and their descriptions"""
    return {name: scenario.description for name, scenario in SCENARIOS.items()}


__all__ = [
    'SimulationConfig',
    'SimulationScenario',
    'SCENARIOS',
    'get_scenario',
    'list_scenarios',
]
