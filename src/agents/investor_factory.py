"""Builds the investor population: network traders in tiers, noise traders and the human player."""
import math
from typing import Dict, List

import numpy as np

from agents.investor import HyperComplexStrategy, Investor, PortfolioValuePoint, RandomStrategy
from agents.neural.neural_network import NeuralNetwork
from scenarios.base import AgentPopulation
from scenarios.universe import NOISE_TRADER_NAMES, STRATEGY_NAMES

BASE_HIDDEN_LAYERS = [10, 5]

# (name prefix, strategy name, hidden layers); each tier is drawn from the one before
UPGRADE_TIERS = [
    ('Advanced Trader', "Advanced Quantitative Strategy", [15, 10, 5]),
    ('Elite Trader', "Elite Deep Learning Fund", [20, 15, 10, 5]),
    ('Master Trader', "Grandmaster Algorithmic Trading", [30, 25, 20, 15, 10]),
]
UPGRADE_LEARNING_RATE_FACTOR = 1.2
UPGRADE_RISK_AVERSION_FACTOR = 0.9

ORACLE_HIDDEN_LAYERS = [50, 50, 50, 50, 50]
ORACLE_LEARNING_RATE = 0.08
ORACLE_RISK_AVERSION = 0.1


def _network(indicator_names: List[str], hidden_layers: List[int], np_rng: np.random.Generator) -> NeuralNetwork:
    return NeuralNetwork([len(indicator_names), *hidden_layers, 1], indicator_names, rng=np_rng)


def _investor_number(investor: Investor) -> int:
    return int(investor.id.split('-')[1])


def build_investors(
    population: AgentPopulation,
    indicator_names: List[str],
    rng,
    np_rng: np.random.Generator,
    ai_cash: float,
    human_cash: float,
    start_day: int,
) -> Dict[str, Investor]:
    """Create every investor, keyed by id, with the human (if any) first.

    AI investors start as identical-architecture network traders. After a
    seeded shuffle the tail of the list becomes noise traders and the head
    is promoted through the upgrade tiers; the very first becomes the Oracle.
    """
    ai_investors = []
    for i in range(population.ai_investor_count):
        ai_investors.append(Investor(
            id=f"ai-{i + 1}",
            name=f"AI Trader #{i + 1}",
            strategy_name=STRATEGY_NAMES[i % len(STRATEGY_NAMES)],
            cash=ai_cash,
            tax_jurisdiction=population.ai_tax_jurisdiction,
            strategy=HyperComplexStrategy(
                network=_network(indicator_names, BASE_HIDDEN_LAYERS, np_rng),
                risk_aversion=0.3 + rng.random() * 0.5,
                trade_frequency=math.floor(1 + rng.random() * 14),
                learning_rate=0.005 + rng.random() * 0.045,
            ),
        ))

    rng.shuffle(ai_investors)

    for i in range(population.noise_trader_count):
        investor = ai_investors[len(ai_investors) - 1 - i]
        investor.name = NOISE_TRADER_NAMES[i % len(NOISE_TRADER_NAMES)]
        investor.strategy_name = "Randomized Algorithm"
        investor.strategy = RandomStrategy(trade_chance=population.noise_trade_chance)

    tier_sizes = [population.advanced_count, population.elite_count, population.master_count]
    for (prefix, strategy_name, hidden_layers), size in zip(UPGRADE_TIERS, tier_sizes):
        for i in range(size):
            investor = ai_investors[i]
            investor.name = f"{prefix} #{i + 1}"
            investor.strategy_name = strategy_name
            strategy = investor.strategy
            strategy.network = _network(indicator_names, hidden_layers, np_rng)
            strategy.learning_rate *= UPGRADE_LEARNING_RATE_FACTOR
            strategy.risk_aversion *= UPGRADE_RISK_AVERSION_FACTOR

    if population.include_oracle and ai_investors:
        oracle = ai_investors[0]
        oracle.name = "The Oracle"
        oracle.strategy_name = "Singularity Fund"
        oracle.strategy.network = _network(indicator_names, ORACLE_HIDDEN_LAYERS, np_rng)
        oracle.strategy.learning_rate = ORACLE_LEARNING_RATE
        oracle.strategy.risk_aversion = ORACLE_RISK_AVERSION

    ai_investors.sort(key=_investor_number)

    investors = []
    if population.include_human:
        investors.append(Investor(
            id=population.human_id,
            name="Human Player",
            is_human=True,
            cash=human_cash,
            tax_jurisdiction=population.human_tax_jurisdiction,
            strategy=RandomStrategy(trade_chance=0.0),
        ))
    investors.extend(ai_investors)

    for investor in investors:
        investor.portfolio_history.append(PortfolioValuePoint(day=start_day, value=investor.cash))
    return {investor.id: investor for investor in investors}
