"""Investors, their strategies and their share lots."""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, List, Literal, Optional, Union

from agents.neural.neural_network import NeuralNetwork


# Strategy variants form a tagged union on ``strategy_type``. The decision
# engine dispatches on the tag; 'simple' and 'complex' are reserved tiers
# that are carried in the data model but never trade.

@dataclass
class SimpleStrategy:
    price_momentum_weight: float = 0.0
    volatility_weight: float = 0.0
    risk_aversion: float = 0.5
    strategy_type: Literal['simple'] = field(default='simple', init=False)

    def clone(self) -> 'SimpleStrategy':
        return replace(self)


@dataclass
class ComplexStrategy:
    weights: Dict[str, float] = field(default_factory=dict)  # growth / value / trend / safety
    risk_aversion: float = 0.5
    trade_frequency: int = 5
    strategy_type: Literal['complex'] = field(default='complex', init=False)

    def clone(self) -> 'ComplexStrategy':
        return replace(self, weights=dict(self.weights))


@dataclass
class HyperComplexStrategy:
    """Neural-network-driven strategy"""
    network: NeuralNetwork
    risk_aversion: float
    trade_frequency: int
    learning_rate: float
    strategy_type: Literal['hyperComplex'] = field(default='hyperComplex', init=False)

    def clone(self) -> 'HyperComplexStrategy':
        return replace(self, network=self.network.clone())


@dataclass
class RandomStrategy:
    """Noise trader"""
    trade_chance: float
    strategy_type: Literal['random'] = field(default='random', init=False)

    def clone(self) -> 'RandomStrategy':
        return replace(self)


InvestorStrategy = Union[SimpleStrategy, ComplexStrategy, HyperComplexStrategy, RandomStrategy]


@dataclass
class ShareLot:
    purchase_time: datetime
    purchase_price: float
    shares: int
    purchase_indicators: Dict[str, float] = field(default_factory=dict)

    def clone(self) -> 'ShareLot':
        return replace(self, purchase_indicators=dict(self.purchase_indicators))


@dataclass
class RecentTrade:
    """A network-driven trade awaiting outcome evaluation"""
    symbol: str
    day: int
    side: Literal['buy', 'sell']
    shares: int
    price: float
    indicator_values: List[float]
    outcome_evaluation_day: int

    def clone(self) -> 'RecentTrade':
        return replace(self, indicator_values=list(self.indicator_values))


@dataclass
class PortfolioValuePoint:
    day: int
    value: float


@dataclass
class Investor:
    id: str
    name: str
    strategy: InvestorStrategy
    cash: float
    is_human: bool = False
    strategy_name: Optional[str] = None
    tax_jurisdiction: str = 'USA_WA'
    portfolio: Dict[str, List[ShareLot]] = field(default_factory=dict)
    portfolio_history: List[PortfolioValuePoint] = field(default_factory=list)
    total_taxes_paid: float = 0.0
    annual_long_term_gains: float = 0.0
    annual_short_term_gains: float = 0.0
    tax_loss_carryforward: float = 0.0
    recent_trades: List[RecentTrade] = field(default_factory=list)

    def shares_owned(self, symbol: str) -> int:
        return sum(lot.shares for lot in self.portfolio.get(symbol, []))

    def holdings(self) -> Dict[str, int]:
        return {symbol: self.shares_owned(symbol) for symbol in self.portfolio}

    def portfolio_value(self, prices: Dict[str, float]) -> float:
        return sum(self.shares_owned(symbol) * prices.get(symbol, 0.0) for symbol in self.portfolio)

    def net_worth(self, prices: Dict[str, float]) -> float:
        return self.cash + self.portfolio_value(prices)

    def clone(self) -> 'Investor':
        return replace(
            self,
            strategy=self.strategy.clone(),
            portfolio={symbol: [lot.clone() for lot in lots] for symbol, lots in self.portfolio.items()},
            portfolio_history=[replace(point) for point in self.portfolio_history],
            recent_trades=[trade.clone() for trade in self.recent_trades],
        )
