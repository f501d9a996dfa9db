from dataclasses import dataclass
from datetime import datetime
from typing import Literal


@dataclass
class Trade:
    """
    Represents a completed trade between an investor and the market
    """
    investor_id: str
    symbol: str
    side: Literal['buy', 'sell']
    shares: int
    price: float
    timestamp: datetime
    day: int
    source: Literal['agent', 'player'] = 'agent'

    def __post_init__(self):
        """Validate trade data and compute additional fields"""
        if self.shares <= 0:
            raise ValueError("Trade shares must be positive")
        if self.price <= 0:
            raise ValueError("Trade price must be positive")

        self.value = self.shares * self.price

    @property
    def signed_shares(self) -> int:
        """Net buy volume contributed by this trade"""
        return self.shares if self.side == 'buy' else -self.shares

    def to_dict(self):
        """Convert trade to dictionary for logging/storage"""
        return {
            'investor_id': self.investor_id,
            'symbol': self.symbol,
            'side': self.side,
            'shares': self.shares,
            'price': self.price,
            'value': self.value,
            'timestamp': self.timestamp,
            'day': self.day,
            'source': self.source,
        }

    def __str__(self):
        """String representation for logging"""
        return (
            f"Trade: {self.side.upper()} {self.symbol} {self.shares} @ ${self.price:.2f}"
            f" (Investor: {self.investor_id}, Day: {self.day}, Source: {self.source})"
        )
