"""FIFO share lot bookkeeping and realized gain classification."""
from datetime import datetime
from typing import Dict, List, NamedTuple, Optional

from agents.investor import Investor, ShareLot
from constants import SECONDS_PER_DAY


class RealizedGain(NamedTuple):
    """Gain realized by one sale, split by holding period"""
    long_term: float
    short_term: float

    @property
    def total(self) -> float:
        return self.long_term + self.short_term


def holding_days(purchase_time: datetime, sale_time: datetime) -> float:
    return (sale_time - purchase_time).total_seconds() / SECONDS_PER_DAY


def add_lot(
    investor: Investor,
    symbol: str,
    shares: int,
    price: float,
    purchase_time: datetime,
    indicators: Optional[Dict[str, float]] = None,
) -> ShareLot:
    """Append a new lot for a purchase."""
    lot = ShareLot(
        purchase_time=purchase_time,
        purchase_price=price,
        shares=shares,
        purchase_indicators=dict(indicators or {}),
    )
    investor.portfolio.setdefault(symbol, []).append(lot)
    return lot


def consume_lots_fifo(
    investor: Investor,
    symbol: str,
    shares: int,
    sale_price: float,
    sale_time: datetime,
    long_term_holding_days: int = 365,
) -> RealizedGain:
    """Remove ``shares`` from the oldest lots first.

    A partially consumed lot keeps its purchase price and time. The symbol is
    dropped from the portfolio once its last lot is gone.

    Raises:
        ValueError: If the investor holds fewer than ``shares`` shares
    """
    lots: List[ShareLot] = investor.portfolio.get(symbol, [])
    if shares > sum(lot.shares for lot in lots):
        raise ValueError(f"Cannot sell {shares} {symbol}: only {investor.shares_owned(symbol)} held")

    long_term = 0.0
    short_term = 0.0
    remaining = shares
    kept: List[ShareLot] = []
    # sorted() is stable, so lots bought at the same instant keep insertion order
    for lot in sorted(lots, key=lambda item: item.purchase_time):
        if remaining <= 0:
            kept.append(lot)
            continue
        sold = min(lot.shares, remaining)
        gain = (sale_price - lot.purchase_price) * sold
        if holding_days(lot.purchase_time, sale_time) > long_term_holding_days:
            long_term += gain
        else:
            short_term += gain
        remaining -= sold
        if sold < lot.shares:
            lot.shares -= sold
            kept.append(lot)

    if kept:
        investor.portfolio[symbol] = kept
    else:
        del investor.portfolio[symbol]
    return RealizedGain(long_term=long_term, short_term=short_term)


def record_realized_gain(investor: Investor, gain: RealizedGain) -> None:
    investor.annual_long_term_gains += gain.long_term
    investor.annual_short_term_gains += gain.short_term
