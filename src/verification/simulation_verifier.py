"""
SimulationVerifier: checks a simulation state against the engine's invariants.

Each check returns a list of human-readable violations; ``verify`` runs them
all, logs the outcome on the ``verification`` logger and returns every
violation found. An empty list means the state is consistent.
"""

from typing import List, Optional

from constants import FLOAT_TOLERANCE, MAX_EVENT_HISTORY, MAX_PORTFOLIO_HISTORY, MIN_PRICE
from services.logging_service import LoggingService


class SimulationVerifier:
    """
    Verifies simulation state invariants and detects accounting errors.

    Args:
        max_history_length: Bound on per-stock and market-index history; skipped when None
    """

    def __init__(self, max_history_length: Optional[int] = None):
        self.max_history_length = max_history_length
        self.logger = LoggingService.get_logger('verification')

    def verify(self, state) -> List[str]:
        """Run every check against ``state`` and return all violations."""
        self.logger.info(f"\n=== Verifying state at day {state.day} ({state.time.isoformat()}) ===")

        violations = []
        violations += self.verify_day_time_consistency(state)
        violations += self.verify_lot_consistency(state)
        violations += self.verify_cash_non_negative(state)
        violations += self.verify_price_floor(state)
        violations += self.verify_history_order(state)
        violations += self.verify_bounded_histories(state)
        violations += self.verify_market_index(state)

        if violations:
            for violation in violations:
                self.logger.error(f"INVARIANT VIOLATION: {violation}")
        else:
            self.logger.info("✓ All invariants hold")
        return violations

    def verify_day_time_consistency(self, state) -> List[str]:
        expected = state.day_from_time()
        if state.day != expected:
            return [f"day {state.day} does not match elapsed time (expected {expected})"]
        return []

    def verify_lot_consistency(self, state) -> List[str]:
        """Every lot is positive and belongs to a known stock"""
        violations = []
        for investor in state.investors.values():
            for symbol, lots in investor.portfolio.items():
                if symbol not in state.stocks:
                    violations.append(f"{investor.id} holds unknown symbol {symbol}")
                if not lots:
                    violations.append(f"{investor.id} has an empty lot list for {symbol}")
                for lot in lots:
                    if lot.shares <= 0:
                        violations.append(f"{investor.id} has a non-positive lot of {symbol}: {lot.shares}")
                purchase_times = [lot.purchase_time for lot in lots]
                if purchase_times != sorted(purchase_times):
                    violations.append(f"{investor.id} lots for {symbol} are not in purchase order")
        return violations

    def verify_cash_non_negative(self, state) -> List[str]:
        """Trading never overdraws cash; only tax settlement may take it below zero"""
        violations = []
        for investor in state.investors.values():
            if investor.cash < -FLOAT_TOLERANCE and investor.total_taxes_paid <= 0:
                violations.append(f"{investor.id} has negative cash ${investor.cash:.2f}")
        return violations

    def verify_price_floor(self, state) -> List[str]:
        violations = []
        for stock in state.stocks.values():
            bar = stock.current_bar
            if bar.close < MIN_PRICE - FLOAT_TOLERANCE:
                violations.append(f"{stock.symbol} close {bar.close} is below the price floor")
            if bar.low > bar.high + FLOAT_TOLERANCE:
                violations.append(f"{stock.symbol} bar has low {bar.low} above high {bar.high}")
        return violations

    def verify_history_order(self, state) -> List[str]:
        violations = []
        for stock in state.stocks.values():
            days = [bar.day for bar in stock.history]
            if any(later <= earlier for earlier, later in zip(days, days[1:])):
                violations.append(f"{stock.symbol} history days are not strictly increasing")
        return violations

    def verify_bounded_histories(self, state) -> List[str]:
        violations = []
        if len(state.event_history) > MAX_EVENT_HISTORY:
            violations.append(f"event history holds {len(state.event_history)} events")
        for investor in state.investors.values():
            if len(investor.portfolio_history) > MAX_PORTFOLIO_HISTORY:
                violations.append(f"{investor.id} portfolio history holds {len(investor.portfolio_history)} points")
        if self.max_history_length is not None:
            for stock in state.stocks.values():
                if len(stock.history) > self.max_history_length:
                    violations.append(f"{stock.symbol} history holds {len(stock.history)} bars")
            if len(state.market_index_history) > self.max_history_length:
                violations.append(f"market index history holds {len(state.market_index_history)} points")
        return violations

    def verify_market_index(self, state) -> List[str]:
        """Index points are positive and never lie beyond the current day"""
        violations = []
        for point in state.market_index_history:
            if point.price <= 0:
                violations.append(f"market index level {point.price} on day {point.day} is not positive")
            if point.day > state.day:
                violations.append(f"market index point for future day {point.day}")
        return violations
