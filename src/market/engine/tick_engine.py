"""Intraday price update."""
from datetime import datetime

from agents.agent_manager.services.agent_decision_service import AgentDecisionService, TickFlows
from constants import HOURS_PER_DAY, MIN_PRICE, TRADING_SESSION_HOURS
from market.market_hours import is_market_open


class TickEngine:
    """Advances every listed stock through one sub-day slice.

    Per tick: AI investors trade (outside the bootstrap period), then each
    stock's close drifts by inflation net of operating tax, moves with net
    order flow (or a random walk during bootstrap) while its region is open,
    and is floored at ``MIN_PRICE``.
    """

    def __init__(self, config, rng, decision_service: AgentDecisionService):
        self.config = config
        self.rng = rng
        self.decision_service = decision_service

    def in_bootstrap(self, day: int) -> bool:
        return day < self.config.initial_history_length + self.config.bootstrap_days

    def run_tick(self, state, moment: datetime, tick_hours: float) -> TickFlows:
        """Mutates ``state`` (which the caller owns) and returns the tick's order flow."""
        bootstrap = self.in_bootstrap(state.day)
        flows = TickFlows() if bootstrap else self.decision_service.run_agents(state, moment, tick_hours)

        day_fraction = tick_hours / HOURS_PER_DAY
        for stock in state.active_stocks():
            bar = stock.current_bar
            price = bar.close
            operating_drag = self.config.operating_tax_rate(stock.sector) / 365 * day_fraction
            price *= 1 - operating_drag + self.config.inflation_rate * day_fraction

            if is_market_open(moment, stock.region):
                if bootstrap:
                    volatility = self.config.bootstrap_volatility * (tick_hours / TRADING_SESSION_HOURS)
                    price *= 1 + (self.rng.random() - 0.5) * 2 * volatility
                else:
                    net_buy = flows.net_buys.get(stock.symbol, 0)
                    pressure = net_buy / stock.shares_outstanding * self.config.price_impact_factor
                    limit = self.config.max_tick_pressure
                    price *= 1 + max(-limit, min(limit, pressure))

            price = max(MIN_PRICE, price)
            bar.close = price
            bar.high = max(bar.high, price)
            bar.low = min(bar.low, price)
            bar.volume += flows.volumes.get(stock.symbol, 0)
        return flows
