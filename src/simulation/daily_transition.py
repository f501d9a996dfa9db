"""End-of-day processing run once at every midnight."""
from typing import Dict

from accounting.tax_service import settle_annual_taxes
from agents.investor import PortfolioValuePoint
from constants import MAX_PORTFOLIO_HISTORY, MIN_PRICE
from corporate.corporate_action_service import CorporateActionService
from events.event_service import EventService
from events.impact import resolve_event_impact
from events.macro_event_service import MacroEventService
from market.state.sim_state import OHLCBar, SimplePricePoint
from services.logging_service import LoggingService
from simulation.learning_service import LearningService

DAYS_PER_TAX_YEAR = 365


def _append_point(history, point, cap: int) -> None:
    """Append ``point``, replacing a point already recorded for the same day."""
    if history and history[-1].day == point.day:
        history[-1] = point
    else:
        history.append(point)
    del history[:-cap]


class DailyTransition:
    """Closes the current day and opens ``new_day``.

    The steps run in a fixed order, which matters: learning sees the closes
    of the day that just ended, snapshots are taken before the bars roll,
    and the day's impacts are applied to the freshly opened bar only after
    macro and corporate events have both contributed.
    """

    def __init__(self, config, learning_service: LearningService, event_service: EventService,
                 macro_service: MacroEventService, corporate_service: CorporateActionService):
        self.config = config
        self.learning_service = learning_service
        self.event_service = event_service
        self.macro_service = macro_service
        self.corporate_service = corporate_service
        self.logger = LoggingService.get_logger('simulation')

    def run(self, state, new_day: int) -> None:
        """Mutates ``state`` (which the caller owns); ``state.day`` is still the closing day."""
        closing_day = state.day

        self.learning_service.learn_corporate_actions(state, new_day)
        self.learning_service.learn_articles(state, new_day)
        self.learning_service.learn_trades(state, new_day)

        self._snapshot_net_worth(state, closing_day)
        self._snapshot_market_index(state, closing_day)

        if new_day % DAYS_PER_TAX_YEAR == 0:
            settle_annual_taxes(state.investors.values(), self.config.tax_regimes, new_day)

        self._roll_histories(state, new_day)

        active = state.active_event
        if active is not None and (active.is_macro or active.type == 'neutral'):
            state.active_event = None

        self.event_service.retry_pending_narratives(state)

        daily_impacts: Dict[str, float] = {symbol: 1.0 for symbol in state.stocks}
        self.macro_service.maybe_trigger(state, new_day)
        self.corporate_service.run_day(state, new_day, daily_impacts)

        if state.active_event is not None:
            for stock in state.active_stocks():
                daily_impacts[stock.symbol] *= resolve_event_impact(
                    stock, state.active_event, self.config.macro.spillover_factor
                )

        self._apply_impacts(state, daily_impacts)
        self.logger.info(
            f"Day {closing_day} -> {new_day}: index {state.current_market_index:.2f}, "
            f"{len(state.active_stocks())} listed, {len(state.event_history)} events on record"
        )

    def _snapshot_net_worth(self, state, day: int) -> None:
        prices = {symbol: stock.current_price for symbol, stock in state.stocks.items()}
        for investor in state.investors.values():
            point = PortfolioValuePoint(day=day, value=investor.net_worth(prices))
            _append_point(investor.portfolio_history, point, MAX_PORTFOLIO_HISTORY)

    def _snapshot_market_index(self, state, day: int) -> None:
        listed = state.active_stocks()
        if not listed:
            return
        level = sum(stock.current_price for stock in listed) / len(listed)
        _append_point(state.market_index_history, SimplePricePoint(day=day, price=level),
                      self.config.max_history_length)

    def _roll_histories(self, state, new_day: int) -> None:
        cap = self.config.max_history_length
        for stock in state.active_stocks():
            close = stock.current_price
            stock.history.append(OHLCBar(day=new_day, open=close, high=close, low=close, close=close, volume=0))
            del stock.history[:-cap]

    def _apply_impacts(self, state, daily_impacts: Dict[str, float]) -> None:
        for symbol, impact in daily_impacts.items():
            stock = state.stocks.get(symbol)
            if stock is None or stock.is_delisted or impact == 1.0:
                continue
            bar = stock.current_bar
            bar.close = max(MIN_PRICE, bar.close * impact)
            bar.high = max(bar.high, bar.close)
            bar.low = min(bar.low, bar.close)
