"""Autonomous corporate decisions: splits, alliances and acquisitions."""
import math
from typing import Dict, List, Optional

from constants import CORPORATE_EVALUATION_HORIZONS
from events.event_service import EventService
from events.event_types import ActiveEvent, AllianceDetails, MergerDetails, SplitDetails
from market.indicators.corporate_indicators import calculate_corporate_indicators
from market.indicators.technical_indicators import indicator_vector
from market.state.sim_state import TrackedCorporateAction
from scenarios.base import CorporateActionParams, SectorEventCatalog
from services.logging_service import LoggingService


class CorporateActionService:
    """Runs each stock's corporate AI once per day.

    A stock whose action day has come evaluates, in strict priority, a split,
    then an alliance, then an acquisition; the first that clears its
    threshold is taken. Stocks that take no action may instead get a minor
    sector news item.
    """

    def __init__(self, params: CorporateActionParams, catalog: Dict[str, SectorEventCatalog],
                 indicator_names: List[str], rng, event_service: EventService):
        self.params = params
        self.catalog = catalog
        self.indicator_names = indicator_names
        self.rng = rng
        self.event_service = event_service
        self.logger = LoggingService.get_logger('corporate')

    def next_action_day(self, day: int) -> int:
        return day + self.params.min_action_interval + self.rng.randrange(self.params.action_interval_range)

    def run_day(self, state, new_day: int, daily_impacts: Dict[str, float]) -> List[ActiveEvent]:
        """Evaluate every listed stock; multiplies ``daily_impacts`` in place."""
        events = []
        for stock in list(state.stocks.values()):
            if stock.is_delisted:
                continue

            event = None
            if new_day >= stock.corporate_ai.next_corporate_action_day:
                event = self._decide(state, stock, new_day, daily_impacts)
                if event is not None:
                    stock.corporate_ai.next_corporate_action_day = self.next_action_day(new_day)

            if event is None and self.rng.random() < self.params.minor_event_probability:
                event = self._minor_event(state, stock, new_day, daily_impacts)
            if event is not None:
                events.append(event)
        return events

    def _decide(self, state, stock, new_day: int, daily_impacts: Dict[str, float]) -> Optional[ActiveEvent]:
        indicators = calculate_corporate_indicators(
            stock, state.stocks.values(), state.market_index_history, state.event_history
        )
        inputs = indicator_vector(indicators, self.indicator_names)
        price = stock.current_bar.open
        ai = stock.corporate_ai

        split_score = ai.split_nn.feed_forward(inputs)[0]
        if split_score > self.params.split_threshold and price > self.params.min_split_price:
            return self._split(state, stock, new_day, price, inputs)

        alliance_score = ai.alliance_nn.feed_forward(inputs)[0]
        if alliance_score > self.params.alliance_threshold:
            return self._alliance(state, stock, new_day, price, inputs, daily_impacts)

        acquisition_score = ai.acquisition_nn.feed_forward(inputs)[0]
        if acquisition_score > self.params.acquisition_threshold:
            return self._acquisition(state, stock, new_day, price, inputs, daily_impacts)
        return None

    def _track(self, state, stock, new_day: int, action_type: str, inputs, starting_price: float):
        state.tracked_corporate_actions.append(TrackedCorporateAction(
            start_day=new_day,
            evaluation_day=new_day + CORPORATE_EVALUATION_HORIZONS[action_type],
            stock_symbol=stock.symbol,
            action_type=action_type,
            indicator_values=list(inputs),
            starting_stock_price=starting_price,
            starting_market_index=state.current_market_index,
        ))

    def _counterparties(self, state, stock, extra_filter=None) -> List:
        def eligible(other):
            return (
                other.symbol != stock.symbol
                and not other.is_delisted
                and other.sector == stock.sector
                and (extra_filter is None or extra_filter(other))
            )

        candidates = [other for other in state.stocks.values() if eligible(other) and other.region == stock.region]
        if not candidates or self.rng.random() < self.params.partner_fallback_probability:
            candidates = [other for other in state.stocks.values() if eligible(other)]
        return candidates

    def _split(self, state, stock, new_day: int, price: float, inputs) -> ActiveEvent:
        ratio = max(2, math.floor(price / 100))
        event = self.event_service.emit_event(
            state, new_day,
            event_name=f"Announces {ratio}-for-1 Stock Split",
            description=f"The board has approved a {ratio}-for-1 stock split.",
            type='split',
            keywords=[stock.sector, stock.name, 'split'],
            stock_symbol=stock.symbol,
            stock_name=stock.name,
            split_details=SplitDetails(symbol=stock.symbol, ratio=ratio),
        )
        stock.apply_split(ratio)
        self._track(state, stock, new_day, 'split', inputs, price / ratio)
        self.logger.info(f"Day {new_day}: {stock.symbol} splits {ratio}-for-1 at ${price:.2f}")
        return event

    def _alliance(self, state, stock, new_day, price, inputs, daily_impacts) -> Optional[ActiveEvent]:
        partners = self._counterparties(state, stock)
        if not partners:
            return None
        partner = self.rng.choice(partners)
        event = self.event_service.emit_event(
            state, new_day,
            event_name=f"Forms Alliance with {partner.name}",
            description="A strategic alliance to collaborate on new technologies.",
            type='alliance',
            keywords=[stock.sector, 'alliance', partner.name],
            stock_symbol=stock.symbol,
            stock_name=stock.name,
            alliance_details=AllianceDetails(partners=[stock.symbol, partner.symbol]),
        )
        daily_impacts[stock.symbol] = daily_impacts.get(stock.symbol, 1.0) * self.params.alliance_bump
        daily_impacts[partner.symbol] = daily_impacts.get(partner.symbol, 1.0) * self.params.alliance_bump
        self._track(state, stock, new_day, 'alliance', inputs, price)
        self.logger.info(f"Day {new_day}: {stock.symbol} forms alliance with {partner.symbol}")
        return event

    def _acquisition(self, state, stock, new_day, price, inputs, daily_impacts) -> Optional[ActiveEvent]:
        max_target_cap = price * stock.shares_outstanding * self.params.max_target_cap_ratio
        targets = self._counterparties(
            state, stock, lambda other: other.current_bar.open * other.shares_outstanding < max_target_cap
        )
        if not targets:
            return None
        target = self.rng.choice(targets)
        event = self.event_service.emit_event(
            state, new_day,
            event_name=f"Acquires {target.name}",
            description="An acquisition to consolidate market share.",
            type='merger',
            keywords=[stock.sector, 'acquisition', target.name],
            stock_symbol=stock.symbol,
            stock_name=stock.name,
            merger_details=MergerDetails(acquiring=stock.symbol, acquired=target.symbol),
        )
        daily_impacts[stock.symbol] = daily_impacts.get(stock.symbol, 1.0) * self.params.acquirer_bump
        # Delisted stocks are skipped when impacts apply, so the target freezes at its pre-bump close
        daily_impacts[target.symbol] = daily_impacts.get(target.symbol, 1.0) * self.params.target_bump
        self._track(state, stock, new_day, 'acquisition', inputs, price)
        target.is_delisted = True
        self.logger.info(f"Day {new_day}: {stock.symbol} acquires {target.symbol}; {target.symbol} delisted")
        return event

    def _minor_event(self, state, stock, new_day: int, daily_impacts: Dict[str, float]) -> Optional[ActiveEvent]:
        catalog = self.catalog.get(stock.sector)
        if catalog is None:
            return None
        if self.rng.random() < self.params.minor_event_neutral_share:
            event_type = 'neutral'
        else:
            event_type = self.rng.choice(('positive', 'negative'))
        pool = catalog.pool(event_type)
        if not pool:
            return None
        template = self.rng.choice(pool)
        event = self.event_service.emit_event(
            state, new_day,
            event_name=template.name,
            description=template.description,
            type=template.type,
            keywords=[stock.sector, stock.name, template.type],
            stock_symbol=stock.symbol,
            stock_name=stock.name,
            impact=template.impact,
        )
        if isinstance(template.impact, (int, float)):
            daily_impacts[stock.symbol] = daily_impacts.get(stock.symbol, 1.0) * template.impact
        return event
