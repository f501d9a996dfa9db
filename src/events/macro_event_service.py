"""Scheduling and selection of market-wide events."""
from typing import List, Optional

from events.event_service import EventService
from events.event_types import ActiveEvent
from market.indicators.corporate_indicators import market_momentum
from scenarios.base import EventTemplate, MacroEventParams
from services.logging_service import LoggingService

BULLISH_TYPES = ('positive', 'political')
BEARISH_TYPES = ('negative', 'disaster', 'political')


class MacroEventService:
    """Emits one macro event whenever the schedule comes due.

    Selection leans on the market's 50-day momentum: in a rising market the
    pool is usually narrowed to positive and political events, in a falling
    market to negative, disaster and political ones.
    """

    def __init__(self, catalog: List[EventTemplate], params: MacroEventParams, rng, event_service: EventService):
        self.catalog = catalog
        self.params = params
        self.rng = rng
        self.event_service = event_service
        self.logger = LoggingService.get_logger('events')

    def initial_schedule(self, day: int) -> int:
        return day + self.params.first_event_min_delay + self.rng.randrange(self.params.first_event_delay_range)

    def candidate_pool(self, momentum: float) -> List[EventTemplate]:
        pool = self.catalog
        if momentum > self.params.momentum_threshold and self.rng.random() < self.params.bias_probability:
            pool = [event for event in self.catalog if event.type in BULLISH_TYPES]
        elif momentum < -self.params.momentum_threshold and self.rng.random() < self.params.bias_probability:
            pool = [event for event in self.catalog if event.type in BEARISH_TYPES]
        return pool or self.catalog

    def maybe_trigger(self, state, new_day: int) -> Optional[ActiveEvent]:
        """Emit and activate a macro event if one is due on ``new_day``."""
        if new_day < state.next_macro_event_day or not self.catalog:
            return None

        momentum = market_momentum(state.market_index_history)
        template = self.rng.choice(self.candidate_pool(momentum))
        event = self.event_service.emit_event(
            state,
            new_day,
            event_name=template.name,
            description=template.description,
            type=template.type,
            keywords=['macro', template.type, template.region or 'Global'],
            impact=dict(template.impact) if isinstance(template.impact, dict) else template.impact,
            region=template.region,
        )
        state.active_event = event
        state.next_macro_event_day = new_day + self.params.min_interval + self.rng.randrange(self.params.interval_range)
        self.logger.info(
            f"Day {new_day}: macro event '{template.name}' (momentum {momentum:+.2%}); "
            f"next macro event on day {state.next_macro_event_day}"
        )
        return event
