"""Event emission and narrative enrichment."""
from typing import Iterable, List, Optional

from constants import ARTICLE_EVALUATION_HORIZON, MAX_EVENT_HISTORY
from events.event_types import ActiveEvent
from exceptions import CollaboratorError
from market.state.sim_state import TrackedArticle
from services.logging_service import LoggingService


class EventService:
    """Records new events and attaches generated narrative to them.

    Narrative collaborators are allowed to fail. A failed enrichment leaves
    the event with its placeholder headline and ``narrative_pending`` set;
    ``retry_pending_narratives`` tries again on later days, up to
    ``max_attempts`` per event.
    """

    def __init__(self, rng, text_generator, image_lookup, max_attempts: int = 3):
        self.rng = rng
        self.text_generator = text_generator
        self.image_lookup = image_lookup
        self.max_attempts = max_attempts
        self.logger = LoggingService.get_logger('events')

    def emit_event(
        self,
        state,
        day: int,
        event_name: str,
        description: str,
        type: str,
        keywords: Iterable[Optional[str]],
        **details,
    ) -> ActiveEvent:
        """Create an event, push it onto the history and try to enrich it.

        ``details`` are passed through to ``ActiveEvent`` (stock_symbol,
        stock_name, impact, region, split/merger/alliance details).
        """
        event = ActiveEvent(
            id=f"{day}-{self.rng.getrandbits(48):012x}",
            day=day,
            event_name=event_name,
            description=description,
            type=type,
            keywords=[keyword for keyword in keywords if keyword],
            **details,
        )
        state.event_history.insert(0, event)
        del state.event_history[MAX_EVENT_HISTORY:]

        self.enrich(state, event)
        LoggingService.log_event(event)
        return event

    def enrich(self, state, event: ActiveEvent) -> bool:
        """Generate narrative and image for ``event``; True when nothing is left pending."""
        event.narrative_attempts += 1
        text_done = not event.narrative_pending or bool(event.summary)
        if not text_done:
            text_done = self._generate_text(state, event)
        image_done = bool(event.image_url) or self._lookup_image(event)
        event.narrative_pending = not (text_done and image_done)
        return not event.narrative_pending

    def _generate_text(self, state, event: ActiveEvent) -> bool:
        try:
            if state.text_model is None:
                state.text_model = self.text_generator.create_model()
            result = self.text_generator.generate(event, state)
        except Exception as e:
            error = CollaboratorError(f"Text generation failed for event {event.id}: {e}")
            self.logger.warning(str(error))
            return False

        event.headline = result.article.headline
        event.summary = result.article.summary
        event.full_text = result.article.full_text

        stock = state.get_stock(event.stock_symbol) if event.stock_symbol else None
        state.tracked_articles.append(TrackedArticle(
            event_id=event.id,
            evaluation_day=event.day + ARTICLE_EVALUATION_HORIZON,
            generated_text=result.generated_text,
            starting_market_index=state.current_market_index,
            stock_symbol=stock.symbol if stock else None,
            starting_stock_price=stock.current_price if stock else None,
        ))
        return True

    def _lookup_image(self, event: ActiveEvent) -> bool:
        try:
            event.image_url = self.image_lookup.lookup(event.headline, *event.keywords)
        except Exception as e:
            error = CollaboratorError(f"Image lookup failed for event {event.id}: {e}")
            self.logger.warning(str(error))
            return False
        return bool(event.image_url)

    def retry_pending_narratives(self, state) -> List[ActiveEvent]:
        """Retry enrichment for pending events still in the history."""
        completed = []
        for event in state.event_history:
            if not event.narrative_pending or event.narrative_attempts >= self.max_attempts:
                continue
            if self.enrich(state, event):
                self.logger.info(f"Narrative for event {event.id} completed on attempt {event.narrative_attempts}")
                completed.append(event)
        return completed
