"""Moving simulated time forward in bounded chunks."""
import time
from datetime import timedelta

from exceptions import CollaboratorError
from market.engine.tick_engine import TickEngine
from services.logging_service import LoggingService
from simulation.daily_transition import DailyTransition


class TimeAdvancer:
    """Advances a state by a number of simulated seconds.

    Time moves in chunks of ``config.time_chunk_seconds``. A chunk is split
    at every midnight it crosses: each part before a midnight is ticked, the
    daily transition runs exactly at that boundary, then the remainder is
    ticked under the new day. A wall-clock budget (``config.max_real_time_ms``)
    bounds the real time spent per call; when it runs out the state is
    returned with whatever progress was made.
    """

    def __init__(self, config, tick_engine: TickEngine, daily_transition: DailyTransition, text_generator):
        self.config = config
        self.tick_engine = tick_engine
        self.daily_transition = daily_transition
        self.text_generator = text_generator
        self.logger = LoggingService.get_logger('simulation')

    def advance(self, state, seconds: float):
        if seconds <= 0:
            return state

        state = state.clone()
        target = state.time + timedelta(seconds=seconds)
        chunk = timedelta(seconds=self.config.time_chunk_seconds)
        budget_ms = self.config.max_real_time_ms
        started = time.perf_counter()

        current = state.time
        while current < target:
            if budget_ms is not None and (time.perf_counter() - started) * 1000 >= budget_ms:
                self.logger.info(
                    f"Wall-clock budget of {budget_ms:.0f}ms exhausted at {current.isoformat()}; "
                    f"{(target - current).total_seconds():.0f}s left unsimulated"
                )
                break

            chunk_end = min(target, current + chunk)
            start = current
            midnight = state.date_for_day(state.day_from_time(start) + 1)
            while chunk_end >= midnight:
                self._tick(state, start, midnight)
                new_day = state.day_from_time(midnight)
                self.daily_transition.run(state, new_day)
                state.day = new_day
                start = midnight
                midnight = state.date_for_day(new_day + 1)
            self._tick(state, start, chunk_end)

            current = chunk_end
            state.time = current

        state.time = current
        state.day = state.day_from_time(current)
        if state.text_model is not None:
            self._refine_text_model(state)
        return state

    def _refine_text_model(self, state) -> None:
        try:
            state.text_model = self.text_generator.refine(state.text_model)
        except Exception as e:
            error = CollaboratorError(f"Text model refinement failed at {state.time.isoformat()}: {e}")
            self.logger.warning(str(error))

    def _tick(self, state, start, end) -> None:
        seconds = (end - start).total_seconds()
        if seconds > 0:
            self.tick_engine.run_tick(state, start, seconds / 3600)
