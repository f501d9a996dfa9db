"""Public entry points of the market simulation.

Every entry point takes a state and returns a state; the state passed in is
never modified. Typical use::

    sim = MarketSimulation(seed=42)
    state = sim.initialize_state()
    state = sim.advance_time(state, 3600)
    state = sim.player_buy_stock(state, 'human-player', 'INNV', 100)
"""
import random
from datetime import timedelta
from typing import Optional

import numpy as np
from pydantic import ValidationError

from agents.agent_manager.services.agent_decision_service import AgentDecisionService
from agents.agents_api import OrderDetails
from agents.investor_factory import build_investors
from agents.neural.neural_network import NeuralNetwork
from corporate.corporate_action_service import CorporateActionService
from events.event_service import EventService
from events.macro_event_service import MacroEventService
from exceptions import CollaboratorError, OrderRejected
from market.engine.services.trade_execution_service import TradeExecutionService
from market.engine.tick_engine import TickEngine
from market.history_generator import backfill_market_index, generate_history, initial_price_and_shares
from market.state.sim_state import CorporateAI, SimulationState, Stock
from narrative.image_service import KeywordImageService
from narrative.news_generator import MarkovNewsGenerator
from scenarios.base import SimulationConfig
from scenarios.universe import CORPORATE_NEURONS, INDICATOR_NEURONS, assign_regions, build_default_config
from services.logging_service import LoggingService
from simulation.daily_transition import DailyTransition
from simulation.learning_service import LearningService
from simulation.time_advancement import TimeAdvancer

CORPORATE_HIDDEN_LAYERS = [5]
DEFAULT_REGION = 'North America'


class MarketSimulation:
    """Wires the engines together around one configuration and one seed.

    Args:
        config: Simulation configuration; the full default universe when omitted
        seed: Seed for every random draw the engine makes; None for fresh entropy
        text_generator: Narrative collaborator, a ``MarkovNewsGenerator`` by default
        image_lookup: Image collaborator, a ``KeywordImageService`` by default
    """

    def __init__(self,
                 config: Optional[SimulationConfig] = None,
                 seed: Optional[int] = None,
                 text_generator=None,
                 image_lookup=None):
        self.config = config if config is not None else build_default_config()
        self.rng = random.Random(seed)
        self.np_rng = np.random.default_rng(seed)
        self.text_generator = text_generator if text_generator is not None else MarkovNewsGenerator(rng=self.rng)
        self.image_lookup = image_lookup if image_lookup is not None else KeywordImageService()
        self.logger = LoggingService.get_logger('simulation')
        self.trade_logger = LoggingService.get_logger('trading')

        self.execution_service = TradeExecutionService()
        self.decision_service = AgentDecisionService(
            self.config, self.rng, INDICATOR_NEURONS, self.execution_service
        )
        self.tick_engine = TickEngine(self.config, self.rng, self.decision_service)
        self.event_service = EventService(
            self.rng, self.text_generator, self.image_lookup, self.config.max_narrative_attempts
        )
        self.macro_service = MacroEventService(
            self.config.macro_events, self.config.macro, self.rng, self.event_service
        )
        self.corporate_service = CorporateActionService(
            self.config.corporate, self.config.corporate_events, CORPORATE_NEURONS, self.rng, self.event_service
        )
        self.learning_service = LearningService(self.text_generator)
        self.daily_transition = DailyTransition(
            self.config, self.learning_service, self.event_service, self.macro_service, self.corporate_service
        )
        self.time_advancer = TimeAdvancer(
            self.config, self.tick_engine, self.daily_transition, self.text_generator
        )

    def initialize_state(self) -> SimulationState:
        """Build a fresh world: seeded histories, corporate AIs and the investor population."""
        config = self.config
        day = config.initial_history_length

        definitions = list(config.stocks)
        if config.assign_regions:
            definitions = assign_regions(definitions, self.rng)
            order = {stock.symbol: i for i, stock in enumerate(config.stocks)}
            definitions.sort(key=lambda stock: order[stock.symbol])

        stocks = {}
        for definition in definitions:
            price, shares = initial_price_and_shares(definition, config, self.rng)
            stocks[definition.symbol] = Stock(
                symbol=definition.symbol,
                name=definition.name,
                sector=definition.sector,
                region=definition.region or DEFAULT_REGION,
                history=generate_history(day, price, self.rng),
                corporate_ai=self._corporate_ai(day),
                shares_outstanding=shares,
                eps=1.0 + self.rng.random() * 4.0,
            )

        investors = build_investors(
            config.population,
            INDICATOR_NEURONS,
            self.rng,
            self.np_rng,
            ai_cash=config.ai_initial_cash,
            human_cash=config.human_initial_cash,
            start_day=day,
        )

        state = SimulationState(
            day=day,
            time=config.start_date + timedelta(days=day, hours=config.initial_time_of_day_hours),
            start_date=config.start_date,
            stocks=stocks,
            investors=investors,
            market_index_history=backfill_market_index([stock.history for stock in stocks.values()]),
            next_macro_event_day=self.macro_service.initial_schedule(day),
        )
        state.text_model = self._create_text_model()

        self.logger.info(
            f"Initialized {len(stocks)} stocks and {len(investors)} investors at day {day} "
            f"({state.time.isoformat()}); first macro event on day {state.next_macro_event_day}"
        )
        return state

    def _corporate_ai(self, day: int) -> CorporateAI:
        layers = [len(CORPORATE_NEURONS), *CORPORATE_HIDDEN_LAYERS, 1]
        return CorporateAI(
            next_corporate_action_day=self.corporate_service.next_action_day(day),
            split_nn=NeuralNetwork(layers, CORPORATE_NEURONS, rng=self.np_rng),
            alliance_nn=NeuralNetwork(layers, CORPORATE_NEURONS, rng=self.np_rng),
            acquisition_nn=NeuralNetwork(layers, CORPORATE_NEURONS, rng=self.np_rng),
            learning_rate=0.01 + self.rng.random() * 0.04,
        )

    def _create_text_model(self):
        try:
            return self.text_generator.create_model()
        except Exception as e:
            self.logger.warning(str(CollaboratorError(f"Could not create text model: {e}")))
            return None

    def advance_time(self, state: SimulationState, seconds: float) -> SimulationState:
        """Simulate ``seconds`` of market time (bounded by the wall-clock budget)."""
        return self.time_advancer.advance(state, seconds)

    def player_buy_stock(self, state: SimulationState, investor_id: str, symbol: str, shares: int) -> SimulationState:
        return self._player_order(state, investor_id, symbol, shares, "Buy")

    def player_sell_stock(self, state: SimulationState, investor_id: str, symbol: str, shares: int) -> SimulationState:
        return self._player_order(state, investor_id, symbol, shares, "Sell")

    def _player_order(self, state: SimulationState, investor_id: str, symbol: str, shares: int,
                      decision: str) -> SimulationState:
        """Fill a player order against the current close, or return ``state`` untouched.

        Player orders are not gated by market hours and do not count towards
        the traded volume of the bar.
        """
        try:
            order = OrderDetails(decision=decision, quantity=shares, stock_id=symbol)
        except ValidationError as e:
            self.trade_logger.info(f"Rejected {decision.lower()} order from {investor_id}: {e.errors()[0]['msg']}")
            return state

        investor = state.get_investor(investor_id)
        if investor is None:
            self.trade_logger.info(f"Rejected {decision.lower()} order: unknown investor {investor_id}")
            return state

        staged = state.with_investor(investor.clone())
        try:
            self.execution_service.execute_order(
                staged, investor_id, order, source='player', enforce_market_hours=False
            )
        except OrderRejected as e:
            self.trade_logger.info(f"Rejected {decision.lower()} order from {investor_id}: {e.reason}")
            return state
        return staged


_default_simulation: Optional[MarketSimulation] = None


def get_default_simulation() -> MarketSimulation:
    global _default_simulation
    if _default_simulation is None:
        _default_simulation = MarketSimulation()
    return _default_simulation


def initialize_state() -> SimulationState:
    return get_default_simulation().initialize_state()


def advance_time(state: SimulationState, seconds: float) -> SimulationState:
    return get_default_simulation().advance_time(state, seconds)


def player_buy_stock(state: SimulationState, investor_id: str, symbol: str, shares: int) -> SimulationState:
    return get_default_simulation().player_buy_stock(state, investor_id, symbol, shares)


def player_sell_stock(state: SimulationState, investor_id: str, symbol: str, shares: int) -> SimulationState:
    return get_default_simulation().player_sell_stock(state, investor_id, symbol, shares)
