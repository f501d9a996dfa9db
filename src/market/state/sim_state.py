"""World state of the simulation.

Everything here is a plain mutable dataclass. Public entry points never
mutate the state they are given: they work on a ``clone()`` (or on a
structurally shared copy that only replaces what it touches) and return it.
"""
import copy
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from agents.investor import Investor
from agents.neural.neural_network import NeuralNetwork
from constants import SECONDS_PER_DAY
from events.event_types import ActiveEvent


@dataclass
class OHLCBar:
    """One day of price/volume history"""
    day: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def clone(self) -> 'OHLCBar':
        return replace(self)

    def rescale(self, ratio: float) -> None:
        """Divide every price field by ``ratio`` (split adjustment)."""
        self.open /= ratio
        self.high /= ratio
        self.low /= ratio
        self.close /= ratio

    def to_dict(self):
        return {
            'day': self.day,
            'open': self.open,
            'high': self.high,
            'low': self.low,
            'close': self.close,
            'volume': self.volume,
        }


@dataclass
class SimplePricePoint:
    """Single value over time (market index)"""
    day: int
    price: float


@dataclass
class CorporateAI:
    """The three decision networks owned by one stock"""
    next_corporate_action_day: int
    split_nn: NeuralNetwork
    alliance_nn: NeuralNetwork
    acquisition_nn: NeuralNetwork
    learning_rate: float

    def network_for(self, action_type: str) -> Optional[NeuralNetwork]:
        return {
            'split': self.split_nn,
            'alliance': self.alliance_nn,
            'acquisition': self.acquisition_nn,
        }.get(action_type)

    def clone(self) -> 'CorporateAI':
        return CorporateAI(
            next_corporate_action_day=self.next_corporate_action_day,
            split_nn=self.split_nn.clone(),
            alliance_nn=self.alliance_nn.clone(),
            acquisition_nn=self.acquisition_nn.clone(),
            learning_rate=self.learning_rate,
        )


@dataclass
class Stock:
    symbol: str
    name: str
    sector: str
    region: str
    history: List[OHLCBar]
    corporate_ai: CorporateAI
    shares_outstanding: float
    eps: float
    is_delisted: bool = False

    @property
    def current_bar(self) -> OHLCBar:
        return self.history[-1]

    @property
    def current_price(self) -> float:
        return self.history[-1].close

    @property
    def market_cap(self) -> float:
        return self.current_price * self.shares_outstanding

    def closes(self) -> List[float]:
        return [bar.close for bar in self.history]

    def volumes(self) -> List[float]:
        return [bar.volume for bar in self.history]

    def apply_split(self, ratio: int) -> None:
        """Rescale the whole history and EPS by ``ratio`` and multiply the share count."""
        for bar in self.history:
            bar.rescale(ratio)
        self.eps /= ratio
        self.shares_outstanding *= ratio

    def clone(self) -> 'Stock':
        return Stock(
            symbol=self.symbol,
            name=self.name,
            sector=self.sector,
            region=self.region,
            history=[bar.clone() for bar in self.history],
            corporate_ai=self.corporate_ai.clone(),
            shares_outstanding=self.shares_outstanding,
            eps=self.eps,
            is_delisted=self.is_delisted,
        )


@dataclass
class TrackedCorporateAction:
    """A corporate decision waiting for its outcome to be scored"""
    start_day: int
    evaluation_day: int
    stock_symbol: str
    action_type: str  # 'split' | 'alliance' | 'acquisition'
    indicator_values: List[float]
    starting_stock_price: float
    starting_market_index: float

    def clone(self) -> 'TrackedCorporateAction':
        return replace(self, indicator_values=list(self.indicator_values))


@dataclass
class TrackedArticle:
    """A generated article waiting for its outcome to be scored"""
    event_id: str
    evaluation_day: int
    generated_text: str
    starting_market_index: float
    stock_symbol: Optional[str] = None
    starting_stock_price: Optional[float] = None

    def clone(self) -> 'TrackedArticle':
        return replace(self)


@dataclass
class SimulationState:
    """Root snapshot of the simulated world.

    ``day`` is always ``floor((time - start_date) / 1 day)``.
    """
    day: int
    time: datetime
    start_date: datetime
    stocks: Dict[str, Stock]
    investors: Dict[str, Investor]
    active_event: Optional[ActiveEvent] = None
    event_history: List[ActiveEvent] = field(default_factory=list)
    market_index_history: List[SimplePricePoint] = field(default_factory=list)
    next_macro_event_day: int = 0
    tracked_corporate_actions: List[TrackedCorporateAction] = field(default_factory=list)
    tracked_articles: List[TrackedArticle] = field(default_factory=list)
    text_model: Any = None

    def active_stocks(self) -> List[Stock]:
        return [stock for stock in self.stocks.values() if not stock.is_delisted]

    def get_stock(self, symbol: str) -> Optional[Stock]:
        return self.stocks.get(symbol)

    def get_investor(self, investor_id: str) -> Optional[Investor]:
        return self.investors.get(investor_id)

    @property
    def current_market_index(self) -> float:
        if not self.market_index_history:
            return 0.0
        return self.market_index_history[-1].price

    def day_from_time(self, moment: Optional[datetime] = None) -> int:
        moment = moment if moment is not None else self.time
        elapsed = (moment - self.start_date).total_seconds()
        return int(elapsed // SECONDS_PER_DAY)

    def date_for_day(self, day: int) -> datetime:
        return self.start_date + timedelta(days=day)

    def clone(self) -> 'SimulationState':
        """Deep copy built from each entity's own ``clone``.

        The active event is shared by identity with the head of the event
        history, so it is re-pointed rather than copied twice.
        """
        event_history = [event.clone() for event in self.event_history]
        active_event = None
        if self.active_event is not None:
            active_event = next(
                (clone for original, clone in zip(self.event_history, event_history)
                 if original is self.active_event),
                None
            )
            if active_event is None:
                active_event = self.active_event.clone()

        text_model = self.text_model
        if text_model is not None:
            text_model = text_model.clone() if hasattr(text_model, 'clone') else copy.deepcopy(text_model)

        return SimulationState(
            day=self.day,
            time=self.time,
            start_date=self.start_date,
            stocks={symbol: stock.clone() for symbol, stock in self.stocks.items()},
            investors={investor_id: investor.clone() for investor_id, investor in self.investors.items()},
            active_event=active_event,
            event_history=event_history,
            market_index_history=[replace(point) for point in self.market_index_history],
            next_macro_event_day=self.next_macro_event_day,
            tracked_corporate_actions=[action.clone() for action in self.tracked_corporate_actions],
            tracked_articles=[article.clone() for article in self.tracked_articles],
            text_model=text_model,
        )

    def with_investor(self, investor: Investor) -> 'SimulationState':
        """Structurally shared copy with one investor replaced.

        Stocks, events and histories are shared with ``self``; only the
        investors mapping is new. Used by player orders, which touch nothing
        else.
        """
        investors = dict(self.investors)
        investors[investor.id] = investor
        return replace(self, investors=investors)
