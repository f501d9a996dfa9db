"""Simulation configuration models.

Static tables (stock universe, event catalogs, tax regimes, operating-tax
rates) are configuration: the engine receives them through
``SimulationConfig`` instead of reading module globals, so tests can run
against small synthetic universes.
"""
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

Region = Literal['North America', 'Europe', 'Asia']
REGIONS = ('North America', 'Europe', 'Asia')


class StockDefinition(BaseModel):
    """One listed company in the universe"""
    symbol: str
    name: str
    sector: str
    region: Optional[Region] = None  # assigned at build time when missing
    reference_price: Optional[float] = Field(default=None, gt=0)
    reference_shares: Optional[float] = Field(default=None, gt=0)


class EventTemplate(BaseModel):
    """Catalog entry for a macro or minor corporate event"""
    name: str
    description: str
    type: Literal['positive', 'negative', 'neutral', 'political', 'disaster']
    impact: Union[float, Dict[str, float], None] = None
    region: Optional[Union[Region, Literal['Global']]] = None
    category: Optional[str] = None


class SectorEventCatalog(BaseModel):
    positive: List[EventTemplate] = Field(default_factory=list)
    negative: List[EventTemplate] = Field(default_factory=list)
    neutral: List[EventTemplate] = Field(default_factory=list)

    def pool(self, event_type: str) -> List[EventTemplate]:
        return getattr(self, event_type)


class TaxRegime(BaseModel):
    """Capital gains tax rules for one jurisdiction.

    Gains realized on lots held longer than ``long_term_holding_days`` are
    long-term. Tax is owed on the part of each bucket's annual net gain that
    exceeds ``exemption`` (the exemption applies to long-term gains first).
    """
    name: str
    long_term_rate: float = Field(ge=0, le=1)
    short_term_rate: float = Field(default=0.0, ge=0, le=1)
    exemption: float = Field(default=0.0, ge=0)
    long_term_holding_days: int = 365
    allow_loss_carryforward: bool = False


class AgentPopulation(BaseModel):
    """How many AI investors of each tier to build"""
    ai_investor_count: int = Field(default=99, ge=0)
    noise_trader_count: int = Field(default=5, ge=0)
    noise_trade_chance: float = 0.05
    advanced_count: int = 5
    elite_count: int = 3
    master_count: int = 2
    include_oracle: bool = True
    include_human: bool = True
    human_id: str = 'human-player'
    human_tax_jurisdiction: str = 'USA_WA'
    ai_tax_jurisdiction: str = 'USA_WA'

    @model_validator(mode='after')
    def validate_tiers(self):
        upgraded = max(self.advanced_count, self.elite_count, self.master_count, int(self.include_oracle))
        if self.noise_trader_count + upgraded > self.ai_investor_count:
            raise ValueError("Tier upgrades and noise traders exceed the AI investor count")
        if not (self.advanced_count >= self.elite_count >= self.master_count):
            raise ValueError("Tiers must be nested: advanced >= elite >= master")
        return self


class CorporateActionParams(BaseModel):
    split_threshold: float = 0.9
    alliance_threshold: float = 0.92
    acquisition_threshold: float = 0.95
    min_split_price: float = 250.0
    min_action_interval: int = 20
    action_interval_range: int = 30
    alliance_bump: float = 1.03
    acquirer_bump: float = 1.05
    target_bump: float = 1.15
    max_target_cap_ratio: float = 0.5
    partner_fallback_probability: float = 0.1
    minor_event_probability: float = 0.15
    minor_event_neutral_share: float = 0.8


class MacroEventParams(BaseModel):
    first_event_min_delay: int = 200
    first_event_delay_range: int = 165
    min_interval: int = 15
    interval_range: int = 20
    momentum_threshold: float = 0.05
    bias_probability: float = 0.7
    spillover_factor: float = 0.25


class SimulationConfig(BaseModel):
    """Everything the engine needs besides the state itself"""
    stocks: List[StockDefinition]
    macro_events: List[EventTemplate]
    corporate_events: Dict[str, SectorEventCatalog]
    tax_regimes: Dict[str, TaxRegime]
    operating_tax_rates: Dict[str, float] = Field(default_factory=dict)  # annual, by sector + 'default'
    population: AgentPopulation = Field(default_factory=AgentPopulation)
    corporate: CorporateActionParams = Field(default_factory=CorporateActionParams)
    macro: MacroEventParams = Field(default_factory=MacroEventParams)

    use_realistic_data: bool = False
    assign_regions: bool = True
    start_date: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)
    initial_time_of_day_hours: float = Field(default=9.5, ge=0, lt=24)
    initial_history_length: int = Field(default=252, ge=2)
    history_padding: int = 50  # bars kept beyond the initial window
    bootstrap_days: int = Field(default=1, ge=0)
    min_initial_price: float = 8.0
    max_initial_price: float = 12.0
    min_shares_outstanding: float = 50_000_000
    shares_outstanding_range: float = 150_000_000
    human_initial_cash: float = 1_000_000
    ai_initial_cash: float = 100
    inflation_rate: float = 0.02 / 365  # daily

    price_impact_factor: float = 0.1
    max_tick_pressure: float = 0.1
    bootstrap_volatility: float = 0.15
    agent_buy_fraction: float = 0.2
    agent_sell_fraction: float = 0.5
    noise_trader_min_cash: float = 10.0
    noise_trader_max_fraction: float = 0.5

    time_chunk_seconds: int = Field(default=600, gt=0)
    max_real_time_ms: Optional[float] = 100.0  # None disables the wall-clock valve
    max_narrative_attempts: int = 3

    @field_validator('start_date')
    @classmethod
    def normalize_start_date(cls, value: datetime) -> datetime:
        """Epoch start is midnight UTC so day boundaries fall on midnights."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.replace(hour=0, minute=0, second=0, microsecond=0)

    @model_validator(mode='after')
    def validate_universe(self):
        symbols = [stock.symbol for stock in self.stocks]
        if len(symbols) != len(set(symbols)):
            raise ValueError("Stock symbols must be unique")
        if self.min_initial_price > self.max_initial_price:
            raise ValueError("min_initial_price must not exceed max_initial_price")
        for regime_name in (self.population.human_tax_jurisdiction, self.population.ai_tax_jurisdiction):
            if regime_name not in self.tax_regimes:
                raise ValueError(f"Unknown tax jurisdiction: {regime_name}")
        return self

    @property
    def max_history_length(self) -> int:
        return self.initial_history_length + self.history_padding

    def operating_tax_rate(self, sector: str) -> float:
        return self.operating_tax_rates.get(sector, self.operating_tax_rates.get('default', 0.0))


class SimulationScenario:
    """
    A named configuration preset.

    Attributes:
        name (str): The unique name of the scenario.
        description (str): A brief description of what the scenario sets up.
        config (SimulationConfig): The configuration handed to the engine.
    """
    def __init__(self, name: str, description: str, config: SimulationConfig):
        self.name = name
        self.description = description
        self.config = config

    def __repr__(self):
        return f"SimulationScenario(name={self.name!r})"
