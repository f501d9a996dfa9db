"""Narrative event records."""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Literal, Optional, Union

EventType = Literal[
    'positive', 'negative', 'neutral', 'split', 'merger', 'alliance', 'political', 'disaster'
]

# A single multiplier, or a multiplier per sector/region/'default'
EventImpact = Union[float, Dict[str, float], None]

PENDING_HEADLINE = "Developing story"


@dataclass
class SplitDetails:
    symbol: str
    ratio: int


@dataclass
class MergerDetails:
    acquiring: str
    acquired: str


@dataclass
class AllianceDetails:
    partners: List[str]


@dataclass
class ActiveEvent:
    """A macro or corporate event plus the narrative generated for it"""
    id: str
    day: int
    event_name: str
    description: str
    type: EventType
    stock_symbol: Optional[str] = None
    stock_name: Optional[str] = None
    impact: EventImpact = None
    region: Optional[str] = None
    split_details: Optional[SplitDetails] = None
    merger_details: Optional[MergerDetails] = None
    alliance_details: Optional[AllianceDetails] = None
    image_url: str = ''
    headline: str = PENDING_HEADLINE
    summary: str = ''
    full_text: str = ''
    narrative_pending: bool = True
    narrative_attempts: int = 0
    keywords: List[str] = field(default_factory=list)

    @property
    def is_macro(self) -> bool:
        return self.stock_symbol is None

    @property
    def is_corporate(self) -> bool:
        return self.stock_symbol is not None

    def mean_impact(self) -> float:
        """Scalar impact, or the mean of a per-key impact map; 0 when absent."""
        if isinstance(self.impact, dict):
            if not self.impact:
                return 0.0
            return sum(self.impact.values()) / len(self.impact)
        if self.impact is None:
            return 0.0
        return float(self.impact)

    def clone(self) -> 'ActiveEvent':
        return replace(
            self,
            impact=dict(self.impact) if isinstance(self.impact, dict) else self.impact,
            split_details=replace(self.split_details) if self.split_details else None,
            merger_details=replace(self.merger_details) if self.merger_details else None,
            alliance_details=(
                AllianceDetails(partners=list(self.alliance_details.partners))
                if self.alliance_details else None
            ),
            keywords=list(self.keywords),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'day': self.day,
            'type': self.type,
            'event_name': self.event_name,
            'description': self.description,
            'stock_symbol': self.stock_symbol,
            'stock_name': self.stock_name,
            'region': self.region,
            'impact': self.impact,
            'headline': self.headline,
            'summary': self.summary,
            'image_url': self.image_url,
        }
