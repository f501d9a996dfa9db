"""Regional trading sessions (UTC)."""
from datetime import datetime
from typing import Dict, List, Tuple

# Half-open [start, end) sessions in fractional UTC hours
TRADING_SESSIONS: Dict[str, List[Tuple[float, float]]] = {
    'North America': [(13.5, 20.0)],
    'Europe': [(7.0, 15.5)],
    'Asia': [(0.0, 2.5), (3.5, 6 + 25 / 60)],
}

WEEKEND = (5, 6)  # Saturday, Sunday


def is_market_open(moment: datetime, region: str) -> bool:
    """True when ``region`` is in session at ``moment``. Unknown regions never open."""
    if moment.weekday() in WEEKEND:
        return False
    hours = moment.hour + moment.minute / 60
    return any(start <= hours < end for start, end in TRADING_SESSIONS.get(region, []))


def open_regions(moment: datetime) -> List[str]:
    return [region for region in TRADING_SESSIONS if is_market_open(moment, region)]
