"""Resolution of an event's impact on individual stocks."""
from constants import GLOBAL_REGION

SPILLOVER_FACTOR = 0.25


def resolve_event_impact(stock, event, spillover_factor: float = SPILLOVER_FACTOR) -> float:
    """Price multiplier that ``event`` applies to ``stock``.

    A scalar impact applies to every stock. A map is looked up by the stock's
    sector, then its region, then ``'default'``. Failing those, a regional
    event whose own region is a key in the map spills a damped share of that
    impact onto the stock. Anything else is unaffected (1.0).
    """
    impact = event.impact
    if impact is None:
        return 1.0
    if not isinstance(impact, dict):
        return float(impact)

    if stock.sector in impact:
        return impact[stock.sector]
    if stock.region in impact:
        return impact[stock.region]
    if 'default' in impact:
        return impact['default']

    region = event.region
    if region and region != GLOBAL_REGION and impact.get(region):
        return 1 + (impact[region] - 1) * spillover_factor
    return 1.0
