"""Capital gains tax settlement."""
from dataclasses import dataclass
from typing import Dict, List

from agents.investor import Investor
from scenarios.base import TaxRegime
from services.logging_service import LoggingService


@dataclass
class TaxSettlement:
    """Result of one investor's annual settlement"""
    day: int
    investor_id: str
    jurisdiction: str
    long_term_gains: float
    short_term_gains: float
    carryforward_used: float
    tax_due: float


def calculate_tax_due(
    long_term_gains: float,
    short_term_gains: float,
    regime: TaxRegime,
    carryforward: float = 0.0,
) -> Dict[str, float]:
    """Tax owed on one year's realized gains.

    Carried-forward losses offset short-term gains first, then long-term
    gains. The exemption applies to long-term gains first and any unused
    part to short-term gains.

    Returns:
        Dict with ``tax_due``, ``carryforward_used`` and ``new_carryforward``
    """
    carryforward_used = 0.0
    if regime.allow_loss_carryforward and carryforward > 0:
        offset = min(carryforward, max(short_term_gains, 0.0))
        short_term_gains -= offset
        carryforward_used += offset
        offset = min(carryforward - carryforward_used, max(long_term_gains, 0.0))
        long_term_gains -= offset
        carryforward_used += offset

    net = long_term_gains + short_term_gains
    new_carryforward = carryforward - carryforward_used
    if regime.allow_loss_carryforward and net < 0:
        new_carryforward += -net

    exemption = regime.exemption
    taxable_long = max(long_term_gains, 0.0)
    exempt_long = min(taxable_long, exemption)
    taxable_long -= exempt_long
    taxable_short = max(max(short_term_gains, 0.0) - (exemption - exempt_long), 0.0)

    tax_due = taxable_long * regime.long_term_rate + taxable_short * regime.short_term_rate
    return {
        'tax_due': tax_due,
        'carryforward_used': carryforward_used,
        'new_carryforward': new_carryforward,
    }


def settle_investor(investor: Investor, regime: TaxRegime, day: int) -> TaxSettlement:
    """Charge the year's tax to ``investor`` and reset the annual accumulators."""
    result = calculate_tax_due(
        investor.annual_long_term_gains,
        investor.annual_short_term_gains,
        regime,
        investor.tax_loss_carryforward,
    )
    settlement = TaxSettlement(
        day=day,
        investor_id=investor.id,
        jurisdiction=regime.name,
        long_term_gains=investor.annual_long_term_gains,
        short_term_gains=investor.annual_short_term_gains,
        carryforward_used=result['carryforward_used'],
        tax_due=result['tax_due'],
    )
    if settlement.tax_due > 0:
        investor.cash -= settlement.tax_due
        investor.total_taxes_paid += settlement.tax_due
    investor.tax_loss_carryforward = result['new_carryforward']
    investor.annual_long_term_gains = 0.0
    investor.annual_short_term_gains = 0.0
    return settlement


def settle_annual_taxes(investors, tax_regimes: Dict[str, TaxRegime], day: int) -> List[TaxSettlement]:
    """Settle every investor under their own jurisdiction.

    Investors whose jurisdiction is not configured are skipped with a warning.
    """
    logger = LoggingService.get_logger('tax')
    settlements = []
    for investor in investors:
        regime = tax_regimes.get(investor.tax_jurisdiction)
        if regime is None:
            logger.warning(f"No tax regime for {investor.id} ({investor.tax_jurisdiction}); skipping")
            continue
        settlement = settle_investor(investor, regime, day)
        LoggingService.log_tax_settlement(settlement)
        settlements.append(settlement)
    logger.info(
        f"Day {day}: settled taxes for {len(settlements)} investors, "
        f"total ${sum(s.tax_due for s in settlements):,.2f}"
    )
    return settlements
