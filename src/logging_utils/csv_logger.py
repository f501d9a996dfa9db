"""CSV row formatting for trade, event and tax logs."""
import logging
from typing import Iterable


def sanitize_for_csv(text) -> str:
    """Sanitize a value for safe CSV storage

    Handles newlines, tabs, quotes and commas, and neutralizes formula
    injection when the file is opened in a spreadsheet.
    """
    if text is None:
        return ''
    text = str(text)
    if not text:
        return ''

    text = text.replace('\n', ' | ').replace('\r', '')
    text = text.replace('\t', ' ')
    text = text.replace('"', "'")
    text = text.replace(',', ';')

    if text[0] in ('=', '+', '@'):
        text = "'" + text

    return text


class CSVLogger:
    """Writes one CSV row per record through a plain-format logger."""

    @staticmethod
    def format_row(values: Iterable) -> str:
        cells = []
        for value in values:
            if isinstance(value, float):
                cells.append(f"{value:.6f}")
            else:
                cells.append(sanitize_for_csv(value))
        return ','.join(cells)

    @staticmethod
    def log_trade(logger: logging.Logger, trade) -> None:
        """Log an executed trade (market.trade.Trade)."""
        logger.info(CSVLogger.format_row([
            trade.timestamp.isoformat(),
            trade.day,
            trade.investor_id,
            trade.symbol,
            trade.side,
            trade.shares,
            trade.price,
            trade.value,
            trade.source,
        ]))

    @staticmethod
    def log_event(logger: logging.Logger, event) -> None:
        """Log a newly emitted ActiveEvent."""
        impact = event.impact
        if isinstance(impact, dict):
            impact = ';'.join(f"{key}={value}" for key, value in impact.items())
        logger.info(CSVLogger.format_row([
            event.day,
            event.id,
            event.type,
            event.stock_symbol or '',
            event.event_name,
            event.region or '',
            impact if impact is not None else '',
        ]))

    @staticmethod
    def log_tax_settlement(logger: logging.Logger, settlement) -> None:
        """Log one investor's annual tax settlement (accounting.tax_service.TaxSettlement)."""
        logger.info(CSVLogger.format_row([
            settlement.day,
            settlement.investor_id,
            settlement.jurisdiction,
            settlement.long_term_gains,
            settlement.short_term_gains,
            settlement.carryforward_used,
            settlement.tax_due,
        ]))
