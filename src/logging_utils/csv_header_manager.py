"""Header rows for the per-run CSV logs."""
from pathlib import Path


class CSVHeaders:
    """Constants for CSV file headers."""

    TRADES = "sim_time,day,investor_id,symbol,side,shares,price,value,source"

    EVENTS = "day,event_id,type,stock_symbol,event_name,region,impact"

    TAX_SETTLEMENTS = (
        "day,investor_id,jurisdiction,long_term_gains,short_term_gains,"
        "carryforward_used,tax_due"
    )


class CSVHeaderManager:
    """Writes header rows before the CSV loggers start appending."""

    @staticmethod
    def initialize_csv_file(file_path: Path, header: str) -> None:
        """Write ``header`` unless the file already has content."""
        if not file_path.exists() or file_path.stat().st_size == 0:
            with open(file_path, 'w') as f:
                f.write(f"{header}\n")
