"""Centralized logging service for simulation runs."""
import logging
from pathlib import Path
from typing import Dict, Optional

from logging_utils.logger_factory import LoggerFactory
from logging_utils.csv_header_manager import CSVHeaders, CSVHeaderManager
from logging_utils.csv_logger import CSVLogger

LOGGER_NAMES = (
    'simulation',
    'trading',
    'events',
    'corporate',
    'learning',
    'tax',
    'verification',
)

CSV_LOGS = {
    'trades_csv': ('trades.csv', CSVHeaders.TRADES),
    'events_csv': ('events.csv', CSVHeaders.EVENTS),
    'tax_csv': ('tax_settlements.csv', CSVHeaders.TAX_SETTLEMENTS),
}


class LoggingService:
    """Centralized logging service with singleton pattern.

    The engine is usable as a library without any setup: until
    ``initialize`` is called, ``get_logger`` hands out plain module loggers
    and the CSV helpers are no-ops. ``initialize`` attaches file handlers
    under ``logs/<run_id>`` for a scripted run.
    """

    _instance = None
    _loggers: Dict[str, logging.Logger] = {}
    _run_dir: Optional[Path] = None
    _data_dir: Optional[Path] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def initialize(cls, run_id: str, base_dir: Path = Path('logs')):
        """Initialize all loggers and directories."""
        cls.reset()
        cls._run_dir = Path(base_dir) / run_id
        cls._data_dir = cls._run_dir / 'data'
        cls._run_dir.mkdir(parents=True, exist_ok=True)
        cls._data_dir.mkdir(exist_ok=True)

        console_handler = LoggerFactory.console_handler()

        for key, (filename, header) in CSV_LOGS.items():
            CSVHeaderManager.initialize_csv_file(cls._run_dir / filename, header)
            cls._loggers[key] = LoggerFactory.create_csv_logger(
                f'market_sim.{key}', cls._run_dir, filename, console_handler
            )

        for name in LOGGER_NAMES:
            cls._loggers[name] = LoggerFactory.create_logger(
                f'market_sim.{name}', cls._run_dir, f'{name}.log', console_handler
            )

        # Prevent duplicate messages
        for logger in cls._loggers.values():
            logger.propagate = False

    @classmethod
    def reset(cls):
        """Detach and close every handler created by ``initialize``."""
        for logger in cls._loggers.values():
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            logger.propagate = True
        cls._loggers = {}
        cls._run_dir = None
        cls._data_dir = None

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._run_dir is not None

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get logger by name."""
        logger = cls._loggers.get(name)
        if logger is None:
            return logging.getLogger(f'market_sim.{name}')
        return logger

    @classmethod
    def get_run_dir(cls) -> Path:
        """Get the run directory path."""
        if cls._run_dir is None:
            raise RuntimeError("LoggingService not initialized. Call initialize() first.")
        return cls._run_dir

    @classmethod
    def get_data_dir(cls) -> Path:
        """Get the data directory path."""
        if cls._data_dir is None:
            raise RuntimeError("LoggingService not initialized. Call initialize() first.")
        return cls._data_dir

    @classmethod
    def log_trade(cls, trade):
        """Log trade execution."""
        cls.get_logger('trading').debug(str(trade))
        if 'trades_csv' in cls._loggers:
            CSVLogger.log_trade(cls._loggers['trades_csv'], trade)

    @classmethod
    def log_event(cls, event):
        """Log a newly emitted narrative event."""
        cls.get_logger('events').info(
            f"Day {event.day}: [{event.type}] {event.event_name}"
            + (f" ({event.stock_symbol})" if event.stock_symbol else "")
        )
        if 'events_csv' in cls._loggers:
            CSVLogger.log_event(cls._loggers['events_csv'], event)

    @classmethod
    def log_tax_settlement(cls, settlement):
        """Log an annual tax settlement."""
        if settlement.tax_due > 0:
            cls.get_logger('tax').info(
                f"Day {settlement.day}: {settlement.investor_id} owes "
                f"${settlement.tax_due:,.2f} ({settlement.jurisdiction})"
            )
        if 'tax_csv' in cls._loggers:
            CSVLogger.log_tax_settlement(cls._loggers['tax_csv'], settlement)

    @classmethod
    def log_simulation(cls, message: str):
        """Log simulation message."""
        cls.get_logger('simulation').info(message)
