"""Logging utilities package with factory and CSV management."""
from logging_utils.logger_factory import LoggerFactory
from logging_utils.csv_header_manager import CSVHeaders, CSVHeaderManager
from logging_utils.csv_logger import CSVLogger, sanitize_for_csv

__all__ = [
    'LoggerFactory',
    'CSVHeaders',
    'CSVHeaderManager',
    'CSVLogger',
    'sanitize_for_csv',
]
