"""Factory for creating and configuring loggers with consistent patterns."""
import logging
from pathlib import Path
from typing import Optional


class LoggerFactory:
    """Factory for creating loggers with standardized configurations."""

    @staticmethod
    def create_logger(
        name: str,
        run_dir: Path,
        filename: str,
        console_handler: logging.Handler,
        formatter: Optional[logging.Formatter] = None,
        level: int = logging.INFO
    ) -> logging.Logger:
        """
        Create a logger writing to a file in the run directory and to the console.

        Args:
            name: Logger name
            run_dir: Run-specific directory for logs
            filename: Log filename
            console_handler: Shared console handler for warnings/errors
            formatter: Custom formatter (default: timestamped)
            level: Level for the logger and its file handler

        Returns:
            Configured logger
        """
        logger = logging.getLogger(name)
        logger.setLevel(level)

        if formatter is None:
            formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

        file_handler = logging.FileHandler(run_dir / filename, mode='w')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    @staticmethod
    def create_csv_logger(
        name: str,
        run_dir: Path,
        filename: str,
        console_handler: logging.Handler
    ) -> logging.Logger:
        """
        Create a CSV logger with plain formatting (no timestamps).

        The file is opened in append mode so the header written by
        CSVHeaderManager survives.
        """
        logger = logging.getLogger(name)
        logger.setLevel(logging.INFO)

        file_handler = logging.FileHandler(run_dir / filename, mode='a')
        file_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    @staticmethod
    def console_handler(level: int = logging.WARNING) -> logging.Handler:
        """Console handler shared by every logger of a run."""
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
        return handler
