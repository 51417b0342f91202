"""
Logging configuration for jsonclient

Provides structured logging with optional file and console output.
The library itself never installs handlers; applications call setup_logging().
"""

import logging
import sys
from pathlib import Path


class JSONClientLogger:
    """Centralized logger for the library"""

    def __init__(
        self, name: str = "jsonclient", log_file: Path | None = None, console_output: bool = True
    ):
        """
        Initialize logger

        Args:
            name: Logger name (usually "jsonclient" for the package logger)
            log_file: Path to log file (optional)
            console_output: Whether to print to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        # Clear existing handlers
        self.logger.handlers = []

        # Format: timestamp - module - level - message
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

        if console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def get_logger(self) -> logging.Logger:
        """Get the underlying logger instance"""
        return self.logger


def setup_logging(log_file: Path | None = None, verbose: bool = False) -> logging.Logger:
    """
    Setup logging for an application using jsonclient

    Args:
        log_file: Optional file receiving DEBUG records (request/response traces)
        verbose: Whether to also print INFO records to stdout

    Returns:
        Configured package logger
    """
    logger_wrapper = JSONClientLogger(name="jsonclient", log_file=log_file, console_output=verbose)
    return logger_wrapper.get_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get logger for a specific module

    Args:
        module_name: Name of the module (e.g., 'client', 'http_client')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"jsonclient.{module_name}")


def setup_logging_from_config(config_obj) -> logging.Logger:
    """
    Setup logging from the ``logging`` section of a Config

    Args:
        config_obj: Config providing logging.log_file and logging.verbose

    Returns:
        Configured package logger
    """
    log_file = config_obj.get("logging.log_file")
    return setup_logging(
        log_file=Path(log_file) if log_file else None,
        verbose=bool(config_obj.get("logging.verbose", False)),
    )
