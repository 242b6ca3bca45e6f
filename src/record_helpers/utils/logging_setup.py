"""Logging configuration."""
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

# Handlers installed by the last setup_logging call
_installed_handlers: List[logging.Handler] = []


def setup_logging(log_dir: Optional[str] = "logs", level: Union[int, str] = logging.INFO) -> None:
    """
    Set up logging configuration.

    Args:
        log_dir: Directory to store log files; None logs to the console only
        level: Logging level (number or name such as "DEBUG")
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    # Configure logging format
    log_format = '%(asctime)s - %(levelname)s - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'
    formatter = logging.Formatter(log_format, date_format)

    handlers = [logging.StreamHandler()]
    log_file = None
    if log_dir:
        # Create logs directory
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # Create log filename with timestamp
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"record_helpers_{timestamp}.log"
        handlers.append(logging.FileHandler(log_file))

    # Configure root logger, replacing handlers from an earlier call
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _installed_handlers.append(handler)

    logging.debug("Logging initialized")
    if log_file:
        logging.debug(f"Log file: {log_file}")


def log_operation(operation: str, details: str, level: int = logging.INFO) -> None:
    """Log an operation with details."""
    logging.log(level, f"{operation}: {details}")
