# Path: xbrl_tree/core/logger/ipo_logging.py
"""
IPO-Aware Logging for xbrl_tree

Input-Process-Output separated logging for statement reconstruction.

Logger names carry their layer as prefix:
- input.*   (table discovery and reading)
- process.* (normalizer, tree builder, fact binder, reshaper, annotator)
- output.*  (text/CSV formatters, CLI rendering)

When a log directory is given, one file per layer is written next to a
combined full_activity.log. Without a directory only the console is used.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LAYERS = ('input', 'process', 'output')

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
CONSOLE_FORMAT = '[%(levelname)s] %(name)s - %(message)s'


class IPOFilter(logging.Filter):
    """Filter logs by IPO layer prefix."""

    def __init__(self, layer: str):
        """
        Initialize filter for specific IPO layer.

        Args:
            layer: 'input', 'process', or 'output'
        """
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter records by logger name prefix."""
        return record.name == self.layer or record.name.startswith(f'{self.layer}.')


def setup_ipo_logging(
    log_dir: Optional[Path] = None,
    log_level: str = 'INFO',
    console_output: bool = True
) -> None:
    """
    Set up IPO-aware logging for xbrl_tree.

    Creates, when log_dir is given:
    - input_activity.log
    - process_activity.log
    - output_activity.log
    - full_activity.log (all layers combined)

    Args:
        log_dir: Directory for log files, or None for console only
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console

    Example:
        setup_ipo_logging(
            log_dir=Path('/var/log/xbrl_tree'),
            log_level='DEBUG',
        )
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        full_handler = logging.FileHandler(log_dir / 'full_activity.log')
        full_handler.setLevel(logging.DEBUG)
        full_handler.setFormatter(formatter)
        root_logger.addHandler(full_handler)

        for layer in LAYERS:
            handler = logging.FileHandler(log_dir / f'{layer}_activity.log')
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(formatter)
            handler.addFilter(IPOFilter(layer))
            root_logger.addHandler(handler)

    if console_output:
        # stdout is reserved for rendered statements
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)


def get_input_logger(name: str) -> logging.Logger:
    """
    Get logger for INPUT layer.

    Args:
        name: Logger name (e.g., 'table_reader')

    Returns:
        Logger under the 'input.' prefix
    """
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """
    Get logger for PROCESS layer.

    Args:
        name: Logger name (e.g., 'hierarchy.tree_builder')

    Returns:
        Logger under the 'process.' prefix
    """
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """
    Get logger for OUTPUT layer.

    Args:
        name: Logger name (e.g., 'text_formatter')

    Returns:
        Logger under the 'output.' prefix
    """
    return logging.getLogger(f'output.{name}')


__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
