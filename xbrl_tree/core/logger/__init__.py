# Path: xbrl_tree/core/logger/__init__.py
"""
xbrl_tree Logger Package

IPO-aware logging with separate streams for:
- INPUT layer (table discovery and reading)
- PROCESS layer (hierarchy reconstruction and fact binding)
- OUTPUT layer (formatters, CLI)
"""

from .ipo_logging import (
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
