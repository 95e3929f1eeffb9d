# Path: xbrl_tree/output/formatters/__init__.py
"""
Statement Formatters

Each formatter renders a StatementResult into a specific output format.
Formatters know nothing about tree reconstruction; new formats add new
formatters without touching the hierarchy package.
"""

from .base_formatter import BaseFormatter, FormatterRegistry
from .text_formatter import TextFormatter
from .csv_formatter import CsvFormatter


def register_default_formatters() -> None:
    """Register the built-in text and csv formatters."""
    FormatterRegistry.register(TextFormatter)
    FormatterRegistry.register(CsvFormatter)


__all__ = [
    'BaseFormatter',
    'FormatterRegistry',
    'TextFormatter',
    'CsvFormatter',
    'register_default_formatters',
]
