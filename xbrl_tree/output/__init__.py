# Path: xbrl_tree/output/__init__.py
"""
Output Layer for xbrl_tree

Renders reconstructed statements:
- formatters/ - text and csv renderers behind a name registry
"""

from .formatters import (
    BaseFormatter,
    FormatterRegistry,
    TextFormatter,
    CsvFormatter,
    register_default_formatters,
)

__all__ = [
    'BaseFormatter',
    'FormatterRegistry',
    'TextFormatter',
    'CsvFormatter',
    'register_default_formatters',
]
