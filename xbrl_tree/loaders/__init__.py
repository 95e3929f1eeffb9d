# Path: xbrl_tree/loaders/__init__.py
"""
xbrl_tree Loaders Package

Readers for the flat tables an XBRL parser produces.

    - Discovery (table_data.py): which table files exist
    - Interpretation (table_reader.py): read them into DataFrames

Example:
    from xbrl_tree.loaders import TableDataLoader, TableReader

    loader = TableDataLoader(config)
    tables = TableReader().read_tables(loader.discover_tables())
"""

from .table_data import TableDataLoader
from .table_reader import TableReader, XbrlTables, empty_table
from .constants import TABLE_NAMES


__all__ = [
    'TableDataLoader',
    'TableReader',
    'XbrlTables',
    'empty_table',
    'TABLE_NAMES',
]
