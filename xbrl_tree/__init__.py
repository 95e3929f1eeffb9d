# Path: xbrl_tree/__init__.py
"""
xbrl_tree - Statement hierarchy reconstruction for parsed XBRL tables.

Rebuilds presentation trees from flat parent -> child arc tables, binds
base-context facts to every tree position and produces an ordered,
labelled wide statement table.

Example:
    from xbrl_tree import StatementBuilder, TableDataLoader, TableReader

    loader = TableDataLoader(tables_dir='tables/')
    tables = TableReader().read_tables(loader.discover_tables())
    result = StatementBuilder(tables).build('http://acme.com/role/BalanceSheet')
    print(result.table)
"""

from xbrl_tree.loaders import TableDataLoader, TableReader, XbrlTables
from xbrl_tree.process.hierarchy import (
    BuildReport,
    StatementBuilder,
    StatementResult,
    TreeBuilder,
    TreeIndex,
    TreeNode,
)

__version__ = '0.1.0'

__all__ = [
    'TableDataLoader',
    'TableReader',
    'XbrlTables',
    'BuildReport',
    'StatementBuilder',
    'StatementResult',
    'TreeBuilder',
    'TreeIndex',
    'TreeNode',
    '__version__',
]
