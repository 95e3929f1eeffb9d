# Path: xbrl_tree/process/__init__.py
"""
Process Layer for xbrl_tree

The PROCESS layer turns loaded tables into statements:
- hierarchy/ - edge normalization, tree building, fact binding,
  wide reshaping and label/calc annotation

Components follow the IPO pattern:
- Read from INPUT layer (loaders)
- Process data in memory (no file access)
- Hand results to OUTPUT layer (formatters)
"""

from xbrl_tree.process.hierarchy import StatementBuilder, StatementResult, TreeBuilder, TreeNode

__all__ = [
    'StatementBuilder',
    'StatementResult',
    'TreeBuilder',
    'TreeNode',
]
