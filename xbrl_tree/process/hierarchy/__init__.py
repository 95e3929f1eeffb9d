# Path: xbrl_tree/process/hierarchy/__init__.py
"""
Hierarchy Reconstruction Package for xbrl_tree

Rebuilds explicit statement trees from flat parent -> child arc tables and
binds reported facts to them.

Components (data flows top to bottom):
- edge_normalizer: raw link table -> ordered NormalizedEdge list for one role
- tree_builder: breadth-first TreeBuilder assigning depth and path_id
- fact_binder: base-context facts, rescaled by decimals, per tree position
- wide_reshaper: one row per node, one column per period end date
- annotator: labels (preferredLabel fallback chain) and is_calculated
- statement_builder: StatementBuilder running all of the above for a role

path_id Utilities:
- rank_width, format_segment, child_path_id, is_descendant

Example:
    from xbrl_tree.process.hierarchy import StatementBuilder

    builder = StatementBuilder(tables)
    result = builder.build('http://acme.com/role/BalanceSheet')
    for record in result.to_records():
        print(record['path_id'], record['label'])
"""

from xbrl_tree.process.hierarchy.constants import PeriodOrder, RelationKind, StatementType
from xbrl_tree.process.hierarchy.errors import (
    ErrorSeverity,
    IssueKind,
    HierarchyError,
    TableSchemaError,
    MissingColumnError,
    MalformedOrderError,
    NoRootError,
    NonNumericFactError,
    HierarchyWarning,
    CycleDetectedWarning,
    DuplicateArcWarning,
    UnreachableConceptWarning,
    DuplicatePeriodWarning,
    BalanceSignNotice,
    BuildIssue,
    BuildReport,
)
from xbrl_tree.process.hierarchy.path_id import (
    rank_width,
    format_segment,
    child_path_id,
    is_descendant,
)
from xbrl_tree.process.hierarchy.node import TreeNode, TreeIndex
from xbrl_tree.process.hierarchy.edge_normalizer import (
    NormalizedEdge,
    coerce_order,
    normalize_edges,
)
from xbrl_tree.process.hierarchy.tree_builder import TreeBuilder
from xbrl_tree.process.hierarchy.fact_binder import (
    BoundRow,
    FactBinder,
    base_contexts,
    scale_fact_value,
)
from xbrl_tree.process.hierarchy.wide_reshaper import WideReshaper, reshape_wide
from xbrl_tree.process.hierarchy.annotator import Annotator, LabelResolver
from xbrl_tree.process.hierarchy.roles import detect_statement_type, find_roles
from xbrl_tree.process.hierarchy.statement_builder import StatementBuilder, StatementResult

__all__ = [
    # Enums
    'PeriodOrder',
    'RelationKind',
    'StatementType',
    # Errors and report
    'ErrorSeverity',
    'IssueKind',
    'HierarchyError',
    'TableSchemaError',
    'MissingColumnError',
    'MalformedOrderError',
    'NoRootError',
    'NonNumericFactError',
    'HierarchyWarning',
    'CycleDetectedWarning',
    'DuplicateArcWarning',
    'UnreachableConceptWarning',
    'DuplicatePeriodWarning',
    'BalanceSignNotice',
    'BuildIssue',
    'BuildReport',
    # path_id utilities
    'rank_width',
    'format_segment',
    'child_path_id',
    'is_descendant',
    # Tree
    'TreeNode',
    'TreeIndex',
    # Pipeline
    'NormalizedEdge',
    'coerce_order',
    'normalize_edges',
    'TreeBuilder',
    'BoundRow',
    'FactBinder',
    'base_contexts',
    'scale_fact_value',
    'WideReshaper',
    'reshape_wide',
    'Annotator',
    'LabelResolver',
    'detect_statement_type',
    'find_roles',
    'StatementBuilder',
    'StatementResult',
]
