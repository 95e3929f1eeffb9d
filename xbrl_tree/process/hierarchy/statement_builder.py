# Path: xbrl_tree/process/hierarchy/statement_builder.py
"""
Statement Builder - Runs the full reconstruction for one role.

    presentation arcs --normalize--> edges --build--> tree nodes
    tree nodes + facts + contexts --bind--> bound rows
    bound rows --reshape--> wide table --annotate--> statement table

Structural errors (MalformedOrderError, NoRootError, MissingColumnError)
propagate to the caller. Everything recoverable ends up in the result's
BuildReport.

Example:
    builder = StatementBuilder(tables, lang='en-US')
    result = builder.build('http://acme.com/role/BalanceSheet')
    print(result.table)
    print(result.report.summary())
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

import pandas as pd

from xbrl_tree.core.logger import get_process_logger
from xbrl_tree.process.hierarchy.annotator import Annotator, LabelResolver
from xbrl_tree.process.hierarchy.constants import (
    COL_ROLE_DEFINITION,
    COL_ROLE_ID,
    DEFAULT_LANGUAGE,
    DEFAULT_PATH_ID_WIDTH,
    PeriodOrder,
    RelationKind,
    StatementType,
)
from xbrl_tree.process.hierarchy.edge_normalizer import normalize_edges
from xbrl_tree.process.hierarchy.errors import BuildReport, HierarchyError
from xbrl_tree.process.hierarchy.fact_binder import BoundRow, FactBinder
from xbrl_tree.process.hierarchy.node import TreeIndex, TreeNode
from xbrl_tree.process.hierarchy.roles import detect_statement_type
from xbrl_tree.process.hierarchy.tree_builder import TreeBuilder
from xbrl_tree.process.hierarchy.wide_reshaper import WideReshaper


logger = get_process_logger('hierarchy.statement_builder')


@dataclass
class StatementResult:
    """
    Everything produced for one role.

    Attributes:
        role_id: Role that was built
        nodes: Tree nodes in pre-order
        bound_rows: Annotated bound rows (path_id, end_date, value, ...)
        table: Wide table: path_id, depth, element_id, label,
            is_calculated, then one column per period end date
        report: Recovered issues
        definition: Role definition text, if known
        statement_type: Detected statement type
    """
    role_id: str
    nodes: list[TreeNode]
    bound_rows: list[BoundRow]
    table: pd.DataFrame
    report: BuildReport
    definition: Optional[str] = None
    statement_type: StatementType = StatementType.UNKNOWN
    _index: Optional[TreeIndex] = field(default=None, init=False, repr=False)

    @property
    def index(self) -> TreeIndex:
        """Arena view of the nodes."""
        if self._index is None:
            self._index = TreeIndex(self.nodes)
        return self._index

    @property
    def period_columns(self) -> list[str]:
        """Period end date columns of the wide table."""
        return WideReshaper.period_columns(self.table)

    @property
    def title(self) -> str:
        """Definition text when available, else the role id."""
        return self.definition or self.role_id

    def to_records(self) -> list[dict[str, Any]]:
        """Wide table rows as plain dicts; missing cells are None."""
        cleaned = self.table.astype(object).where(self.table.notna(), None)
        return cleaned.to_dict('records')

    def __len__(self) -> int:
        return len(self.nodes)


class StatementBuilder:
    """
    Orchestrates normalize -> build -> bind -> reshape -> annotate.

    Args:
        tables: Object with element, label, context, fact, presentation,
            calculation and role DataFrames (XbrlTables)
        lang: Label language
        path_id_width: Minimum digits per path_id segment
        period_order: 'ascending' or 'descending' period columns
    """

    def __init__(
        self,
        tables,
        lang: str = DEFAULT_LANGUAGE,
        path_id_width: int = DEFAULT_PATH_ID_WIDTH,
        period_order: Union[PeriodOrder, str] = PeriodOrder.ASCENDING,
    ):
        self.tables = tables
        self.lang = lang
        self.tree_builder = TreeBuilder(min_width=path_id_width)
        self.fact_binder = FactBinder()
        self.reshaper = WideReshaper(period_order)
        self._resolver: Optional[LabelResolver] = None
        self._build_count = 0
        self._last_error: Optional[str] = None

    @property
    def resolver(self) -> LabelResolver:
        """Label index shared by every role of this filing."""
        if self._resolver is None:
            self._resolver = LabelResolver(self.tables.label, lang=self.lang)
        return self._resolver

    def build(self, role_id: str) -> StatementResult:
        """
        Reconstruct one role's statement.

        Args:
            role_id: Role identifier as found in the presentation table

        Returns:
            StatementResult

        Raises:
            MalformedOrderError: If an arc order is not numeric
            NoRootError: If the role's arcs have no root
            MissingColumnError: If an input table lacks required columns
        """
        report = BuildReport(role_id=role_id)
        definition = self._role_definition(role_id)

        try:
            edges = normalize_edges(self.tables.presentation, role_id, RelationKind.PRESENTATION)
            if not edges:
                logger.warning(f"Role {role_id} has no presentation arcs")
            nodes = self.tree_builder.build(edges, role_id=role_id, report=report)

            bound = self.fact_binder.bind(nodes, self.tables.fact, self.tables.context, report)
            wide = self.reshaper.reshape(nodes, bound, report)

            calc_edges = normalize_edges(self.tables.calculation, role_id, RelationKind.CALCULATION)
            annotator = Annotator(
                self.tables.label, calc_edges, lang=self.lang, resolver=self.resolver,
            )
            table = annotator.annotate_table(wide, nodes)
            rows = annotator.annotate_rows(bound, nodes)
            annotator.find_balance_mismatches(self.tables.element, report)
        except HierarchyError as e:
            self._last_error = f"{role_id}: {e}"
            raise

        self._build_count += 1
        if report.has_warnings:
            logger.warning(f"Role {role_id} built with issues: {report.summary()}")
        else:
            logger.info(f"Role {role_id} built: {len(nodes)} node(s), {len(rows)} value(s)")

        return StatementResult(
            role_id=role_id,
            nodes=nodes,
            bound_rows=rows,
            table=table,
            report=report,
            definition=definition,
            statement_type=detect_statement_type(role_id, definition),
        )

    def build_many(self, role_ids: Iterable[str]) -> dict[str, StatementResult]:
        """Build several roles; structural errors are not caught."""
        return {role_id: self.build(role_id) for role_id in role_ids}

    def _role_definition(self, role_id: str) -> Optional[str]:
        """Definition text of a role from the role table."""
        roles = getattr(self.tables, 'role', None)
        if roles is None or roles.empty:
            return None
        if COL_ROLE_ID not in roles.columns or COL_ROLE_DEFINITION not in roles.columns:
            return None
        matches = roles.loc[roles[COL_ROLE_ID] == role_id, COL_ROLE_DEFINITION].dropna()
        return str(matches.iloc[0]) if len(matches) else None

    @property
    def last_error(self) -> Optional[str]:
        """Get the last error message."""
        return self._last_error

    @property
    def build_count(self) -> int:
        """Get number of successful builds."""
        return self._build_count

    def reset_stats(self) -> None:
        """Reset build statistics."""
        self._build_count = 0
        self._last_error = None


__all__ = [
    'StatementResult',
    'StatementBuilder',
]
