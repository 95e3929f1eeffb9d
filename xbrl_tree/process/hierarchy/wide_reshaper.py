# Path: xbrl_tree/process/hierarchy/wide_reshaper.py
"""
Wide Reshaper - Pivots bound rows into one row per tree position.

    path_id | depth | element_id | 2012-12-31 | 2013-12-31
    ''      | 0     | Root       | NaN        | NaN
    '01'    | 1     | A          | NaN        | NaN
    '0101'  | 2     | A1         | 90         | 100

Every tree node keeps its row even when no fact was bound to it; empty
cells are NaN, never zero. Cell values are the Decimal scaled values.

Two base facts can land on the same (path_id, end_date) cell, typically
a quarter and a year-to-date duration ending on the same day. Bound rows
arrive ordered by start date, so the earliest start (longest duration)
is kept and each discarded fact is recorded as a DUPLICATE_PERIOD issue.
"""

from typing import Optional, Union

import pandas as pd

from xbrl_tree.core.logger import get_process_logger
from xbrl_tree.process.hierarchy.constants import (
    ANNOTATION_COLUMNS,
    OUT_DEPTH,
    OUT_ELEMENT_ID,
    OUT_END_DATE,
    OUT_PATH_ID,
    OUT_SCALED_VALUE,
    ROW_KEY_COLUMNS,
    PeriodOrder,
)
from xbrl_tree.process.hierarchy.errors import (
    BuildIssue,
    BuildReport,
    DuplicatePeriodWarning,
    ErrorSeverity,
    IssueKind,
)
from xbrl_tree.process.hierarchy.fact_binder import BoundRow
from xbrl_tree.process.hierarchy.node import TreeNode


logger = get_process_logger('hierarchy.wide_reshaper')


def coerce_period_order(value: Union[PeriodOrder, str, None]) -> PeriodOrder:
    """
    Accept a PeriodOrder or its name ('ascending', 'desc', ...).

    Raises:
        ValueError: For an unknown ordering
    """
    if value is None:
        return PeriodOrder.ASCENDING
    if isinstance(value, PeriodOrder):
        return value
    text = str(value).strip().lower()
    if text in ('asc', 'ascending'):
        return PeriodOrder.ASCENDING
    if text in ('desc', 'descending'):
        return PeriodOrder.DESCENDING
    raise ValueError(f"Unknown period order: {value!r}")


class WideReshaper:
    """
    Turns long bound rows into the wide statement table.

    Example:
        reshaper = WideReshaper(period_order='descending')
        table = reshaper.reshape(nodes, rows, report=report)
        print(reshaper.period_columns(table))
    """

    def __init__(self, period_order: Union[PeriodOrder, str, None] = PeriodOrder.ASCENDING):
        self.period_order = coerce_period_order(period_order)

    def reshape(
        self,
        nodes: list[TreeNode],
        bound_rows: list[BoundRow],
        report: Optional[BuildReport] = None,
    ) -> pd.DataFrame:
        """
        Pivot bound rows to one column per period end date.

        Args:
            nodes: Tree nodes in pre-order
            bound_rows: Output of FactBinder.bind
            report: Report collecting discarded duplicates

        Returns:
            DataFrame with path_id, depth, element_id and one column per
            end date, rows in path_id order
        """
        if report is None:
            report = BuildReport()

        node_frame = pd.DataFrame(
            [
                {OUT_PATH_ID: n.path_id, OUT_DEPTH: n.depth, OUT_ELEMENT_ID: n.element_id}
                for n in sorted(nodes, key=lambda n: n.path_id)
            ],
            columns=list(ROW_KEY_COLUMNS),
        )

        if not bound_rows:
            logger.debug(f"No bound values; wide table has {len(node_frame)} empty row(s)")
            return node_frame

        kept = self._drop_duplicate_periods(bound_rows, report)

        long_frame = pd.DataFrame(
            [
                {
                    OUT_PATH_ID: r.path_id,
                    OUT_END_DATE: r.end_date,
                    OUT_SCALED_VALUE: r.scaled_value,
                }
                for r in kept
            ]
        )
        wide = long_frame.pivot(index=OUT_PATH_ID, columns=OUT_END_DATE, values=OUT_SCALED_VALUE)

        periods = sorted(wide.columns, reverse=self.period_order is PeriodOrder.DESCENDING)
        wide = wide.reindex(columns=periods)
        wide.columns.name = None

        table = node_frame.merge(wide, left_on=OUT_PATH_ID, right_index=True, how='left')
        table = table.reset_index(drop=True)

        logger.info(
            f"Wide table: {len(table)} row(s) x {len(periods)} period(s), "
            f"{len(kept)} value(s)"
        )
        return table

    @staticmethod
    def period_columns(table: pd.DataFrame) -> list[str]:
        """Columns of a wide table that hold period values."""
        fixed = set(ROW_KEY_COLUMNS) | set(ANNOTATION_COLUMNS)
        return [col for col in table.columns if col not in fixed]

    @staticmethod
    def _drop_duplicate_periods(
        bound_rows: list[BoundRow],
        report: BuildReport,
    ) -> list[BoundRow]:
        """First row per (path_id, end_date) in bound-row order."""
        ordered = sorted(bound_rows, key=lambda r: (r.path_id, r.end_date, r.start_date or ''))
        kept: dict[tuple[str, str], BoundRow] = {}

        for row in ordered:
            key = (row.path_id, row.end_date)
            winner = kept.get(key)
            if winner is None:
                kept[key] = row
                continue

            message = (
                f"{row.element_id} at {row.path_id!r} has several values ending "
                f"{row.end_date}; kept {winner.scaled_value} "
                f"(context {winner.context_id}), dropped {row.scaled_value} "
                f"(context {row.context_id})"
            )
            report.add(BuildIssue(
                kind=IssueKind.DUPLICATE_PERIOD,
                severity=ErrorSeverity.WARNING,
                message=message,
                element_id=row.element_id,
                path_id=row.path_id,
                details={
                    'end_date': row.end_date,
                    'kept_context_id': winner.context_id,
                    'dropped_context_id': row.context_id,
                    'dropped_start_date': row.start_date,
                },
                error=DuplicatePeriodWarning(message),
            ))
            logger.debug(message)

        return list(kept.values())


def reshape_wide(
    nodes: list[TreeNode],
    bound_rows: list[BoundRow],
    period_order: Union[PeriodOrder, str, None] = PeriodOrder.ASCENDING,
    report: Optional[BuildReport] = None,
) -> pd.DataFrame:
    """Convenience wrapper around WideReshaper.reshape."""
    return WideReshaper(period_order).reshape(nodes, bound_rows, report=report)


__all__ = [
    'WideReshaper',
    'reshape_wide',
    'coerce_period_order',
]
