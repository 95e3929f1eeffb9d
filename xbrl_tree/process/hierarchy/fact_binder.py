# Path: xbrl_tree/process/hierarchy/fact_binder.py
"""
Fact Binder - Binds reported facts to reconstructed tree positions.

Only facts reported in a base context are eligible:
- every dimensionN column of the context is empty or 'NA' (no segment
  breakdown)
- the context has an end date (instant-only contexts without endDate
  are dropped; the statement compares periods by end date)

Each eligible fact is rescaled:

    scaled_value = value x 10^decimals

A fact whose value (or decimals) cannot be read as a number raises
NonNumericFactError internally; the binder records it in the build report
and skips that single fact.

Example:
    binder = FactBinder()
    rows = binder.bind(nodes, tables.fact, tables.context, report=report)
    for row in rows:
        print(row.path_id, row.end_date, row.scaled_value)
"""

import re
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import pandas as pd

from xbrl_tree.core.logger import get_process_logger
from xbrl_tree.process.hierarchy.constants import (
    COL_CONTEXT_ID,
    COL_DECIMALS,
    COL_ELEMENT_ID,
    COL_END_DATE,
    COL_FACT_VALUE,
    COL_START_DATE,
    COL_UNIT_ID,
    DEFAULT_DECIMALS,
    DIMENSION_COLUMN_PATTERN,
    INFINITE_DECIMALS,
    MISSING_VALUE_MARKERS,
)
from xbrl_tree.process.hierarchy.edge_normalizer import is_blank
from xbrl_tree.process.hierarchy.errors import (
    BuildIssue,
    BuildReport,
    ErrorSeverity,
    IssueKind,
    MissingColumnError,
    NonNumericFactError,
)
from xbrl_tree.process.hierarchy.node import TreeNode


logger = get_process_logger('hierarchy.fact_binder')

_DIMENSION_RE = re.compile(DIMENSION_COLUMN_PATTERN)


@dataclass(frozen=True)
class BoundRow:
    """
    One concept position with one period value.

    Attributes:
        path_id: Tree position
        depth: Tree depth of the position
        element_id: Concept identifier
        end_date: Period end date (as reported, e.g. '2013-12-31')
        scaled_value: value x 10^decimals
        start_date: Period start date, if any
        context_id: Context the fact was reported in
        unit_id: Unit of the fact
        label: Display label (filled in by the annotator)
        is_calculated: Calculation parent flag (filled in by the annotator)
    """
    path_id: str
    depth: int
    element_id: str
    end_date: str
    scaled_value: Decimal
    start_date: Optional[str] = None
    context_id: Optional[str] = None
    unit_id: Optional[str] = None
    label: Optional[str] = None
    is_calculated: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            'path_id': self.path_id,
            'depth': self.depth,
            'element_id': self.element_id,
            'label': self.label,
            'end_date': self.end_date,
            'start_date': self.start_date,
            'scaled_value': self.scaled_value,
            'is_calculated': self.is_calculated,
            'context_id': self.context_id,
            'unit_id': self.unit_id,
        }


# ==============================================================================
# VALUE HELPERS
# ==============================================================================

def is_missing_value(value: Any) -> bool:
    """True for empty, NaN and 'NA'-style markers in date and dimension cells."""
    if is_blank(value):
        return True
    return str(value).strip().upper() in MISSING_VALUE_MARKERS


def parse_decimals(
    raw: Any,
    element_id: str = '',
    context_id: Optional[str] = None,
) -> int:
    """
    Read the decimals exponent of a fact.

    Empty and INF mean no rescaling (0).

    Raises:
        NonNumericFactError: If decimals is not an integer
    """
    if is_blank(raw) or str(raw).strip().upper() == INFINITE_DECIMALS:
        return DEFAULT_DECIMALS
    try:
        exponent = Decimal(str(raw).strip())
    except InvalidOperation:
        raise NonNumericFactError(element_id, raw, context_id, field_name='decimals') from None
    if not exponent.is_finite() or exponent != exponent.to_integral_value():
        raise NonNumericFactError(element_id, raw, context_id, field_name='decimals')
    return int(exponent)


def scale_fact_value(
    raw_value: Any,
    raw_decimals: Any = None,
    element_id: str = '',
    context_id: Optional[str] = None,
) -> Decimal:
    """
    Compute value x 10^decimals exactly.

    Args:
        raw_value: Reported value ('1234', '-5.5', '1,234', ...)
        raw_decimals: Reported decimals exponent ('6', '-3', 'INF', None)
        element_id: Concept (for the error message)
        context_id: Context (for the error message)

    Returns:
        Scaled Decimal

    Raises:
        NonNumericFactError: If value or decimals is not numeric

    Example:
        >>> scale_fact_value('1234', '6')
        Decimal('1.234E+9')
        >>> scale_fact_value('1234', '-3')
        Decimal('1.234')
    """
    if is_blank(raw_value):
        raise NonNumericFactError(element_id, raw_value, context_id)
    try:
        value = Decimal(str(raw_value).strip().replace(',', ''))
    except InvalidOperation:
        raise NonNumericFactError(element_id, raw_value, context_id) from None
    if not value.is_finite():
        raise NonNumericFactError(element_id, raw_value, context_id)

    exponent = parse_decimals(raw_decimals, element_id, context_id)
    return value.scaleb(exponent)


def dimension_columns(contexts: pd.DataFrame) -> list[str]:
    """Columns named dimension1..N."""
    return [col for col in contexts.columns if _DIMENSION_RE.match(str(col))]


def base_contexts(contexts: pd.DataFrame) -> pd.DataFrame:
    """
    Contexts without dimensional breakdown that have an end date.

    Args:
        contexts: Context table

    Returns:
        Filtered contexts, one row per contextId

    Raises:
        MissingColumnError: If contextId or endDate is absent
    """
    missing = [col for col in (COL_CONTEXT_ID, COL_END_DATE) if col not in contexts.columns]
    if missing:
        raise MissingColumnError('context', missing)

    mask = ~contexts[COL_END_DATE].map(is_missing_value).astype(bool)
    for col in dimension_columns(contexts):
        mask &= contexts[col].map(is_missing_value).astype(bool)

    eligible = contexts[mask]
    return eligible.drop_duplicates(subset=[COL_CONTEXT_ID], keep='first')


# ==============================================================================
# BINDER
# ==============================================================================

class FactBinder:
    """
    Joins tree nodes to base-context facts.

    Example:
        binder = FactBinder()
        rows = binder.bind(nodes, facts_df, contexts_df)
        print(binder.bound_count, binder.skipped_count)
    """

    def __init__(self):
        """Initialize the fact binder."""
        self._bound_count = 0
        self._skipped_count = 0

    def bind(
        self,
        nodes: list[TreeNode],
        facts: pd.DataFrame,
        contexts: pd.DataFrame,
        report: Optional[BuildReport] = None,
    ) -> list[BoundRow]:
        """
        Bind facts to every tree position of their concept.

        Args:
            nodes: Tree nodes of one role
            facts: Fact table
            contexts: Context table
            report: Report collecting skipped facts

        Returns:
            Bound rows ordered by (path_id, end_date, start_date)

        Raises:
            MissingColumnError: If a required column is absent
        """
        if report is None:
            report = BuildReport()

        missing = [
            col for col in (COL_CONTEXT_ID, COL_ELEMENT_ID, COL_FACT_VALUE)
            if col not in facts.columns
        ]
        if missing:
            raise MissingColumnError('fact', missing)

        if not nodes:
            return []

        element_ids = {node.element_id for node in nodes}
        relevant = facts[facts[COL_ELEMENT_ID].isin(element_ids)]

        eligible_ctx = base_contexts(contexts)
        ctx_columns = [COL_CONTEXT_ID, COL_END_DATE]
        if COL_START_DATE in eligible_ctx.columns:
            ctx_columns.append(COL_START_DATE)

        joined = relevant.merge(
            eligible_ctx[ctx_columns],
            on=COL_CONTEXT_ID,
            how='inner',
            suffixes=('', '_ctx'),
        )

        logger.debug(
            f"{len(relevant)} fact(s) for {len(element_ids)} concept(s), "
            f"{len(joined)} in base contexts with an end date"
        )

        scaled_by_element = self._scale_facts(joined, report)

        rows: list[BoundRow] = []
        for node in nodes:
            for fact in scaled_by_element.get(node.element_id, []):
                rows.append(BoundRow(
                    path_id=node.path_id,
                    depth=node.depth,
                    element_id=node.element_id,
                    end_date=fact['end_date'],
                    scaled_value=fact['value'],
                    start_date=fact['start_date'],
                    context_id=fact['context_id'],
                    unit_id=fact['unit_id'],
                ))

        rows.sort(key=lambda r: (r.path_id, r.end_date, r.start_date or ''))
        self._bound_count += len(rows)

        logger.info(
            f"Bound {len(rows)} value(s) to "
            f"{len({r.path_id for r in rows})}/{len(nodes)} tree position(s)"
        )
        return rows

    def _scale_facts(
        self,
        joined: pd.DataFrame,
        report: BuildReport,
    ) -> dict[str, list[dict[str, Any]]]:
        """Scale every joined fact, recording the ones that fail."""
        result: dict[str, list[dict[str, Any]]] = defaultdict(list)
        has_decimals = COL_DECIMALS in joined.columns
        has_start = COL_START_DATE in joined.columns
        has_unit = COL_UNIT_ID in joined.columns

        for record in joined.to_dict('records'):
            element_id = str(record[COL_ELEMENT_ID])
            context_id = str(record[COL_CONTEXT_ID])
            try:
                value = scale_fact_value(
                    record[COL_FACT_VALUE],
                    record[COL_DECIMALS] if has_decimals else None,
                    element_id=element_id,
                    context_id=context_id,
                )
            except NonNumericFactError as e:
                self._skipped_count += 1
                report.add(BuildIssue(
                    kind=IssueKind.NON_NUMERIC_FACT,
                    severity=ErrorSeverity.ERROR,
                    message=str(e),
                    element_id=element_id,
                    details={'context_id': context_id, 'raw_value': e.raw_value,
                             'field': e.field_name},
                    error=e,
                ))
                logger.warning(f"Skipped fact: {e}")
                continue

            start = record[COL_START_DATE] if has_start else None
            unit = record[COL_UNIT_ID] if has_unit else None
            result[element_id].append({
                'value': value,
                'end_date': str(record[COL_END_DATE]).strip(),
                'start_date': None if is_missing_value(start) else str(start).strip(),
                'context_id': context_id,
                'unit_id': None if is_blank(unit) else str(unit).strip(),
            })

        return dict(result)

    @property
    def bound_count(self) -> int:
        """Total bound rows produced by this binder."""
        return self._bound_count

    @property
    def skipped_count(self) -> int:
        """Total facts skipped as non-numeric."""
        return self._skipped_count

    def reset_stats(self) -> None:
        """Reset binding statistics."""
        self._bound_count = 0
        self._skipped_count = 0


__all__ = [
    'BoundRow',
    'FactBinder',
    'is_missing_value',
    'parse_decimals',
    'scale_fact_value',
    'dimension_columns',
    'base_contexts',
]
