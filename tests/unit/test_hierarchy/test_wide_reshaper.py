# Path: tests/unit/test_hierarchy/test_wide_reshaper.py
"""
Tests for the wide reshaper.
"""

from decimal import Decimal

import pandas as pd
import pytest

from xbrl_tree.process.hierarchy.constants import PeriodOrder
from xbrl_tree.process.hierarchy.errors import BuildReport, ErrorSeverity, IssueKind
from xbrl_tree.process.hierarchy.fact_binder import BoundRow
from xbrl_tree.process.hierarchy.node import TreeNode
from xbrl_tree.process.hierarchy.wide_reshaper import WideReshaper, coerce_period_order, reshape_wide


NODES = [
    TreeNode('root', '', 0),
    TreeNode('A', '01', 1, parent_id='root', parent_path_id=''),
    TreeNode('A1', '0101', 2, parent_id='A', parent_path_id='01'),
    TreeNode('B', '02', 1, parent_id='root', parent_path_id='', rank=2),
]


def row(path_id, element_id, end_date, value, start_date=None, context_id=None):
    return BoundRow(
        path_id=path_id,
        depth=len(path_id) // 2,
        element_id=element_id,
        end_date=end_date,
        scaled_value=Decimal(value),
        start_date=start_date,
        context_id=context_id,
    )


class TestCoercePeriodOrder:
    """Test period order parsing."""

    @pytest.mark.parametrize('value,expected', [
        (None, PeriodOrder.ASCENDING),
        ('asc', PeriodOrder.ASCENDING),
        ('Ascending', PeriodOrder.ASCENDING),
        ('desc', PeriodOrder.DESCENDING),
        (PeriodOrder.DESCENDING, PeriodOrder.DESCENDING),
    ])
    def test_accepted_values(self, value, expected):
        assert coerce_period_order(value) is expected

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            coerce_period_order('sideways')


class TestReshape:
    """Test WideReshaper.reshape."""

    def test_one_row_per_node(self):
        table = reshape_wide(NODES, [row('0101', 'A1', '2013-12-31', '100')])
        assert list(table['path_id']) == ['', '01', '0101', '02']
        assert list(table.columns) == ['path_id', 'depth', 'element_id', '2013-12-31']
        assert table.loc[2, '2013-12-31'] == Decimal('100')

    def test_missing_cells_are_nan(self):
        """Nodes without facts get NaN, never zero."""
        table = reshape_wide(NODES, [row('0101', 'A1', '2013-12-31', '100')])
        assert pd.isna(table.loc[0, '2013-12-31'])
        assert pd.isna(table.loc[3, '2013-12-31'])

    def test_no_rows_keeps_node_frame(self):
        table = reshape_wide(NODES, [])
        assert list(table.columns) == ['path_id', 'depth', 'element_id']
        assert len(table) == 4

    def test_no_nodes(self):
        table = reshape_wide([], [])
        assert table.empty
        assert list(table.columns) == ['path_id', 'depth', 'element_id']

    def test_ascending_periods(self):
        rows = [row('0101', 'A1', '2013-12-31', '100'), row('0101', 'A1', '2012-12-31', '90')]
        table = reshape_wide(NODES, rows)
        assert WideReshaper.period_columns(table) == ['2012-12-31', '2013-12-31']

    def test_descending_periods(self):
        rows = [row('0101', 'A1', '2012-12-31', '90'), row('0101', 'A1', '2013-12-31', '100')]
        table = reshape_wide(NODES, rows, period_order='descending')
        assert WideReshaper.period_columns(table) == ['2013-12-31', '2012-12-31']

    def test_rows_follow_path_order(self):
        table = reshape_wide(list(reversed(NODES)), [row('02', 'B', '2013-12-31', '5')])
        assert list(table['path_id']) == ['', '01', '0101', '02']
        assert table.loc[3, '2013-12-31'] == Decimal('5')

    def test_period_columns_skip_annotations(self):
        table = pd.DataFrame(columns=['path_id', 'depth', 'element_id', 'label',
                                      'is_calculated', '2013-12-31'])
        assert WideReshaper.period_columns(table) == ['2013-12-31']


class TestDuplicatePeriods:
    """Test competing facts for one cell."""

    def test_earliest_start_wins(self):
        report = BuildReport()
        rows = [
            row('01', 'A', '2013-12-31', '150', start_date='2013-10-01', context_id='q4'),
            row('01', 'A', '2013-12-31', '500', start_date='2013-01-01', context_id='fy'),
        ]
        table = WideReshaper().reshape(NODES, rows, report=report)
        assert table.loc[1, '2013-12-31'] == Decimal('500')

        issues = report.by_kind(IssueKind.DUPLICATE_PERIOD)
        assert len(issues) == 1
        assert issues[0].severity == ErrorSeverity.WARNING
        assert issues[0].details['kept_context_id'] == 'fy'
        assert issues[0].details['dropped_context_id'] == 'q4'

    def test_same_concept_at_two_positions_is_not_duplicate(self):
        report = BuildReport()
        rows = [row('01', 'A', '2013-12-31', '1'), row('02', 'A', '2013-12-31', '1')]
        WideReshaper().reshape(NODES, rows, report=report)
        assert len(report) == 0
