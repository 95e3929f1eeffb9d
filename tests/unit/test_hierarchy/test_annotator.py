# Path: tests/unit/test_hierarchy/test_annotator.py
"""
Tests for label resolution and calculation annotation.
"""

from decimal import Decimal

import pandas as pd
import pytest

from xbrl_tree.process.hierarchy.annotator import (
    Annotator,
    LabelResolver,
    element_balances,
    lang_matches,
    role_matches,
    role_name,
)
from xbrl_tree.process.hierarchy.edge_normalizer import NormalizedEdge
from xbrl_tree.process.hierarchy.errors import BuildReport, ErrorSeverity, IssueKind, MissingColumnError
from xbrl_tree.process.hierarchy.fact_binder import BoundRow
from xbrl_tree.process.hierarchy.node import TreeNode

from fixtures.sample_tables import LABEL_ROLE, TOTAL_LABEL_ROLE


@pytest.fixture
def labels():
    return pd.DataFrame([
        ('Assets', LABEL_ROLE, 'en-US', 'Assets'),
        ('Assets', TOTAL_LABEL_ROLE, 'en-US', 'Total assets'),
        ('Cash', LABEL_ROLE, 'de', 'Kasse'),
        ('Cash', LABEL_ROLE, 'en', 'Cash'),
        ('Terse', 'http://www.xbrl.org/2003/role/terseLabel', 'en-US', 'Terse only'),
        ('Untagged', LABEL_ROLE, None, 'No language'),
        ('British', LABEL_ROLE, 'en-GB', 'British label'),
    ], columns=['elementId', 'labelRole', 'lang', 'labelString'])


class TestMatchingHelpers:
    """Test role and language matching."""

    def test_role_name(self):
        assert role_name(TOTAL_LABEL_ROLE) == 'totalLabel'
        assert role_name('http://x.com/roles#custom') == 'custom'
        assert role_name('label') == 'label'

    def test_role_matches(self):
        assert role_matches(TOTAL_LABEL_ROLE, 'totalLabel')
        assert role_matches(TOTAL_LABEL_ROLE, 'http://other.org/role/TOTALLABEL')
        assert not role_matches(LABEL_ROLE, TOTAL_LABEL_ROLE)

    @pytest.mark.parametrize('candidate,target,expected', [
        ('en-US', 'en-US', True),
        ('EN_us', 'en-US', True),
        ('en', 'en-US', True),
        ('en-US', 'en', True),
        ('en-GB', 'en-US', False),
        ('de', 'en-US', False),
        ('', 'en-US', False),
    ])
    def test_lang_matches(self, candidate, target, expected):
        assert lang_matches(candidate, target) is expected


class TestLabelResolver:
    """Test label fallback order."""

    def test_standard_label(self, labels):
        assert LabelResolver(labels).resolve('Assets') == 'Assets'

    def test_preferred_role(self, labels):
        resolver = LabelResolver(labels)
        assert resolver.resolve('Assets', TOTAL_LABEL_ROLE) == 'Total assets'
        assert resolver.resolve('Assets', 'totalLabel') == 'Total assets'

    def test_unknown_preferred_role_falls_back(self, labels):
        assert LabelResolver(labels).resolve('Assets', 'periodStartLabel') == 'Assets'

    def test_bare_language_label(self, labels):
        assert LabelResolver(labels).resolve('Cash') == 'Cash'

    def test_other_language(self, labels):
        assert LabelResolver(labels, lang='de').resolve('Cash') == 'Kasse'

    def test_any_role_in_language(self, labels):
        assert LabelResolver(labels).resolve('Terse') == 'Terse only'

    def test_untagged_label(self, labels):
        assert LabelResolver(labels).resolve('Untagged') == 'No language'

    def test_other_region_excluded(self, labels):
        resolver = LabelResolver(labels)
        assert resolver.resolve('British') == 'British'
        assert 'British' not in resolver

    def test_element_id_fallback(self, labels):
        assert LabelResolver(labels).resolve('us-gaap_Unknown') == 'us-gaap_Unknown'

    def test_empty_table(self):
        resolver = LabelResolver(pd.DataFrame())
        assert len(resolver) == 0
        assert resolver.resolve('A') == 'A'

    def test_missing_columns(self):
        with pytest.raises(MissingColumnError):
            LabelResolver(pd.DataFrame({'elementId': ['A']}))


class TestAnnotator:
    """Test Annotator."""

    @pytest.fixture
    def nodes(self):
        return [
            TreeNode('Root', '', 0),
            TreeNode('Assets', '01', 1, parent_id='Root', parent_path_id='',
                     preferred_label=TOTAL_LABEL_ROLE),
            TreeNode('Cash', '0101', 2, parent_id='Assets', parent_path_id='01'),
        ]

    @pytest.fixture
    def annotator(self, labels):
        calc = [NormalizedEdge('Assets', 'Cash', 1.0), NormalizedEdge('Assets', 'Allowance', 2.0)]
        return Annotator(labels, calc)

    def test_label_for_uses_preferred_label(self, annotator, nodes):
        assert annotator.label_for(nodes[1]) == 'Total assets'
        assert annotator.label_for(nodes[0]) == 'Root'

    def test_is_calculated(self, annotator):
        assert annotator.is_calculated('Assets')
        assert not annotator.is_calculated('Cash')

    def test_annotate_table(self, annotator, nodes):
        table = pd.DataFrame({
            'path_id': ['', '01', '0101'],
            'depth': [0, 1, 2],
            'element_id': ['Root', 'Assets', 'Cash'],
            '2013-12-31': [None, None, Decimal('100')],
        })
        result = annotator.annotate_table(table, nodes)
        assert list(result.columns) == [
            'path_id', 'depth', 'element_id', 'label', 'is_calculated', '2013-12-31',
        ]
        assert list(result['label']) == ['Root', 'Total assets', 'Cash']
        assert list(result['is_calculated']) == [False, True, False]
        assert 'label' not in table.columns

    def test_annotate_rows(self, annotator, nodes):
        rows = [BoundRow('01', 1, 'Assets', '2013-12-31', Decimal('5'))]
        annotated = annotator.annotate_rows(rows, nodes)
        assert annotated[0].label == 'Total assets'
        assert annotated[0].is_calculated is True
        assert rows[0].label is None

    def test_balance_mismatch(self, annotator):
        elements = pd.DataFrame({
            'elementId': ['Assets', 'Cash', 'Allowance'],
            'balance': ['debit', 'Debit', 'credit'],
        })
        report = BuildReport()
        notices = annotator.find_balance_mismatches(elements, report=report)
        assert len(notices) == 1
        assert notices[0].element_id == 'Allowance'
        assert notices[0].severity == ErrorSeverity.INFO
        assert report.count(IssueKind.BALANCE_SIGN_MISMATCH) == 1

    def test_balance_mismatch_without_balances(self, annotator):
        assert annotator.find_balance_mismatches(pd.DataFrame()) == []

    def test_element_balances(self):
        elements = pd.DataFrame({'elementId': ['A', 'B', 'C'], 'balance': ['DEBIT', None, ' credit ']})
        assert element_balances(elements) == {'A': 'debit', 'C': 'credit'}
