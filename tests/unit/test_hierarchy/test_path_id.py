# Path: tests/unit/test_hierarchy/test_path_id.py
"""
Tests for path_id generation.
"""

import pytest

from xbrl_tree.process.hierarchy.path_id import (
    child_path_id,
    format_segment,
    is_descendant,
    rank_width,
)


class TestRankWidth:
    """Test segment width selection."""

    def test_default_minimum(self):
        """Small groups use the two digit minimum."""
        assert rank_width(1) == 2
        assert rank_width(99) == 2

    def test_widens_past_99(self):
        """A hundredth sibling needs three digits."""
        assert rank_width(100) == 3
        assert rank_width(150) == 3

    def test_custom_minimum(self):
        """The minimum can be raised."""
        assert rank_width(5, minimum=4) == 4

    def test_zero_rank(self):
        """A zero max rank still gets the minimum width."""
        assert rank_width(0) == 2


class TestFormatSegment:
    """Test zero padding of sibling ranks."""

    def test_pads_rank(self):
        """Ranks are zero padded to the width."""
        assert format_segment(1) == '01'
        assert format_segment(7, width=3) == '007'

    def test_rejects_zero(self):
        """Ranks are 1-based."""
        with pytest.raises(ValueError):
            format_segment(0)

    def test_rejects_overflow(self):
        """A rank wider than the segment is rejected."""
        with pytest.raises(ValueError):
            format_segment(100, width=2)


class TestChildPathId:
    """Test path composition."""

    def test_child_of_root(self):
        """Children of the single root have one segment."""
        assert child_path_id('', 1) == '01'

    def test_nested_child(self):
        """Segments are appended to the parent path."""
        assert child_path_id('02', 3) == '0203'

    def test_wide_segment(self):
        """The build width applies to every segment."""
        assert child_path_id('001', 12, width=3) == '001012'


class TestIsDescendant:
    """Test prefix based ancestry."""

    def test_below_ancestor(self):
        """Descendants share the ancestor prefix and are longer."""
        assert is_descendant('0102', '01')
        assert is_descendant('01', '')

    def test_not_self(self):
        """A position is not its own descendant."""
        assert not is_descendant('01', '01')

    def test_sibling_branch(self):
        """Another branch is not below the ancestor."""
        assert not is_descendant('0201', '01')

    def test_other_root_of_forest(self):
        """Roots of a forest are not below each other."""
        assert not is_descendant('02', '01')
        assert not is_descendant('01', '02')


class TestPreorderSorting:
    """Test that string order of path ids is pre-order."""

    def test_parent_sorts_before_children(self):
        """Sorting places each parent before its subtree."""
        paths = ['02', '0101', '', '01', '0201', '0102']
        assert sorted(paths) == ['', '01', '0101', '0102', '02', '0201']

    def test_equal_width_keeps_numeric_order(self):
        """Three digit segments keep 100 after 99."""
        paths = [child_path_id('', rank, width=3) for rank in (100, 99, 9)]
        assert sorted(paths) == ['009', '099', '100']
