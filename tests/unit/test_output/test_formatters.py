# Path: tests/unit/test_output/test_formatters.py
"""
Tests for statement formatters.
"""

from decimal import Decimal

import pandas as pd
import pytest

from xbrl_tree.output import CsvFormatter, FormatterRegistry, TextFormatter, register_default_formatters
from xbrl_tree.output.formatters.base_formatter import plain_number, to_decimal
from xbrl_tree.process.hierarchy import StatementBuilder

from fixtures.sample_tables import BS_ROLE, create_small_example


@pytest.fixture
def balance_sheet(sample_tables):
    return StatementBuilder(sample_tables).build(BS_ROLE)


class TestNumberHelpers:
    """Test cell conversion helpers."""

    def test_to_decimal(self):
        assert to_decimal(Decimal('5')) == Decimal('5')
        assert to_decimal('1.5') == Decimal('1.5')
        assert to_decimal(None) is None
        assert to_decimal(float('nan')) is None
        assert to_decimal(Decimal('NaN')) is None
        assert to_decimal('abc') is None

    def test_plain_number(self):
        assert plain_number(Decimal('1.234E+9')) == '1234000000'
        assert plain_number(Decimal('1.234E+9'), thousands=True) == '1,234,000,000'
        assert plain_number(Decimal('1.234')) == '1.234'
        assert plain_number(None) == ''
        assert plain_number(pd.NA) == ''


class TestFormatterRegistry:
    """Test formatter lookup."""

    def test_default_formatters(self):
        register_default_formatters()
        assert {'text', 'csv'} <= set(FormatterRegistry.get_available())
        assert isinstance(FormatterRegistry.get('text'), TextFormatter)
        assert isinstance(FormatterRegistry.get('csv'), CsvFormatter)

    def test_unknown_format(self):
        assert FormatterRegistry.get('xlsx') is None

    def test_clear(self):
        register_default_formatters()
        FormatterRegistry.clear()
        assert FormatterRegistry.get_available() == []
        register_default_formatters()


class TestTextFormatter:
    """Test indented text rendering."""

    def test_header(self, balance_sheet):
        text = TextFormatter().format_statement(balance_sheet)
        assert '0002 - Statement - Consolidated Balance Sheets' in text
        assert BS_ROLE in text
        header = next(line for line in text.splitlines() if 'Line item' in line)
        assert header.index('2012-12-31') < header.index('2013-12-31')

    def test_indentation_and_marker(self, balance_sheet):
        lines = TextFormatter().format_statement(balance_sheet).splitlines()
        assert any(line.startswith('  Balance Sheet [Abstract]') for line in lines)
        assets = next(line for line in lines if 'Total assets' in line)
        assert assets.startswith('=   Total assets')
        cash = next(line for line in lines if line.strip().startswith('Cash'))
        assert cash.startswith('      Cash')

    def test_values(self, balance_sheet):
        lines = TextFormatter().format_statement(balance_sheet).splitlines()
        assets = next(line for line in lines if 'Total assets' in line)
        assert assets.endswith('1,200')
        cash = next(line for line in lines if line.strip().startswith('Cash'))
        assert cash.split()[-2:] == ['90', '100']

    def test_issue_summary(self, balance_sheet):
        text = TextFormatter().format_statement(balance_sheet)
        assert 'Issues:' in text
        assert 'NON_NUMERIC_FACT: 1' in text
        assert 'Issues:' not in TextFormatter(show_issues=False).format_statement(balance_sheet)

    def test_empty_statement(self, sample_tables):
        result = StatementBuilder(sample_tables).build('http://acme.com/role/Missing')
        assert '(no line items)' in TextFormatter().format_statement(result)

    def test_write_statement(self, balance_sheet, temp_dir):
        path = TextFormatter().write_statement(balance_sheet, temp_dir / 'out')
        assert path.name == 'statement_ConsolidatedBalanceSheets.txt'
        assert 'Total assets' in path.read_text(encoding='utf-8')


class TestCsvFormatter:
    """Test CSV rendering."""

    def test_columns_and_values(self, balance_sheet):
        lines = CsvFormatter().format_statement(balance_sheet).splitlines()
        assert lines[0] == 'path_id,depth,element_id,label,is_calculated,2012-12-31,2013-12-31'
        assert ',Total assets,True,,1200' in lines[2]

    def test_fixed_point_values(self):
        result = StatementBuilder(create_small_example('1234', '6')).build('R1')
        text = CsvFormatter().format_statement(result)
        assert '1234000000' in text
        assert 'E+' not in text

    def test_write_statement(self, balance_sheet, temp_dir):
        path = CsvFormatter().write_statement(balance_sheet, temp_dir)
        assert path.suffix == '.csv'
        written = pd.read_csv(path, dtype=str, keep_default_na=False)
        assert list(written['path_id']) == ['', '01', '0101', '0102', '02']
