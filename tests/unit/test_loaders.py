# Path: tests/unit/test_loaders.py
"""
Tests for table discovery and reading.
"""

import pandas as pd
import pytest

from xbrl_tree.loaders import TableDataLoader, TableReader, XbrlTables
from xbrl_tree.loaders.table_reader import empty_table
from xbrl_tree.process.hierarchy.errors import MissingColumnError

from fixtures.sample_tables import BS_ROLE, IS_ROLE, PAREN_ROLE, write_tables


class TestTableDataLoader:
    """Test table file discovery."""

    def test_requires_directory(self):
        with pytest.raises(ValueError):
            TableDataLoader()

    def test_config_directory(self, mock_config, tables_dir):
        loader = TableDataLoader(mock_config)
        assert loader.tables_dir == tables_dir

    def test_explicit_directory_wins(self, mock_config, temp_dir):
        loader = TableDataLoader(mock_config, tables_dir=temp_dir / 'other')
        assert loader.tables_dir == temp_dir / 'other'

    def test_discovers_written_tables(self, tables_dir):
        paths = TableDataLoader(tables_dir=tables_dir).discover_tables()
        assert set(paths) == {
            'element', 'label', 'context', 'fact', 'presentation', 'calculation', 'role',
        }
        assert paths['fact'].name == 'fact.csv'

    def test_missing_directory(self, temp_dir):
        assert TableDataLoader(tables_dir=temp_dir / 'absent').discover_tables() == {}

    def test_tsv_preference(self, temp_dir, sample_tables, mock_config):
        directory = write_tables(sample_tables, temp_dir / 'mixed', extension='.tsv')
        (directory / 'fact.csv').write_text('contextId,elementId,fact\n')
        mock_config.get.side_effect = lambda key, default=None: {
            'tables_dir': directory, 'table_format': 'tsv',
        }.get(key, default)

        assert TableDataLoader(mock_config).find_table('fact').suffix == '.tsv'

    def test_find_table_absent(self, tables_dir):
        assert TableDataLoader(tables_dir=tables_dir).find_table('definition') is None


class TestTableReader:
    """Test reading table files."""

    def test_reads_all_tables(self, tables_dir):
        paths = TableDataLoader(tables_dir=tables_dir).discover_tables()
        tables = TableReader().read_tables(paths)
        counts = tables.row_counts()
        assert counts['fact'] == 9
        assert counts['presentation'] == 7
        assert counts['definition'] == 0
        assert tables.role_ids == [BS_ROLE, IS_ROLE, PAREN_ROLE]

    def test_values_read_as_text(self, tables_dir):
        facts = TableReader().read_table(tables_dir / 'fact.csv', 'fact')
        assert facts.loc[0, 'fact'] == '100'
        assert facts.loc[0, 'decimals'] == '0'

    def test_tsv(self, temp_dir, sample_tables):
        directory = write_tables(sample_tables, temp_dir / 'tsv', extension='.tsv')
        edges = TableReader().read_table(directory / 'presentation.tsv', 'presentation')
        assert list(edges.columns[:3]) == ['roleId', 'fromElementId', 'toElementId']

    def test_sniffed_txt(self, temp_dir):
        path = temp_dir / 'role.txt'
        path.write_text('roleId;definition\nR1;Balance Sheet\n')
        roles = TableReader().read_table(path, 'role')
        assert list(roles.columns) == ['roleId', 'definition']

    def test_missing_required_column(self, temp_dir):
        path = temp_dir / 'presentation.csv'
        path.write_text('roleId,fromElementId\nR1,a\n')
        with pytest.raises(MissingColumnError) as exc_info:
            TableReader().read_table(path, 'presentation')
        assert exc_info.value.missing == ['toElementId']

    def test_empty_file(self, temp_dir):
        path = temp_dir / 'fact.csv'
        path.write_text('')
        facts = TableReader().read_table(path, 'fact')
        assert facts.empty
        assert 'elementId' in facts.columns

    def test_unknown_names_ignored(self, tables_dir):
        tables = TableReader().read_tables({'notes': tables_dir / 'fact.csv'})
        assert tables.row_counts()['fact'] == 0


class TestXbrlTables:
    """Test the table bundle."""

    def test_defaults_are_empty_with_columns(self):
        tables = XbrlTables()
        assert tables.fact.empty
        assert 'contextId' in tables.fact.columns
        assert tables.role_ids == []

    def test_get(self, sample_tables):
        assert sample_tables.get('role') is sample_tables.role
        with pytest.raises(KeyError):
            sample_tables.get('notes')

    def test_empty_table_unknown_name(self):
        assert list(empty_table('notes').columns) == []

    def test_role_ids_skip_blank(self):
        tables = XbrlTables(presentation=pd.DataFrame({'roleId': ['R1', None, 'R1', 'R2']}))
        assert tables.role_ids == ['R1', 'R2']
