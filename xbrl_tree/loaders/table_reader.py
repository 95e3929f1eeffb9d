# Path: xbrl_tree/loaders/table_reader.py
"""
Table Reader for xbrl_tree

Reads discovered table files into pandas DataFrames. Every column is read
as text (dtype=str) so identifiers, orders and decimals reach the
hierarchy engine exactly as the parser wrote them; numeric coercion
happens there.

Example:
    loader = TableDataLoader(config)
    tables = TableReader().read_tables(loader.discover_tables())
    print(len(tables.fact), 'facts')
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Union

import pandas as pd

from xbrl_tree.core.logger import get_input_logger
from xbrl_tree.process.hierarchy.constants import COL_ROLE_ID
from xbrl_tree.process.hierarchy.errors import MissingColumnError, TableSchemaError

from .constants import (
    EXPECTED_COLUMNS,
    REQUIRED_COLUMNS,
    TABLE_EXTENSIONS,
    TABLE_NAMES,
)


def empty_table(name: str) -> pd.DataFrame:
    """Empty DataFrame with the expected columns of a table."""
    return pd.DataFrame(columns=EXPECTED_COLUMNS.get(name, []), dtype=str)


def _empty(name: str):
    return field(default_factory=lambda: empty_table(name))


@dataclass
class XbrlTables:
    """
    The parsed tables of one filing.

    A table that was not provided is an empty DataFrame with the expected
    columns, so downstream code never checks for None.
    """
    element: pd.DataFrame = _empty('element')
    label: pd.DataFrame = _empty('label')
    context: pd.DataFrame = _empty('context')
    fact: pd.DataFrame = _empty('fact')
    presentation: pd.DataFrame = _empty('presentation')
    calculation: pd.DataFrame = _empty('calculation')
    definition: pd.DataFrame = _empty('definition')
    role: pd.DataFrame = _empty('role')

    def get(self, name: str) -> pd.DataFrame:
        """Table by name."""
        if name not in TABLE_NAMES:
            raise KeyError(f"Unknown table: {name}")
        return getattr(self, name)

    def row_counts(self) -> dict[str, int]:
        """Rows per table."""
        return {f.name: len(getattr(self, f.name)) for f in fields(self)}

    @property
    def role_ids(self) -> list[str]:
        """Distinct presentation roles, in first-seen order."""
        if self.presentation.empty or COL_ROLE_ID not in self.presentation.columns:
            return []
        return list(dict.fromkeys(self.presentation[COL_ROLE_ID].dropna()))


class TableReader:
    """
    Reads table files as text DataFrames and checks their columns.
    """

    def __init__(self):
        self.logger = get_input_logger('table_reader')

    def read_table(self, path: Union[str, Path], name: str) -> pd.DataFrame:
        """
        Read one table file.

        Args:
            path: .csv, .tsv or .txt file
            name: Table name (for column validation)

        Returns:
            DataFrame of strings; empty cells are NaN

        Raises:
            TableSchemaError: If the file cannot be parsed
            MissingColumnError: If a required column is absent
        """
        path = Path(path)
        separator = TABLE_EXTENSIONS.get(path.suffix.lower(), ',')

        try:
            if separator is None:
                df = pd.read_csv(path, sep=None, engine='python', dtype=str)
            else:
                df = pd.read_csv(path, sep=separator, dtype=str)
        except pd.errors.EmptyDataError:
            self.logger.warning(f"Empty table file: {path}")
            return empty_table(name)
        except pd.errors.ParserError as e:
            raise TableSchemaError(f"Cannot parse table '{name}' from {path}: {e}") from e

        df.columns = [str(col).strip() for col in df.columns]

        missing = [col for col in REQUIRED_COLUMNS.get(name, []) if col not in df.columns]
        if missing:
            raise MissingColumnError(name, missing)

        self.logger.debug(f"Read {len(df)} row(s) from {path.name}")
        return df

    def read_tables(self, paths: dict[str, Path]) -> XbrlTables:
        """
        Read every discovered table into an XbrlTables bundle.

        Args:
            paths: Table name -> file path (from TableDataLoader)

        Returns:
            XbrlTables with empty stand-ins for absent tables
        """
        loaded = {}
        for name, path in paths.items():
            if name not in TABLE_NAMES:
                continue
            loaded[name] = self.read_table(path, name)

        tables = XbrlTables(**loaded)
        counts = ', '.join(f"{k}={v}" for k, v in tables.row_counts().items())
        self.logger.info(f"Loaded tables: {counts}")
        return tables


__all__ = [
    'XbrlTables',
    'TableReader',
    'empty_table',
]
