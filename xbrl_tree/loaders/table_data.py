# Path: xbrl_tree/loaders/table_data.py
"""
Table Data Loader for xbrl_tree

Discovers the parsed table files of one filing in a directory:

    <tables_dir>/element.csv
    <tables_dir>/presentation.tsv
    ...

Only paths are returned; TableReader decides how to read them.
"""

from pathlib import Path
from typing import Optional, Union

from xbrl_tree.core.logger import get_input_logger

from .constants import EXTENSION_PREFERENCE, TABLE_NAMES


class TableDataLoader:
    """
    Finds <table>.csv / .tsv / .txt files for every known table.

    Example:
        loader = TableDataLoader(config)
        paths = loader.discover_tables()
        # {'fact': Path('.../fact.csv'), 'presentation': Path(...), ...}
    """

    def __init__(self, config=None, tables_dir: Union[str, Path, None] = None):
        """
        Initialize the table data loader.

        Args:
            config: ConfigLoader (tables_dir, table_format)
            tables_dir: Explicit directory, overrides config

        Raises:
            ValueError: If no tables directory is configured
        """
        self.config = config
        self.logger = get_input_logger('table_data')

        configured = config.get('tables_dir') if config is not None else None
        directory = tables_dir or configured
        if not directory:
            raise ValueError(
                "Tables directory not configured. "
                "Pass --tables or set XBRL_TREE_TABLES_DIR in .env"
            )
        self.tables_dir = Path(directory)

        table_format = config.get('table_format', 'csv') if config is not None else 'csv'
        self.extensions = EXTENSION_PREFERENCE.get(table_format, EXTENSION_PREFERENCE['csv'])

        self.logger.info(f"TableDataLoader initialized: {self.tables_dir}")

    def find_table(self, name: str) -> Optional[Path]:
        """Path of one table file, or None when absent."""
        for extension in self.extensions:
            candidate = self.tables_dir / f"{name}{extension}"
            if candidate.is_file():
                return candidate
        return None

    def discover_tables(self) -> dict[str, Path]:
        """
        Locate every known table in the tables directory.

        Returns:
            Table name -> file path, for the tables that exist
        """
        if not self.tables_dir.is_dir():
            self.logger.warning(f"Tables directory not found: {self.tables_dir}")
            return {}

        found = {}
        for name in TABLE_NAMES:
            path = self.find_table(name)
            if path is not None:
                found[name] = path

        missing = [name for name in TABLE_NAMES if name not in found]
        self.logger.info(f"Found {len(found)}/{len(TABLE_NAMES)} table(s) in {self.tables_dir}")
        if missing:
            self.logger.debug(f"Absent tables: {', '.join(missing)}")
        return found


__all__ = ['TableDataLoader']
