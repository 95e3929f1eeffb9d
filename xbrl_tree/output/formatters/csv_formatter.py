# Path: xbrl_tree/output/formatters/csv_formatter.py
"""
CSV Formatter

Writes the wide statement table for spreadsheet import: one row per
tree position, one column per period. Values are written in fixed-point
notation; missing cells stay empty.
"""

from xbrl_tree.process.hierarchy.statement_builder import StatementResult

from .base_formatter import BaseFormatter, plain_number


class CsvFormatter(BaseFormatter):
    """Renders a statement as CSV."""

    @property
    def format_name(self) -> str:
        return 'csv'

    @property
    def file_extension(self) -> str:
        return '.csv'

    def format_statement(self, result: StatementResult) -> str:
        """Render the wide table as a CSV string."""
        table = result.table.copy()
        for period in result.period_columns:
            table[period] = table[period].map(plain_number)
        return table.to_csv(index=False)


__all__ = ['CsvFormatter']
