# Path: xbrl_tree/output/formatters/text_formatter.py
"""
Text Formatter

Renders a StatementResult as an indented ASCII statement:

    ======================================================
      Balance Sheet
      http://acme.com/role/BalanceSheet
    ======================================================
      Line item                  2012-12-31    2013-12-31
    ------------------------------------------------------
      Assets
    =   Total current assets          1,000         1,200
          Cash                          400           500

Two spaces per depth level, '=' in the margin for calculated rows and
blank cells where no value was reported.
"""

from xbrl_tree.process.hierarchy.constants import (
    DEFAULT_INDENT_SIZE,
    OUT_DEPTH,
    OUT_ELEMENT_ID,
    OUT_IS_CALCULATED,
    OUT_LABEL,
)
from xbrl_tree.process.hierarchy.statement_builder import StatementResult

from .base_formatter import BaseFormatter, plain_number

CALCULATED_MARKER = '='
HEADER_LABEL = 'Line item'
COLUMN_GAP = 2


class TextFormatter(BaseFormatter):
    """Renders a statement as ASCII text."""

    def __init__(self, indent_size: int = DEFAULT_INDENT_SIZE, show_issues: bool = True):
        self.indent_size = indent_size
        self.show_issues = show_issues

    @property
    def format_name(self) -> str:
        return 'text'

    @property
    def file_extension(self) -> str:
        return '.txt'

    def format_statement(self, result: StatementResult) -> str:
        """Render full statement as text."""
        periods = result.period_columns
        records = result.to_records()

        labels = [self._label_cell(record) for record in records]
        label_width = max([len(HEADER_LABEL)] + [len(label) for label in labels])

        cells = {
            period: [plain_number(record[period], thousands=True) for record in records]
            for period in periods
        }
        widths = {
            period: max([len(str(period))] + [len(cell) for cell in cells[period]]) + COLUMN_GAP
            for period in periods
        }

        line_width = 2 + label_width + sum(widths.values())
        divider = '=' * max(line_width, 40)
        sub_divider = '-' * max(line_width, 40)

        lines = [divider, f"  {result.title}"]
        if result.title != result.role_id:
            lines.append(f"  {result.role_id}")
        lines.append(divider)

        header = f"  {HEADER_LABEL:<{label_width}}"
        header += ''.join(f"{str(period):>{widths[period]}}" for period in periods)
        lines.append(header.rstrip())
        lines.append(sub_divider)

        for i, record in enumerate(records):
            marker = CALCULATED_MARKER if record.get(OUT_IS_CALCULATED) else ' '
            row = f"{marker} {labels[i]:<{label_width}}"
            row += ''.join(f"{cells[period][i]:>{widths[period]}}" for period in periods)
            lines.append(row.rstrip())

        if not records:
            lines.append("  (no line items)")

        if self.show_issues and len(result.report):
            lines.append(sub_divider)
            lines.append("  Issues:")
            for summary_line in result.report.summary().splitlines():
                lines.append(f"    {summary_line}")

        lines.append('')
        return '\n'.join(lines)

    def _label_cell(self, record: dict) -> str:
        """Indented label (element id when unlabeled)."""
        indent = ' ' * (int(record.get(OUT_DEPTH) or 0) * self.indent_size)
        label = record.get(OUT_LABEL) or record.get(OUT_ELEMENT_ID) or ''
        return f"{indent}{label}"


__all__ = ['TextFormatter']
