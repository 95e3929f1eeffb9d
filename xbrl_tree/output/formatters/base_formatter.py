# Path: xbrl_tree/output/formatters/base_formatter.py
"""
Base Formatter and Formatter Registry

Abstract base class for statement formatters and a registry
to look them up by format name.

To add a new format:
1. Subclass BaseFormatter
2. Implement format_statement()
3. Register via FormatterRegistry.register()
"""

import re
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Optional, Type

import pandas as pd

from xbrl_tree.process.hierarchy.annotator import role_name
from xbrl_tree.process.hierarchy.statement_builder import StatementResult


def to_decimal(value: Any) -> Optional[Decimal]:
    """Cell value as Decimal, None for missing cells."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


def plain_number(value: Any, thousands: bool = False) -> str:
    """
    Fixed-point text of a cell ('' when missing).

    Example:
        >>> plain_number(Decimal('1.234E+9'), thousands=True)
        '1,234,000,000'
    """
    number = to_decimal(value)
    if number is None:
        return ''
    return format(number, ',f' if thousands else 'f')


class BaseFormatter(ABC):
    """
    Abstract base for statement formatters.

    Each subclass renders a StatementResult into a specific format.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Short name for this format (e.g., 'text', 'csv')."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension including dot (e.g., '.txt', '.csv')."""

    @abstractmethod
    def format_statement(self, result: StatementResult) -> str:
        """
        Render a statement to string.

        Args:
            result: StatementResult to render

        Returns:
            Formatted string representation
        """

    def write_statement(self, result: StatementResult, output_path: Path) -> Path:
        """
        Write a statement to file.

        Args:
            result: StatementResult to render
            output_path: Directory to write into

        Returns:
            Path to the written file
        """
        output_path = Path(output_path)
        output_path.mkdir(parents=True, exist_ok=True)
        filepath = output_path / self._build_filename(result)

        content = self.format_statement(result)
        filepath.write_text(content, encoding='utf-8')
        return filepath

    def _build_filename(self, result: StatementResult) -> str:
        """Build output filename from the role id."""
        name = re.sub(r'[^A-Za-z0-9]+', '_', role_name(result.role_id)).strip('_')
        return f"statement_{name or 'role'}{self.file_extension}"


class FormatterRegistry:
    """
    Registry of available formatters.

    Lookup by format name.
    """

    _formatters: Dict[str, Type[BaseFormatter]] = {}

    @classmethod
    def register(cls, formatter_class: Type[BaseFormatter]) -> None:
        """Register a formatter class."""
        instance = formatter_class()
        cls._formatters[instance.format_name] = formatter_class

    @classmethod
    def get(cls, format_name: str) -> Optional[BaseFormatter]:
        """Get a formatter instance by name."""
        formatter_class = cls._formatters.get(format_name)
        if formatter_class:
            return formatter_class()
        return None

    @classmethod
    def get_available(cls) -> list[str]:
        """Return list of registered format names."""
        return list(cls._formatters.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations (for testing)."""
        cls._formatters.clear()


__all__ = ['BaseFormatter', 'FormatterRegistry', 'to_decimal', 'plain_number']
