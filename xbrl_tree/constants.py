# Path: xbrl_tree/constants.py
"""
System-Wide Constants for xbrl_tree

Console markers and exit codes of the command line tool. Constants of
the reconstruction engine live in process/hierarchy/constants.py.
"""

from typing import Final


# ==============================================================================
# CONSOLE
# ==============================================================================

MENU_WIDTH: Final[int] = 60
MENU_SEPARATOR: Final[str] = '-' * MENU_WIDTH
MENU_HEADER: Final[str] = '=' * MENU_WIDTH

STATUS_OK: Final[str] = '[OK]'
STATUS_FAIL: Final[str] = '[FAIL]'
STATUS_WARN: Final[str] = '[WARN]'
STATUS_INFO: Final[str] = '[INFO]'


# ==============================================================================
# EXIT CODES
# ==============================================================================

EXIT_OK: Final[int] = 0
EXIT_ERROR: Final[int] = 1
EXIT_INTERRUPTED: Final[int] = 130


# ==============================================================================
# OUTPUT FORMATS
# ==============================================================================

FORMAT_TEXT: Final[str] = 'text'
FORMAT_CSV: Final[str] = 'csv'
OUTPUT_FORMATS: Final[tuple] = (FORMAT_TEXT, FORMAT_CSV)


__all__ = [
    'MENU_WIDTH',
    'MENU_SEPARATOR',
    'MENU_HEADER',
    'STATUS_OK',
    'STATUS_FAIL',
    'STATUS_WARN',
    'STATUS_INFO',
    'EXIT_OK',
    'EXIT_ERROR',
    'EXIT_INTERRUPTED',
    'FORMAT_TEXT',
    'FORMAT_CSV',
    'OUTPUT_FORMATS',
]
