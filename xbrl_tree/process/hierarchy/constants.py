# Path: xbrl_tree/process/hierarchy/constants.py
"""
Constants for the Hierarchy Reconstruction Engine

Defines relation kinds, table column names, path id formatting,
label roles and statement type keywords used throughout the
edge -> tree -> fact -> wide table pipeline.
"""

from enum import Enum
from typing import Final


# ==============================================================================
# RELATION AND STATEMENT ENUMERATIONS
# ==============================================================================
class RelationKind(Enum):
    """
    The three parent-child link tables of an XBRL filing.

    PRESENTATION: Display order of a statement
    CALCULATION: Arithmetic aggregation (summation-item)
    DEFINITION: Semantic / dimensional relations
    """
    PRESENTATION = "presentation"
    CALCULATION = "calculation"
    DEFINITION = "definition"


class StatementType(Enum):
    """
    Standard financial statement types, detected from role metadata.
    """
    BALANCE_SHEET = "balance_sheet"
    INCOME_STATEMENT = "income_statement"
    COMPREHENSIVE_INCOME = "comprehensive_income"
    CASH_FLOW = "cash_flow"
    EQUITY = "equity"
    UNKNOWN = "unknown"


class PeriodOrder(Enum):
    """Ordering of period columns in the wide table."""
    ASCENDING = "ascending"
    DESCENDING = "descending"


# ==============================================================================
# INPUT TABLE COLUMNS
# ==============================================================================
COL_ROLE_ID: Final[str] = 'roleId'
COL_FROM: Final[str] = 'fromElementId'
COL_TO: Final[str] = 'toElementId'
COL_ORDER: Final[str] = 'order'
COL_PREFERRED_LABEL: Final[str] = 'preferredLabel'
COL_ARCROLE: Final[str] = 'arcrole'

COL_ELEMENT_ID: Final[str] = 'elementId'
COL_BALANCE: Final[str] = 'balance'

COL_LABEL_ROLE: Final[str] = 'labelRole'
COL_LANG: Final[str] = 'lang'
COL_LABEL_STRING: Final[str] = 'labelString'

COL_CONTEXT_ID: Final[str] = 'contextId'
COL_START_DATE: Final[str] = 'startDate'
COL_END_DATE: Final[str] = 'endDate'
DIMENSION_COLUMN_PATTERN: Final[str] = r'^dimension\d+$'

COL_FACT_VALUE: Final[str] = 'fact'
COL_DECIMALS: Final[str] = 'decimals'
COL_UNIT_ID: Final[str] = 'unitId'

COL_ROLE_TYPE: Final[str] = 'type'
COL_ROLE_DEFINITION: Final[str] = 'definition'


# ==============================================================================
# OUTPUT COLUMNS
# ==============================================================================
OUT_PATH_ID: Final[str] = 'path_id'
OUT_DEPTH: Final[str] = 'depth'
OUT_ELEMENT_ID: Final[str] = 'element_id'
OUT_LABEL: Final[str] = 'label'
OUT_IS_CALCULATED: Final[str] = 'is_calculated'
OUT_END_DATE: Final[str] = 'end_date'
OUT_SCALED_VALUE: Final[str] = 'scaled_value'

ROW_KEY_COLUMNS: Final[tuple] = (OUT_PATH_ID, OUT_DEPTH, OUT_ELEMENT_ID)
ANNOTATION_COLUMNS: Final[tuple] = (OUT_LABEL, OUT_IS_CALCULATED)


# ==============================================================================
# PATH ID AND ORDER DEFAULTS
# ==============================================================================
DEFAULT_PATH_ID_WIDTH: Final[int] = 2
"""Minimum digits per level in a path_id ('01', '02', ...)."""

ROOT_PATH_ID: Final[str] = ""
"""Path id of the single root of a role."""

DEFAULT_ORDER: Final[float] = 0.0
"""Sort key used for arcs with an empty order attribute."""

DEFAULT_DECIMALS: Final[int] = 0
"""Exponent used when a fact reports no decimals (or INF)."""

INFINITE_DECIMALS: Final[str] = 'INF'

MISSING_VALUE_MARKERS: Final[frozenset] = frozenset({'', 'NA', 'NAN', 'NONE', 'NULL', 'NAT'})
"""Raw date and dimension cells treated as absent (R writes NA)."""

DEFAULT_INDENT_SIZE: Final[int] = 2
"""Default indentation spaces for text outlines."""


# ==============================================================================
# LABEL ROLES
# ==============================================================================
DEFAULT_LABEL_ROLE: Final[str] = "http://www.xbrl.org/2003/role/label"
"""Standard label role, used when an arc has no preferredLabel."""

DEFAULT_LANGUAGE: Final[str] = "en-US"


# ==============================================================================
# STATEMENT TYPE KEYWORDS (matched against roleId + definition)
# ==============================================================================
BALANCE_SHEET_KEYWORDS: Final[tuple] = (
    'balancesheet',
    'balance_sheet',
    'balance sheet',
    'financialposition',
    'financial position',
    'financial_position',
    'statementoffinancialcondition',
    'financial condition',
)

COMPREHENSIVE_INCOME_KEYWORDS: Final[tuple] = (
    'comprehensiveincome',
    'comprehensive income',
    'comprehensive_income',
)

INCOME_STATEMENT_KEYWORDS: Final[tuple] = (
    'incomestatement',
    'income statement',
    'income_statement',
    'statementsofincome',
    'statements of income',
    'statementofincome',
    'statement of income',
    'operations',
    'profitloss',
    'profit or loss',
    'earnings',
)

CASH_FLOW_KEYWORDS: Final[tuple] = (
    'cashflow',
    'cash flow',
    'cash_flow',
)

EQUITY_KEYWORDS: Final[tuple] = (
    'stockholdersequity',
    "stockholders' equity",
    'stockholders equity',
    'shareholdersequity',
    "shareholders' equity",
    'shareholders equity',
    'changesinequity',
    'changes in equity',
    'equity',
)

DETAIL_ROLE_KEYWORDS: Final[tuple] = (
    'parenthetical',
    'details',
    'detail',
    'tables',
    'policies',
)
"""Role markers for supporting schedules rather than face statements."""


__all__ = [
    # Enums
    'RelationKind',
    'StatementType',
    'PeriodOrder',
    # Input columns
    'COL_ROLE_ID',
    'COL_FROM',
    'COL_TO',
    'COL_ORDER',
    'COL_PREFERRED_LABEL',
    'COL_ARCROLE',
    'COL_ELEMENT_ID',
    'COL_BALANCE',
    'COL_LABEL_ROLE',
    'COL_LANG',
    'COL_LABEL_STRING',
    'COL_CONTEXT_ID',
    'COL_START_DATE',
    'COL_END_DATE',
    'DIMENSION_COLUMN_PATTERN',
    'COL_FACT_VALUE',
    'COL_DECIMALS',
    'COL_UNIT_ID',
    'COL_ROLE_TYPE',
    'COL_ROLE_DEFINITION',
    # Output columns
    'OUT_PATH_ID',
    'OUT_DEPTH',
    'OUT_ELEMENT_ID',
    'OUT_LABEL',
    'OUT_IS_CALCULATED',
    'OUT_END_DATE',
    'OUT_SCALED_VALUE',
    'ROW_KEY_COLUMNS',
    'ANNOTATION_COLUMNS',
    # Defaults
    'DEFAULT_PATH_ID_WIDTH',
    'ROOT_PATH_ID',
    'DEFAULT_ORDER',
    'DEFAULT_DECIMALS',
    'INFINITE_DECIMALS',
    'MISSING_VALUE_MARKERS',
    'DEFAULT_INDENT_SIZE',
    # Labels
    'DEFAULT_LABEL_ROLE',
    'DEFAULT_LANGUAGE',
    # Statement keywords
    'BALANCE_SHEET_KEYWORDS',
    'COMPREHENSIVE_INCOME_KEYWORDS',
    'INCOME_STATEMENT_KEYWORDS',
    'CASH_FLOW_KEYWORDS',
    'EQUITY_KEYWORDS',
    'DETAIL_ROLE_KEYWORDS',
]
