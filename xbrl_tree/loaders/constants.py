# Path: xbrl_tree/loaders/constants.py
"""
Loaders Module Constants for xbrl_tree

Table names, file extensions and the column layout of each parsed table.
"""

from xbrl_tree.process.hierarchy.constants import (
    COL_ARCROLE,
    COL_BALANCE,
    COL_CONTEXT_ID,
    COL_DECIMALS,
    COL_ELEMENT_ID,
    COL_END_DATE,
    COL_FACT_VALUE,
    COL_FROM,
    COL_LABEL_ROLE,
    COL_LABEL_STRING,
    COL_LANG,
    COL_ORDER,
    COL_PREFERRED_LABEL,
    COL_ROLE_DEFINITION,
    COL_ROLE_ID,
    COL_ROLE_TYPE,
    COL_START_DATE,
    COL_TO,
    COL_UNIT_ID,
)


# ==============================================================================
# TABLE NAMES
# ==============================================================================

TABLE_ELEMENT = 'element'
TABLE_LABEL = 'label'
TABLE_CONTEXT = 'context'
TABLE_FACT = 'fact'
TABLE_PRESENTATION = 'presentation'
TABLE_CALCULATION = 'calculation'
TABLE_DEFINITION = 'definition'
TABLE_ROLE = 'role'

TABLE_NAMES = (
    TABLE_ELEMENT,
    TABLE_LABEL,
    TABLE_CONTEXT,
    TABLE_FACT,
    TABLE_PRESENTATION,
    TABLE_CALCULATION,
    TABLE_DEFINITION,
    TABLE_ROLE,
)

# ==============================================================================
# FILE DETECTION
# ==============================================================================

# Extension -> field separator (None lets pandas sniff it)
TABLE_EXTENSIONS = {
    '.csv': ',',
    '.tsv': '\t',
    '.txt': None,
}

# Extension search order per configured table format
EXTENSION_PREFERENCE = {
    'csv': ('.csv', '.tsv', '.txt'),
    'tsv': ('.tsv', '.txt', '.csv'),
}

# ==============================================================================
# COLUMN LAYOUT
# ==============================================================================

_EDGE_LAYOUT = [COL_ROLE_ID, COL_FROM, COL_TO, COL_ORDER, COL_PREFERRED_LABEL, COL_ARCROLE]

# Columns of an empty stand-in when a table file is absent
EXPECTED_COLUMNS = {
    TABLE_ELEMENT: [COL_ELEMENT_ID, COL_BALANCE],
    TABLE_LABEL: [COL_ELEMENT_ID, COL_LABEL_ROLE, COL_LANG, COL_LABEL_STRING],
    TABLE_CONTEXT: [COL_CONTEXT_ID, COL_START_DATE, COL_END_DATE],
    TABLE_FACT: [COL_CONTEXT_ID, COL_ELEMENT_ID, COL_FACT_VALUE, COL_DECIMALS, COL_UNIT_ID],
    TABLE_PRESENTATION: list(_EDGE_LAYOUT),
    TABLE_CALCULATION: list(_EDGE_LAYOUT),
    TABLE_DEFINITION: list(_EDGE_LAYOUT),
    TABLE_ROLE: [COL_ROLE_ID, COL_ROLE_TYPE, COL_ROLE_DEFINITION],
}

# Columns a present table file must have
REQUIRED_COLUMNS = {
    TABLE_ELEMENT: [COL_ELEMENT_ID],
    TABLE_LABEL: [COL_ELEMENT_ID, COL_LABEL_STRING],
    TABLE_CONTEXT: [COL_CONTEXT_ID, COL_END_DATE],
    TABLE_FACT: [COL_CONTEXT_ID, COL_ELEMENT_ID, COL_FACT_VALUE],
    TABLE_PRESENTATION: [COL_ROLE_ID, COL_FROM, COL_TO],
    TABLE_CALCULATION: [COL_ROLE_ID, COL_FROM, COL_TO],
    TABLE_DEFINITION: [COL_ROLE_ID, COL_FROM, COL_TO],
    TABLE_ROLE: [COL_ROLE_ID],
}


__all__ = [
    'TABLE_ELEMENT',
    'TABLE_LABEL',
    'TABLE_CONTEXT',
    'TABLE_FACT',
    'TABLE_PRESENTATION',
    'TABLE_CALCULATION',
    'TABLE_DEFINITION',
    'TABLE_ROLE',
    'TABLE_NAMES',
    'TABLE_EXTENSIONS',
    'EXTENSION_PREFERENCE',
    'EXPECTED_COLUMNS',
    'REQUIRED_COLUMNS',
]
