# Path: xbrl_tree/process/hierarchy/roles.py
"""
Role Discovery - Finds the face statements among a filing's roles.

Statement types are recognised by keywords in the roleId and the role
definition. Comprehensive income is checked before the income statement
and equity last, because their keywords overlap.

Example:
    roles = find_roles(tables.role, statement_type=StatementType.BALANCE_SHEET)
    for role_id in roles[COL_ROLE_ID]:
        print(role_id)
"""

from typing import Optional, Union

import pandas as pd

from xbrl_tree.process.hierarchy.constants import (
    BALANCE_SHEET_KEYWORDS,
    CASH_FLOW_KEYWORDS,
    COL_ROLE_DEFINITION,
    COL_ROLE_ID,
    COMPREHENSIVE_INCOME_KEYWORDS,
    DETAIL_ROLE_KEYWORDS,
    EQUITY_KEYWORDS,
    INCOME_STATEMENT_KEYWORDS,
    StatementType,
)
from xbrl_tree.process.hierarchy.edge_normalizer import is_blank
from xbrl_tree.process.hierarchy.errors import MissingColumnError


# Checked in this order; first match wins
_TYPE_KEYWORDS: tuple[tuple[StatementType, tuple], ...] = (
    (StatementType.CASH_FLOW, CASH_FLOW_KEYWORDS),
    (StatementType.COMPREHENSIVE_INCOME, COMPREHENSIVE_INCOME_KEYWORDS),
    (StatementType.BALANCE_SHEET, BALANCE_SHEET_KEYWORDS),
    (StatementType.INCOME_STATEMENT, INCOME_STATEMENT_KEYWORDS),
    (StatementType.EQUITY, EQUITY_KEYWORDS),
)


def _role_text(role_id: str, definition: Optional[str] = None) -> str:
    parts = [str(role_id)]
    if not is_blank(definition):
        parts.append(str(definition))
    return ' '.join(parts).lower()


def detect_statement_type(role_id: str, definition: Optional[str] = None) -> StatementType:
    """
    Classify a role by keywords.

    Args:
        role_id: Role identifier or URI
        definition: Role definition text ('00000002 - Statement - ...')

    Returns:
        Matching StatementType, UNKNOWN when nothing matches

    Example:
        >>> detect_statement_type('http://acme.com/role/ConsolidatedBalanceSheets')
        <StatementType.BALANCE_SHEET: 'balance_sheet'>
    """
    text = _role_text(role_id, definition)
    for statement_type, keywords in _TYPE_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return statement_type
    return StatementType.UNKNOWN


def is_detail_role(role_id: str, definition: Optional[str] = None) -> bool:
    """True for parenthetical, details, tables and policies roles."""
    text = _role_text(role_id, definition)
    return any(keyword in text for keyword in DETAIL_ROLE_KEYWORDS)


def _coerce_statement_type(value: Union[StatementType, str]) -> StatementType:
    if isinstance(value, StatementType):
        return value
    text = str(value).strip().lower().replace('-', '_').replace(' ', '_')
    for member in StatementType:
        if text in (member.value, member.name.lower()):
            return member
    raise ValueError(f"Unknown statement type: {value!r}")


def find_roles(
    roles: pd.DataFrame,
    statement_type: Union[StatementType, str, None] = None,
    keyword: Optional[str] = None,
    include_details: bool = False,
) -> pd.DataFrame:
    """
    Filter the role table.

    Args:
        roles: Role table (roleId, type, definition)
        statement_type: Keep only roles of this type
        keyword: Keep only roles whose id/definition contains this text
        include_details: Keep parenthetical/details roles as well

    Returns:
        Matching roles with an added 'statement_type' column, table order kept

    Raises:
        MissingColumnError: If roleId is absent
        ValueError: If statement_type is not a known type
    """
    if COL_ROLE_ID not in roles.columns:
        raise MissingColumnError('role', [COL_ROLE_ID])

    wanted = _coerce_statement_type(statement_type) if statement_type is not None else None
    definitions = (
        roles[COL_ROLE_DEFINITION] if COL_ROLE_DEFINITION in roles.columns
        else pd.Series([None] * len(roles), index=roles.index)
    )

    types = []
    keep = []
    for role_id, definition in zip(roles[COL_ROLE_ID], definitions):
        detected = detect_statement_type(role_id, definition)
        types.append(detected.value)

        selected = True
        if not include_details and is_detail_role(role_id, definition):
            selected = False
        if wanted is not None and detected is not wanted:
            selected = False
        if keyword and keyword.lower() not in _role_text(role_id, definition):
            selected = False
        keep.append(selected)

    result = roles.assign(statement_type=types)
    mask = pd.Series(keep, index=result.index, dtype=bool)
    return result[mask].reset_index(drop=True)


__all__ = [
    'detect_statement_type',
    'is_detail_role',
    'find_roles',
]
