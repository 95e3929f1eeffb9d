# Path: xbrl_tree/process/hierarchy/edge_normalizer.py
"""
Edge Table Normalizer - Reduces a raw link table to ordered arcs for one role.

The presentation, calculation and definition tables share one layout:

    roleId, fromElementId, toElementId, order, preferredLabel, arcrole

Normalization keeps the rows of one role and coerces `order` to a float
sort key. An empty order falls back to 0.0. Anything else that is not a
finite number is rejected with MalformedOrderError, which aborts the
build for that role.

Duplicate arcs are kept as-is; the tree builder decides how to place them.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional, Union

import pandas as pd

from xbrl_tree.core.logger import get_process_logger
from xbrl_tree.process.hierarchy.constants import (
    COL_FROM,
    COL_ORDER,
    COL_PREFERRED_LABEL,
    COL_ROLE_ID,
    COL_TO,
    DEFAULT_ORDER,
    RelationKind,
)
from xbrl_tree.process.hierarchy.errors import MalformedOrderError, MissingColumnError


logger = get_process_logger('hierarchy.edge_normalizer')

REQUIRED_EDGE_COLUMNS = (COL_ROLE_ID, COL_FROM, COL_TO)


@dataclass(frozen=True)
class NormalizedEdge:
    """
    One parent -> child arc of a single role.

    Attributes:
        from_id: Parent element id
        to_id: Child element id
        order: Numeric sibling sort key
        preferred_label: Label role requested for the child (presentation only)
    """
    from_id: str
    to_id: str
    order: float = DEFAULT_ORDER
    preferred_label: Optional[str] = None


def is_blank(value: Any) -> bool:
    """True for None, NaN and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def coerce_order(raw: Any, role_id: str, from_id: str, to_id: str) -> float:
    """
    Convert a raw order attribute to a float sort key.

    Args:
        raw: Order as found in the table ('1', '1.5', '', NaN, 2.0, ...)
        role_id: Role of the arc (for the error message)
        from_id: Parent element id (for the error message)
        to_id: Child element id (for the error message)

    Returns:
        The order, or DEFAULT_ORDER when empty

    Raises:
        MalformedOrderError: If raw is non-empty and not a finite number
    """
    if is_blank(raw):
        return DEFAULT_ORDER
    try:
        order = float(str(raw).strip())
    except ValueError:
        raise MalformedOrderError(role_id, from_id, to_id, raw) from None
    if not math.isfinite(order):
        raise MalformedOrderError(role_id, from_id, to_id, raw)
    return order


def normalize_edges(
    edges: pd.DataFrame,
    role_id: str,
    relation: Union[RelationKind, str] = RelationKind.PRESENTATION,
) -> list[NormalizedEdge]:
    """
    Normalize a raw link table to the arcs of one role.

    Args:
        edges: Raw presentation/calculation/definition table
        role_id: Role to keep
        relation: Which link table this is (used in messages)

    Returns:
        NormalizedEdge list in table order, duplicates included

    Raises:
        MissingColumnError: If roleId/fromElementId/toElementId are absent
        MalformedOrderError: If an order value is not numeric
    """
    relation_name = relation.value if isinstance(relation, RelationKind) else str(relation)

    missing = [col for col in REQUIRED_EDGE_COLUMNS if col not in edges.columns]
    if missing:
        raise MissingColumnError(relation_name, missing)

    role_rows = edges[edges[COL_ROLE_ID] == role_id]
    has_order = COL_ORDER in role_rows.columns
    has_preferred = COL_PREFERRED_LABEL in role_rows.columns

    result: list[NormalizedEdge] = []
    skipped = 0

    for record in role_rows.to_dict('records'):
        from_id = record.get(COL_FROM)
        to_id = record.get(COL_TO)

        if is_blank(from_id) or is_blank(to_id):
            skipped += 1
            continue

        from_id = str(from_id).strip()
        to_id = str(to_id).strip()
        order = coerce_order(record.get(COL_ORDER) if has_order else None, role_id, from_id, to_id)

        preferred = record.get(COL_PREFERRED_LABEL) if has_preferred else None
        preferred = None if is_blank(preferred) else str(preferred).strip()

        result.append(NormalizedEdge(
            from_id=from_id,
            to_id=to_id,
            order=order,
            preferred_label=preferred,
        ))

    if skipped:
        logger.warning(
            f"Skipped {skipped} {relation_name} arc(s) without from/to element "
            f"in role {role_id}"
        )

    logger.debug(f"Normalized {len(result)} {relation_name} arc(s) for role {role_id}")
    return result


def parent_ids(edges: list[NormalizedEdge]) -> set[str]:
    """Element ids that appear as a parent in the given arcs."""
    return {edge.from_id for edge in edges}


__all__ = [
    'NormalizedEdge',
    'is_blank',
    'coerce_order',
    'normalize_edges',
    'parent_ids',
]
