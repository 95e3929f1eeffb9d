# Path: xbrl_tree/process/hierarchy/annotator.py
"""
Label/Calc Annotator - Attaches display labels and calculation flags.

Both annotations are lookups by element_id and never change the tree:

label
    1. the label whose role matches the node's preferredLabel
    2. the standard 'label' role
    3. any label in the target language
    4. the element_id itself
    A role matches on the full URI or its last segment ('totalLabel').
    Languages match case-insensitively and 'en' accepts 'en-US'.

is_calculated
    True when the element is a parent in the role's calculation arcs.

The annotator also flags calculation arcs whose two ends declare opposite
balances (a credit contra-account under a debit total). These notices are
for review only; values are never changed.

Example:
    resolver = LabelResolver(tables.label, lang='en-US')
    resolver.resolve('us-gaap_Assets')                   # 'Assets'
    resolver.resolve('us-gaap_Assets', 'totalLabel')     # 'Total assets'
"""

from collections import defaultdict
from dataclasses import replace
from typing import Optional

import pandas as pd

from xbrl_tree.core.logger import get_process_logger
from xbrl_tree.process.hierarchy.constants import (
    COL_BALANCE,
    COL_ELEMENT_ID,
    COL_LABEL_ROLE,
    COL_LABEL_STRING,
    COL_LANG,
    DEFAULT_LABEL_ROLE,
    DEFAULT_LANGUAGE,
    OUT_ELEMENT_ID,
    OUT_IS_CALCULATED,
    OUT_LABEL,
    OUT_PATH_ID,
)
from xbrl_tree.process.hierarchy.edge_normalizer import NormalizedEdge, is_blank, parent_ids
from xbrl_tree.process.hierarchy.errors import (
    BalanceSignNotice,
    BuildIssue,
    BuildReport,
    ErrorSeverity,
    IssueKind,
    MissingColumnError,
)
from xbrl_tree.process.hierarchy.fact_binder import BoundRow
from xbrl_tree.process.hierarchy.node import TreeNode


logger = get_process_logger('hierarchy.annotator')


# ==============================================================================
# MATCHING HELPERS
# ==============================================================================

def role_name(role: str) -> str:
    """Last segment of a role URI ('.../role/totalLabel' -> 'totalLabel')."""
    text = str(role).strip()
    if '#' in text:
        return text.split('#')[-1]
    return text.rstrip('/').split('/')[-1]


def role_matches(candidate: str, wanted: str) -> bool:
    """True when two label roles are equal or share their last segment."""
    if candidate == wanted:
        return True
    return role_name(candidate).lower() == role_name(wanted).lower()


def lang_matches(candidate: str, target: str) -> bool:
    """
    Case-insensitive language match; a bare language matches its variants.

    Example:
        >>> lang_matches('en-US', 'en')
        True
        >>> lang_matches('EN-us', 'en-US')
        True
        >>> lang_matches('de', 'en-US')
        False
    """
    candidate = str(candidate).strip().lower().replace('_', '-')
    target = str(target).strip().lower().replace('_', '-')
    if not candidate or not target:
        return False
    if candidate == target:
        return True
    return candidate.split('-')[0] == target.split('-')[0] and (
        '-' not in candidate or '-' not in target
    )


# ==============================================================================
# LABEL RESOLVER
# ==============================================================================

class LabelResolver:
    """
    Label lookup for one language.

    Labels of the target language are indexed once per element; exact
    language matches are preferred over bare/regional matches.
    """

    def __init__(self, labels: pd.DataFrame, lang: str = DEFAULT_LANGUAGE):
        """
        Index the label table.

        Args:
            labels: Label table (elementId, labelRole, lang, labelString)
            lang: Target language

        Raises:
            MissingColumnError: If elementId or labelString is absent
        """
        self.lang = lang
        self._labels: dict[str, list[tuple[str, str]]] = defaultdict(list)

        if labels is None or labels.empty:
            return

        missing = [col for col in (COL_ELEMENT_ID, COL_LABEL_STRING) if col not in labels.columns]
        if missing:
            raise MissingColumnError('label', missing)

        has_role = COL_LABEL_ROLE in labels.columns
        has_lang = COL_LANG in labels.columns
        exact: dict[str, list[tuple[str, str]]] = defaultdict(list)
        loose: dict[str, list[tuple[str, str]]] = defaultdict(list)

        for record in labels.to_dict('records'):
            text = record[COL_LABEL_STRING]
            if is_blank(text) or is_blank(record[COL_ELEMENT_ID]):
                continue
            label_lang = record[COL_LANG] if has_lang else ''
            label_lang = '' if is_blank(label_lang) else str(label_lang)
            # untagged labels are treated as the target language
            if label_lang and not lang_matches(label_lang, lang):
                continue

            role = record[COL_LABEL_ROLE] if has_role else DEFAULT_LABEL_ROLE
            role = DEFAULT_LABEL_ROLE if is_blank(role) else str(role).strip()
            entry = (role, str(text).strip())
            element_id = str(record[COL_ELEMENT_ID]).strip()

            if label_lang.lower() == lang.lower():
                exact[element_id].append(entry)
            else:
                loose[element_id].append(entry)

        for element_id in exact.keys() | loose.keys():
            self._labels[element_id] = exact.get(element_id, []) + loose.get(element_id, [])

        logger.debug(f"Indexed labels of {len(self._labels)} element(s) for lang {lang}")

    def resolve(self, element_id: str, preferred_role: Optional[str] = None) -> str:
        """
        Display label of an element.

        Args:
            element_id: Concept identifier
            preferred_role: The node's preferredLabel role, if any

        Returns:
            The best matching label, or element_id when none exists
        """
        entries = self._labels.get(element_id)
        if not entries:
            return element_id

        for wanted in (preferred_role, DEFAULT_LABEL_ROLE):
            if not wanted:
                continue
            for role, text in entries:
                if role_matches(role, wanted):
                    return text

        return entries[0][1]

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._labels

    def __len__(self) -> int:
        return len(self._labels)


# ==============================================================================
# ANNOTATOR
# ==============================================================================

class Annotator:
    """
    Adds label and is_calculated to nodes, bound rows and wide tables.

    Example:
        annotator = Annotator(tables.label, calc_edges, lang='en-US')
        table = annotator.annotate_table(wide, nodes)
        rows = annotator.annotate_rows(bound_rows, nodes)
    """

    def __init__(
        self,
        labels: pd.DataFrame,
        calculation_edges: list[NormalizedEdge],
        lang: str = DEFAULT_LANGUAGE,
        resolver: Optional[LabelResolver] = None,
    ):
        self.resolver = resolver if resolver is not None else LabelResolver(labels, lang=lang)
        self.calculation_edges = list(calculation_edges)
        self._calculated = parent_ids(self.calculation_edges)

    def label_for(self, node: TreeNode) -> str:
        """Label of a tree node, honoring its preferredLabel."""
        return self.resolver.resolve(node.element_id, node.preferred_label)

    def is_calculated(self, element_id: str) -> bool:
        """True when the element sums calculation children in this role."""
        return element_id in self._calculated

    def labels_by_path(self, nodes: list[TreeNode]) -> dict[str, str]:
        """path_id -> label."""
        return {node.path_id: self.label_for(node) for node in nodes}

    def annotate_rows(self, bound_rows: list[BoundRow], nodes: list[TreeNode]) -> list[BoundRow]:
        """Copies of bound rows with label and is_calculated filled in."""
        labels = self.labels_by_path(nodes)
        return [
            replace(
                row,
                label=labels.get(row.path_id, row.element_id),
                is_calculated=self.is_calculated(row.element_id),
            )
            for row in bound_rows
        ]

    def annotate_table(self, table: pd.DataFrame, nodes: list[TreeNode]) -> pd.DataFrame:
        """
        Insert label and is_calculated right after element_id.

        Args:
            table: Wide table from WideReshaper
            nodes: The nodes the table was built from

        Returns:
            A new DataFrame; row order and period columns are unchanged
        """
        labels = self.labels_by_path(nodes)
        result = table.copy()
        position = list(result.columns).index(OUT_ELEMENT_ID) + 1

        result.insert(position, OUT_LABEL, [
            labels.get(path_id, element_id)
            for path_id, element_id in zip(result[OUT_PATH_ID], result[OUT_ELEMENT_ID])
        ])
        result.insert(
            position + 1,
            OUT_IS_CALCULATED,
            [self.is_calculated(e) for e in result[OUT_ELEMENT_ID]],
        )
        return result

    def find_balance_mismatches(
        self,
        elements: pd.DataFrame,
        report: Optional[BuildReport] = None,
    ) -> list[BuildIssue]:
        """
        Flag calculation arcs whose parent and child balances differ.

        Args:
            elements: Element table (elementId, balance)
            report: Report receiving the notices

        Returns:
            The BuildIssue notices that were recorded
        """
        balances = element_balances(elements)
        notices: list[BuildIssue] = []
        seen: set[tuple[str, str]] = set()

        for edge in self.calculation_edges:
            key = (edge.from_id, edge.to_id)
            if key in seen:
                continue
            seen.add(key)

            parent_balance = balances.get(edge.from_id)
            child_balance = balances.get(edge.to_id)
            if not parent_balance or not child_balance or parent_balance == child_balance:
                continue

            message = (
                f"{edge.to_id} ({child_balance}) sums into "
                f"{edge.from_id} ({parent_balance}); review sign"
            )
            notices.append(BuildIssue(
                kind=IssueKind.BALANCE_SIGN_MISMATCH,
                severity=ErrorSeverity.INFO,
                message=message,
                element_id=edge.to_id,
                details={
                    'parent_id': edge.from_id,
                    'parent_balance': parent_balance,
                    'child_balance': child_balance,
                },
                error=BalanceSignNotice(message),
            ))

        if report is not None:
            for notice in notices:
                report.add(notice)
        if notices:
            logger.info(f"{len(notices)} calculation arc(s) with opposite balances")
        return notices


def element_balances(elements: Optional[pd.DataFrame]) -> dict[str, str]:
    """elementId -> lower-case balance, for elements that declare one."""
    if elements is None or elements.empty:
        return {}
    if COL_ELEMENT_ID not in elements.columns or COL_BALANCE not in elements.columns:
        return {}
    result = {}
    for element_id, balance in zip(elements[COL_ELEMENT_ID], elements[COL_BALANCE]):
        if is_blank(element_id) or is_blank(balance):
            continue
        result.setdefault(str(element_id).strip(), str(balance).strip().lower())
    return result


__all__ = [
    'role_name',
    'role_matches',
    'lang_matches',
    'LabelResolver',
    'Annotator',
    'element_balances',
]
