# Path: xbrl_tree/process/hierarchy/errors.py
"""
Error Handling for Statement Reconstruction

Two families of problems can occur while rebuilding a statement:

Structural errors (raised, abort the build for a role):
    - MalformedOrderError: an arc carries a non-numeric sort key
    - NoRootError: the role's edge set has no concept without a parent
    - MissingColumnError: an input table lacks a required column

Local issues (recorded, the build continues):
    - CycleDetectedWarning: a branch revisits one of its ancestors
    - NonNumericFactError: one fact cannot be read as a number
    - DuplicateArcWarning, UnreachableConceptWarning,
      DuplicatePeriodWarning, BalanceSignNotice

Local issues are collected as BuildIssue records in a BuildReport so the
caller can audit data quality without losing the rest of the statement.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional


# ==============================================================================
# SEVERITY AND ISSUE KINDS
# ==============================================================================

class ErrorSeverity(Enum):
    """
    Issue severity classification.

    Levels:
        ERROR: A fact or branch was dropped from the statement
        WARNING: Input is unusual, output may differ from intent
        INFO: Worth reviewing, output is unaffected
    """
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Numeric rank (higher is worse)."""
        return {
            ErrorSeverity.INFO: 0,
            ErrorSeverity.WARNING: 1,
            ErrorSeverity.ERROR: 2,
        }[self]


class IssueKind(Enum):
    """Kinds of locally recovered issues."""
    CYCLE_DETECTED = "CYCLE_DETECTED"
    DUPLICATE_ARC = "DUPLICATE_ARC"
    UNREACHABLE_CONCEPT = "UNREACHABLE_CONCEPT"
    NON_NUMERIC_FACT = "NON_NUMERIC_FACT"
    DUPLICATE_PERIOD = "DUPLICATE_PERIOD"
    BALANCE_SIGN_MISMATCH = "BALANCE_SIGN_MISMATCH"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# EXCEPTIONS
# ==============================================================================

class HierarchyError(Exception):
    """Base class for statement reconstruction errors."""


class TableSchemaError(HierarchyError):
    """An input table does not have the expected shape."""


class MissingColumnError(TableSchemaError):
    """An input table lacks one or more required columns."""

    def __init__(self, table: str, missing: list[str]):
        self.table = table
        self.missing = list(missing)
        super().__init__(
            f"Table '{table}' is missing required column(s): {', '.join(self.missing)}"
        )


class MalformedOrderError(HierarchyError):
    """An arc's order attribute is non-empty and not a finite number."""

    def __init__(self, role_id: str, from_id: str, to_id: str, raw_order: Any):
        self.role_id = role_id
        self.from_id = from_id
        self.to_id = to_id
        self.raw_order = raw_order
        super().__init__(
            f"Arc {from_id} -> {to_id} in role {role_id} has a non-numeric "
            f"order: {raw_order!r}"
        )


class NoRootError(HierarchyError):
    """A non-empty edge set where every concept has a parent."""

    def __init__(self, role_id: str, edge_count: int):
        self.role_id = role_id
        self.edge_count = edge_count
        super().__init__(
            f"Role {role_id} has {edge_count} arc(s) but no root concept "
            f"(every concept appears as a child; the edge set is cyclic)"
        )


class NonNumericFactError(HierarchyError):
    """A fact value (or its decimals) cannot be read as a number."""

    def __init__(
        self,
        element_id: str,
        raw_value: Any,
        context_id: Optional[str] = None,
        field_name: str = 'fact',
    ):
        self.element_id = element_id
        self.raw_value = raw_value
        self.context_id = context_id
        self.field_name = field_name
        where = f" (context {context_id})" if context_id else ""
        super().__init__(
            f"Fact {element_id}{where} has a non-numeric {field_name}: {raw_value!r}"
        )


# ==============================================================================
# WARNINGS
# ==============================================================================

class HierarchyWarning(UserWarning):
    """Base class for recoverable reconstruction problems."""


class CycleDetectedWarning(HierarchyWarning):
    """A branch revisits one of its own ancestors and was truncated."""


class DuplicateArcWarning(HierarchyWarning):
    """The same parent -> child arc appears more than once in a role."""


class UnreachableConceptWarning(HierarchyWarning):
    """Concepts in the edge set cannot be reached from any root."""


class DuplicatePeriodWarning(HierarchyWarning):
    """Several base facts compete for the same row and period column."""


class BalanceSignNotice(HierarchyWarning):
    """A calculation child declares the opposite balance of its parent."""


# ==============================================================================
# BUILD REPORT
# ==============================================================================

@dataclass
class BuildIssue:
    """
    A single locally recovered problem.

    Attributes:
        kind: What went wrong
        severity: How much it affects the statement
        message: Human-readable description
        element_id: Concept involved, if any
        path_id: Tree position involved, if any
        details: Extra data for auditing
        error: The exception or warning instance
    """
    kind: IssueKind
    severity: ErrorSeverity
    message: str
    element_id: Optional[str] = None
    path_id: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)
    error: Optional[BaseException] = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        parts = [f"[{self.severity}] {self.kind}: {self.message}"]
        if self.element_id:
            parts.append(f"Element: {self.element_id}")
        if self.path_id:
            parts.append(f"Path: {self.path_id}")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'kind': self.kind.value,
            'severity': self.severity.value,
            'message': self.message,
            'element_id': self.element_id,
            'path_id': self.path_id,
            'details': self.details,
        }


@dataclass
class BuildReport:
    """
    Collection of issues recovered during one statement build.

    Example:
        report = BuildReport(role_id='BalanceSheet')
        report.add(BuildIssue(IssueKind.NON_NUMERIC_FACT, ErrorSeverity.ERROR, '...'))
        if report.has_warnings:
            print(report.summary())
    """
    role_id: Optional[str] = None
    issues: list[BuildIssue] = field(default_factory=list)

    def add(self, issue: BuildIssue) -> BuildIssue:
        """Append an issue and return it."""
        self.issues.append(issue)
        return issue

    def extend(self, other: 'BuildReport') -> None:
        """Append every issue of another report."""
        self.issues.extend(other.issues)

    def by_kind(self, kind: IssueKind) -> list[BuildIssue]:
        """All issues of one kind."""
        return [issue for issue in self.issues if issue.kind == kind]

    def count(self, kind: IssueKind) -> int:
        """Number of issues of one kind."""
        return len(self.by_kind(kind))

    def count_by_kind(self) -> dict[IssueKind, int]:
        """Issue counts grouped by kind."""
        return dict(Counter(issue.kind for issue in self.issues))

    @property
    def has_warnings(self) -> bool:
        """True when any WARNING or ERROR issue was recorded."""
        return any(issue.severity.rank >= ErrorSeverity.WARNING.rank for issue in self.issues)

    @property
    def worst_severity(self) -> Optional[ErrorSeverity]:
        """Highest severity recorded, or None for a clean build."""
        if not self.issues:
            return None
        return max((issue.severity for issue in self.issues), key=lambda s: s.rank)

    def summary(self) -> str:
        """One line per issue kind, e.g. 'CYCLE_DETECTED: 1'."""
        if not self.issues:
            return "No issues"
        counts = self.count_by_kind()
        return '\n'.join(f"{kind}: {counts[kind]}" for kind in IssueKind if kind in counts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'role_id': self.role_id,
            'issue_count': len(self.issues),
            'issues': [issue.to_dict() for issue in self.issues],
        }

    def __len__(self) -> int:
        return len(self.issues)

    def __bool__(self) -> bool:
        return len(self.issues) > 0

    def __iter__(self) -> Iterator[BuildIssue]:
        return iter(self.issues)


__all__ = [
    'ErrorSeverity',
    'IssueKind',
    'HierarchyError',
    'TableSchemaError',
    'MissingColumnError',
    'MalformedOrderError',
    'NoRootError',
    'NonNumericFactError',
    'HierarchyWarning',
    'CycleDetectedWarning',
    'DuplicateArcWarning',
    'UnreachableConceptWarning',
    'DuplicatePeriodWarning',
    'BalanceSignNotice',
    'BuildIssue',
    'BuildReport',
]
