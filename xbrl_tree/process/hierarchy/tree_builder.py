# Path: xbrl_tree/process/hierarchy/tree_builder.py
"""
Tree Builder - Rebuilds an explicit statement tree from normalized arcs.

The arcs of one role form a forest. Roots are concepts that appear as a
parent but never as a child. The builder expands the forest breadth-first,
level by level:

    level 0   roots (a single root gets path_id "")
    level 1   children of the roots, ranked by (order, element_id)
    level n   children of every node placed at level n-1, in placement order

Every placed node receives depth and path_id = parent's path_id plus its
zero-padded sibling rank. Sorting by path_id therefore gives pre-order.

Malformed input is handled per branch:
    - the same parent -> child arc twice: placed once, DuplicateArcWarning
    - a child that is already an ancestor: CycleDetectedWarning, the node
      whose arc closes the cycle is cut with its subtree
    - concepts no root can reach: UnreachableConceptWarning
Only an edge set without any root aborts (NoRootError).

Example:
    builder = TreeBuilder()
    nodes = builder.build(edges, role_id='BalanceSheet', report=report)
    for node in nodes:
        print(node.path_id, node.element_id)
"""

import warnings
from collections import defaultdict
from typing import Optional

from xbrl_tree.core.logger import get_process_logger
from xbrl_tree.process.hierarchy.constants import DEFAULT_PATH_ID_WIDTH, ROOT_PATH_ID
from xbrl_tree.process.hierarchy.edge_normalizer import NormalizedEdge
from xbrl_tree.process.hierarchy.errors import (
    BuildIssue,
    BuildReport,
    CycleDetectedWarning,
    DuplicateArcWarning,
    ErrorSeverity,
    IssueKind,
    NoRootError,
    UnreachableConceptWarning,
)
from xbrl_tree.process.hierarchy.node import TreeIndex, TreeNode
from xbrl_tree.process.hierarchy.path_id import (
    child_path_id,
    format_segment,
    is_descendant,
    rank_width,
)


logger = get_process_logger('hierarchy.tree_builder')

# (element_id, path_id) pairs from the root down to a node
Lineage = tuple[tuple[str, str], ...]


class TreeBuilder:
    """
    Breadth-first tree reconstruction over one role's arcs.

    Example:
        builder = TreeBuilder(min_width=2)
        nodes = builder.build(edges, role_id='BalanceSheet')
        index = TreeIndex(nodes)
    """

    def __init__(self, min_width: int = DEFAULT_PATH_ID_WIDTH):
        """
        Initialize the tree builder.

        Args:
            min_width: Minimum digits per path_id segment
        """
        self.min_width = min_width
        self._build_count = 0
        self._last_error: Optional[str] = None

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def build(
        self,
        edges: list[NormalizedEdge],
        role_id: Optional[str] = None,
        report: Optional[BuildReport] = None,
    ) -> list[TreeNode]:
        """
        Build the tree for one role.

        Args:
            edges: Normalized arcs of the role
            role_id: Role identifier (for messages)
            report: Report collecting recovered issues

        Returns:
            Tree nodes in pre-order (sorted by path_id)

        Raises:
            NoRootError: If edges is non-empty but every concept has a parent
        """
        if report is None:
            report = BuildReport(role_id=role_id)

        if not edges:
            logger.info(f"Role {role_id}: no arcs, empty tree")
            return []

        children = self._group_children(edges)
        roots = self._find_roots(edges)

        if not roots:
            error = NoRootError(role_id, len(edges))
            self._last_error = str(error)
            logger.error(self._last_error)
            raise error

        max_rank = max(len(roots) if len(roots) > 1 else 1,
                       max(len(group) for group in children.values()))
        width = rank_width(max_rank, self.min_width)

        arena: dict[str, TreeNode] = {}
        lineage: dict[str, Lineage] = {}
        truncated: set[str] = set()

        frontier = self._place_roots(roots, width, arena, lineage)

        while frontier:
            next_level: list[TreeNode] = []

            for parent in frontier:
                if parent.path_id not in arena:
                    continue
                self._expand(
                    parent, children.get(parent.element_id, []), width,
                    arena, lineage, truncated, next_level, role_id, report,
                )

            frontier = [node for node in next_level if node.path_id in arena]

        nodes = sorted(arena.values(), key=lambda n: n.path_id)

        self._report_unreachable(edges, nodes, truncated, children, role_id, report)

        self._build_count += 1
        logger.info(
            f"Role {role_id}: built {len(nodes)} node(s) from {len(edges)} arc(s), "
            f"{len(roots)} root(s), max depth {max((n.depth for n in nodes), default=0)}"
        )
        return nodes

    def build_index(
        self,
        edges: list[NormalizedEdge],
        role_id: Optional[str] = None,
        report: Optional[BuildReport] = None,
    ) -> TreeIndex:
        """Build the tree and wrap it in a TreeIndex."""
        return TreeIndex(self.build(edges, role_id=role_id, report=report))

    # =========================================================================
    # TRAVERSAL
    # =========================================================================

    def _place_roots(
        self,
        roots: list[str],
        width: int,
        arena: dict[str, TreeNode],
        lineage: dict[str, Lineage],
    ) -> list[TreeNode]:
        """Create root nodes; a lone root sits at the empty path_id."""
        placed = []
        for rank, element_id in enumerate(roots, start=1):
            path = ROOT_PATH_ID if len(roots) == 1 else format_segment(rank, width)
            node = TreeNode(element_id=element_id, path_id=path, depth=0, rank=rank)
            arena[path] = node
            lineage[path] = ((element_id, path),)
            placed.append(node)
        return placed

    def _expand(
        self,
        parent: TreeNode,
        child_edges: list[NormalizedEdge],
        width: int,
        arena: dict[str, TreeNode],
        lineage: dict[str, Lineage],
        truncated: set[str],
        next_level: list[TreeNode],
        role_id: Optional[str],
        report: BuildReport,
    ) -> None:
        """Place the children of one parent, ranked by (order, to_id)."""
        seen: set[str] = set()
        rank = 0

        for edge in child_edges:
            if parent.path_id not in arena:
                # parent was cut by a cycle closing through one of its arcs
                return

            if edge.to_id in seen:
                self._record_duplicate(parent, edge, role_id, report)
                continue
            seen.add(edge.to_id)

            line = lineage[parent.path_id]
            line_elements = [element for element, _ in line]
            if edge.to_id in line_elements:
                self._truncate_cycle(
                    parent, edge, line, line_elements.index(edge.to_id),
                    arena, lineage, truncated, role_id, report,
                )
                continue

            rank += 1
            path = child_path_id(parent.path_id, rank, width)
            node = TreeNode(
                element_id=edge.to_id,
                path_id=path,
                depth=parent.depth + 1,
                parent_id=parent.element_id,
                parent_path_id=parent.path_id,
                order=edge.order,
                rank=rank,
                preferred_label=edge.preferred_label,
            )
            arena[path] = node
            lineage[path] = line + ((edge.to_id, path),)
            next_level.append(node)

    def _truncate_cycle(
        self,
        parent: TreeNode,
        edge: NormalizedEdge,
        line: Lineage,
        ancestor_pos: int,
        arena: dict[str, TreeNode],
        lineage: dict[str, Lineage],
        truncated: set[str],
        role_id: Optional[str],
        report: BuildReport,
    ) -> None:
        """
        Cut the node whose arc closes a cycle.

        When the parent itself is revisited (a self loop) only the arc is
        dropped. Otherwise the parent is removed with the children already
        placed below it; its siblings and ancestors stay.
        """
        removed: list[str] = []
        cut_path = None

        if ancestor_pos < len(line) - 1:
            cut_path = parent.path_id
            for path in [p for p in arena if p == cut_path or is_descendant(p, cut_path)]:
                removed.append(arena[path].element_id)
                del arena[path]
                lineage.pop(path, None)
            truncated.update(removed)

        cycle = [element for element, _ in line[ancestor_pos:]] + [edge.to_id]
        message = (
            f"Cycle in role {role_id}: {' -> '.join(cycle)}; "
            + (f"truncated branch at {cut_path!r} ({len(removed)} node(s))"
               if cut_path is not None else "arc dropped")
        )
        warning = CycleDetectedWarning(message)

        report.add(BuildIssue(
            kind=IssueKind.CYCLE_DETECTED,
            severity=ErrorSeverity.WARNING,
            message=message,
            element_id=edge.to_id,
            path_id=parent.path_id,
            details={
                'parent_id': parent.element_id,
                'cycle': cycle,
                'truncated_path_id': cut_path,
                'truncated_elements': removed,
            },
            error=warning,
        ))
        logger.warning(message)
        warnings.warn(warning, stacklevel=4)

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _group_children(edges: list[NormalizedEdge]) -> dict[str, list[NormalizedEdge]]:
        """Arcs grouped by parent, sorted by (order, to_id)."""
        grouped: dict[str, list[NormalizedEdge]] = defaultdict(list)
        for edge in edges:
            grouped[edge.from_id].append(edge)
        for group in grouped.values():
            group.sort(key=lambda e: (e.order, e.to_id))
        return dict(grouped)

    @staticmethod
    def _find_roots(edges: list[NormalizedEdge]) -> list[str]:
        """Parents that are never children, sorted by element id."""
        parents = {edge.from_id for edge in edges}
        children = {edge.to_id for edge in edges}
        return sorted(parents - children)

    @staticmethod
    def _record_duplicate(
        parent: TreeNode,
        edge: NormalizedEdge,
        role_id: Optional[str],
        report: BuildReport,
    ) -> None:
        message = (
            f"Duplicate arc {parent.element_id} -> {edge.to_id} in role {role_id} "
            f"(order {edge.order}); placed once"
        )
        report.add(BuildIssue(
            kind=IssueKind.DUPLICATE_ARC,
            severity=ErrorSeverity.INFO,
            message=message,
            element_id=edge.to_id,
            path_id=parent.path_id,
            details={'parent_id': parent.element_id, 'order': edge.order},
            error=DuplicateArcWarning(message),
        ))
        logger.debug(message)

    @staticmethod
    def _report_unreachable(
        edges: list[NormalizedEdge],
        nodes: list[TreeNode],
        truncated: set[str],
        children: dict[str, list[NormalizedEdge]],
        role_id: Optional[str],
        report: BuildReport,
    ) -> None:
        """
        Record concepts that no root reaches (detached cycles).

        Concepts below a cycle cut are only hidden by the cut and are
        not reported again.
        """
        mentioned = {e.from_id for e in edges} | {e.to_id for e in edges}
        placed = {n.element_id for n in nodes}

        hidden = set(truncated)
        pending = list(truncated)
        while pending:
            for edge in children.get(pending.pop(), []):
                if edge.to_id not in hidden:
                    hidden.add(edge.to_id)
                    pending.append(edge.to_id)

        for element_id in sorted(mentioned - placed - hidden):
            message = f"Concept {element_id} in role {role_id} is not reachable from any root"
            report.add(BuildIssue(
                kind=IssueKind.UNREACHABLE_CONCEPT,
                severity=ErrorSeverity.WARNING,
                message=message,
                element_id=element_id,
                error=UnreachableConceptWarning(message),
            ))
            logger.warning(message)

    # =========================================================================
    # STATISTICS
    # =========================================================================

    @property
    def last_error(self) -> Optional[str]:
        """Get the last error message."""
        return self._last_error

    @property
    def build_count(self) -> int:
        """Get number of successful builds."""
        return self._build_count

    def reset_stats(self) -> None:
        """Reset build statistics."""
        self._build_count = 0
        self._last_error = None


__all__ = ['TreeBuilder']
