# Path: xbrl_tree/process/hierarchy/node.py
"""
Tree Node - A concept's position in a reconstructed statement tree.

Nodes hold no references to each other. The parent is named by its
path_id, and children are derived through TreeIndex, an arena keyed by
path_id, so the tree never contains pointer cycles.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from xbrl_tree.process.hierarchy.constants import DEFAULT_INDENT_SIZE, ROOT_PATH_ID
from xbrl_tree.process.hierarchy.path_id import is_descendant


@dataclass(frozen=True)
class TreeNode:
    """
    A single position in the statement tree.

    Attributes:
        element_id: Concept identifier (e.g., "us-gaap_Assets")
        path_id: Sortable position id ("" for a single root, "0102", ...)
        depth: Levels below the root (roots are 0)
        parent_id: element_id of the parent, None for roots
        parent_path_id: path_id of the parent, None for roots
        order: Arc order that placed this node (0.0 for roots)
        rank: 1-based rank among siblings
        preferred_label: Label role requested by the presentation arc

    Example:
        node = TreeNode(element_id='us-gaap_Cash', path_id='0101', depth=2,
                        parent_id='us-gaap_AssetsCurrent', parent_path_id='01',
                        order=1.0, rank=1)
    """
    element_id: str
    path_id: str
    depth: int
    parent_id: Optional[str] = None
    parent_path_id: Optional[str] = None
    order: float = 0.0
    rank: int = 1
    preferred_label: Optional[str] = None

    @property
    def is_root(self) -> bool:
        """Check if this node has no parent."""
        return self.parent_path_id is None

    def to_dict(self) -> dict[str, Any]:
        """Convert node to dictionary."""
        return {
            'element_id': self.element_id,
            'path_id': self.path_id,
            'depth': self.depth,
            'parent_id': self.parent_id,
            'parent_path_id': self.parent_path_id,
            'order': self.order,
            'rank': self.rank,
            'preferred_label': self.preferred_label,
        }

    def __str__(self) -> str:
        return f"{self.path_id or '<root>'} {self.element_id}"


class TreeIndex:
    """
    Arena of tree nodes keyed by path_id.

    Children-of-X is a lookup on parent_path_id; nothing is stored on
    the nodes themselves.

    Example:
        index = TreeIndex(nodes)
        for child in index.children_of('01'):
            print(child.element_id)
    """

    def __init__(self, nodes: Iterable[TreeNode]):
        """
        Build the index.

        Args:
            nodes: Tree nodes with unique path_ids

        Raises:
            ValueError: If two nodes share a path_id
        """
        self._nodes: dict[str, TreeNode] = {}
        self._children: dict[str, list[TreeNode]] = defaultdict(list)
        self._by_element: dict[str, list[TreeNode]] = defaultdict(list)

        for node in sorted(nodes, key=lambda n: n.path_id):
            if node.path_id in self._nodes:
                raise ValueError(f"Duplicate path_id {node.path_id!r}")
            self._nodes[node.path_id] = node
            self._by_element[node.element_id].append(node)
            if node.parent_path_id is not None:
                self._children[node.parent_path_id].append(node)

    # ===========================================================================
    # LOOKUPS
    # ===========================================================================
    def get(self, path_id: str) -> Optional[TreeNode]:
        """Node at a path_id, or None."""
        return self._nodes.get(path_id)

    def children_of(self, path_id: str) -> list[TreeNode]:
        """Direct children of a position, in rank order."""
        return list(self._children.get(path_id, []))

    def parent_of(self, node: TreeNode) -> Optional[TreeNode]:
        """Parent node, or None for roots."""
        if node.parent_path_id is None:
            return None
        return self._nodes.get(node.parent_path_id)

    def by_element(self, element_id: str) -> list[TreeNode]:
        """Every position a concept occupies (more than one if repeated)."""
        return list(self._by_element.get(element_id, []))

    def ancestors_of(self, path_id: str) -> list[TreeNode]:
        """Ancestors from the parent up to the root."""
        result = []
        node = self._nodes.get(path_id)
        while node is not None and node.parent_path_id is not None:
            node = self._nodes.get(node.parent_path_id)
            if node is not None:
                result.append(node)
        return result

    def descendants_of(self, path_id: str) -> list[TreeNode]:
        """All nodes strictly below a position, in pre-order."""
        return [n for p, n in self._nodes.items() if is_descendant(p, path_id)]

    @property
    def roots(self) -> list[TreeNode]:
        """Nodes without a parent."""
        return [n for n in self._nodes.values() if n.is_root]

    @property
    def leaves(self) -> list[TreeNode]:
        """Nodes without children."""
        return [n for p, n in self._nodes.items() if p not in self._children]

    @property
    def max_depth(self) -> int:
        """Deepest level in the tree (0 for an empty tree)."""
        return max((n.depth for n in self._nodes.values()), default=0)

    # ===========================================================================
    # ITERATION AND REPRESENTATION
    # ===========================================================================
    def iter_preorder(self) -> Iterator[TreeNode]:
        """Nodes in pre-order (path_id order)."""
        yield from self._nodes.values()

    def to_text(self, indent_size: int = DEFAULT_INDENT_SIZE) -> str:
        """
        Indented outline of the tree, one element per line.

        Args:
            indent_size: Spaces per depth level
        """
        lines = []
        for node in self.iter_preorder():
            indent = ' ' * (node.depth * indent_size)
            lines.append(f"{indent}{node.element_id}")
        return '\n'.join(lines)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, path_id: object) -> bool:
        return path_id in self._nodes

    def __iter__(self) -> Iterator[TreeNode]:
        return self.iter_preorder()

    def __repr__(self) -> str:
        root = self._nodes.get(ROOT_PATH_ID)
        root_str = root.element_id if root else f"{len(self.roots)} roots"
        return f"TreeIndex(nodes={len(self._nodes)}, root={root_str})"


__all__ = [
    'TreeNode',
    'TreeIndex',
]
