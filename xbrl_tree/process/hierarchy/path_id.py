# Path: xbrl_tree/process/hierarchy/path_id.py
"""
path_id Generation Utilities.

A path_id encodes a node's position in a statement tree as the
concatenation of its zero-padded sibling ranks, one segment per level:

    ""        single root of the role
    "01"      first child of a single root, or the first of several roots
    "0203"    third child of the node at "02"

Because every segment in one build has the same width, sorting path_ids
as plain strings yields a pre-order traversal (parent before children,
siblings by rank).

Width is 2 digits by default. When a sibling group has more than 99
members the whole build switches to a wider segment so that '100'
never sorts before '99'.
"""

from xbrl_tree.process.hierarchy.constants import DEFAULT_PATH_ID_WIDTH


def rank_width(max_rank: int, minimum: int = DEFAULT_PATH_ID_WIDTH) -> int:
    """
    Digits needed so that every rank up to max_rank fits one segment.

    Args:
        max_rank: Largest 1-based sibling rank in the build
        minimum: Lower bound on the width

    Returns:
        Segment width

    Example:
        >>> rank_width(12)
        2
        >>> rank_width(150)
        3
    """
    return max(minimum, len(str(max(max_rank, 1))))


def format_segment(rank: int, width: int = DEFAULT_PATH_ID_WIDTH) -> str:
    """
    Zero-pad a 1-based sibling rank.

    Raises:
        ValueError: If rank is not positive or does not fit the width
    """
    if rank < 1:
        raise ValueError(f"Sibling rank must be 1-based, got {rank}")
    segment = f"{rank:0{width}d}"
    if len(segment) > width:
        raise ValueError(f"Rank {rank} does not fit a {width}-digit path segment")
    return segment


def child_path_id(parent_path_id: str, rank: int, width: int = DEFAULT_PATH_ID_WIDTH) -> str:
    """
    Path id of a child from its parent's path id and its sibling rank.

    Example:
        >>> child_path_id('02', 3)
        '0203'
    """
    return f"{parent_path_id}{format_segment(rank, width)}"


def is_descendant(path_id: str, ancestor: str) -> bool:
    """True if path_id lies strictly below ancestor."""
    return len(path_id) > len(ancestor) and path_id.startswith(ancestor)


__all__ = [
    'rank_width',
    'format_segment',
    'child_path_id',
    'is_descendant',
]
