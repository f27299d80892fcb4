"""locale-sync – Translation Tree primitives.

A translation tree is a plain JSON object: string keys mapping to either a
string (leaf) or another object (subtree). Every merge step classifies values
through node_kind() instead of guessing from ad-hoc type checks.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator

Tree = dict[str, Any]


class NodeKind(str, Enum):
    """Kind of a value inside a translation tree."""

    LEAF = "leaf"
    SUBTREE = "subtree"
    OPAQUE = "opaque"  # arrays, numbers, booleans, null


def node_kind(value: Any) -> NodeKind:
    """Classify a tree value.

    Arrays are never subtrees, even though they are JSON containers.
    """
    if isinstance(value, dict):
        return NodeKind.SUBTREE
    if isinstance(value, str):
        return NodeKind.LEAF
    return NodeKind.OPAQUE


def is_subtree(value: Any) -> bool:
    return node_kind(value) is NodeKind.SUBTREE


def normalize(tree: Any) -> Any:
    """Return a copy of ``tree`` with keys sorted ascending at every depth.

    Non-object inputs pass through unchanged. Lists are returned as-is and
    not descended into. The input is never mutated.

    Args:
        tree: Any JSON value.

    Returns:
        New tree with canonical key order.
    """
    if not is_subtree(tree):
        return tree
    return {key: normalize(tree[key]) for key in sorted(tree)}


def iter_leaf_paths(tree: Tree, prefix: str = "") -> Iterator[str]:
    """Yield dotted paths of every non-subtree value in ``tree``."""
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if is_subtree(value):
            yield from iter_leaf_paths(value, path)
        else:
            yield path
