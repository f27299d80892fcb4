"""locale-sync – Obsolete Key Pruner.

Removes from a target tree every key the reference tree no longer has.
Recursion only happens where both sides hold a subtree; leaf/subtree
mismatches are not touched here.
"""

from __future__ import annotations

import structlog

from locale_sync.core.tree import Tree, is_subtree

logger = structlog.get_logger()


def prune(reference: Tree, target: Tree, _path: str = "") -> bool:
    """Delete keys of ``target`` absent from ``reference``, in place.

    Returns:
        True if any key was removed.
    """
    removed = False

    for key in list(target):
        path = f"{_path}.{key}" if _path else key
        if key not in reference:
            del target[key]
            logger.debug("prune.removed", key=path)
            removed = True
        elif is_subtree(reference[key]) and is_subtree(target[key]):
            if prune(reference[key], target[key], path):
                removed = True

    return removed
