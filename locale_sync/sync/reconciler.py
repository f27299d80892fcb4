"""locale-sync – Key Reconciler.

Adds to a target tree every key the reference tree has and the target lacks.
Missing leaves are machine-translated; missing subtrees are created and
filled recursively. Existing target leaves are never overwritten.

The walk itself is sequential and only records which leaves need a
translation. Translations may then run on a bounded thread pool, but results
are always written back by the calling thread, so every node has exactly one
writer.
"""

from __future__ import annotations

import contextvars
import copy
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable

import structlog

from locale_sync.core.tree import NodeKind, Tree, node_kind

logger = structlog.get_logger()

TranslateFn = Callable[[str], str]


@dataclass
class PendingLeaf:
    """A target slot waiting for the translation of a reference leaf."""
    container: Tree
    key: str
    text: str


def _collect(
    reference: Tree,
    target: Tree,
    pending: list[PendingLeaf],
    repair_type_mismatches: bool,
) -> bool:
    changed = False

    for key, ref_value in reference.items():
        ref_kind = node_kind(ref_value)

        if key not in target:
            if ref_kind is NodeKind.SUBTREE:
                target[key] = {}
                _collect(ref_value, target[key], pending, repair_type_mismatches)
            elif ref_kind is NodeKind.LEAF:
                pending.append(PendingLeaf(target, key, ref_value))
            else:
                target[key] = copy.deepcopy(ref_value)
            changed = True

        elif ref_kind is NodeKind.SUBTREE:
            if node_kind(target[key]) is not NodeKind.SUBTREE:
                target[key] = {}
                changed = True
            if _collect(ref_value, target[key], pending, repair_type_mismatches):
                changed = True

        elif (
            repair_type_mismatches
            and ref_kind is NodeKind.LEAF
            and node_kind(target[key]) is NodeKind.SUBTREE
        ):
            pending.append(PendingLeaf(target, key, ref_value))
            changed = True

    return changed


def _fill(pending: list[PendingLeaf], translate: TranslateFn, max_workers: int) -> None:
    if not pending:
        return

    texts = [leaf.text for leaf in pending]
    if max_workers <= 1 or len(pending) == 1:
        results = [translate(text) for text in texts]
    else:
        with ThreadPoolExecutor(
            max_workers=min(max_workers, len(pending)),
            thread_name_prefix="translate",
        ) as pool:
            # each call runs in a copy of the caller's context (log bindings)
            futures = [
                pool.submit(contextvars.copy_context().run, translate, text)
                for text in texts
            ]
            results = [future.result() for future in futures]

    for leaf, result in zip(pending, results):
        leaf.container[leaf.key] = result


def reconcile(
    reference: Tree,
    target: Tree,
    translate: TranslateFn,
    *,
    max_workers: int = 1,
    repair_type_mismatches: bool = False,
) -> bool:
    """Add keys missing from ``target``, in place.

    Args:
        reference: Authoritative tree. Not modified.
        target: Tree to complete. Mutated in place.
        translate: Callable translating one reference leaf into the target
            language (already bound to source and target languages).
        max_workers: Upper bound of concurrent translate calls. 1 = inline.
        repair_type_mismatches: Also replace target subtrees sitting where the
            reference has a leaf. Off by default; such mismatches are left as-is.

    Returns:
        True if ``target`` was modified.
    """
    pending: list[PendingLeaf] = []
    changed = _collect(reference, target, pending, repair_type_mismatches)

    if pending:
        logger.debug("reconcile.translating", leaves=len(pending), max_workers=max_workers)
    _fill(pending, translate, max_workers)
    return changed
