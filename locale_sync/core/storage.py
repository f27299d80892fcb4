"""locale-sync – JSON tree storage.

Whole-file reads and writes of translation trees. Output is UTF-8 with
2-space indentation and keys sorted at every level.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog

from locale_sync.core.errors import TreeFileError, TreeWriteError
from locale_sync.core.tree import Tree, is_subtree, normalize

logger = structlog.get_logger()


def load_tree(path: str | Path) -> Tree:
    """Load a translation tree from a JSON file.

    Args:
        path: File to read.

    Returns:
        The parsed JSON object.

    Raises:
        TreeFileError: File missing, unreadable, not UTF-8, not JSON, or not
            an object.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TreeFileError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise TreeFileError(path, f"not valid UTF-8 ({e})") from e

    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as e:
        raise TreeFileError(path, f"invalid JSON ({e})") from e

    if not is_subtree(data):
        raise TreeFileError(path, f"expected a JSON object, got {type(data).__name__}")

    logger.debug("storage.loaded", path=str(path), keys=len(data))
    return data


def dump_tree(tree: Tree) -> str:
    """Serialize a tree the way it is written to disk."""
    return json.dumps(normalize(tree), ensure_ascii=False, indent=2)


def save_tree(path: str | Path, tree: Tree) -> None:
    """Write ``tree`` to ``path`` in normalized form.

    The whole file is replaced; there is no protection against concurrent
    writers (last writer wins).

    Raises:
        TreeWriteError: The file could not be written.
    """
    path = Path(path)
    try:
        path.write_text(dump_tree(tree), encoding="utf-8")
    except OSError as e:
        raise TreeWriteError(path, e.strerror or str(e)) from e
    logger.info("storage.saved", path=str(path))
