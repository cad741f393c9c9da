from __future__ import annotations

"""
Directory Merge Service.

Presents several physical directories as one logical directory. Entries with
the same name at the same level are unified; same-named directories are
merged recursively, while files never merge and the first one seen wins.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from fccwtree.domain.tree_models import NodeKind, TreeNode
from fccwtree.infra.fs import is_within, list_entries

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# SCRATCH STATE
# -----------------------------------------------------------------------------

@dataclass
class _MergeSlot:
    """Per-name build state. Never leaves merge_roots."""
    name: str
    path: str
    is_dir: bool
    contributing: List[Tuple[str, FrozenSet[str]]] = field(default_factory=list)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def merge_roots(
        roots: Sequence[Optional[str]],
        base_dir: Optional[str] = None,
        config_path: Optional[str] = None,
) -> Tuple[TreeNode, ...]:
    """
    List the merged immediate children of one or more physical directories.

    Roots are scanned in the given order and each root's entries in name
    order. The first root that produces a name owns the node's canonical
    path. A later directory with the name of an earlier directory adds its
    path to the contributing set; anything sharing the name of an earlier
    file is discarded. Merged directories are expanded eagerly over all of
    their contributing paths.

    Args:
        roots: Physical directories in priority order. Empty entries are
               ignored and missing directories are skipped silently.
        base_dir: Directory that relative roots are resolved against.
        config_path: Configuration file recorded on every produced node.

    Returns:
        Tuple[TreeNode, ...]: Nodes in first-discovery order.

    Raises:
        FilesystemAccessError: If an existing root cannot be listed.
    """
    paths: List[str] = []
    for root in roots:
        if not root:
            continue
        if base_dir and not os.path.isabs(root):
            root = os.path.join(base_dir, root)
        paths.append(os.path.normpath(root))

    return _merge([(p, frozenset()) for p in paths], config_path)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _merge(
        roots: List[Tuple[str, FrozenSet[str]]],
        config_path: Optional[str],
) -> Tuple[TreeNode, ...]:
    slots: Dict[str, _MergeSlot] = {}

    for root, chain in roots:
        if not os.path.isdir(root):
            logger.debug(f"Skipping missing root: {root}")
            continue

        # Entries of this root descend from it and from everything above it
        entry_chain = chain | {os.path.realpath(root)}

        for name, is_dir in list_entries(root):
            entry_path = os.path.join(root, name)
            slot = slots.get(name)

            if slot is None:
                slot = _MergeSlot(name=name, path=entry_path, is_dir=is_dir)
                if is_dir:
                    slot.contributing.append((entry_path, entry_chain))
                slots[name] = slot
                continue

            if slot.is_dir and is_dir:
                slot.contributing.append((entry_path, entry_chain))
            else:
                logger.debug(f"'{entry_path}' shadowed by '{slot.path}'")

    nodes: List[TreeNode] = []
    for slot in slots.values():
        children: Tuple[TreeNode, ...] = ()
        if slot.is_dir:
            children = _expand(slot, config_path)

        nodes.append(TreeNode(
            kind=NodeKind.ENTRY,
            label=slot.name,
            path=slot.path,
            is_dir=slot.is_dir,
            children=children,
            config_path=config_path,
        ))
    return tuple(nodes)


def _expand(slot: _MergeSlot, config_path: Optional[str]) -> Tuple[TreeNode, ...]:
    """
    Merge a directory slot's contributing paths, refusing symlink cycles.

    A contributing path is a cycle when its real path is, or contains, one of
    the directories on its own listing chain.
    """
    paths: List[Tuple[str, FrozenSet[str]]] = []
    for p, chain in slot.contributing:
        real = os.path.realpath(p)
        if any(is_within(ancestor, real) for ancestor in chain):
            logger.warning(f"Not descending into '{p}': directory cycle")
            continue
        paths.append((p, chain))

    slot.contributing.clear()
    if not paths:
        return ()
    return _merge(paths, config_path)
