from __future__ import annotations

"""
Create-Target Resolution Service.

Maps a selected logical node back to the physical directory where a new
file of a given category belongs. The node's own category root fixes its
relative position; the requested category decides which root that
position is replayed into.
"""

import logging
import os
from typing import Optional

from fccwtree.domain.config import CategoryRoots
from fccwtree.domain.errors import InvalidNameError, UserCancelled
from fccwtree.domain.tree_models import Category, TreeNode
from fccwtree.infra.fs import is_within

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def category_root(roots: CategoryRoots, category: Category) -> str:
    if category is Category.SOURCE:
        return roots.source
    if category is Category.RESOURCE:
        return roots.resources
    return roots.include


def owning_root(path: str, roots: CategoryRoots) -> Optional[str]:
    """
    Return the first category root (source, resources, include) containing a path.
    """
    for root in roots.as_list():
        if is_within(path, root):
            return root
    return None


def resolve_create_target(
        node: Optional[TreeNode],
        category: Category,
        roots: CategoryRoots,
) -> str:
    """
    Compute the directory in which a new file of a category is created.

    Without a node (or for nodes without a physical path) the category root
    itself is returned. For an entry node, its directory (the node itself
    when it is a directory, else its parent) is taken relative to the
    category root it lives in and re-joined onto the requested category's
    root, e.g. a node under ``res/sub/`` yields ``web-src/sub`` for a source
    file. Nodes outside every category root target their own directory.

    Args:
        node: Selected tree node, if any.
        category: Category of the file to create.
        roots: Category roots of the node's configuration.

    Returns:
        str: Absolute target directory. Nothing is created.
    """
    base_dir = category_root(roots, category)
    if node is None or not node.path:
        return base_dir

    node_path = os.path.abspath(node.path)
    node_dir = node_path if _is_directory(node) else os.path.dirname(node_path)

    element_root = owning_root(node_path, roots)
    if element_root is not None:
        rel = os.path.relpath(node_dir, element_root)
        target = base_dir if rel == os.curdir else os.path.join(base_dir, rel)
        return os.path.normpath(target)

    return node_dir


def build_target_path(target_dir: str, file_name: Optional[str]) -> str:
    """
    Join a user-supplied file name onto the target directory.

    Nested names such as ``sub/new.js`` are accepted.

    Raises:
        UserCancelled: If the name is empty or blank. Other names are used verbatim.
        InvalidNameError: If the name is absolute or escapes the target.
    """
    name = file_name or ""
    if not name.strip():
        raise UserCancelled()
    if os.path.isabs(name):
        raise InvalidNameError(f"File name must be relative, got '{name}'", target_dir)

    target_path = os.path.normpath(os.path.join(target_dir, name))
    if target_path == os.path.normpath(target_dir) or not is_within(target_path, target_dir):
        raise InvalidNameError(f"File name '{name}' leaves the target directory", target_dir)
    return target_path


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _is_directory(node: TreeNode) -> bool:
    """Prefer the filesystem's answer; fall back to the node flag for vanished paths."""
    if node.path and os.path.exists(node.path):
        return os.path.isdir(node.path)
    return node.is_dir
