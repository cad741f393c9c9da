from __future__ import annotations

"""
Tree Renderer.

Converts the logical workspace tree into ASCII lines or plain dictionaries
for terminal and JSON output.
"""

from typing import Any, Dict, List, Optional, Sequence

from fccwtree.core.services.index import WorkspaceTreeProvider
from fccwtree.domain.errors import WorkspaceError
from fccwtree.domain.tree_models import TreeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_structure(
        provider: WorkspaceTreeProvider,
        nodes: Sequence[TreeNode],
        lines: List[str],
        prefix: str = "",
        errors: Optional[List[str]] = None,
) -> None:
    """
    Recursively render nodes and their descendants as connector lines.

    Children are requested through the provider, so configuration nodes are
    expanded on the way down. A configuration that fails to load is rendered
    as an error line and recorded in ``errors``; its siblings still render.

    Args:
        provider: Source of node children.
        nodes: Nodes of the current level.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        errors: Optional accumulator for failure messages.
    """
    total = len(nodes)

    for i, node in enumerate(nodes):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        label = f"{node.label}/" if node.is_entry and node.is_dir else node.label
        lines.append(f"{prefix}{connector}{label}")

        if not node.expandable:
            continue

        new_prefix = prefix + ("    " if is_last else "│   ")
        try:
            children = provider.get_children(node)
        except WorkspaceError as e:
            lines.append(f"{new_prefix}[ERROR] {e}")
            if errors is not None:
                errors.append(str(e))
            continue

        render_tree_structure(provider, children, lines, prefix=new_prefix, errors=errors)


def tree_to_dict(provider: WorkspaceTreeProvider, node: TreeNode) -> Dict[str, Any]:
    """
    Serialize a node and its expanded descendants into a JSON-ready dict.
    """
    item = provider.get_tree_item(node)
    out: Dict[str, Any] = {
        "label": item.label,
        "kind": node.kind.value,
        "context": item.context_value,
    }
    if item.resource_path:
        out["path"] = item.resource_path
    if node.config_path:
        out["config"] = node.config_path

    if node.expandable:
        try:
            out["children"] = [tree_to_dict(provider, c) for c in provider.get_children(node)]
        except WorkspaceError as e:
            out["error"] = str(e)
    return out
