from __future__ import annotations

"""
Workspace Tree Data Models.

Provides the immutable node types handed to the host interface and the
renderable item description derived from them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class Category(str, Enum):
    """Semantic category a newly created file belongs to."""
    SOURCE = "source"
    RESOURCE = "resource"
    INCLUDE = "include"


class NodeKind(str, Enum):
    INFO = "info"
    CONFIG = "config"
    SECTION = "section"
    ENTRY = "entry"


class CollapsibleState(str, Enum):
    NONE = "none"
    COLLAPSED = "collapsed"


# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeNode:
    """
    One node of the logical workspace tree.

    Configuration nodes carry only their file path (``config_path``) and are
    expanded lazily. Section nodes and directory entries carry their children
    eagerly. Entry nodes point at the canonical physical path, i.e. the first
    root in which their name was discovered.

    Attributes:
        kind: Node category.
        label: Display name.
        path: Canonical physical path (entries only).
        is_dir: True for expandable entries.
        children: Eagerly computed children.
        config_path: Configuration file this node was built from.
    """
    kind: NodeKind
    label: str
    path: Optional[str] = None
    is_dir: bool = False
    children: Tuple["TreeNode", ...] = field(default_factory=tuple)
    config_path: Optional[str] = None

    @property
    def is_entry(self) -> bool:
        return self.kind is NodeKind.ENTRY

    @property
    def expandable(self) -> bool:
        if self.kind is NodeKind.ENTRY:
            return self.is_dir
        return self.kind in (NodeKind.CONFIG, NodeKind.SECTION)


@dataclass(frozen=True)
class TreeItem:
    """
    Renderable description of a node for the host interface.

    Attributes:
        label: Text shown to the user.
        collapsible: Whether the host should draw an expander.
        resource_path: Physical path backing the item, if any.
        command: Action on activation ("open" for files).
        context_value: Action affordance key; None disables all actions.
        tooltip: Extra hover text.
    """
    label: str
    collapsible: CollapsibleState = CollapsibleState.NONE
    resource_path: Optional[str] = None
    command: Optional[str] = None
    context_value: Optional[str] = None
    tooltip: Optional[str] = None
