from __future__ import annotations

"""
Workspace Tree Provider.

Top-level orchestrator answering "children of this node" requests for a
host tree view. Nothing is cached: every request re-reads the configuration
files and re-scans the filesystem, so a refresh only has to notify the host.
"""

import logging
import os
from typing import Callable, List, Optional, Tuple

from fccwtree.core.services.locator import locate_config_files
from fccwtree.core.services.merge import merge_roots
from fccwtree.core.services.watch import WatchFilter
from fccwtree.domain.config import CategoryRoots, ProjectConfig, load_project_config
from fccwtree.domain.constants import (
    COMBINED_SOURCE_LABEL,
    CONFIG_EXTENSION,
    INCLUDES_LABEL,
    NO_WORKSPACE_LABEL,
)
from fccwtree.domain.errors import WorkspaceError
from fccwtree.domain.tree_models import CollapsibleState, NodeKind, TreeItem, TreeNode

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


class WorkspaceTreeProvider:
    """
    Tree data provider for one workspace.

    With a single configuration file its sections are exposed directly at
    the root. With several, the root lists one node per configuration file,
    each expanded on demand into its own sections.

    Args:
        workspace_root: Directory scanned for configuration files and
                        against which configured directories are resolved.
        extension: Configuration file suffix.
        strict_scan: Abort the configuration scan on unreadable directories.
    """

    def __init__(
            self,
            workspace_root: str,
            extension: str = CONFIG_EXTENSION,
            strict_scan: bool = True,
    ) -> None:
        self.workspace_root = os.path.abspath(workspace_root)
        self.extension = extension
        self.strict_scan = strict_scan
        self._listeners: List[ChangeListener] = []

    # -------------------------------------------------------------------------
    # CHANGE NOTIFICATION
    # -------------------------------------------------------------------------

    def on_did_change(self, listener: ChangeListener) -> Callable[[], None]:
        """
        Subscribe to refresh notifications.

        Returns:
            Callable[[], None]: Function removing the subscription.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def refresh(self) -> None:
        logger.debug("Workspace tree invalidated")
        for listener in list(self._listeners):
            listener()

    def handle_fs_event(self, path: str) -> bool:
        """Refresh if a changed path affects the tree. Returns True when refreshed."""
        if self.watch_filter().is_relevant(path):
            self.refresh()
            return True
        return False

    # -------------------------------------------------------------------------
    # TREE DATA API
    # -------------------------------------------------------------------------

    def get_children(self, node: Optional[TreeNode] = None) -> List[TreeNode]:
        """
        List the children of a node, or the top-level nodes.

        Raises:
            ConfigParseError: If the configuration being expanded is malformed.
            FilesystemAccessError: If the workspace cannot be scanned.
        """
        if node is None:
            return self._root_children()

        if node.kind is NodeKind.CONFIG and node.config_path:
            return list(self.build_sections(node.config_path))

        return list(node.children)

    def get_tree_item(self, node: TreeNode) -> TreeItem:
        collapsible = CollapsibleState.COLLAPSED if node.expandable else CollapsibleState.NONE

        if node.kind is NodeKind.INFO:
            return TreeItem(label=node.label)

        if node.kind is NodeKind.CONFIG:
            return TreeItem(
                label=node.label,
                collapsible=collapsible,
                context_value="config",
                tooltip=node.config_path,
            )

        if node.kind is NodeKind.SECTION:
            return TreeItem(label=node.label, collapsible=collapsible, context_value="section")

        return TreeItem(
            label=node.label,
            collapsible=collapsible,
            resource_path=node.path,
            command=None if node.is_dir else "open",
            context_value="folder" if node.is_dir else "file",
            tooltip=node.path,
        )

    def build_sections(self, config_path: str) -> Tuple[TreeNode, ...]:
        """
        Build the "Combined source" and "Includes" sections of a configuration.

        A section is omitted when its directories are not configured.
        """
        config = self.load_config(config_path)
        sections: List[TreeNode] = []

        if config.has_combined_source:
            sections.append(TreeNode(
                kind=NodeKind.SECTION,
                label=COMBINED_SOURCE_LABEL,
                children=merge_roots(config.combined_source_dirs(), self.workspace_root, config_path),
                config_path=config_path,
            ))

        if config.has_includes:
            sections.append(TreeNode(
                kind=NodeKind.SECTION,
                label=INCLUDES_LABEL,
                children=merge_roots([config.include_directory], self.workspace_root, config_path),
                config_path=config_path,
            ))

        return tuple(sections)

    # -------------------------------------------------------------------------
    # CONFIGURATION ACCESS
    # -------------------------------------------------------------------------

    def list_config_files(self) -> List[str]:
        return locate_config_files(self.workspace_root, self.extension, strict=self.strict_scan)

    def load_config(self, config_path: str) -> ProjectConfig:
        return load_project_config(config_path)

    def config_for(self, node: Optional[TreeNode]) -> Optional[str]:
        """Configuration owning a node, else the workspace's only configuration."""
        if node is not None and node.config_path:
            return node.config_path
        configs = self.list_config_files()
        if len(configs) == 1:
            return configs[0]
        return None

    def category_roots_for(self, node: Optional[TreeNode]) -> CategoryRoots:
        """Category roots of the node's configuration, or the default layout."""
        config_path = self.config_for(node)
        config = self.load_config(config_path) if config_path else ProjectConfig()
        return config.category_roots(self.workspace_root)

    def watch_filter(self) -> WatchFilter:
        roots = ProjectConfig().category_roots(self.workspace_root).as_list()
        for config_path in self.list_config_files():
            try:
                roots.extend(self.load_config(config_path).category_roots(self.workspace_root).as_list())
            except WorkspaceError as e:
                logger.debug(f"Watch filter ignores {config_path}: {e}")
        return WatchFilter(self.workspace_root, roots, self.extension)

    # -------------------------------------------------------------------------
    # NODE LOOKUP
    # -------------------------------------------------------------------------

    def find_node(self, path: str) -> Optional[TreeNode]:
        """
        Find the entry whose canonical physical path equals the given path.

        Configurations that fail to load are skipped with a warning.
        """
        target = os.path.normpath(os.path.abspath(path))
        pending: List[TreeNode] = list(reversed(self.get_children()))

        while pending:
            node = pending.pop()
            if node.path and os.path.normpath(node.path) == target:
                return node
            try:
                children = self.get_children(node)
            except WorkspaceError as e:
                logger.warning(f"Skipping '{node.label}' while searching: {e}")
                continue
            pending.extend(reversed(children))
        return None

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _root_children(self) -> List[TreeNode]:
        configs = self.list_config_files()

        if not configs:
            return [TreeNode(kind=NodeKind.INFO, label=NO_WORKSPACE_LABEL)]

        if len(configs) == 1:
            return list(self.build_sections(configs[0]))

        return [
            TreeNode(kind=NodeKind.CONFIG, label=os.path.basename(p), config_path=p)
            for p in configs
        ]
