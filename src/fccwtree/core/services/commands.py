from __future__ import annotations

"""
Workspace Commands.

Host-facing create/delete/reload operations. Prompts and notifications are
delegated to the host through small protocols; failures are reported to the
user and abort only the operation in progress.
"""

import logging
from typing import Optional, Protocol

from fccwtree.core.services.index import WorkspaceTreeProvider
from fccwtree.core.services.resolver import build_target_path, resolve_create_target
from fccwtree.domain.errors import UserCancelled, WorkspaceError
from fccwtree.domain.tree_models import Category, TreeNode
from fccwtree.infra.fs import create_empty_file, remove_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# HOST PROTOCOLS
# -----------------------------------------------------------------------------

class Prompter(Protocol):
    def ask_file_name(self, category: Category) -> Optional[str]:
        ...

    def confirm_delete(self, path: str) -> bool:
        ...


class Notifier(Protocol):
    def info(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

class WorkspaceCommands:
    """
    Command handlers bound to one tree provider.

    Args:
        provider: Tree provider to refresh after successful operations.
        prompter: Collects file names and delete confirmations.
        notifier: Displays outcome messages.
    """

    def __init__(
            self,
            provider: WorkspaceTreeProvider,
            prompter: Prompter,
            notifier: Notifier,
    ) -> None:
        self.provider = provider
        self.prompter = prompter
        self.notifier = notifier

    def reload(self) -> None:
        self.provider.refresh()

    def create_source(self, node: Optional[TreeNode] = None) -> Optional[str]:
        return self.create_file(node, Category.SOURCE)

    def create_resource(self, node: Optional[TreeNode] = None) -> Optional[str]:
        return self.create_file(node, Category.RESOURCE)

    def create_include(self, node: Optional[TreeNode] = None) -> Optional[str]:
        return self.create_file(node, Category.INCLUDE)

    def create_file(self, node: Optional[TreeNode], category: Category) -> Optional[str]:
        """
        Prompt for a name and create an empty file of the given category.

        Returns:
            Optional[str]: The created path, or None if cancelled or failed.
        """
        try:
            file_name = self.prompter.ask_file_name(category)
            roots = self.provider.category_roots_for(node)
            target_dir = resolve_create_target(node, category, roots)
            target_path = build_target_path(target_dir, file_name)
            create_empty_file(target_path)
        except UserCancelled:
            logger.debug(f"Create {category.value} file cancelled")
            return None
        except WorkspaceError as e:
            logger.error(f"Create {category.value} file failed: {e}")
            self.notifier.error(str(e))
            return None

        logger.info(f"Created {category.value} file {target_path}")
        self.notifier.info(f"{category.value} file created: {target_path}")
        self.provider.refresh()
        return target_path

    def delete(self, node: Optional[TreeNode]) -> bool:
        """
        Confirm, then delete the node's file or directory tree.

        Nodes without a physical path (configurations, sections) are ignored.

        Returns:
            bool: True if something was deleted.
        """
        if node is None or not node.path:
            return False

        path = node.path
        if not self.prompter.confirm_delete(path):
            logger.debug(f"Delete of {path} declined")
            return False

        try:
            removed_tree = remove_path(path)
        except WorkspaceError as e:
            logger.error(f"Delete failed: {e}")
            self.notifier.error(str(e))
            return False

        logger.info(f"Deleted {'directory' if removed_tree else 'file'} {path}")
        self.notifier.info(f"{path} deleted.")
        self.provider.refresh()
        return True
