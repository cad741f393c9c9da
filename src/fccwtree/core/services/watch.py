from __future__ import annotations

"""
Filesystem Event Filter.

Decides which change notifications invalidate the workspace tree: any
configuration file, and anything inside a category root.
"""

import os
from typing import Iterable, List

from fccwtree.domain.constants import CONFIG_EXTENSION
from fccwtree.infra.fs import is_within


class WatchFilter:
    """
    Relevance test for filesystem events below a workspace.

    Args:
        workspace_root: Absolute workspace directory.
        category_roots: Absolute directories whose content is displayed.
        extension: Configuration file suffix.
    """

    def __init__(
            self,
            workspace_root: str,
            category_roots: Iterable[str],
            extension: str = CONFIG_EXTENSION,
    ) -> None:
        self.workspace_root = os.path.abspath(workspace_root)
        self.extension = extension
        self.roots: List[str] = []
        for root in category_roots:
            root = os.path.normpath(os.path.abspath(root))
            if root not in self.roots:
                self.roots.append(root)

    @property
    def patterns(self) -> List[str]:
        """Workspace-relative glob patterns for hosts that run their own watcher."""
        out = [f"**/*{self.extension}"]
        for root in self.roots:
            if is_within(root, self.workspace_root):
                rel = os.path.relpath(root, self.workspace_root).replace(os.sep, "/")
                out.append(f"{rel}/**")
        return out

    def is_relevant(self, path: str) -> bool:
        if path.endswith(self.extension):
            return True
        full = os.path.join(self.workspace_root, path) if not os.path.isabs(path) else path
        return any(is_within(full, root) for root in self.roots)
