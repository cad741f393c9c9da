from __future__ import annotations

"""
Configuration File Discovery Service.

Walks a workspace and collects every project configuration file, at any
depth, in a deterministic order.
"""

import logging
import os
from typing import List

from fccwtree.domain.constants import CONFIG_EXTENSION
from fccwtree.domain.errors import FilesystemAccessError

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def locate_config_files(
        root_dir: str,
        extension: str = CONFIG_EXTENSION,
        strict: bool = True,
) -> List[str]:
    """
    Recursively find configuration files below a workspace root.

    Directory and file names are visited in sorted order, files of a
    directory before its subdirectories. Symlinked directories are not
    followed, so link cycles cannot cause infinite recursion.

    Args:
        root_dir: Workspace directory to scan.
        extension: Filename suffix identifying configuration files.
        strict: If True, an unreadable directory aborts the whole scan.
                If False, it is skipped with a warning.

    Returns:
        List[str]: Absolute paths of every matching file, each exactly once.

    Raises:
        FilesystemAccessError: If the root is missing, or a directory is
                               unreadable in strict mode.
    """
    root_abs = os.path.abspath(root_dir)
    if not os.path.isdir(root_abs):
        raise FilesystemAccessError("Workspace root is not a directory", root_abs)

    def _on_error(err: OSError) -> None:
        if strict:
            raise FilesystemAccessError(
                f"Cannot scan directory ({err.strerror or err})", err.filename or root_abs
            ) from err
        logger.warning(f"Skipping unreadable directory '{err.filename}': {err.strerror or err}")

    found: List[str] = []
    for root, dirs, files in os.walk(root_abs, onerror=_on_error):
        dirs.sort()
        files.sort()

        for file_name in files:
            if file_name.endswith(extension):
                found.append(os.path.join(root, file_name))

    logger.debug(f"Found {len(found)} configuration file(s) under {root_abs}")
    return found
