from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Thin wrappers over 'os' and 'shutil' used by the indexing services. Every
OSError crossing this boundary is converted into a FilesystemAccessError
carrying the offending path.
"""

import os
import shutil
from typing import List, Optional, Tuple

from fccwtree.domain.errors import FilesystemAccessError

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def is_within(path: str, root: str) -> bool:
    """
    Check whether a path equals or lies below a root, component-wise.

    '/ws/res' is within '/ws/res' and contains '/ws/res/a', but
    '/ws/resources' is not within '/ws/res'.
    """
    p = os.path.normcase(os.path.abspath(path))
    r = os.path.normcase(os.path.abspath(root))
    try:
        return os.path.commonpath([p, r]) == r
    except ValueError:
        # Different drives on Windows
        return False


# -----------------------------------------------------------------------------
# DIRECTORY LISTING API
# -----------------------------------------------------------------------------

def list_entries(directory: str) -> List[Tuple[str, bool]]:
    """
    List the immediate entries of a directory sorted by name.

    Args:
        directory: Directory to inspect.

    Returns:
        List[Tuple[str, bool]]: (name, is_directory) pairs.

    Raises:
        FilesystemAccessError: If the directory cannot be read.
    """
    try:
        with os.scandir(directory) as it:
            entries = [(e.name, _is_dir(e)) for e in it]
    except OSError as e:
        raise FilesystemAccessError(f"Cannot list directory ({e.strerror or e})", directory) from e
    entries.sort(key=lambda item: item[0])
    return entries


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        # Broken symlink or vanished entry: treat as a leaf
        return False


# -----------------------------------------------------------------------------
# MUTATION API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def create_empty_file(path: str) -> str:
    """
    Create an empty file, creating any missing parent directories first.

    Existing files are never truncated.

    Args:
        path: Absolute path of the file to create.

    Returns:
        str: The created path.

    Raises:
        FilesystemAccessError: If the directory chain or the file cannot be created.
    """
    parent = os.path.dirname(os.path.abspath(path))
    ok, err = safe_mkdir(parent)
    if not ok:
        raise FilesystemAccessError(f"Cannot create directory ({err})", parent)

    try:
        with open(path, "x", encoding="utf-8"):
            pass
    except FileExistsError as e:
        raise FilesystemAccessError("File already exists", path) from e
    except OSError as e:
        raise FilesystemAccessError(f"Cannot create file ({e.strerror or e})", path) from e
    return path


def remove_path(path: str) -> bool:
    """
    Delete a file, or a directory together with all of its descendants.

    Args:
        path: Path to remove.

    Returns:
        bool: True if a directory tree was removed, False for a single file.

    Raises:
        FilesystemAccessError: If the path is missing or cannot be removed.
    """
    if not os.path.lexists(path):
        raise FilesystemAccessError("Path does not exist", path)

    is_tree = os.path.isdir(path) and not os.path.islink(path)
    try:
        if is_tree:
            shutil.rmtree(path)
        else:
            os.remove(path)
    except OSError as e:
        raise FilesystemAccessError(f"Cannot delete ({e.strerror or e})", path) from e
    return is_tree
