from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Puts the 'src' directory on sys.path so the package imports uninstalled.
2. Provides helpers that lay out workspaces on disk from nested dicts.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def build_tree(root: Path, layout: Dict[str, Any]) -> Path:
    """
    Materialize a nested dict as files and directories.

    Dict values become directories, string values become file contents.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        target = root / name
        if isinstance(value, dict):
            build_tree(target, value)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(value, encoding="utf-8")
    return root


def write_config(path: Path, **fields: Optional[str]) -> Path:
    """Write a .fccw file with the given directory fields."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(fields), encoding="utf-8")
    return path


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_tree() -> Callable[[Path, Dict[str, Any]], Path]:
    return build_tree


@pytest.fixture
def make_config() -> Callable[..., Path]:
    return write_config


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """
    Single-configuration workspace using the default layout.

    Structure:
    /ws
      project.fccw
      /web-src
        index.html
        /a
          x.txt
      /res
        logo.png
        /a
          y.txt
      /include
        header.inc
    """
    root = tmp_path / "ws"
    build_tree(root, {
        "web-src": {"index.html": "<html/>", "a": {"x.txt": "x"}},
        "res": {"logo.png": "png", "a": {"y.txt": "y"}},
        "include": {"header.inc": "hdr"},
    })
    write_config(
        root / "project.fccw",
        sourceDirectory="web-src",
        resourcesDirectory="res",
        includeDirectory="include",
    )
    return root
