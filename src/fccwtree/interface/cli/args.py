from __future__ import annotations

"""
CLI Argument Definition.

Defines the command-line schema of the workspace explorer: global options
(workspace, diagnostics) and one sub-command per host operation.
"""

import argparse
from typing import List, Optional

from fccwtree.domain.tree_models import Category

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the fccwtree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="fccwtree",
        description="Browse and edit a .fccw workspace as a merged source tree.",
    )

    # --- Workspace and Diagnostics ---
    p.add_argument(
        "-w", "--workspace",
        dest="workspace",
        default=None,
        help="Workspace root directory (default: current directory).",
    )
    p.add_argument(
        "--lenient",
        action="store_true",
        help="Skip unreadable directories while looking for .fccw files.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- Read Operations ---
    sub.add_parser("configs", help="List configuration files of the workspace.")

    tree = sub.add_parser("tree", help="Print the merged workspace tree.")
    tree.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Emit the tree as JSON.",
    )

    # --- Write Operations ---
    create = sub.add_parser("create", help="Create an empty file in a category.")
    create.add_argument(
        "category",
        choices=category_choices(),
        help="Category of the new file.",
    )
    create.add_argument(
        "--at",
        dest="at_path",
        default=None,
        help="Physical path of the selected tree entry.",
    )
    create.add_argument(
        "--name",
        dest="file_name",
        default=None,
        help="File name (prompted when omitted).",
    )

    delete = sub.add_parser("delete", help="Delete a file or directory shown in the tree.")
    delete.add_argument("path", help="Physical path of the entry to delete.")
    delete.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Do not ask for confirmation.",
    )

    return p


def category_choices() -> List[str]:
    return [c.value for c in Category]


def parse_category(value: Optional[str]) -> Category:
    return Category((value or "").strip().lower())
