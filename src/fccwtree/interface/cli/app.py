from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Host shim for terminals: bootstraps logging, constructs the tree provider
and the command handlers for the chosen workspace, and renders results.
Prompts are answered on stdin.
"""

import json
import os
import sys
from typing import List, Optional

from fccwtree.core.analysis.tree_renderer import render_tree_structure, tree_to_dict
from fccwtree.core.services.commands import WorkspaceCommands
from fccwtree.core.services.index import WorkspaceTreeProvider
from fccwtree.domain.errors import WorkspaceError
from fccwtree.domain.tree_models import Category
from fccwtree.infra.fs import normalize_path
from fccwtree.infra.logging import LoggingConfig, configure_logging, get_logger
from fccwtree.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# HOST ADAPTERS
# -----------------------------------------------------------------------------

class ConsolePrompter:
    """
    Answers command prompts from preset values or stdin.

    Args:
        file_name: Preset file name; prompted when None.
        assume_yes: Confirm deletions without asking.
    """

    def __init__(self, file_name: Optional[str] = None, assume_yes: bool = False) -> None:
        self.file_name = file_name
        self.assume_yes = assume_yes

    def ask_file_name(self, category: Category) -> Optional[str]:
        if self.file_name is not None:
            return self.file_name
        return _read_line(f"Enter {category.value} file name: ")

    def confirm_delete(self, path: str) -> bool:
        if self.assume_yes:
            return True
        answer = _read_line(f"Delete {path}? [y/N] ")
        return (answer or "").strip().lower() in ("y", "yes")


class ConsoleNotifier:
    def __init__(self) -> None:
        self.errors: List[str] = []

    def info(self, message: str) -> None:
        print(message)

    def error(self, message: str) -> None:
        self.errors.append(message)
        print(f"ERROR: {message}", file=sys.stderr)


def _read_line(prompt: str) -> Optional[str]:
    try:
        return input(prompt)
    except EOFError:
        return None


# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 ok, 1 operation failed, 2 bad input, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    workspace = normalize_path(args.workspace, fallback=os.getcwd())
    if not os.path.isdir(workspace):
        print(f"ERROR: workspace does not exist: {workspace}", file=sys.stderr)
        return 2

    provider = WorkspaceTreeProvider(workspace, strict_scan=not args.lenient)
    logger.debug(f"Workspace: {workspace}")

    try:
        if args.command == "configs":
            return _cmd_configs(provider)
        if args.command == "tree":
            return _cmd_tree(provider, json_output=args.json_output)
        if args.command == "create":
            return _cmd_create(provider, args.category, args.at_path, args.file_name)
        if args.command == "delete":
            return _cmd_delete(provider, args.path, args.yes)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except WorkspaceError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    parser.error(f"unknown command {args.command!r}")
    return 2


# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def _cmd_configs(provider: WorkspaceTreeProvider) -> int:
    configs = provider.list_config_files()
    if not configs:
        print("No .fccw workspace found")
    for path in configs:
        print(os.path.relpath(path, provider.workspace_root))
    return 0


def _cmd_tree(provider: WorkspaceTreeProvider, json_output: bool) -> int:
    roots = provider.get_children()

    if json_output:
        data = [tree_to_dict(provider, node) for node in roots]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return 1 if _has_error(data) else 0

    lines: List[str] = []
    errors: List[str] = []
    render_tree_structure(provider, roots, lines, errors=errors)
    print(provider.workspace_root)
    print("\n".join(lines))
    return 1 if errors else 0


def _cmd_create(
        provider: WorkspaceTreeProvider,
        category: str,
        at_path: Optional[str],
        file_name: Optional[str],
) -> int:
    node = None
    if at_path:
        node = provider.find_node(normalize_path(at_path, fallback=provider.workspace_root))
        if node is None:
            print(f"ERROR: not shown in the workspace tree: {at_path}", file=sys.stderr)
            return 2

    notifier = ConsoleNotifier()
    commands = WorkspaceCommands(provider, ConsolePrompter(file_name=file_name), notifier)
    commands.create_file(node, cli_args.parse_category(category))
    return 1 if notifier.errors else 0


def _cmd_delete(provider: WorkspaceTreeProvider, path: str, assume_yes: bool) -> int:
    node = provider.find_node(normalize_path(path, fallback=provider.workspace_root))
    if node is None:
        print(f"ERROR: not shown in the workspace tree: {path}", file=sys.stderr)
        return 2

    notifier = ConsoleNotifier()
    commands = WorkspaceCommands(provider, ConsolePrompter(assume_yes=assume_yes), notifier)
    commands.delete(node)
    return 1 if notifier.errors else 0


def _has_error(data: List[dict]) -> bool:
    for item in data:
        if "error" in item or _has_error(item.get("children", [])):
            return True
    return False


if __name__ == "__main__":
    sys.exit(main())
