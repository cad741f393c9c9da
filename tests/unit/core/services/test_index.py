from __future__ import annotations

"""
Unit tests for the Workspace Tree Provider.

Verifies:
1. Root listing for zero, one and several configuration files.
2. Section construction and suppression.
3. Renderable items and change notification.
4. Isolation of a malformed configuration to its own subtree.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

from fccwtree.core.services.index import WorkspaceTreeProvider
from fccwtree.domain.constants import COMBINED_SOURCE_LABEL, INCLUDES_LABEL, NO_WORKSPACE_LABEL
from fccwtree.domain.errors import ConfigParseError
from fccwtree.domain.tree_models import CollapsibleState, NodeKind, TreeNode


def labels(nodes: List[TreeNode]) -> List[str]:
    return [n.label for n in nodes]


@pytest.fixture
def multi_workspace(
        tmp_path: Path,
        make_tree: Callable[[Path, Dict[str, Any]], Path],
        make_config: Callable[..., Path],
) -> Path:
    root = make_tree(tmp_path / "multi", {
        "app": {"src": {"main.js": ""}, "inc": {"defs.h": ""}},
        "lib": {"src": {"lib.js": ""}},
    })
    make_config(root / "app.fccw", sourceDirectory="app/src", includeDirectory="app/inc")
    make_config(root / "nested" / "deeper" / "lib.fccw", sourceDirectory="lib/src")
    return root


# -----------------------------------------------------------------------------
# ROOT LISTING
# -----------------------------------------------------------------------------

def test_zero_configs_yields_single_info_node(tmp_path: Path) -> None:
    provider = WorkspaceTreeProvider(str(tmp_path))

    nodes = provider.get_children()

    assert len(nodes) == 1
    info = nodes[0]
    assert info.kind is NodeKind.INFO
    assert info.label == NO_WORKSPACE_LABEL

    item = provider.get_tree_item(info)
    assert item.context_value is None
    assert item.command is None
    assert item.collapsible is CollapsibleState.NONE
    assert provider.get_children(info) == []


def test_single_config_exposes_sections_at_root(workspace: Path) -> None:
    provider = WorkspaceTreeProvider(str(workspace))

    sections = provider.get_children()

    assert labels(sections) == [COMBINED_SOURCE_LABEL, INCLUDES_LABEL]
    combined = provider.get_children(sections[0])
    assert labels(combined) == ["a", "index.html", "logo.png"]
    merged_a = combined[0]
    assert labels(provider.get_children(merged_a)) == ["x.txt", "y.txt"]
    assert labels(provider.get_children(sections[1])) == ["header.inc"]


def test_multiple_configs_expand_lazily(multi_workspace: Path) -> None:
    provider = WorkspaceTreeProvider(str(multi_workspace))

    top = provider.get_children()

    assert labels(top) == ["app.fccw", "lib.fccw"]
    assert all(n.kind is NodeKind.CONFIG for n in top)
    assert top[1].config_path == str(multi_workspace / "nested" / "deeper" / "lib.fccw")
    assert all(n.children == () for n in top)

    app_sections = provider.get_children(top[0])
    assert labels(app_sections) == [COMBINED_SOURCE_LABEL, INCLUDES_LABEL]

    lib_sections = provider.get_children(top[1])
    assert labels(lib_sections) == [COMBINED_SOURCE_LABEL]
    assert labels(provider.get_children(lib_sections[0])) == ["lib.js"]


def test_directories_resolve_against_workspace_not_config_dir(multi_workspace: Path) -> None:
    provider = WorkspaceTreeProvider(str(multi_workspace))
    lib_config = str(multi_workspace / "nested" / "deeper" / "lib.fccw")

    combined = provider.build_sections(lib_config)[0]

    assert combined.children[0].path == str(multi_workspace / "lib" / "src" / "lib.js")
    assert combined.children[0].config_path == lib_config


def test_sections_suppressed_when_unconfigured(tmp_path: Path, make_config: Callable[..., Path]) -> None:
    make_config(tmp_path / "empty.fccw")
    provider = WorkspaceTreeProvider(str(tmp_path))

    assert provider.get_children() == []


def test_configured_but_missing_directory_gives_empty_section(
        tmp_path: Path, make_config: Callable[..., Path]
) -> None:
    make_config(tmp_path / "p.fccw", includeDirectory="include")
    provider = WorkspaceTreeProvider(str(tmp_path))

    sections = provider.get_children()

    assert labels(sections) == [INCLUDES_LABEL]
    assert sections[0].children == ()


def test_resources_nested_inside_source_directory(
        tmp_path: Path,
        make_tree: Callable[[Path, Dict[str, Any]], Path],
        make_config: Callable[..., Path],
) -> None:
    make_tree(tmp_path, {"res": {"img": {"logo.png": ""}}})
    make_config(tmp_path / "p.fccw", sourceDirectory=".", resourcesDirectory="res")
    provider = WorkspaceTreeProvider(str(tmp_path))

    combined = provider.get_children()[0]
    res = next(n for n in provider.get_children(combined) if n.label == "res")

    assert labels(provider.get_children(res)) == ["img"]
    assert res.path == str(tmp_path / "res")


# -----------------------------------------------------------------------------
# ERROR ISOLATION
# -----------------------------------------------------------------------------

def test_malformed_config_fails_only_its_subtree(multi_workspace: Path) -> None:
    (multi_workspace / "app.fccw").write_text("{ not json", encoding="utf-8")
    provider = WorkspaceTreeProvider(str(multi_workspace))

    top = provider.get_children()
    assert labels(top) == ["app.fccw", "lib.fccw"]

    with pytest.raises(ConfigParseError):
        provider.get_children(top[0])
    assert labels(provider.get_children(top[1])) == [COMBINED_SOURCE_LABEL]


def test_malformed_single_config_propagates(workspace: Path) -> None:
    (workspace / "project.fccw").write_text("[1, 2", encoding="utf-8")
    provider = WorkspaceTreeProvider(str(workspace))

    with pytest.raises(ConfigParseError):
        provider.get_children()


# -----------------------------------------------------------------------------
# TREE ITEMS & NOTIFICATION
# -----------------------------------------------------------------------------

def test_tree_items_for_entries(workspace: Path) -> None:
    provider = WorkspaceTreeProvider(str(workspace))
    combined = provider.get_children()[0]
    folder, page = combined.children[0], combined.children[1]

    folder_item = provider.get_tree_item(folder)
    assert folder_item.collapsible is CollapsibleState.COLLAPSED
    assert folder_item.context_value == "folder"
    assert folder_item.command is None

    page_item = provider.get_tree_item(page)
    assert page_item.collapsible is CollapsibleState.NONE
    assert page_item.context_value == "file"
    assert page_item.command == "open"
    assert page_item.resource_path == str(workspace / "web-src" / "index.html")

    section_item = provider.get_tree_item(combined)
    assert section_item.context_value == "section"
    assert section_item.resource_path is None


def test_refresh_notifies_subscribers_until_unsubscribed(tmp_path: Path) -> None:
    provider = WorkspaceTreeProvider(str(tmp_path))
    calls: List[str] = []

    unsubscribe = provider.on_did_change(lambda: calls.append("changed"))
    provider.refresh()
    unsubscribe()
    provider.refresh()

    assert calls == ["changed"]


def test_every_request_rebuilds_from_disk(workspace: Path) -> None:
    provider = WorkspaceTreeProvider(str(workspace))
    before = provider.get_children()[0]

    (workspace / "res" / "new.css").write_text("", encoding="utf-8")
    after = provider.get_children()[0]

    assert "new.css" not in labels(list(before.children))
    assert "new.css" in labels(list(after.children))


def test_handle_fs_event_filters_irrelevant_paths(workspace: Path) -> None:
    provider = WorkspaceTreeProvider(str(workspace))
    calls: List[str] = []
    provider.on_did_change(lambda: calls.append("changed"))

    assert provider.handle_fs_event(str(workspace / "res" / "a" / "y.txt")) is True
    assert provider.handle_fs_event(str(workspace / "build" / "out.bin")) is False
    assert provider.handle_fs_event(str(workspace / "sub" / "other.fccw")) is True

    assert calls == ["changed", "changed"]


# -----------------------------------------------------------------------------
# LOOKUP & CONFIG RESOLUTION
# -----------------------------------------------------------------------------

def test_find_node_by_physical_path(workspace: Path) -> None:
    provider = WorkspaceTreeProvider(str(workspace))

    node = provider.find_node(str(workspace / "res" / "a" / "y.txt"))

    assert node is not None
    assert node.label == "y.txt"
    assert provider.find_node(str(workspace / "res" / "a")) is None
    assert provider.find_node(str(workspace / "web-src" / "a")) is not None


def test_find_node_skips_broken_configs(multi_workspace: Path) -> None:
    (multi_workspace / "app.fccw").write_text("oops", encoding="utf-8")
    provider = WorkspaceTreeProvider(str(multi_workspace))

    node = provider.find_node(str(multi_workspace / "lib" / "src" / "lib.js"))

    assert node is not None
    assert node.config_path == str(multi_workspace / "nested" / "deeper" / "lib.fccw")


def test_category_roots_for_nodes(multi_workspace: Path) -> None:
    provider = WorkspaceTreeProvider(str(multi_workspace))
    node = provider.find_node(str(multi_workspace / "app" / "src" / "main.js"))

    roots = provider.category_roots_for(node)
    assert roots.source == str(multi_workspace / "app" / "src")
    assert roots.include == str(multi_workspace / "app" / "inc")
    assert roots.resources == str(multi_workspace / "res")

    # Several configurations and no node: default layout
    assert provider.config_for(None) is None
    assert provider.category_roots_for(None).source == str(multi_workspace / "web-src")


def test_config_for_single_config_without_node(workspace: Path) -> None:
    provider = WorkspaceTreeProvider(str(workspace))

    assert provider.config_for(None) == str(workspace / "project.fccw")
