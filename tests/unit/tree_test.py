"""Tests for file tree construction and filtering."""

from __future__ import annotations

import pytest

from git_explorer.core.errors import TreeBuildFailure
from git_explorer.core.tree import (
    build_changed_files_tree,
    build_file_tree,
    empty_tree,
    filter_changed,
    iter_files,
)
from git_explorer.models import ChangeStats, FileTreeNode


def _child(node: FileTreeNode, name: str) -> FileTreeNode:
    assert node.children is not None
    return next(c for c in node.children if c.name == name)


class TestBuildFileTree:
    def test_root_shape(self) -> None:
        tree = build_file_tree([])
        assert tree.name == "root"
        assert tree.type == "folder"
        assert tree.path == "/"
        assert tree.children == []

    def test_nested_paths_share_folders(self) -> None:
        tree = build_file_tree(["src/a.py", "src/b.py", "README.md"])
        assert [c.name for c in tree.children or []] == ["src", "README.md"]
        src = _child(tree, "src")
        assert src.type == "folder"
        assert src.path == "src"
        assert [c.path for c in src.children or []] == ["src/a.py", "src/b.py"]

    def test_statuses_and_counts(self) -> None:
        stats = [
            ChangeStats(path="src/new.py", insertions=5, deletions=0),
            ChangeStats(path="src/old.py", insertions=0, deletions=3),
            ChangeStats(path="src/edit.py", insertions=2, deletions=4),
        ]
        tree = build_file_tree(["src/new.py", "src/old.py", "src/edit.py", "src/same.py"], stats)
        src = _child(tree, "src")
        assert _child(src, "new.py").status == "added"
        assert _child(src, "old.py").status == "deleted"
        edit = _child(src, "edit.py")
        assert edit.status == "modified"
        assert (edit.additions, edit.deletions) == (2, 4)
        same = _child(src, "same.py")
        assert same.status == "unchanged"
        assert same.additions is None

    def test_folders_carry_no_status(self) -> None:
        tree = build_file_tree(["a/b/c.txt"], [ChangeStats(path="a/b/c.txt", insertions=1)])
        folder = _child(tree, "a")
        assert folder.status is None
        assert folder.additions is None

    def test_file_folder_conflict_raises(self) -> None:
        with pytest.raises(TreeBuildFailure):
            build_file_tree(["docs", "docs/guide.md"])

    def test_every_leaf_is_a_file(self) -> None:
        paths = ["a/b/c.txt", "a/d.txt", "e.txt"]
        tree = build_file_tree(paths)
        assert sorted(f.path for f in iter_files(tree)) == sorted(paths)


class TestBuildChangedFilesTree:
    def test_only_listed_paths(self) -> None:
        tree = build_changed_files_tree(
            [
                ChangeStats(path="src/a.py", insertions=3, deletions=1),
                ChangeStats(path="gone.txt", insertions=0, deletions=2),
            ]
        )
        files = {f.path: f.status for f in iter_files(tree)}
        assert files == {"src/a.py": "modified", "gone.txt": "deleted"}

    def test_empty_input_gives_empty_root(self) -> None:
        assert build_changed_files_tree([]) == empty_tree()


class TestFilterChanged:
    def test_prunes_unchanged_branches(self) -> None:
        tree = build_file_tree(
            ["src/a.py", "docs/guide.md"],
            [ChangeStats(path="src/a.py", insertions=1)],
        )
        filtered = filter_changed(tree)
        assert filtered is not None
        assert [c.name for c in filtered.children or []] == ["src"]

    def test_keeps_selected_path(self) -> None:
        tree = build_file_tree(["src/a.py", "docs/guide.md"])
        filtered = filter_changed(tree, keep_path="docs/guide.md")
        assert filtered is not None
        assert [f.path for f in iter_files(filtered)] == ["docs/guide.md"]

    def test_root_survives_when_nothing_changed(self) -> None:
        filtered = filter_changed(build_file_tree(["a.txt"]))
        assert filtered is not None
        assert filtered.path == "/"
        assert filtered.children == []
