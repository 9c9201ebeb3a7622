from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping

from git_explorer.core.classify import classify_changed_only, classify_full
from git_explorer.core.errors import TreeBuildFailure
from git_explorer.models import ROOT_NAME, ROOT_PATH, ChangeStats, FileStatus, FileTreeNode


def empty_tree() -> FileTreeNode:
    return FileTreeNode(name=ROOT_NAME, type="folder", path=ROOT_PATH, children=[])


def join_path(parent_path: str, name: str) -> str:
    if parent_path == ROOT_PATH:
        return name
    return f"{parent_path}/{name}"


def _insert_path(
    root: FileTreeNode,
    index: dict[tuple[str, str], FileTreeNode],
    file_path: str,
    stats: ChangeStats | None,
    status: FileStatus,
) -> None:
    parts = [part for part in file_path.split("/") if part]
    if not parts:
        return
    current = root
    for i, part in enumerate(parts):
        is_file = i == len(parts) - 1
        child = index.get((current.path, part))
        if child is None:
            child = FileTreeNode(
                name=part,
                type="file" if is_file else "folder",
                path=join_path(current.path, part),
                status=status if is_file else None,
                additions=stats.insertions if is_file and stats is not None else None,
                deletions=stats.deletions if is_file and stats is not None else None,
                children=None if is_file else [],
            )
            assert current.children is not None
            current.children.append(child)
            index[(current.path, part)] = child
        elif is_file and child.type == "folder":
            raise TreeBuildFailure(file_path, f"{child.path} is already a folder")
        elif not is_file and child.type == "file":
            raise TreeBuildFailure(file_path, f"{child.path} is already a file")
        current = child


def _build(
    paths: Iterable[str],
    stats_by_path: Mapping[str, ChangeStats],
    classify: Callable[[str], FileStatus],
) -> FileTreeNode:
    root = empty_tree()
    # (parent path, name) -> node; children lists keep first-seen order
    index: dict[tuple[str, str], FileTreeNode] = {}
    for file_path in paths:
        _insert_path(root, index, file_path, stats_by_path.get(file_path), classify(file_path))
    return root


def build_file_tree(paths: Iterable[str], stats: Iterable[ChangeStats] = ()) -> FileTreeNode:
    """Build the full tree for *paths*, classifying each file with :func:`classify_full`.

    Raises ``TreeBuildFailure`` when a path needs a folder where a file already
    sits (or the reverse).
    """
    stats_by_path = {s.path: s for s in stats}
    return _build(paths, stats_by_path, lambda p: classify_full(stats_by_path.get(p)))


def build_changed_files_tree(stats: Iterable[ChangeStats]) -> FileTreeNode:
    """Build a tree containing only the paths in *stats*, classified with :func:`classify_changed_only`."""
    stats_list = list(stats)
    stats_by_path = {s.path: s for s in stats_list}
    return _build(
        (s.path for s in stats_list),
        stats_by_path,
        lambda p: classify_changed_only(stats_by_path[p]),
    )


def iter_files(node: FileTreeNode) -> Iterator[FileTreeNode]:
    """Yield every file node below *node* in tree order."""
    if node.type == "file":
        yield node
        return
    for child in node.children or []:
        yield from iter_files(child)


def filter_changed(node: FileTreeNode, keep_path: str | None = None) -> FileTreeNode | None:
    """Prune *node* to files whose status is not ``unchanged``, always keeping *keep_path*.

    Folders left without children disappear; the root is returned even when empty.
    """
    if node.type == "file":
        changed = node.status is not None and node.status != "unchanged"
        return node if changed or node.path == keep_path else None
    children = [c for c in (filter_changed(child, keep_path) for child in node.children or []) if c is not None]
    if not children and node.path != ROOT_PATH:
        return None
    return node.model_copy(update={"children": children})
