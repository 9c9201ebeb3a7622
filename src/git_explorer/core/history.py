"""Per-commit file tree history.

Entry ``i`` of the history is the changed-files-only tree of ``commits[i]``
relative to ``commits[i + 1]``. Commits are newest first, so ``i + 1`` is the
chronologically earlier neighbour. The oldest commit in range has no
neighbour: every file present at that commit is reported as added with a
placeholder count of one insertion, which is not a real line count.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from git_explorer.core.errors import DiffComputationFailure, TreeBuildFailure
from git_explorer.core.ports.git import GitReader
from git_explorer.core.result import GitResult
from git_explorer.core.tree import build_changed_files_tree, empty_tree
from git_explorer.models import ChangeStats, Commit, FileTreeNode

logger = logging.getLogger(__name__)

MAX_HISTORY_COMMITS = 100
ADDED_PLACEHOLDER_INSERTIONS = 1


def _changes_for_commit(reader: GitReader, commits: Sequence[Commit], index: int) -> GitResult[list[ChangeStats]]:
    current = commits[index]
    if index + 1 < len(commits):
        previous = commits[index + 1]
        summary = reader.diff_summary(previous.id, current.id)
        if not summary.ok:
            return GitResult.failure(DiffComputationFailure(previous.id, current.id, summary.error))
        return summary

    listing = reader.ls_tree(current.id)
    if not listing.ok:
        return GitResult.failure(DiffComputationFailure(current.id, current.id, listing.error))
    return GitResult.success(
        [
            ChangeStats(path=path, insertions=ADDED_PLACEHOLDER_INSERTIONS, deletions=0)
            for path in listing.unwrap_or([])
        ]
    )


def compute_commit_changes(
    reader: GitReader,
    commits: Sequence[Commit],
    max_workers: int = 1,
    max_commits: int = MAX_HISTORY_COMMITS,
) -> list[GitResult[list[ChangeStats]]]:
    """Return one change-set result per commit, index-aligned with *commits*.

    Raises ``ValueError`` when *commits* exceeds *max_commits*; each commit costs
    one external ``git`` invocation.
    """
    if len(commits) > max_commits:
        raise ValueError(f"refusing to diff {len(commits)} commits (limit {max_commits})")

    results: list[GitResult[list[ChangeStats]]] = [GitResult.success([]) for _ in commits]
    if max_workers > 1 and len(commits) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = {i: pool.submit(_changes_for_commit, reader, commits, i) for i in range(len(commits))}
            for i, future in futures.items():
                results[i] = future.result()
    else:
        for i in range(len(commits)):
            results[i] = _changes_for_commit(reader, commits, i)
    return results


def tree_for_changes(commit: Commit, changes: GitResult[list[ChangeStats]]) -> FileTreeNode:
    if not changes.ok:
        logger.warning("Could not analyze commit %s: %s", commit.id[:7], changes.error)
        return empty_tree()
    try:
        return build_changed_files_tree(changes.unwrap_or([]))
    except TreeBuildFailure as exc:
        logger.warning("Could not build tree for commit %s: %s", commit.id[:7], exc)
        return empty_tree()


def generate_file_tree_history(
    reader: GitReader,
    commits: Sequence[Commit],
    max_workers: int = 1,
    max_commits: int = MAX_HISTORY_COMMITS,
) -> list[FileTreeNode]:
    """Build the changed-files-only tree of every commit; always ``len(commits)`` entries."""
    changes = compute_commit_changes(reader, commits, max_workers=max_workers, max_commits=max_commits)
    return [tree_for_changes(commit, result) for commit, result in zip(commits, changes, strict=True)]


def with_file_counts(commits: Sequence[Commit], changes: Sequence[GitResult[list[ChangeStats]]]) -> list[Commit]:
    """Return copies of *commits* carrying the number of files each one changed."""
    return [
        commit.model_copy(update={"files_changed_count": len(result.unwrap_or([]))})
        for commit, result in zip(commits, changes, strict=True)
    ]
