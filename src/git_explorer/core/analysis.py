"""Repository analysis orchestration.

``analyze_repository`` works on any ``GitReader`` and never raises for a bad
commit or file: each component degrades to an empty or sentinel value. Only
``RangeResolutionError`` escapes it. ``analyze_remote`` adds the clone and its
temporary directory; ``run_analysis`` adds the repository bookkeeping.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from git_explorer.config import Settings
from git_explorer.core.architecture import generate_architecture_diagrams, generate_architecture_notes
from git_explorer.core.commit_range import ResolvedRange, resolve_commit_range
from git_explorer.core.content import CURRENT_REVISION, ContentCache, ContentFetcher, ContentKey, FetchedContents
from git_explorer.core.errors import DiffComputationFailure, TreeBuildFailure
from git_explorer.core.history import compute_commit_changes, tree_for_changes, with_file_counts
from git_explorer.core.ports.git import GitReader
from git_explorer.core.ports.store import RepositoryStore
from git_explorer.core.result import GitResult
from git_explorer.core.tree import build_changed_files_tree, build_file_tree, empty_tree
from git_explorer.db.git import cloned_repository
from git_explorer.db.helpers import repository_name
from git_explorer.models import (
    AnalysisResult,
    AnalysisStats,
    ChangeStats,
    Commit,
    FileContents,
    FileDiff,
    FileTreeNode,
)

logger = logging.getLogger(__name__)

CODE_FILE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".py", ".java", ".cpp", ".c", ".go", ".rs", ".md", ".json")
MAX_FILE_DIFFS = 200


@dataclass(frozen=True)
class RangeSummary:
    base: str | None
    head: str | None
    changes: list[ChangeStats]


def summarize_range(reader: GitReader, log: Sequence[Commit], resolved: ResolvedRange) -> RangeSummary:
    """Diff-summary the resolved range.

    A multi-commit range compares its oldest and newest commit. A single commit
    compares against its parent in *log*, or falls back to the working tree
    status when the parent is outside the clone.
    """
    if resolved.is_empty:
        return RangeSummary(None, None, [])

    oldest, newest = resolved.commits[0], resolved.commits[-1]
    if oldest.id != newest.id:
        base, head = oldest.id, newest.id
    else:
        position = next(i for i, commit in enumerate(log) if commit.id == newest.id)
        if position + 1 >= len(log):
            status = reader.status()
            if not status.ok:
                logger.warning("Could not read working tree status: %s", status.error)
            paths = status.unwrap_or([])
            return RangeSummary(None, None, [ChangeStats(path=p, insertions=0, deletions=0) for p in paths])
        base, head = log[position + 1].id, newest.id

    summary = reader.diff_summary(base, head)
    if not summary.ok:
        logger.warning("%s", DiffComputationFailure(base, head, summary.error))
    return RangeSummary(base, head, summary.unwrap_or([]))


def collect_file_diffs(reader: GitReader, summary: RangeSummary) -> dict[str, FileDiff]:
    if summary.base is None or summary.head is None:
        return {}
    changes = summary.changes
    if len(changes) > MAX_FILE_DIFFS:
        logger.info("Limiting per-file diffs to %d of %d changed files", MAX_FILE_DIFFS, len(changes))
        changes = changes[:MAX_FILE_DIFFS]

    file_diffs: dict[str, FileDiff] = {}
    for stats in changes:
        diff = reader.diff(summary.base, summary.head, stats.path)
        if not diff.ok:
            logger.debug("Could not get diff for file %s: %s", stats.path, diff.error)
            continue
        file_diffs[stats.path] = FileDiff(
            additions=stats.insertions,
            deletions=stats.deletions,
            diff=diff.unwrap_or(""),
        )
    return file_diffs


def snapshot_tree(reader: GitReader, revision: str, changes: Sequence[ChangeStats]) -> GitResult[FileTreeNode]:
    listing = reader.ls_tree(revision)
    if not listing.ok:
        return GitResult.failure(TreeBuildFailure("/", f"cannot list files at {revision}: {listing.error}"))
    try:
        return GitResult.success(build_file_tree(listing.unwrap_or([]), changes))
    except TreeBuildFailure as exc:
        return GitResult.failure(exc)


def changed_tree(changes: Sequence[ChangeStats]) -> GitResult[FileTreeNode]:
    try:
        return GitResult.success(build_changed_files_tree(changes))
    except TreeBuildFailure as exc:
        return GitResult.failure(exc)


def _tree_or_empty(result: GitResult[FileTreeNode], label: str) -> FileTreeNode:
    if not result.ok:
        logger.warning("Could not build %s: %s", label, result.error)
    return result.unwrap_or(empty_tree())


def is_code_file(path: str) -> bool:
    return path.endswith(CODE_FILE_EXTENSIONS)


def preferred_file(paths: Sequence[str]) -> str | None:
    """README first, then a main/index file, then any code file."""
    code_files = [p for p in paths if is_code_file(p)]
    if not code_files:
        return None
    for candidate in code_files:
        if "readme" in candidate.lower():
            return candidate
    for candidate in code_files:
        lowered = candidate.lower()
        if "main" in lowered or "index" in lowered:
            return candidate
    return code_files[0]


def pick_file_contents(
    reader: GitReader, summary: RangeSummary, snapshot_revision: str, fetcher: ContentFetcher
) -> FileContents:
    """Contents shown initially: the first changed code file across the range, else a representative file."""
    if summary.base is not None and summary.head is not None:
        for stats in summary.changes:
            if is_code_file(stats.path):
                return fetcher.fetch(stats.path, summary.base, summary.head).contents

    listing = reader.ls_tree(snapshot_revision)
    if not listing.ok:
        logger.warning("Could not get file contents: %s", listing.error)
        return FileContents()
    path = preferred_file(listing.unwrap_or([]))
    if path is None:
        return FileContents()
    fetched = fetcher.fetch(path, snapshot_revision, snapshot_revision)
    if not fetched.found:
        return FileContents()
    return fetched.contents


def analyze_repository(
    reader: GitReader,
    from_commit: str | None = None,
    to_commit: str | None = None,
    settings: Settings | None = None,
    cache: ContentCache | None = None,
) -> AnalysisResult:
    settings = settings or Settings()
    log_result = reader.log(settings.log_max_count)
    if not log_result.ok:
        logger.warning("Could not read commit log: %s", log_result.error)
    log = log_result.unwrap_or([])

    resolved = resolve_commit_range(log, from_commit, to_commit, settings.max_display_commits)
    analyzed = resolved.newest_first
    snapshot_revision = resolved.commits[-1].id if resolved.commits else CURRENT_REVISION

    summary = summarize_range(reader, log, resolved)
    changes = compute_commit_changes(
        reader, analyzed, max_workers=settings.history_workers, max_commits=settings.log_max_count
    )
    history = [tree_for_changes(commit, result) for commit, result in zip(analyzed, changes, strict=True)]
    commits = with_file_counts(analyzed, changes)
    fetcher = ContentFetcher(reader, cache)

    return AnalysisResult(
        commits=commits,
        selectable_commits=resolved.window.commits,
        range=resolved.describe(),
        file_tree=_tree_or_empty(snapshot_tree(reader, snapshot_revision, summary.changes), "file tree"),
        changed_file_tree=_tree_or_empty(changed_tree(summary.changes), "changed file tree"),
        file_tree_history=history,
        architecture_notes=generate_architecture_notes(commits),
        architecture_diagrams=generate_architecture_diagrams(commits),
        file_contents=pick_file_contents(reader, summary, snapshot_revision, fetcher),
        stats=AnalysisStats(
            total_additions=sum(s.insertions for s in summary.changes),
            total_deletions=sum(s.deletions for s in summary.changes),
            files_changed=len(summary.changes),
            commits_count=len(commits),
        ),
        file_diffs=collect_file_diffs(reader, summary),
    )


def analyze_remote(
    repo_url: str,
    from_commit: str | None = None,
    to_commit: str | None = None,
    settings: Settings | None = None,
    cache: ContentCache | None = None,
) -> AnalysisResult:
    """Clone *repo_url* into a temporary directory and analyze it. Raises ``CloneFailure``."""
    settings = settings or Settings()
    with cloned_repository(
        repo_url,
        depth=settings.clone_depth,
        clone_timeout=settings.clone_timeout,
        timeout=settings.git_timeout,
    ) as repo:
        return analyze_repository(repo, from_commit, to_commit, settings, cache)


def fetch_remote_file_content(
    repo_url: str,
    file_path: str,
    from_commit: str | None = None,
    to_commit: str | None = None,
    settings: Settings | None = None,
    cache: ContentCache | None = None,
) -> FetchedContents:
    """File text at two revisions of *repo_url*; cloning only on a cache miss."""
    settings = settings or Settings()
    cache = cache if cache is not None else ContentCache()
    cached = cache.get(ContentKey(file_path, from_commit, to_commit))
    if cached is not None:
        return cached
    with cloned_repository(
        repo_url,
        depth=settings.clone_depth,
        clone_timeout=settings.clone_timeout,
        timeout=settings.git_timeout,
    ) as repo:
        return ContentFetcher(repo, cache).fetch(file_path, from_commit, to_commit)


async def run_analysis(
    store: RepositoryStore,
    repo_url: str,
    from_commit: str | None = None,
    to_commit: str | None = None,
    settings: Settings | None = None,
    cache: ContentCache | None = None,
) -> AnalysisResult:
    """Analyze *repo_url* and record it in *store*.

    The blocking clone and ``git`` calls run in a worker thread.
    """
    repository = await store.get_repository_by_url(repo_url)
    if repository is None:
        repository = await store.create_repository(repo_url, repository_name(repo_url))

    result = await asyncio.to_thread(analyze_remote, repo_url, from_commit, to_commit, settings, cache)

    await store.update_repository(repository.id, last_analyzed=datetime.now(timezone.utc))
    return result
