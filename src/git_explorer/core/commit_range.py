"""Commit range resolution over a bounded, chronologically ordered window."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from git_explorer.core.errors import RangeResolutionError
from git_explorer.models import Commit, CommitRange

DEFAULT_MAX_SELECTABLE_COMMITS = 50
MIN_PREFIX_LENGTH = 4


@dataclass(frozen=True)
class CommitWindow:
    """The commits offered for range selection, oldest first."""

    commits: list[Commit]
    truncated: bool
    total_count: int


@dataclass(frozen=True)
class ResolvedRange:
    window: CommitWindow
    from_index: int = -1
    to_index: int = -1
    commits: list[Commit] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.commits

    @property
    def newest_first(self) -> list[Commit]:
        return list(reversed(self.commits))

    def describe(self) -> CommitRange:
        return CommitRange(
            from_commit=self.commits[0].id if self.commits else None,
            to_commit=self.commits[-1].id if self.commits else None,
            from_index=self.from_index,
            to_index=self.to_index,
            truncated=self.window.truncated,
            total_commits=self.window.total_count,
        )


def select_window(commits: Sequence[Commit], max_count: int = DEFAULT_MAX_SELECTABLE_COMMITS) -> CommitWindow:
    """Keep the *max_count* most recent of *commits* (given newest first) and order them oldest first."""
    recent = list(commits[:max_count])
    recent.reverse()
    return CommitWindow(commits=recent, truncated=len(commits) > max_count, total_count=len(commits))


def find_commit_index(commits: Sequence[Commit], identifier: str) -> int:
    """Index of the commit matching *identifier* exactly or by unique prefix; -1 if none."""
    for i, commit in enumerate(commits):
        if commit.id == identifier:
            return i
    if len(identifier) < MIN_PREFIX_LENGTH:
        return -1
    matches = [i for i, commit in enumerate(commits) if commit.id.startswith(identifier)]
    return matches[0] if len(matches) == 1 else -1


def resolve_commit_range(
    commits: Sequence[Commit],
    from_commit: str | None = None,
    to_commit: str | None = None,
    max_count: int = DEFAULT_MAX_SELECTABLE_COMMITS,
) -> ResolvedRange:
    """Resolve *from_commit*..*to_commit* (inclusive) within the display window of *commits*.

    *commits* is the log, newest first. A missing side defaults to the window's
    oldest (from) or newest (to) commit. Raises ``RangeResolutionError`` when an
    identifier is not in the window or when from comes after to.
    """
    window = select_window(commits, max_count)
    if not window.commits:
        if from_commit or to_commit:
            raise RangeResolutionError("repository has no commits to select", from_commit, to_commit)
        return ResolvedRange(window=window)

    from_index = find_commit_index(window.commits, from_commit) if from_commit else 0
    to_index = find_commit_index(window.commits, to_commit) if to_commit else len(window.commits) - 1

    if from_index == -1 or to_index == -1:
        raise RangeResolutionError("commit is not in the selectable history", from_commit, to_commit)
    if from_index > to_index:
        raise RangeResolutionError("fromCommit must not be newer than toCommit", from_commit, to_commit)

    return ResolvedRange(
        window=window,
        from_index=from_index,
        to_index=to_index,
        commits=window.commits[from_index : to_index + 1],
    )
