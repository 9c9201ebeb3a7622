"""Change-status classification for a single path.

Two rule sets are kept side by side because the full tree and the
changed-files-only tree disagree on boundary cases (e.g. ``0/0``), and
callers rely on each set's exact output.
"""

from __future__ import annotations

from git_explorer.models import ChangeStats, FileStatus


def classify_full(stats: ChangeStats | None) -> FileStatus:
    """Status of a path in the full repository tree; a missing entry means ``unchanged``."""
    if stats is None:
        return "unchanged"
    if stats.insertions > 0 and stats.deletions == 0:
        return "added"
    if stats.insertions == 0 and stats.deletions > 0:
        return "deleted"
    if stats.insertions > 0 or stats.deletions > 0:
        return "modified"
    return "unchanged"


def classify_changed_only(stats: ChangeStats) -> FileStatus:
    """Status of a path known to be changed; never ``unchanged``."""
    if stats.insertions > 0 and stats.deletions > 0:
        return "modified"
    if stats.insertions > 0:
        return "added"
    return "deleted"
