"""Shared fixtures and helpers for tests."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from git_explorer.core.errors import GitCommandError
from git_explorer.core.result import GitResult
from git_explorer.db import InMemoryRepositoryStore
from git_explorer.models import ChangeStats, Commit

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Throwaway git repositories
# ---------------------------------------------------------------------------


def run_git(args: list[str], cwd: Path) -> str:
    result = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Test Author",
            "-c",
            "user.email=author@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def commit_all(repo: Path, message: str) -> str:
    run_git(["add", "-A"], repo)
    run_git(["commit", "-m", message], repo)
    return run_git(["rev-parse", "HEAD"], repo)


@dataclass
class SampleRepo:
    path: Path
    # oldest first
    commits: list[str] = field(default_factory=list)

    @property
    def url(self) -> str:
        return self.path.as_uri()


@pytest.fixture
def sample_repo(tmp_path: Path) -> SampleRepo:
    """Three commits: initial files, a feature commit, and a cleanup that deletes README.md."""
    repo = tmp_path / "sample"
    repo.mkdir()
    run_git(["init"], repo)

    (repo / "src").mkdir()
    (repo / "README.md").write_text("# Sample\n", encoding="utf-8")
    (repo / "src" / "app.py").write_text("print('v1')\n", encoding="utf-8")
    first = commit_all(repo, "Initial setup")

    (repo / "docs").mkdir()
    (repo / "docs" / "guide.md").write_text("guide\n", encoding="utf-8")
    (repo / "src" / "app.py").write_text("print('v1')\nprint('v2')\n", encoding="utf-8")
    second = commit_all(repo, "Add guide")

    (repo / "README.md").unlink()
    (repo / "src" / "app.py").write_text("print('v3')\n", encoding="utf-8")
    third = commit_all(repo, "Fix app output")

    return SampleRepo(path=repo, commits=[first, second, third])


# ---------------------------------------------------------------------------
# In-process fakes
# ---------------------------------------------------------------------------


def make_commit(index: int, message: str = "") -> Commit:
    return Commit(
        id=f"{index:040x}",
        message=message or f"commit {index}",
        author="Test Author",
        timestamp=f"2024-01-{index % 28 + 1:02d}T00:00:00+00:00",
    )


class FakeGitReader:
    """Scripted ``GitReader``: every unscripted call fails like git would."""

    def __init__(self) -> None:
        self.commits: list[Commit] = []
        self.summaries: dict[tuple[str, str], list[ChangeStats]] = {}
        self.trees: dict[str, list[str]] = {}
        self.files: dict[tuple[str, str], str] = {}
        self.diffs: dict[tuple[str, str, str], str] = {}
        self.working_tree: list[str] = []
        self.calls: list[tuple[str, ...]] = []

    def _fail(self, *args: str) -> GitCommandError:
        return GitCommandError(list(args), stderr="fatal: bad revision", returncode=128)

    def log(self, max_count: int = 100) -> GitResult[list[Commit]]:
        self.calls.append(("log", str(max_count)))
        return GitResult.success(self.commits[:max_count])

    def diff_summary(self, from_revision: str, to_revision: str) -> GitResult[list[ChangeStats]]:
        self.calls.append(("diff_summary", from_revision, to_revision))
        stats = self.summaries.get((from_revision, to_revision))
        if stats is None:
            return GitResult.failure(self._fail("diff", from_revision, to_revision))
        return GitResult.success(stats)

    def diff(self, from_revision: str, to_revision: str, path: str) -> GitResult[str]:
        self.calls.append(("diff", from_revision, to_revision, path))
        text = self.diffs.get((from_revision, to_revision, path))
        if text is None:
            return GitResult.failure(self._fail("diff", from_revision, to_revision, path))
        return GitResult.success(text)

    def show(self, revision: str, path: str) -> GitResult[str]:
        self.calls.append(("show", revision, path))
        text = self.files.get((revision, path))
        if text is None:
            return GitResult.failure(self._fail("show", f"{revision}:{path}"))
        return GitResult.success(text)

    def ls_tree(self, revision: str) -> GitResult[list[str]]:
        self.calls.append(("ls_tree", revision))
        paths = self.trees.get(revision)
        if paths is None:
            return GitResult.failure(self._fail("ls-tree", revision))
        return GitResult.success(paths)

    def status(self) -> GitResult[list[str]]:
        self.calls.append(("status",))
        return GitResult.success(self.working_tree)

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


@pytest.fixture
def fake_reader() -> FakeGitReader:
    return FakeGitReader()


@pytest.fixture
def in_memory_store() -> InMemoryRepositoryStore:
    return InMemoryRepositoryStore()
