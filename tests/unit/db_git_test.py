from pathlib import Path

import pytest

from git_explorer.core.analysis import analyze_repository
from git_explorer.core.errors import CloneFailure, GitCommandError, classify_clone_error
from git_explorer.db import GitRepository, clone_repository, cloned_repository, run_git
from git_explorer.db.helpers import (
    FIELD_SEP,
    RECORD_SEP,
    parse_log,
    parse_numstat,
    parse_porcelain_status,
    repository_name,
)
from tests.conftest import SampleRepo, commit_all


class TestGitRepository:
    def test_log_is_newest_first(self, sample_repo: SampleRepo) -> None:
        commits = GitRepository(sample_repo.path).log().unwrap()
        assert [c.id for c in commits] == list(reversed(sample_repo.commits))
        assert [c.message for c in commits] == ["Fix app output", "Add guide", "Initial setup"]
        assert commits[0].author == "Test Author"
        assert commits[0].timestamp

    def test_log_respects_max_count(self, sample_repo: SampleRepo) -> None:
        assert len(GitRepository(sample_repo.path).log(max_count=2).unwrap()) == 2

    def test_diff_summary(self, sample_repo: SampleRepo) -> None:
        first, _, third = sample_repo.commits
        summary = GitRepository(sample_repo.path).diff_summary(first, third).unwrap()
        stats = {s.path: (s.insertions, s.deletions) for s in summary}
        assert stats == {"README.md": (0, 1), "docs/guide.md": (1, 0), "src/app.py": (1, 1)}

    def test_diff_summary_bad_revision(self, sample_repo: SampleRepo) -> None:
        result = GitRepository(sample_repo.path).diff_summary("0" * 40, sample_repo.commits[0])
        assert not result.ok
        assert isinstance(result.error, GitCommandError)

    def test_diff_of_one_file(self, sample_repo: SampleRepo) -> None:
        first, _, third = sample_repo.commits
        patch = GitRepository(sample_repo.path).diff(first, third, "src/app.py").unwrap()
        assert "-print('v1')" in patch
        assert "+print('v3')" in patch

    def test_show(self, sample_repo: SampleRepo) -> None:
        repo = GitRepository(sample_repo.path)
        assert repo.show(sample_repo.commits[0], "README.md").unwrap() == "# Sample\n"
        assert not repo.show(sample_repo.commits[2], "README.md").ok

    def test_ls_tree(self, sample_repo: SampleRepo) -> None:
        paths = GitRepository(sample_repo.path).ls_tree(sample_repo.commits[2]).unwrap()
        assert paths == ["docs/guide.md", "src/app.py"]

    def test_status_of_clean_checkout(self, sample_repo: SampleRepo) -> None:
        assert GitRepository(sample_repo.path).status().unwrap() == []

    def test_status_lists_modified_files(self, sample_repo: SampleRepo) -> None:
        (sample_repo.path / "src" / "app.py").write_text("changed\n", encoding="utf-8")
        assert GitRepository(sample_repo.path).status().unwrap() == ["src/app.py"]


    @pytest.mark.parametrize("revision", ["--output=out.txt", "-p", ""])
    def test_option_shaped_revisions_fail(self, sample_repo: SampleRepo, revision: str) -> None:
        repo = GitRepository(sample_repo.path)
        assert not repo.show(revision, "src/app.py").ok
        assert not repo.ls_tree(revision).ok
        assert not repo.diff_summary(revision, sample_repo.commits[2]).ok
        assert not repo.diff(sample_repo.commits[0], revision, "src/app.py").ok

    def test_show_output_option_writes_nothing(self, sample_repo: SampleRepo, tmp_path: Path) -> None:
        target = tmp_path / "out"
        result = GitRepository(sample_repo.path).show(f"--output={target}", "README.md")
        assert not result.ok
        assert isinstance(result.error, GitCommandError)
        assert not list(tmp_path.glob("out*"))


class TestNonAsciiPaths:
    @pytest.fixture
    def repo(self, sample_repo: SampleRepo) -> SampleRepo:
        (sample_repo.path / "docs" / "café.md").write_text("au lait\n", encoding="utf-8")
        sample_repo.commits.append(commit_all(sample_repo.path, "Add café notes"))
        return sample_repo

    def test_ls_tree(self, repo: SampleRepo) -> None:
        paths = GitRepository(repo.path).ls_tree(repo.commits[-1]).unwrap()
        assert "docs/café.md" in paths

    def test_diff_summary(self, repo: SampleRepo) -> None:
        summary = GitRepository(repo.path).diff_summary(repo.commits[2], repo.commits[3]).unwrap()
        assert [(s.path, s.insertions, s.deletions) for s in summary] == [("docs/café.md", 1, 0)]

    def test_show(self, repo: SampleRepo) -> None:
        assert GitRepository(repo.path).show(repo.commits[-1], "docs/café.md").unwrap() == "au lait\n"

    def test_status(self, repo: SampleRepo) -> None:
        (repo.path / "docs" / "café.md").write_text("noir\n", encoding="utf-8")
        assert GitRepository(repo.path).status().unwrap() == ["docs/café.md"]

    def test_analysis_keys_diffs_by_real_path(self, repo: SampleRepo) -> None:
        result = analyze_repository(GitRepository(repo.path), repo.commits[2], repo.commits[3])
        assert "docs/café.md" in result.file_diffs
        assert "+au lait" in result.file_diffs["docs/café.md"].diff

def test_run_git_outside_repository(tmp_path: Path) -> None:
    result = run_git(["log"], cwd=tmp_path)
    assert not result.ok
    assert isinstance(result.error, GitCommandError)
    assert result.error.returncode != 0


class TestClone:
    def test_clone_local_repository(self, sample_repo: SampleRepo, tmp_path: Path) -> None:
        repo = clone_repository(sample_repo.url, tmp_path / "clone")
        assert [c.id for c in repo.log().unwrap()] == list(reversed(sample_repo.commits))

    def test_cloned_repository_removes_directory(self, sample_repo: SampleRepo) -> None:
        with cloned_repository(sample_repo.url) as repo:
            clone_path = repo.path
            assert (clone_path / "src" / "app.py").exists()
        assert not clone_path.exists()

    def test_clone_failure(self, tmp_path: Path) -> None:
        with pytest.raises(CloneFailure) as info:
            clone_repository((tmp_path / "missing").as_uri(), tmp_path / "clone")
        assert info.value.details

    def test_failed_clone_leaves_no_directory(self, tmp_path: Path) -> None:
        with pytest.raises(CloneFailure):
            with cloned_repository((tmp_path / "missing").as_uri()):
                pass


@pytest.mark.parametrize(
    ("stderr", "kind", "status_code"),
    [
        ("fatal: Authentication failed for 'https://github.com/a/b.git/'", "auth", 401),
        ("fatal: could not read Username for 'https://github.com': terminal prompts disabled", "auth", 401),
        ("remote: Repository not found.\nfatal: repository 'https://github.com/a/b.git/' not found", "not_found", 404),
        ("fatal: unable to access 'https://example.invalid/': Operation timed out", "timeout", 408),
        ("fatal: unable to access 'https://example.invalid/': Could not resolve host: example.invalid", "network", 503),
        ("fatal: something unexpected", "unknown", 500),
    ],
)
def test_classify_clone_error(stderr: str, kind: str, status_code: int) -> None:
    assert classify_clone_error(stderr) == kind
    assert CloneFailure(classify_clone_error(stderr)).status_code == status_code


class TestParsers:
    def test_parse_log(self) -> None:
        output = (
            f"abc123{FIELD_SEP}Ada{FIELD_SEP}2024-01-02T03:04:05+00:00{FIELD_SEP}Add parser{RECORD_SEP}\n"
            f"def456{FIELD_SEP}Bob{FIELD_SEP}2024-01-01T00:00:00+00:00{FIELD_SEP}Initial{RECORD_SEP}\n"
        )
        commits = parse_log(output)
        assert [(c.id, c.author, c.message) for c in commits] == [
            ("abc123", "Ada", "Add parser"),
            ("def456", "Bob", "Initial"),
        ]

    def test_parse_numstat_binary_counts_as_zero(self) -> None:
        stats = parse_numstat("3\t1\tsrc/a.py\x00-\t-\tlogo.png\x00")
        assert [(s.path, s.insertions, s.deletions) for s in stats] == [("src/a.py", 3, 1), ("logo.png", 0, 0)]

    def test_parse_numstat_keeps_tabs_in_path(self) -> None:
        assert parse_numstat("1\t0\tweird\tname.txt\x00")[0].path == "weird\tname.txt"

    def test_parse_porcelain_status(self) -> None:
        assert parse_porcelain_status(" M src/a.py\x00?? new.txt\x00R  moved.txt\x00old.txt\x00") == [
            "src/a.py",
            "new.txt",
            "moved.txt",
        ]

    @pytest.mark.parametrize(
        ("url", "name"),
        [
            ("https://github.com/octo/hello.git", "octo/hello"),
            ("https://github.com/octo/hello/", "octo/hello"),
            ("git@github.com:octo/hello.git", "octo/hello"),
            ("file:///tmp/repos/sample", "repos/sample"),
        ],
    )
    def test_repository_name(self, url: str, name: str) -> None:
        assert repository_name(url) == name
