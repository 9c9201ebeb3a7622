import logging
import shutil
import subprocess
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from git_explorer.core.errors import CloneFailure, GitCommandError, classify_clone_error
from git_explorer.core.result import GitResult
from git_explorer.db.helpers import (
    LOG_FORMAT,
    parse_log,
    parse_name_list,
    parse_numstat,
    parse_porcelain_status,
)
from git_explorer.models import ChangeStats, Commit

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
TEMP_DIR_PREFIX = "git-explorer-"


def run_git(args: list[str], cwd: Path | None = None, timeout: float = DEFAULT_TIMEOUT) -> GitResult[str]:
    """Run ``git`` with *args* and return its stdout, or the failure that replaced it."""
    command = ["git", *args] if cwd is None else ["git", "-C", str(cwd), *args]
    try:
        result = subprocess.run(
            command,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return GitResult.failure(GitCommandError(args, timed_out=True))
    except OSError as exc:
        return GitResult.failure(GitCommandError(args, stderr=str(exc)))
    if result.returncode != 0:
        return GitResult.failure(GitCommandError(args, stderr=result.stderr, returncode=result.returncode))
    return GitResult.success(result.stdout)


class GitRepository:
    """Read-only view of a local clone, one ``git`` subprocess per call."""

    def __init__(self, path: Path, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.path = path
        self.timeout = timeout

    def _run(self, args: list[str]) -> GitResult[str]:
        return run_git(args, cwd=self.path, timeout=self.timeout)

    def _run_at(self, args: list[str], revisions: list[str], paths: Sequence[str] = ()) -> GitResult[str]:
        """Run *args* on caller-supplied *revisions*; none of them is ever read as an option."""
        for revision in revisions:
            if not revision or revision.startswith("-"):
                return GitResult.failure(GitCommandError([*args, revision], stderr=f"invalid revision {revision!r}"))
        command = [*args, "--end-of-options", *revisions]
        if paths:
            command += ["--", *paths]
        return self._run(command)

    def log(self, max_count: int = 100) -> GitResult[list[Commit]]:
        result = self._run(["log", f"--max-count={max_count}", f"--format={LOG_FORMAT}"])
        return result.map(parse_log)

    def diff_summary(self, from_revision: str, to_revision: str) -> GitResult[list[ChangeStats]]:
        result = self._run_at(["diff", "--numstat", "-z", "--no-renames"], [from_revision, to_revision])
        return result.map(parse_numstat)

    def diff(self, from_revision: str, to_revision: str, path: str) -> GitResult[str]:
        return self._run_at(["diff"], [from_revision, to_revision], [path])

    def show(self, revision: str, path: str) -> GitResult[str]:
        return self._run_at(["show"], [f"{revision}:{path}"])

    def ls_tree(self, revision: str) -> GitResult[list[str]]:
        result = self._run_at(["ls-tree", "-r", "-z", "--name-only"], [revision])
        return result.map(parse_name_list)

    def status(self) -> GitResult[list[str]]:
        result = self._run(["status", "--porcelain", "-z"])
        return result.map(parse_porcelain_status)


def clone_repository(
    url: str,
    destination: Path,
    depth: int | None = 50,
    single_branch: bool = True,
    timeout: float = 300.0,
) -> GitRepository:
    """Clone *url* into *destination*. Raises ``CloneFailure`` on any error."""
    args = ["clone"]
    if depth:
        args.append(f"--depth={depth}")
    if single_branch:
        args.append("--single-branch")
    args += ["--", url, str(destination)]

    result = run_git(args, timeout=timeout)
    if not result.ok:
        error = result.error
        assert isinstance(error, GitCommandError)
        kind = "timeout" if error.timed_out else classify_clone_error(error.stderr)
        logger.error("Clone of %s failed (%s): %s", url, kind, error)
        raise CloneFailure(kind, details=str(error))
    return GitRepository(destination, timeout=timeout)


@contextmanager
def cloned_repository(
    url: str,
    depth: int | None = 50,
    single_branch: bool = True,
    clone_timeout: float = 300.0,
    timeout: float = DEFAULT_TIMEOUT,
) -> Iterator[GitRepository]:
    """Clone *url* into a fresh temporary directory that is removed on exit, whatever happens."""
    temp_dir = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX))
    try:
        repo = clone_repository(url, temp_dir, depth=depth, single_branch=single_branch, timeout=clone_timeout)
        repo.timeout = timeout
        yield repo
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)
