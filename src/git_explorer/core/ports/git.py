from typing import Protocol

from git_explorer.core.result import GitResult
from git_explorer.models import ChangeStats, Commit


class GitReader(Protocol):
    def log(self, max_count: int = 100) -> GitResult[list[Commit]]: ...

    def diff_summary(self, from_revision: str, to_revision: str) -> GitResult[list[ChangeStats]]: ...

    def diff(self, from_revision: str, to_revision: str, path: str) -> GitResult[str]: ...

    def show(self, revision: str, path: str) -> GitResult[str]: ...

    def ls_tree(self, revision: str) -> GitResult[list[str]]: ...

    def status(self) -> GitResult[list[str]]: ...
