from git_explorer.db.git import GitRepository, clone_repository, cloned_repository, run_git
from git_explorer.db.helpers import (
    parse_log,
    parse_numstat,
    repository_name,
)
from git_explorer.db.memory import InMemoryRepositoryStore

__all__ = [
    "GitRepository",
    "InMemoryRepositoryStore",
    "clone_repository",
    "cloned_repository",
    "parse_log",
    "parse_numstat",
    "repository_name",
    "run_git",
]
