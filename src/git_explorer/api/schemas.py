from __future__ import annotations

from urllib.parse import urlparse

from pydantic import field_validator

from git_explorer.models import CamelModel, RepositoryRecord

LOCAL_SCHEME = "file"
_ALLOWED_SCHEMES = {"http", "https", "ssh", "git", LOCAL_SCHEME}


def is_local_url(url: str) -> bool:
    return urlparse(url).scheme == LOCAL_SCHEME


def _check_repo_url(value: str) -> str:
    value = value.strip()
    parsed = urlparse(value)
    if parsed.scheme not in _ALLOWED_SCHEMES or (parsed.scheme != LOCAL_SCHEME and not parsed.netloc):
        raise ValueError("repoUrl must be a valid repository URL")
    return value


def _check_revision(value: str | None) -> str | None:
    """Blank means unset; a leading dash would be read by git as an option."""
    if value is None or not value.strip():
        return None
    value = value.strip()
    if value.startswith("-"):
        raise ValueError("commit must be a revision, not an option")
    return value


class AnalyzeRequest(CamelModel):
    """POST /api/analyze"""

    repo_url: str
    from_commit: str | None = None
    to_commit: str | None = None

    @field_validator("repo_url")
    @classmethod
    def _valid_url(cls, value: str) -> str:
        return _check_repo_url(value)

    @field_validator("from_commit", "to_commit")
    @classmethod
    def _valid_revision(cls, value: str | None) -> str | None:
        return _check_revision(value)


class FileContentRequest(CamelModel):
    """POST /api/file-content; the route checks required fields itself to answer 400."""

    repo_url: str | None = None
    file_path: str | None = None
    from_commit: str | None = None
    to_commit: str | None = None

    @field_validator("repo_url")
    @classmethod
    def _valid_url(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return _check_repo_url(value)

    @field_validator("from_commit", "to_commit")
    @classmethod
    def _valid_revision(cls, value: str | None) -> str | None:
        return _check_revision(value)


class ErrorResponse(CamelModel):
    error: str
    details: str | None = None


class RepositoriesResponse(CamelModel):
    repositories: list[RepositoryRecord]


class HealthResponse(CamelModel):
    status: str = "ok"
