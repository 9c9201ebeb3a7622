from __future__ import annotations

from fastapi import HTTPException, Request

from git_explorer.api.schemas import is_local_url
from git_explorer.config import Settings
from git_explorer.core.content import ContentCacheRegistry
from git_explorer.core.ports.store import RepositoryStore


def get_store(request: Request) -> RepositoryStore:
    """The ``RepositoryStore`` injected into ``create_app``."""
    store: RepositoryStore = request.app.state.store
    return store


def get_settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


def get_content_caches(request: Request) -> ContentCacheRegistry:
    caches: ContentCacheRegistry = request.app.state.content_caches
    return caches


def check_clone_url(url: str, settings: Settings) -> None:
    """Refuse ``file://`` clones from HTTP callers unless the deployment opts in."""
    if is_local_url(url) and not settings.allow_file_urls:
        raise HTTPException(status_code=400, detail="Local repository URLs are not allowed")
