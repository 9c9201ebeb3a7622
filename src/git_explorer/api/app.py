from __future__ import annotations

from fastapi import FastAPI

from git_explorer.api.errors import register_error_handlers
from git_explorer.api.lifespan import lifespan
from git_explorer.api.routes.analyze import router as analyze_router
from git_explorer.api.routes.file_content import router as file_content_router
from git_explorer.api.routes.health import router as health_router
from git_explorer.api.routes.repositories import router as repositories_router
from git_explorer.api.routes.root import router as root_router
from git_explorer.config import Settings
from git_explorer.core.content import ContentCacheRegistry
from git_explorer.core.ports.store import RepositoryStore
from git_explorer.db.memory import InMemoryRepositoryStore


def create_app(store: RepositoryStore | None = None, settings: Settings | None = None) -> FastAPI:
    app = FastAPI(
        title="Git Explorer API",
        description="Analyze how a repository's file tree and contents evolve across commits.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else InMemoryRepositoryStore()
    app.state.settings = settings if settings is not None else Settings.from_env()
    app.state.content_caches = ContentCacheRegistry()

    register_error_handlers(app)

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(analyze_router)
    app.include_router(file_content_router)
    app.include_router(repositories_router)

    return app
