from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = app.state.settings
    logger.info(
        "Serving with clone depth %d, log limit %d, display limit %d",
        settings.clone_depth,
        settings.log_max_count,
        settings.max_display_commits,
    )
    yield
    repositories = await app.state.store.list_repositories()
    logger.info("Shutting down after analyzing %d repositories", len(repositories))
