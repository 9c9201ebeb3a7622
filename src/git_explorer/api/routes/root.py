from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint listing the API routes."""
    return {
        "meta": {
            "title": "Git Explorer API",
            "description": "Analyze how a repository's file tree and contents evolve across commits.",
            "version": "0.1.0",
        },
        "links": {
            "self": "/",
            "analyze": "/api/analyze",
            "file-content": "/api/file-content",
            "repositories": "/api/repositories",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
