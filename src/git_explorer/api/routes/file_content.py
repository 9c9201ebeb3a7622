import asyncio

from fastapi import APIRouter, Depends, HTTPException

from git_explorer.api.dependencies import check_clone_url, get_content_caches, get_settings
from git_explorer.api.schemas import ErrorResponse, FileContentRequest
from git_explorer.config import Settings
from git_explorer.core.analysis import fetch_remote_file_content
from git_explorer.core.content import ContentCacheRegistry
from git_explorer.models import FileContents

router = APIRouter(prefix="/api", tags=["analysis"])


@router.post(
    "/file-content",
    response_model=FileContents,
    responses={code: {"model": ErrorResponse} for code in (400, 404, 500)},
)
async def file_content(
    body: FileContentRequest,
    settings: Settings = Depends(get_settings),
    caches: ContentCacheRegistry = Depends(get_content_caches),
) -> FileContents:
    """Text of one file at two revisions; sentinel text stands in for a revision without the file."""
    if not body.repo_url or not body.file_path:
        raise HTTPException(status_code=400, detail="Repository URL and file path are required")
    check_clone_url(body.repo_url, settings)

    fetched = await asyncio.to_thread(
        fetch_remote_file_content,
        body.repo_url,
        body.file_path,
        body.from_commit,
        body.to_commit,
        settings,
        caches.for_repository(body.repo_url),
    )
    if not fetched.found:
        raise HTTPException(status_code=404, detail="File not found")
    return fetched.contents
