from fastapi import APIRouter, Depends

from git_explorer.api.dependencies import check_clone_url, get_content_caches, get_settings, get_store
from git_explorer.api.schemas import AnalyzeRequest, ErrorResponse
from git_explorer.config import Settings
from git_explorer.core.analysis import run_analysis
from git_explorer.core.content import ContentCacheRegistry
from git_explorer.core.ports.store import RepositoryStore
from git_explorer.models import AnalysisResult

router = APIRouter(prefix="/api", tags=["analysis"])


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    response_model_exclude_none=True,
    responses={code: {"model": ErrorResponse} for code in (400, 401, 404, 408, 500, 503)},
)
async def analyze(
    body: AnalyzeRequest,
    store: RepositoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
    caches: ContentCacheRegistry = Depends(get_content_caches),
) -> AnalysisResult:
    """Clone the repository and analyze the requested commit range."""
    check_clone_url(body.repo_url, settings)
    return await run_analysis(
        store,
        body.repo_url,
        from_commit=body.from_commit,
        to_commit=body.to_commit,
        settings=settings,
        cache=caches.for_repository(body.repo_url),
    )
