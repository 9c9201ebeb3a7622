from fastapi import APIRouter, Depends

from git_explorer.api.dependencies import get_store
from git_explorer.api.schemas import RepositoriesResponse
from git_explorer.core.ports.store import RepositoryStore

router = APIRouter(prefix="/api", tags=["repositories"])


@router.get("/repositories", response_model=RepositoriesResponse)
async def repositories(store: RepositoryStore = Depends(get_store)) -> RepositoriesResponse:
    return RepositoriesResponse(repositories=await store.list_repositories())
