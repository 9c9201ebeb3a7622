import shutil

from fastapi import APIRouter, Response, status

from git_explorer.api.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness check: the process is up."""
    return HealthResponse()


@router.get("/healthz/ready", response_model=HealthResponse)
async def readiness(response: Response) -> HealthResponse:
    """Readiness check: the git executable is on PATH."""
    if shutil.which("git") is not None:
        return HealthResponse(status="ok")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="degraded")
