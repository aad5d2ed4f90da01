from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from codex_highlight.api.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
async def health() -> str:
    return "OK"


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe: is the process alive?"""
    return HealthResponse()
