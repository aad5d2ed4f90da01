from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from codex_highlight.api.dependencies import init_pipeline, shutdown_pipeline


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    init_pipeline()
    yield
    shutdown_pipeline()
