from __future__ import annotations

from fastapi import FastAPI

from codex_highlight.api.handlers import register_exception_handlers
from codex_highlight.api.lifespan import lifespan
from codex_highlight.api.middleware import RequestLoggingMiddleware
from codex_highlight.api.routes.health import router as health_router
from codex_highlight.api.routes.highlight import router as highlight_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Codex Highlight API",
        description="Syntax-highlight source code as themed HTML or CSS-classed tables.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router, include_in_schema=False)
    app.include_router(highlight_router)

    return app
