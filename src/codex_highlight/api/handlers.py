"""Exception handlers turning failures into ``{"error", "code"}`` payloads."""

from __future__ import annotations

import logging
from typing import cast

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from codex_highlight.api.schemas import ErrorResponse
from codex_highlight.errors import HighlightError

logger = logging.getLogger(__name__)


async def highlight_error_handler(_request: Request, exc: Exception) -> Response:
    error = cast(HighlightError, exc)
    # Tagged failures keep a 200 status: clients branch on the payload's "code".
    return JSONResponse(ErrorResponse(**error.to_payload()).model_dump())


async def not_found_handler(request: Request, exc: Exception) -> Response:
    http_exc = cast(StarletteHTTPException, exc)
    if http_exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            ErrorResponse(error="resource not found", code="resource_not_found").model_dump(),
            status_code=status.HTTP_404_NOT_FOUND,
        )
    logger.error("%s %s rejected: %d %s", request.method, request.url.path, http_exc.status_code, http_exc.detail)
    return await http_exception_handler(request, http_exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HighlightError, highlight_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
