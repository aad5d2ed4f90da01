import asyncio
import logging

from fastapi import APIRouter, Depends

from codex_highlight.api.dependencies import get_pipeline
from codex_highlight.api.schemas import HighlightQuery, HighlightResponse
from codex_highlight.core.pipeline import HighlightPipeline

logger = logging.getLogger(__name__)

router = APIRouter(tags=["highlight"])


@router.post("/", response_model=HighlightResponse)
async def highlight(
    body: HighlightQuery,
    pipeline: HighlightPipeline = Depends(get_pipeline),
) -> HighlightResponse:
    logger.info("highlight extension=%r filepath=%r code_len=%d", body.extension, body.filepath, len(body.code))
    output = await asyncio.to_thread(pipeline.render, body.to_request())
    return HighlightResponse(data=output.body, plaintext=output.plaintext)
