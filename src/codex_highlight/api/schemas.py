from __future__ import annotations

from pydantic import BaseModel, Field

from codex_highlight.models import HighlightRequest, OutputMode


class HighlightQuery(BaseModel):
    """Request body for ``POST /``."""

    # Deprecated, kept for clients that only send a file extension.
    extension: str = ""
    filepath: str = ""
    # Return a table annotated with CSS classes instead of inline-styled HTML.
    css: bool = False
    # Ignored unless css is set.
    line_length_limit: int | None = Field(default=None, ge=0)
    # Ignored if css is set.
    theme: str = ""
    code: str

    def to_request(self) -> HighlightRequest:
        return HighlightRequest(
            code=self.code,
            extension=self.extension,
            filepath=self.filepath,
            mode=OutputMode.CLASSED if self.css else OutputMode.THEMED,
            theme=self.theme,
            line_length_limit=self.line_length_limit,
        )


class HighlightResponse(BaseModel):
    data: str
    plaintext: bool


class ErrorResponse(BaseModel):
    error: str
    code: str


class HealthResponse(BaseModel):
    status: str = "ok"
