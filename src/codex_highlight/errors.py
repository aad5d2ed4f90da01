"""Typed failures surfaced to clients as ``{"error": ..., "code": ...}`` payloads."""

from __future__ import annotations


class HighlightError(Exception):
    code = "internal"
    message = "internal error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail

    def to_payload(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}


class InvalidExtensionError(HighlightError):
    code = "invalid_extension"
    message = "invalid extension"


class InvalidThemeError(HighlightError):
    code = "invalid_theme"
    message = "invalid theme"


class HighlightPanicError(HighlightError):
    """The tokenize/render step terminated abnormally inside the worker process.

    ``detail`` holds the operator-facing diagnostic (traceback or exit code);
    it is logged but never sent to the client.
    """

    code = "panic"
    message = "panic while highlighting code"


class HighlightTimeoutError(HighlightPanicError):
    message = "timeout while highlighting code"
