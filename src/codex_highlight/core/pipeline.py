from __future__ import annotations

import logging

from codex_highlight.core.classed import DEFAULT_CLASS_PREFIX, render_classed
from codex_highlight.core.isolation import ProcessBoundary
from codex_highlight.core.ports.engine import GrammarEngine
from codex_highlight.core.resolver import resolve
from codex_highlight.core.themed import render_themed
from codex_highlight.errors import HighlightPanicError, InvalidExtensionError, InvalidThemeError
from codex_highlight.models import (
    GrammarDescriptor,
    HighlightRequest,
    OutputMode,
    RenderedOutput,
    ThemeDescriptor,
)

logger = logging.getLogger(__name__)


def tokenize_and_render(
    engine: GrammarEngine,
    code: str,
    grammar: GrammarDescriptor,
    theme: ThemeDescriptor | None,
    line_length_limit: int | None,
    class_prefix: str,
) -> str:
    """Tokenize ``code`` and render it. Runs inside the worker process."""
    lines = engine.tokenize(code, grammar)
    if theme is None:
        return render_classed(lines, line_length_limit, class_prefix, grammar.scope)
    return render_themed(engine, lines, theme)


class HighlightPipeline:
    """Resolve, tokenize and render one request at a time; holds no per-request state."""

    def __init__(
        self,
        engine: GrammarEngine,
        boundary: ProcessBoundary,
        class_prefix: str = DEFAULT_CLASS_PREFIX,
    ) -> None:
        self.engine = engine
        self.boundary = boundary
        self.class_prefix = class_prefix

    def render(self, request: HighlightRequest) -> RenderedOutput:
        resolution = resolve(self.engine, request.extension, request.filepath, request.code)
        if resolution.plaintext and request.extension and not request.filepath:
            # Legacy clients get an error for an extension nothing recognizes.
            raise InvalidExtensionError(request.extension)
        logger.debug("Resolved grammar %s (plaintext=%s)", resolution.grammar.name, resolution.plaintext)

        theme: ThemeDescriptor | None = None
        line_length_limit: int | None = None
        if request.mode is OutputMode.THEMED:
            theme = self.engine.find_theme(request.theme)
            if theme is None:
                raise InvalidThemeError(request.theme)
        else:
            line_length_limit = request.line_length_limit

        try:
            body = self.boundary.run(
                tokenize_and_render,
                self.engine,
                request.code,
                resolution.grammar,
                theme,
                line_length_limit,
                self.class_prefix,
            )
        except HighlightPanicError as exc:
            logger.error(
                "Highlighting failed (grammar=%s, filepath=%r, extension=%r, code_len=%d): %s",
                resolution.grammar.name,
                request.filepath,
                request.extension,
                len(request.code),
                exc.detail,
            )
            raise
        return RenderedOutput(body=body, plaintext=resolution.plaintext)
