from __future__ import annotations

from collections.abc import AsyncIterator

from codex_highlight.config import Settings
from codex_highlight.core.isolation import ProcessBoundary
from codex_highlight.core.pipeline import HighlightPipeline
from codex_highlight.engine import PygmentsEngine, load_grammar_catalog, load_theme_catalog

_pipeline: HighlightPipeline | None = None


def build_pipeline(settings: Settings) -> HighlightPipeline:
    boundary = ProcessBoundary(
        start_method=settings.start_method,
        timeout=settings.timeout,
        preload=[PygmentsEngine.__module__],
    )
    return HighlightPipeline(PygmentsEngine(), boundary, class_prefix=settings.class_prefix)


def init_pipeline() -> HighlightPipeline:
    """Build the process-wide pipeline and load the catalogs, once."""
    global _pipeline  # noqa: PLW0603
    if _pipeline is None:
        load_grammar_catalog()
        load_theme_catalog()
        _pipeline = build_pipeline(Settings.from_env())
    return _pipeline


async def get_pipeline() -> AsyncIterator[HighlightPipeline]:
    """Yield the ``HighlightPipeline``, creating it lazily on first call."""
    yield init_pipeline()


def shutdown_pipeline() -> None:
    global _pipeline  # noqa: PLW0603
    _pipeline = None
