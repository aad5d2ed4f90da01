from collections.abc import Iterable

from codex_highlight.core.ports.engine import GrammarEngine
from codex_highlight.models import StyledLine, ThemeDescriptor


def render_themed(engine: GrammarEngine, lines: Iterable[StyledLine], theme: ThemeDescriptor) -> str:
    """Render ``lines`` as one HTML fragment with the theme's colors inlined."""
    return engine.render_themed(lines, theme)
