from codex_highlight.engine.pygments_engine import (
    GrammarCatalog,
    PygmentsEngine,
    load_grammar_catalog,
    load_theme_catalog,
)

__all__ = [
    "GrammarCatalog",
    "PygmentsEngine",
    "load_grammar_catalog",
    "load_theme_catalog",
]
