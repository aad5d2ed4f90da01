from collections.abc import Sequence
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from codex_highlight.engine import PygmentsEngine

catalog_app = typer.Typer(help="List the embedded themes and grammars.")
console = Console()


def _render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*row)
    console.print(table)
    console.print(f"({len(rows)} rows)")


def print_features(engine: PygmentsEngine) -> None:
    """Print the theme and grammar catalogs as markdown lists."""
    console.print("## Embedded themes:", markup=False)
    console.print()
    for theme in engine.themes():
        console.print(f"- `{theme.name}`", markup=False)
    console.print()

    console.print("## Supported file extensions:", markup=False)
    console.print()
    for grammar in engine.grammars():
        keys = "`, `".join((*grammar.filenames, *grammar.extensions))
        console.print(f"- {grammar.name} (`{keys}`)", markup=False)
    console.print()


@catalog_app.command("themes")
def themes() -> None:
    """List embedded themes."""
    rows = [(t.name, t.background or "") for t in PygmentsEngine().themes()]
    _render_table(["theme", "background"], rows)


@catalog_app.command("grammars")
def grammars(
    filter: Annotated[str | None, typer.Option("--filter", "-f", help="Only grammars whose name contains this.")] = None,
) -> None:
    """List grammars with the file names and extensions they claim."""
    rows = [
        (g.name, ", ".join(g.aliases), ", ".join((*g.filenames, *g.extensions)))
        for g in PygmentsEngine().grammars()
        if filter is None or filter.lower() in g.name.lower()
    ]
    _render_table(["grammar", "aliases", "files"], rows)
