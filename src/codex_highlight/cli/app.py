import typer

from codex_highlight.cli.catalog import catalog_app
from codex_highlight.cli.highlight import highlight
from codex_highlight.cli.serve import serve

app = typer.Typer(
    name="codex-highlight",
    help="Codex Highlight CLI: syntax-highlight code as HTML.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("serve")(serve)
app.command("highlight")(highlight)
app.add_typer(catalog_app, name="catalog")


def main() -> None:
    app()
