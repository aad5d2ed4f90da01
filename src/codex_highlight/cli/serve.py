import logging
from typing import Annotated

import typer
from rich.console import Console

from codex_highlight.cli.catalog import print_features
from codex_highlight.config import Settings
from codex_highlight.engine import PygmentsEngine

console = Console()


def serve(
    host: Annotated[str | None, typer.Option(help="Bind address (default: $HIGHLIGHT_HOST).")] = None,
    port: Annotated[int | None, typer.Option(help="Bind port (default: $HIGHLIGHT_PORT).")] = None,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Do not list themes and grammars.")] = False,
) -> None:
    """Start the highlighting API server."""
    import uvicorn

    from codex_highlight.api.app import create_app

    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not (quiet or settings.quiet):
        print_features(PygmentsEngine())

    bind_host = host or settings.host
    bind_port = port or settings.port
    app = create_app()
    console.print(f"[green]Starting API server on {bind_host}:{bind_port}[/green]")
    uvicorn.run(app, host=bind_host, port=bind_port, log_config=None)
