import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from codex_highlight.api.dependencies import build_pipeline
from codex_highlight.config import Settings
from codex_highlight.errors import HighlightError
from codex_highlight.models import HighlightRequest, OutputMode

console = Console(stderr=True)


def highlight(
    path: Annotated[str, typer.Argument(help="File to highlight, or '-' to read stdin.")],
    css: Annotated[bool, typer.Option("--css", help="Emit a CSS-classed table instead of themed HTML.")] = False,
    theme: Annotated[str, typer.Option("--theme", "-t", help="Theme name, ignored with --css.")] = "default",
    line_length_limit: Annotated[
        int | None, typer.Option("--line-length-limit", min=0, help="Truncate long lines, --css only.")
    ] = None,
    extension: Annotated[str, typer.Option("--extension", "-e", help="Extension hint for stdin input.")] = "",
) -> None:
    """Highlight a local file with the same pipeline the server uses."""
    if path == "-":
        code, filepath = sys.stdin.read(), ""
    else:
        file_path = Path(path)
        try:
            code = file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            console.print(f"[red]File not found: {path}[/red]")
            raise typer.Exit(code=1) from None
        except (OSError, UnicodeDecodeError) as exc:
            console.print(f"[red]Cannot read {escape(path)}: {escape(str(exc))}[/red]")
            raise typer.Exit(code=1) from None
        filepath = file_path.as_posix()

    request = HighlightRequest(
        code=code,
        extension=extension,
        filepath=filepath,
        mode=OutputMode.CLASSED if css else OutputMode.THEMED,
        theme=theme,
        line_length_limit=line_length_limit,
    )
    try:
        output = build_pipeline(Settings.from_env()).render(request)
    except HighlightError as exc:
        console.print(f"[red]{exc.message}[/red] ({exc.code})")
        raise typer.Exit(code=1) from None

    if output.plaintext:
        console.print("[yellow]No grammar matched, rendered as plain text.[/yellow]")
    typer.echo(output.body)
