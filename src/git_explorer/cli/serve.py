from typing import Annotated

import typer
from rich.console import Console

from git_explorer.config import Settings

console = Console()


def serve(
    host: Annotated[str, typer.Option(help="Interface to bind.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port to listen on.")] = 8000,
) -> None:
    """Start the git-explorer HTTP API."""
    import uvicorn

    from git_explorer.api.app import create_app

    settings = Settings.from_env()
    app = create_app(settings=settings)
    console.print(f"[green]Serving git-explorer API on http://{host}:{port}[/green]")
    if settings.debug:
        console.print("[yellow]Debug mode: error responses include details.[/yellow]")
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())
