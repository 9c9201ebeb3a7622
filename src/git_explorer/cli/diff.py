from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from git_explorer.cli import render
from git_explorer.config import Settings
from git_explorer.core.analysis import fetch_remote_file_content
from git_explorer.core.errors import CloneFailure
from git_explorer.core.line_diff import render_diff

console = Console()


def _print_diff(before: str, after: str, progress: float, expand: list[int]) -> None:
    view = render_diff(before, after, progress=progress, expanded=set(expand))
    console.print(render.diff_view(view))
    if view.segments and not view.has_changes:
        console.print("[dim]No changes.[/dim]")


def diff(
    before: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="File with the old text.")],
    after: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="File with the new text.")],
    progress: Annotated[float, typer.Option(min=0.0, max=1.0, help="Playback position between 0 and 1.")] = 1.0,
    expand: Annotated[list[int] | None, typer.Option(help="Index of a collapsed segment to expand.")] = None,
) -> None:
    """Render a line diff between two local files."""
    _print_diff(
        before.read_text(encoding="utf-8", errors="replace"),
        after.read_text(encoding="utf-8", errors="replace"),
        progress,
        expand or [],
    )


def show(
    repo_url: Annotated[str, typer.Argument(help="Repository URL to clone.")],
    file_path: Annotated[str, typer.Argument(help="Repository-relative file path.")],
    from_commit: Annotated[str | None, typer.Option("--from", help="Revision of the old text.")] = None,
    to_commit: Annotated[str | None, typer.Option("--to", help="Revision of the new text.")] = None,
    progress: Annotated[float, typer.Option(min=0.0, max=1.0, help="Playback position between 0 and 1.")] = 1.0,
    expand: Annotated[list[int] | None, typer.Option(help="Index of a collapsed segment to expand.")] = None,
) -> None:
    """Fetch a file at two revisions of a remote repository and render the diff."""
    settings = Settings.from_env()
    try:
        fetched = asyncio.run(
            asyncio.to_thread(fetch_remote_file_content, repo_url, file_path, from_commit, to_commit, settings)
        )
    except CloneFailure as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1) from exc

    if not fetched.found:
        console.print(f"[red]File not found:[/red] {file_path}")
        raise typer.Exit(1)
    _print_diff(fetched.contents.before, fetched.contents.after, progress, expand or [])
