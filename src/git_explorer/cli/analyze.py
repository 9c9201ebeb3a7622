from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Annotated

import typer
from rich.console import Console

from git_explorer.cli import render
from git_explorer.config import Settings
from git_explorer.core.analysis import run_analysis
from git_explorer.core.errors import CloneFailure, RangeResolutionError
from git_explorer.core.tree import filter_changed
from git_explorer.db.memory import InMemoryRepositoryStore

console = Console()


def analyze(
    repo_url: Annotated[str, typer.Argument(help="Repository URL to clone.")],
    from_commit: Annotated[str | None, typer.Option("--from", help="Oldest commit of the range.")] = None,
    to_commit: Annotated[str | None, typer.Option("--to", help="Newest commit of the range.")] = None,
    max_commits: Annotated[int | None, typer.Option(help="Commits offered for range selection.")] = None,
    changed_only: Annotated[bool, typer.Option(help="Hide unchanged files in the file tree.")] = True,
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw analysis payload.")] = False,
) -> None:
    """Clone a repository and summarize a commit range."""
    settings = Settings.from_env()
    if max_commits is not None:
        settings = replace(settings, max_display_commits=max_commits)

    try:
        result = asyncio.run(
            run_analysis(InMemoryRepositoryStore(), repo_url, from_commit, to_commit, settings=settings)
        )
    except CloneFailure as exc:
        console.print(f"[red]{exc.message}[/red]")
        if settings.debug and exc.details:
            console.print(exc.details, style="dim")
        raise typer.Exit(1) from exc
    except RangeResolutionError as exc:
        console.print(f"[red]Please select a valid commit range:[/red] {exc.reason}")
        raise typer.Exit(2) from exc

    if as_json:
        console.print_json(result.model_dump_json(by_alias=True, exclude_none=True))
        return

    if result.range.truncated:
        console.print(
            f"[yellow]Only the {len(result.selectable_commits)} most recent of "
            f"{result.range.total_commits} commits are selectable.[/yellow]"
        )
    console.print(render.commit_table(result.commits, title="Commits in range (newest first)"))

    stats = result.stats
    console.print(
        f"[green]+{stats.total_additions}[/green] [red]-{stats.total_deletions}[/red] "
        f"across {stats.files_changed} files in {stats.commits_count} commits"
    )
    tree = filter_changed(result.file_tree) if changed_only else result.file_tree
    if tree is not None:
        console.print(render.file_tree(tree, title="file tree"))
    for note in result.architecture_notes:
        console.print(f"• {note}")
