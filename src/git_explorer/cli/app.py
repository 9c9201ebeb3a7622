import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from git_explorer.cli.analyze import analyze
from git_explorer.cli.diff import diff, show
from git_explorer.cli.serve import serve
from git_explorer.config import Settings

app = typer.Typer(
    name="git-explorer",
    help="Git Explorer CLI: see how a repository's files change across commits.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log analysis progress.")] = False,
) -> None:
    level = "DEBUG" if verbose else Settings.from_env().log_level
    logging.basicConfig(level=level, format="%(message)s", handlers=[RichHandler(show_path=False)], force=True)


app.command("analyze")(analyze)
app.command("diff")(diff)
app.command("show")(show)
app.command("serve")(serve)


def main() -> None:
    app()
