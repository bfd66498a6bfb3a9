from __future__ import annotations

import typer

from raisever import __version__
from raisever.cli.commands.init_cmd import init
from raisever.cli.commands.raise_cmd import raise_

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command("raise")(raise_)
app.command()(init)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Raise package.json version, update changelog and record it in git."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
