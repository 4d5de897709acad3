from __future__ import annotations

import typer

from relpub import __version__
from relpub.cli.commands.check import check
from relpub.cli.commands.publish import publish


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(publish)
app.command()(check)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Publish a prebuilt archive as a GitHub release."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
