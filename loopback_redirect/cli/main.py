"""Main CLI entry point for loopback-redirect."""

import typer
from rich.console import Console

from loopback_redirect.cli.commands.capture import capture
from loopback_redirect.cli.commands.config import config
from loopback_redirect.core.logging import configure_root_logging

app = typer.Typer(
    name="loopback-redirect",
    help="Capture OAuth authorization codes on a loopback redirect listener",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(capture)
app.command()(config)


@app.command()
def version() -> None:
    """Show version information."""
    from loopback_redirect import __version__

    console = Console()
    console.print(f"[bold cyan]loopback-redirect[/bold cyan] version [green]{__version__}[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Loopback Redirect CLI."""
    configure_root_logging("DEBUG" if verbose else None)


if __name__ == "__main__":
    app()
