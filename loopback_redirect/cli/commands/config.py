"""Configuration inspection command for the loopback-redirect CLI."""

import typer
from rich.console import Console
from rich.table import Table

from loopback_redirect.core.config.schema import ConfigSchema
from loopback_redirect.core.config.validation import ConfigError, load_all_specs, validate_all


def config() -> None:
    """Show the effective configuration and any validation errors."""
    console = Console()
    loaded = load_all_specs()

    table = Table(title="Loopback Redirect Configuration")
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_column("Description")

    for spec in sorted(ConfigSchema.all_specs().values(), key=lambda s: s.name):
        value = loaded[spec.name]
        if isinstance(value, ConfigError):
            shown = f"[red]{value.value!r} (invalid)[/red]"
        else:
            shown = "unset" if value is None else str(value)
        table.add_row(spec.name, shown, spec.description)

    console.print(table)

    errors = validate_all()
    if errors:
        for error in errors:
            console.print(f"[red]Configuration error: {error}[/red]")
        raise typer.Exit(1) from None
