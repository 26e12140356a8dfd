"""Authorization code capture command for the loopback-redirect CLI."""

import dataclasses

import typer
from rich.console import Console
from rich.panel import Panel

from loopback_redirect.core.config.validation import ConfigError
from loopback_redirect.core.redirect import (
    AuthorizationDeniedError,
    AuthorizationError,
    AuthorizationTimeoutError,
    InteractiveLogin,
    InteractiveLoginConfig,
    ListenerSettings,
    RedirectCaptureError,
)


def capture(
    authorize_endpoint: str = typer.Option(
        ..., "--authorize-endpoint", "-e", help="Provider authorize endpoint (HTTPS)"
    ),
    client_id: str = typer.Option(..., "--client-id", help="OAuth client ID"),
    resource: str = typer.Option(None, "--resource", help="Resource parameter"),
    scope: str = typer.Option(None, "--scope", help="Space-separated scopes"),
    prompt: str = typer.Option(None, "--prompt", help="Prompt parameter, e.g. select_account"),
    port: int = typer.Option(None, "--port", help="Fixed listener port (default: OS-assigned)"),
    timeout: float = typer.Option(
        None, "--timeout", help="Seconds to wait for the redirect (default: REDIRECT_WAIT_TIMEOUT)"
    ),
) -> None:
    """Capture an authorization code through a loopback redirect.

    Prints the authorize URL; open it in a browser and complete the
    login. The authorization code is printed once the provider redirects
    back.

    Example:
        loopback-redirect capture -e https://login.example.com/authorize --client-id abc
    """
    console = Console()

    try:
        settings = ListenerSettings.load()
        if port is not None:
            settings = dataclasses.replace(settings, port=port)

        config = InteractiveLoginConfig(
            authorize_endpoint=authorize_endpoint,
            client_id=client_id,
            resource=resource,
            scope=scope,
            prompt=prompt,
            timeout=timeout if timeout is not None else settings.wait_timeout,
        )
    except (ConfigError, RedirectCaptureError) as e:
        console.print(
            Panel(
                f"[red]Invalid configuration.[/red]\n\nError: {e}",
                title="Configuration Error",
                border_style="red",
            )
        )
        raise typer.Exit(1) from None

    def present(authorize_url: str) -> None:
        console.print(
            Panel(
                f"Open this URL in a browser to sign in:\n\n{authorize_url}",
                title="Authorize",
                border_style="cyan",
            )
        )
        console.print("[yellow]Waiting for the authorization redirect...[/yellow]")

    try:
        code = InteractiveLogin(config, settings).run(present)
    except AuthorizationTimeoutError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None
    except AuthorizationDeniedError as e:
        console.print(
            Panel(
                f"[red]The provider denied the authorization.[/red]\n\n"
                f"Error: {e.error}\n"
                f"Description: {e.description or 'None'}",
                title="Authorization Denied",
                border_style="red",
            )
        )
        raise typer.Exit(1) from None
    except AuthorizationError as e:
        console.print(
            Panel(
                f"[red]The authorization redirect was rejected.[/red]\n\n"
                f"Reason: {e.reason}\nError: {e}",
                title="Authorization Failed",
                border_style="red",
            )
        )
        raise typer.Exit(1) from None
    except RedirectCaptureError as e:
        console.print(
            Panel(
                f"[red]An error occurred while capturing the redirect.[/red]\n\nError: {e}",
                title="Capture Error",
                border_style="red",
            )
        )
        raise typer.Exit(1) from None

    console.print(
        Panel(
            f"[green]✅ Authorization code received[/green]\n\n{code}",
            title="Capture Success",
            border_style="green",
        )
    )
