"""Settings and gateway helpers for CLI commands.

Centralizes creation of settings and gateways from environment variables.
Hides configuration details from command implementations.
"""

import typer
from rich.console import Console

from ..config import ClientSettings, Settings
from ..errors import ConfigurationError
from ..gateway import CompletionGateway, create_gateway

# Default console for output
_console = Console()


def require_settings(console: Console | None = None) -> Settings:
    """Load server settings, exiting if the configuration is unusable.

    Raises:
        SystemExit: If GEMINI_API_KEY is missing or a value is malformed
    """
    con = console or _console
    try:
        return Settings.from_env()
    except ConfigurationError as e:
        con.print(f"[red]Error: {e}[/red]")
        con.print("[dim]Set it in your environment or in a .env file.[/dim]")
        raise typer.Exit(code=1)


def get_client_gateway(url: str | None = None, console: Console | None = None) -> CompletionGateway:
    """Create an HTTP gateway pointing at the proxy.

    Args:
        url: Proxy base URL (default: EVA_API_URL or http://localhost:3001)
        console: Optional Rich console for output

    Environment variables:
        EVA_API_URL: Proxy base URL
        EVA_TIMEOUT_S: Request timeout in seconds
    """
    con = console or _console
    try:
        client_settings = ClientSettings.from_env()
    except ConfigurationError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    return create_gateway(
        "http",
        base_url=url or client_settings.api_url,
        timeout_s=client_settings.timeout_s,
    )
