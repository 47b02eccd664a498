"""
CLI tool for running and inspecting the chat relay.

Provides commands for starting the server and viewing the effective
configuration.
"""

import copy
from typing import Any

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from uvicorn.config import LOGGING_CONFIG

from chat_relay.settings import app_settings

typer_app = typer.Typer(
    name="chat-relay",
    help="Chat relay CLI - Run the WebSocket chat server and inspect its settings",
    add_completion=False,
)
console = Console()


def build_log_config() -> dict[str, Any]:
    """
    Uvicorn logging config with monitoring paths removed from access logs.

    Returns:
        A copy of uvicorn's default logging config whose access handler
        runs ``ExcludeMetricsFilter``.
    """
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config.setdefault("filters", {})["exclude_metrics"] = {
        "()": "chat_relay.uvicorn_filters.ExcludeMetricsFilter"
    }
    log_config["handlers"]["access"]["filters"] = ["exclude_metrics"]
    return log_config


@typer_app.command(name="serve")
def serve(
    host: str = typer.Option(
        app_settings.HOST, "--host", help="Interface to bind to"
    ),
    port: int = typer.Option(
        app_settings.PORT, "--port", "-p", help="Port to listen on"
    ),
    reload: bool = typer.Option(
        False, "--reload", help="Restart the server on code changes"
    ),
):
    """
    Start the chat relay server.

    Example:
        python cli.py serve --port 8080
    """
    console.print(
        f"[bold green]Starting chat relay on {host}:{port}[/bold green] "
        f"(websocket path [cyan]{app_settings.WS_PATH}[/cyan])"
    )
    uvicorn.run(
        "chat_relay:application",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=build_log_config(),
    )


@typer_app.command(name="settings")
def show_settings():
    """
    Display the effective configuration.

    Values come from environment variables where set, defaults otherwise.

    Example:
        WS_PATH=/chat python cli.py settings
    """
    console.print()
    console.print(
        Panel.fit(
            "[bold cyan]Chat Relay Settings[/bold cyan]", border_style="cyan"
        )
    )
    console.print()

    table = Table("Setting", "Value", show_lines=True)
    for name, value in app_settings.model_dump().items():
        table.add_row(f"[green]{name}[/green]", str(value))

    console.print(table)
    console.print()


if __name__ == "__main__":
    typer_app()
