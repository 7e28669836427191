"""Run the web application."""

import typer
import uvicorn
from rich.panel import Panel

from src.catalog.runtime.context import get_config

from .utils import console


def serve(
    host: str | None = typer.Option(None, help="Bind address (default: app.host)"),
    port: int | None = typer.Option(None, help="Port (default: app.port)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """🚀 Serve the catalog with uvicorn."""
    app_config = get_config().app
    host = host or app_config.host
    port = port or app_config.port

    console.print(Panel.fit(f"[bold green]{app_config.name}[/bold green]", border_style="green"))
    console.print(f"[blue]Listening on:[/blue] http://{host}:{port}")
    if app_config.environment == "production":
        console.print(f"[blue]Public URL:[/blue] {app_config.base_url}")

    uvicorn.run(
        "src.catalog.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["src"] if reload else None,
        # Requests are logged by the application middleware
        access_log=False,
    )
