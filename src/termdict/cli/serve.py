"""
CLI: ``termdict serve`` — start the HTTP server.
"""

from __future__ import annotations

import typer

from termdict.cli.utils import console, load_settings

app = typer.Typer(no_args_is_help=True)


@app.command("start")
def start(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (default from settings)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default from settings)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the termdict REST API server."""
    import uvicorn

    settings = load_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold green]Starting termdict API[/bold green] on {host}:{port}")
    uvicorn.run(
        "termdict.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )
