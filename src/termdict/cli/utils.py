"""
CLI utility helpers — output formatting and context management.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from termdict.core.context import RepositoryContext, open_context
from termdict.core.errors import TermdictError
from termdict.core.settings import TermdictSettings, get_settings
from termdict.ops.context import OperationContext
from termdict.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)


# ── Context helpers ──────────────────────────────────────────────────────


def load_settings(database: str | None = None) -> TermdictSettings:
    """Process settings, with ``--db`` taking precedence over the environment."""
    settings = get_settings()
    if database:
        settings = settings.model_copy(update={"db_path": Path(database)})
    return settings


def fail(message: str) -> typer.Exit:
    """Print *message* in red on stderr and return the exit to raise."""
    err_console.print(f"[bold red]Error[/bold red]: {escape(message)}")
    return typer.Exit(code=1)


def make_context(database: str | None = None) -> tuple[OperationContext, RepositoryContext]:
    """Open the store and bind the schema for one CLI invocation.

    The caller closes ``repo_ctx.store`` when done.
    """
    try:
        repo_ctx = open_context(load_settings(database))
    except TermdictError as e:
        raise fail(e.message) from e
    return OperationContext(repo_ctx=repo_ctx, caller="cli"), repo_ctx


# ── Output helpers ───────────────────────────────────────────────────────


def print_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, ensure_ascii=False, default=str))


def check_result(result: OperationResult[Any]) -> Any:
    """Return ``result.data`` or exit 1 with the error in red."""
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code if err else "ERROR"
        err_console.print(f"[bold red]Error[/bold red] ({code}): {escape(msg)}")
        raise typer.Exit(code=1)
    return result.data


def print_mapping(data: dict[str, Any], *, title: str = "") -> None:
    """Render a flat mapping as a two-column Rich table."""
    table = Table(title=Text(title) if title else None, show_header=False, pad_edge=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value", overflow="fold")
    for key, value in data.items():
        table.add_row(key, Text("" if value is None else str(value)))
    console.print(table)
