"""
CLI: ``termdict schema`` — show which table and columns are bound.
"""

from __future__ import annotations

import typer

from termdict.cli.utils import console, fail, make_context, print_json, print_mapping
from termdict.core.errors import RepositoryError

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show(
    database: str | None = typer.Option(None, "--db", "-d", help="SQLite dictionary file"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Print the resolved schema binding and the bound table's row count."""
    from termdict.core.repository import TermRepository

    _, repo_ctx = make_context(database)
    try:
        payload = {**repo_ctx.binding.to_dict(), "rows": TermRepository(repo_ctx).count()}
    except RepositoryError as e:
        raise fail(e.message) from e
    finally:
        repo_ctx.store.close()

    if json_out:
        print_json(payload)
        return
    print_mapping(payload, title="Schema binding")
    if payload["link"] is None:
        console.print("[dim]No link column bound.[/dim]")
