"""
CLI: ``termdict terms`` — query the dictionary from the terminal.
"""

from __future__ import annotations

import typer

from termdict.cli.utils import check_result, console, make_context, print_json, print_mapping

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_terms(
    search: str = typer.Option("", "--search", "-s", help="Substring to match"),
    database: str | None = typer.Option(None, "--db", "-d", help="SQLite dictionary file"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List terms in case-insensitive order, optionally filtered."""
    from termdict.ops.terms import list_terms as _list

    ctx, repo_ctx = make_context(database)
    try:
        items = check_result(_list(ctx, search))
    finally:
        repo_ctx.store.close()

    if json_out:
        print_json({"items": items})
        return
    if not items:
        console.print("[dim]No items.[/dim]")
        return
    for item in items:
        console.print(item, markup=False, highlight=False, soft_wrap=True)


@app.command("show")
def show(
    word: str = typer.Argument(..., help="Exact term (case-sensitive)"),
    database: str | None = typer.Option(None, "--db", "-d", help="SQLite dictionary file"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show one term: raw definition, math segments and audio plan."""
    from termdict.ops.terms import get_term_detail as _get

    ctx, repo_ctx = make_context(database)
    try:
        detail = check_result(_get(ctx, word))
    finally:
        repo_ctx.store.close()

    if json_out:
        print_json(detail.to_dict())
        return

    print_mapping(
        {
            "word": detail.record.term,
            "meaning": detail.record.definition,
            "audio": " ".join(detail.audio) or None,
            "link": detail.record.link_ref,
            "math": len(detail.rendered.math_segments),
        },
        title=detail.record.term,
    )
