"""
Root Typer application for the termdict CLI.

Sub-commands import the API and ops layers lazily so ``termdict --help``
stays fast.
"""

from __future__ import annotations

import sys

import typer
from typer import Typer

from termdict.core.logging import configure_logging

app = Typer(
    name="termdict",
    help="termdict — read-only dictionary server over an SQLite term table.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        from termdict import __version__

        try:
            v = pkg_version("termdict")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"termdict {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for diagnostics (stderr)."),
) -> None:
    """termdict CLI — serve the dictionary, inspect its schema, query terms."""
    configure_logging(level=log_level, stream=sys.stderr)


# ── Sub-command registration ─────────────────────────────────────────────

from termdict.cli.schema import app as schema_app  # noqa: E402
from termdict.cli.serve import app as serve_app  # noqa: E402
from termdict.cli.terms import app as terms_app  # noqa: E402

app.add_typer(serve_app, name="serve", help="Start the HTTP server.")
app.add_typer(schema_app, name="schema", help="Inspect the resolved schema binding.")
app.add_typer(terms_app, name="terms", help="List, search and show terms.")
