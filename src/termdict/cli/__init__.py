"""
Command-line interface for termdict.

Entry point: ``termdict`` (installed via ``[project.scripts]``).

Tags:
    termdict, cli, typer, rich
"""
