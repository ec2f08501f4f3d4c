"""Export commands."""

from __future__ import annotations

from typing import List

import typer

from vocab_crawler.export import create_sheet

export_app = typer.Typer(help="Spreadsheet export.", no_args_is_help=True)


@export_app.callback()
def export_callback() -> None:
    """Write crawl output to .xlsx workbooks."""


@export_app.command("sheet")
def sheet_cmd(
    name: str = typer.Argument(..., help="Workbook name; '.xlsx' is appended."),
    fields: List[str] = typer.Argument(..., help="Values for the first row, from column A."),
) -> None:
    """Create a single-row spreadsheet."""
    if not create_sheet(name, *fields):
        typer.echo(f"[export] Failed to write {name}.xlsx", err=True)
        raise typer.Exit(1)
    typer.echo(f"[export] Wrote {name}.xlsx")
