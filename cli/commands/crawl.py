"""Crawl commands: walk the dictionary index and print harvested entries."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import typer

from vocab_crawler.config import settings
from vocab_crawler.crawl import (
    URL,
    crawl_vocab_urls,
    extract_index,
    fetch_entry,
    get_seeds,
    run_crawl,
)
from vocab_crawler.export import write_entries

crawl_app = typer.Typer(help="Crawl the dictionary site.", no_args_is_help=True)


@crawl_app.command("seeds")
def seeds_cmd() -> None:
    """Print the seed keys in crawl order."""
    for seed in get_seeds():
        typer.echo(seed)


@crawl_app.command("index")
def index_cmd(
    seed: str = typer.Option(..., help="Seed key, e.g. '0-9' or 'a'."),
) -> None:
    """Print the listing URLs found on the index page of a seed key."""
    if seed not in get_seeds():
        typer.echo(f"[index] Unknown seed key {seed!r}.", err=True)
        raise typer.Exit(1)
    for listing in extract_index(seed):
        typer.echo(listing)


@crawl_app.command("listing")
def listing_cmd(
    url: str = typer.Option(..., help="Listing page URL."),
) -> None:
    """Print the entry URLs linked from a listing page."""
    for vocab_url in crawl_vocab_urls(URL(url)):
        typer.echo(vocab_url)


@crawl_app.command("entry")
def entry_cmd(
    url: str = typer.Option(..., help="Entry page URL."),
) -> None:
    """Crawl a single entry page and print its result."""
    result = fetch_entry(URL(url))
    typer.echo(str(result))
    if not result.ok:
        raise typer.Exit(1)


@crawl_app.command("run")
def run_cmd(
    seed: Optional[List[str]] = typer.Option(
        None, "--seed", help="Seed key to crawl (repeatable). Defaults to CRAWL_SEEDS, else all."
    ),
    entry_workers: Optional[int] = typer.Option(
        None, min=1, help="Concurrent entry pages per listing."
    ),
    listing_workers: Optional[int] = typer.Option(
        None, min=1, help="Concurrent listing pages per seed key."
    ),
    xlsx: Optional[Path] = typer.Option(
        None, help="Also write successful entries to this .xlsx file."
    ),
) -> None:
    """Crawl the selected seed keys and print one line per entry page."""
    scope = replace(settings, seeds=",".join(seed)) if seed else settings
    try:
        seeds = scope.selected_seeds()
    except ValueError as exc:
        typer.echo(f"[crawl] {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"[crawl] Seeds: {', '.join(seeds)}", err=True)
    entries = []
    failures = 0
    for result in run_crawl(
        seeds,
        entry_workers=entry_workers,
        listing_workers=listing_workers,
    ):
        typer.echo(str(result))
        if result.ok:
            entries.append(result.entry)
        else:
            failures += 1

    typer.echo(f"[crawl] Done: {len(entries)} entr(ies), {failures} failure(s).", err=True)

    if xlsx is not None:
        if not write_entries(xlsx, entries):
            typer.echo(f"[crawl] Failed to write {xlsx}", err=True)
            raise typer.Exit(1)
        typer.echo(f"[crawl] Wrote {len(entries)} entr(ies) to {xlsx}", err=True)
