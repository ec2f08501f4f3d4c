"""vocab-crawler CLI — entry-point for all crawler operations.

Usage:
    python cli/main.py --help

Sub-command groups:
    crawl   → seed keys, index / listing / entry pages, full runs
    export  → spreadsheet output
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from vocab_crawler.xxx
# import ...` works when the CLI is invoked as `python cli/main.py` from any
# working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import typer

from cli.commands.crawl import crawl_app
from cli.commands.export import export_app
from vocab_crawler.config import settings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(filename)s:%(lineno)d %(message)s"

app = typer.Typer(
    name="vocab-crawler",
    help="Harvest vocabulary entries from an online dictionary.",
    no_args_is_help=True,
)
app.add_typer(crawl_app, name="crawl")
app.add_typer(export_app, name="export")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (defaults to LOG_LEVEL or INFO)."
    ),
) -> None:
    """Configure logging before any sub-command runs."""
    level = (log_level or settings.log_level).upper()
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
