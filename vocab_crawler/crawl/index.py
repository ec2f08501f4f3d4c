"""Index stage: seed key -> listing page URLs."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from vocab_crawler.config import settings
from vocab_crawler.crawl.channel import Channel
from vocab_crawler.crawl.models import URL
from vocab_crawler.scraper import Collector, HTMLElement, VisitError

logger = logging.getLogger(__name__)

INDEX_SELECTOR = ".hlh32.hdb.dil.tcbd"


def index_url(seed: str, base_url: Optional[str] = None) -> URL:
    """Return the index page URL for *seed*."""
    return URL((base_url if base_url is not None else settings.base_url) + seed)


def extract_index(seed: str) -> Channel[URL]:
    """Stream the listing URLs found on the index page for *seed*.

    The page is visited on a background thread; each matching index link is
    pushed as soon as it is seen.  The returned channel is closed when the
    visit finishes, whether or not it succeeded.  A failed visit is logged and
    leaves whatever links were already emitted.
    """
    url = index_url(seed)
    logger.info("[index] Extracting indexes from %s", url)
    indexes: Channel[URL] = Channel()

    collector = Collector()

    def on_index(e: HTMLElement) -> None:
        indexes.put(URL(e.attr("href")))

    collector.on_html(INDEX_SELECTOR, on_index)
    collector.on_error(lambda u, exc: logger.warning("[index] %s: %s", u, exc))

    def run() -> None:
        try:
            collector.visit(url)
        except VisitError as exc:
            logger.error("[index] Failed to get index for %r: %s", seed, exc)
        finally:
            indexes.close()

    threading.Thread(target=run, name=f"index-{seed}", daemon=True).start()
    return indexes
