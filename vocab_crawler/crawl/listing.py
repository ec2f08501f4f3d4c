"""Listing stage: listing page URL -> absolute entry page URLs."""

from __future__ import annotations

import logging
import threading
from urllib.parse import urljoin

from vocab_crawler.config import settings
from vocab_crawler.crawl.channel import Channel
from vocab_crawler.crawl.models import URL
from vocab_crawler.scraper import Collector, HTMLElement, VisitError

logger = logging.getLogger(__name__)

WORD_LINK_SELECTOR = ".tc-bd"


def crawl_vocab_urls(listing: URL) -> Channel[URL]:
    """Stream the entry URLs linked from *listing*.

    Links are relative on listing pages and are resolved against
    ``settings.site_origin``.  Matches with an empty ``href`` are skipped.
    The channel is closed once the visit finishes.
    """
    logger.info("[listing] Crawling entry urls from %s", listing)
    vocab_urls: Channel[URL] = Channel()
    origin = settings.site_origin

    collector = Collector()

    def on_link(e: HTMLElement) -> None:
        link = e.attr("href").strip()
        if not link:
            return
        try:
            resolved = urljoin(origin, link)
        except ValueError as exc:
            logger.warning("[listing] Skipping malformed link %r on %s: %s", link, listing, exc)
            return
        vocab_urls.put(URL(resolved))

    collector.on_html(WORD_LINK_SELECTOR, on_link)
    collector.on_error(lambda u, exc: logger.warning("[listing] %s: %s", u, exc))

    def run() -> None:
        try:
            collector.visit(listing)
        except VisitError as exc:
            logger.error("[listing] Failed to crawl %s: %s", listing, exc)
        finally:
            vocab_urls.close()

    threading.Thread(target=run, name=f"listing-{listing}", daemon=True).start()
    return vocab_urls
