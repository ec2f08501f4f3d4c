"""Top-level driver: seed keys -> stream of crawl results.

``crawl_seed`` expands one seed key into its listings and crawls them on a
bounded pool, merging every listing's results into one channel.
``run_crawl`` walks seed keys strictly one after another.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, Optional

from vocab_crawler.config import settings
from vocab_crawler.crawl.aggregator import crawl_handle
from vocab_crawler.crawl.channel import Channel
from vocab_crawler.crawl.index import extract_index
from vocab_crawler.crawl.listing import crawl_vocab_urls
from vocab_crawler.crawl.models import URL, CrawlResult

logger = logging.getLogger(__name__)


def _forward_listing(
    listing: URL,
    out: Channel[CrawlResult],
    entry_workers: Optional[int],
) -> int:
    count = 0
    for result in crawl_handle(crawl_vocab_urls(listing), max_workers=entry_workers):
        out.put(result)
        count += 1
    logger.info("[crawl] %d result(s) from %s", count, listing)
    return count


def crawl_seed(
    seed: str,
    *,
    entry_workers: Optional[int] = None,
    listing_workers: Optional[int] = None,
) -> Channel[CrawlResult]:
    """Crawl the whole subtree of *seed* and stream its results."""
    workers = listing_workers or settings.listing_workers
    results: Channel[CrawlResult] = Channel()

    def run() -> None:
        try:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="listing") as pool:
                futures = [
                    pool.submit(_forward_listing, listing, results, entry_workers)
                    for listing in extract_index(seed)
                ]
            for future in futures:
                exc = future.exception()
                if exc is not None:
                    logger.error("[crawl] Listing failed for seed %r: %r", seed, exc)
        finally:
            results.close()

    threading.Thread(target=run, name=f"seed-{seed}", daemon=True).start()
    return results


def run_crawl(
    seeds: Iterable[str],
    *,
    entry_workers: Optional[int] = None,
    listing_workers: Optional[int] = None,
) -> Iterator[CrawlResult]:
    """Yield results for each seed key, finishing one key before the next."""
    for seed in seeds:
        logger.info("[crawl] Seed %r", seed)
        yield from crawl_seed(
            seed,
            entry_workers=entry_workers,
            listing_workers=listing_workers,
        )
