"""Fan-in of many entry crawls into one result stream."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Iterable, Optional

from vocab_crawler.config import settings
from vocab_crawler.crawl.channel import Channel
from vocab_crawler.crawl.entry import crawl_vocab
from vocab_crawler.crawl.models import URL, CrawlResult

logger = logging.getLogger(__name__)


def crawl_handle(
    vocab_urls: Iterable[URL],
    *,
    max_workers: Optional[int] = None,
) -> Channel[CrawlResult]:
    """Crawl every URL drawn from *vocab_urls* and merge the results.

    URLs are submitted to a ``ThreadPoolExecutor`` of ``max_workers``
    threads (``settings.entry_workers`` by default) as they arrive.  Each
    crawl writes one result to the returned channel; results arrive in
    completion order, not submission order.  The channel is closed after
    every submitted crawl has finished.
    """
    workers = max_workers or settings.entry_workers
    responses: Channel[CrawlResult] = Channel()

    def run() -> None:
        futures: dict[Future, URL] = {}
        try:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="entry") as pool:
                for vocab_url in vocab_urls:
                    futures[pool.submit(crawl_vocab, vocab_url, responses)] = vocab_url
                done, _ = wait(futures)
            for future in done:
                exc = future.exception()
                if exc is not None:
                    logger.error("[entry] Unexpected failure for %s: %r", futures[future], exc)
            logger.debug("[entry] %d crawl(s) finished", len(done))
        finally:
            responses.close()

    threading.Thread(target=run, name="crawl-handle", daemon=True).start()
    return responses
