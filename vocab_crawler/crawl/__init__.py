"""Crawl pipeline: seed keys -> index -> listings -> entries.

Structure:
- seeds.py: the fixed seed key order
- models.py: levels, entries, results and entry failure kinds
- channel.py: single-consumer stream closed at end of sequence
- index.py / listing.py / entry.py: one module per stage
- aggregator.py: fan-in of concurrent entry crawls
- pipeline.py: per-seed driver
"""

from vocab_crawler.crawl.aggregator import crawl_handle
from vocab_crawler.crawl.channel import Channel, ChannelClosedError
from vocab_crawler.crawl.entry import EntryAccumulator, crawl_vocab, fetch_entry
from vocab_crawler.crawl.index import extract_index, index_url
from vocab_crawler.crawl.listing import crawl_vocab_urls
from vocab_crawler.crawl.models import (
    DEFAULT_LEVEL,
    URL,
    CrawlError,
    CrawlResult,
    DefinitionNotFoundError,
    ProficiencyLevel,
    VocabEntry,
    WordNotFoundError,
)
from vocab_crawler.crawl.pipeline import crawl_seed, run_crawl
from vocab_crawler.crawl.seeds import get_seeds

__all__ = [
    "Channel",
    "ChannelClosedError",
    "CrawlError",
    "CrawlResult",
    "DEFAULT_LEVEL",
    "DefinitionNotFoundError",
    "EntryAccumulator",
    "ProficiencyLevel",
    "URL",
    "VocabEntry",
    "WordNotFoundError",
    "crawl_handle",
    "crawl_seed",
    "crawl_vocab",
    "crawl_vocab_urls",
    "extract_index",
    "fetch_entry",
    "get_seeds",
    "index_url",
    "run_crawl",
]
