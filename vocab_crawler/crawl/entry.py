"""Entry stage: one entry page URL -> exactly one :class:`CrawlResult`.

Parsing state for a page lives in an :class:`EntryAccumulator` built fresh for
every visit; its handler methods are the collector callbacks.

Selector handling differs per field:

* word: first non-empty match is kept.
* definition: first non-empty match is kept; surrounding whitespace and one
  trailing colon are stripped.
* level: only the first match (index 0) is parsed.  Pages without a level
  marker keep :data:`DEFAULT_LEVEL`.
* example usage: every match overwrites the previous one, so the last wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vocab_crawler.crawl.channel import Channel
from vocab_crawler.crawl.models import (
    DEFAULT_LEVEL,
    URL,
    CrawlResult,
    DefinitionNotFoundError,
    ProficiencyLevel,
    VocabEntry,
    WordNotFoundError,
)
from vocab_crawler.scraper import Collector, HTMLElement, VisitError

logger = logging.getLogger(__name__)

WORD_SELECTOR = ".hw.dhw"
DEFINITION_SELECTOR = ".def.ddef_d.db"
LEVEL_SELECTOR = ".epp-xref.dxref"
EXAMPLE_SELECTOR = ".eg.deg"


def clean_definition(text: str) -> str:
    """Trim *text* and drop a single trailing colon."""
    text = text.strip()
    if text.endswith(":"):
        text = text[:-1]
    return text


@dataclass
class EntryAccumulator:
    """Fields collected while visiting one entry page."""

    url: str
    word: str = ""
    definition: str = ""
    level: ProficiencyLevel = DEFAULT_LEVEL
    example_usage: str = ""
    word_found: bool = False
    definition_found: bool = False

    def register(self, collector: Collector) -> None:
        collector.on_html(WORD_SELECTOR, self.on_word)
        collector.on_html(DEFINITION_SELECTOR, self.on_definition)
        collector.on_html(LEVEL_SELECTOR, self.on_level)
        collector.on_html(EXAMPLE_SELECTOR, self.on_example)

    def on_word(self, e: HTMLElement) -> None:
        if self.word_found:
            return
        word = e.text.strip()
        if word:
            self.word = word
            self.word_found = True

    def on_definition(self, e: HTMLElement) -> None:
        if self.definition_found:
            return
        definition = clean_definition(e.text)
        if definition:
            self.definition = definition
            self.definition_found = True

    def on_level(self, e: HTMLElement) -> None:
        if e.index == 0:
            self.level = ProficiencyLevel.parse(e.text)
            if not self.level.is_valid:
                logger.warning("[entry] Unparseable level %r on %s", e.text.strip(), self.url)

    def on_example(self, e: HTMLElement) -> None:
        self.example_usage = e.text.strip()

    def result(self) -> CrawlResult:
        """Build the single result for this page from what was collected."""
        if not self.word_found:
            return CrawlResult.failure(self.url, WordNotFoundError())
        if not self.definition_found:
            return CrawlResult.failure(self.url, DefinitionNotFoundError())
        entry = VocabEntry(
            word=self.word,
            definition=self.definition,
            level=self.level,
            example_usage=self.example_usage,
        )
        return CrawlResult.success(self.url, entry)


def fetch_entry(vocab_url: URL) -> CrawlResult:
    """Visit *vocab_url* and return its :class:`CrawlResult`.

    A failed visit is only logged, never raised; the result is then decided
    by whatever the accumulator saw before the failure.
    """
    logger.info("[entry] Crawling %s", vocab_url)
    acc = EntryAccumulator(url=vocab_url)
    collector = Collector()
    acc.register(collector)
    collector.on_error(lambda u, exc: logger.warning("[entry] %s: %s", u, exc))

    try:
        collector.visit(vocab_url)
    except VisitError as exc:
        logger.error("[entry] Failed to crawl %s: %s", vocab_url, exc)
    except Exception:
        logger.exception("[entry] Unexpected failure while crawling %s", vocab_url)

    return acc.result()


def crawl_vocab(vocab_url: URL, responses: Channel[CrawlResult]) -> None:
    """Crawl *vocab_url* and write exactly one result to *responses*."""
    responses.put(fetch_entry(vocab_url))
