"""Tests for the index, listing and entry stages.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer; every stage builds its
  own real ``Collector`` and parses the canned HTML below.
- ``settings.base_url`` / ``settings.site_origin`` are pointed at an example
  host with ``monkeypatch`` so routes do not depend on the environment.
"""

from __future__ import annotations

import threading

import httpx
import pytest
import respx

from vocab_crawler.crawl.aggregator import crawl_handle
from vocab_crawler.crawl.entry import EntryAccumulator, clean_definition, crawl_vocab, fetch_entry
from vocab_crawler.crawl.channel import Channel
from vocab_crawler.crawl.index import extract_index, index_url
from vocab_crawler.crawl.listing import crawl_vocab_urls
from vocab_crawler.crawl.models import (
    CrawlResult,
    DefinitionNotFoundError,
    ProficiencyLevel,
    WordNotFoundError,
)
from vocab_crawler.scraper import HTMLElement

_BASE = "https://dict.example.com/browse/english/"
_ORIGIN = "https://dict.example.com"


@pytest.fixture(autouse=True)
def site(monkeypatch):
    monkeypatch.setattr("vocab_crawler.config.settings.base_url", _BASE)
    monkeypatch.setattr("vocab_crawler.config.settings.site_origin", _ORIGIN)


def _entry_page(
    word: str | None = "run",
    definitions: tuple[str, ...] = ("  to move fast:  ",),
    levels: tuple[str, ...] = (),
    examples: tuple[str, ...] = (),
) -> str:
    parts = ["<html><body>"]
    if word is not None:
        parts.append(f'<span class="hw dhw">{word}</span>')
    for level in levels:
        parts.append(f'<span class="epp-xref dxref">{level}</span>')
    for d in definitions:
        parts.append(f'<div class="def ddef_d db">{d}</div>')
    for ex in examples:
        parts.append(f'<span class="eg deg">{ex}</span>')
    parts.append("</body></html>")
    return "".join(parts)


def _element(text: str, index: int = 0) -> HTMLElement:
    return HTMLElement(index=index, text=text, request_url="https://x/")


# ---------------------------------------------------------------------------
# Index stage
# ---------------------------------------------------------------------------

_INDEX_HTML = """\
<html><body>
  <a class="hlh32 hdb dil tcbd" href="https://dict.example.com/browse/english/a/a/">a - abandon</a>
  <a class="hlh32 hdb dil tcbd" href="https://dict.example.com/browse/english/a/ab/">abandoned - able</a>
  <a class="hlh32" href="/not-an-index">ignored</a>
</body></html>
"""


class TestExtractIndex:
    def test_index_url_appends_seed(self) -> None:
        assert index_url("0-9") == _BASE + "0-9"

    def test_emits_each_index_link_in_document_order(self) -> None:
        with respx.mock:
            respx.get(_BASE + "a").mock(return_value=httpx.Response(200, text=_INDEX_HTML))
            listings = list(extract_index("a"))

        assert listings == [
            "https://dict.example.com/browse/english/a/a/",
            "https://dict.example.com/browse/english/a/ab/",
        ]

    def test_transport_failure_closes_empty_stream(self) -> None:
        with respx.mock:
            respx.get(_BASE + "b").mock(side_effect=httpx.ConnectError)
            stream = extract_index("b")
            listings = list(stream)

        assert listings == []
        assert stream.closed

    def test_http_error_is_logged(self, caplog) -> None:
        with respx.mock:
            respx.get(_BASE + "c").mock(return_value=httpx.Response(503))
            with caplog.at_level("ERROR"):
                assert list(extract_index("c")) == []

        assert any("[index]" in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------------------------
# Listing stage
# ---------------------------------------------------------------------------

_LISTING_URL = _BASE + "a/a/"

_LISTING_HTML = """\
<html><body>
  <a class="tc-bd" href="/dictionary/english/a">a</a>
  <a class="tc-bd" href="">empty</a>
  <a class="tc-bd" href="/dictionary/english/abandon">abandon</a>
</body></html>
"""


class TestCrawlVocabUrls:
    def test_resolves_relative_links_and_skips_empty(self) -> None:
        with respx.mock:
            respx.get(_LISTING_URL).mock(return_value=httpx.Response(200, text=_LISTING_HTML))
            urls = list(crawl_vocab_urls(_LISTING_URL))

        assert urls == [
            "https://dict.example.com/dictionary/english/a",
            "https://dict.example.com/dictionary/english/abandon",
        ]

    def test_two_links_one_empty_emits_one(self) -> None:
        html = (
            '<html><body><a class="tc-bd" href="/dictionary/english/run">run</a>'
            '<a class="tc-bd" href="">x</a></body></html>'
        )
        with respx.mock:
            respx.get(_LISTING_URL).mock(return_value=httpx.Response(200, text=html))
            urls = list(crawl_vocab_urls(_LISTING_URL))

        assert urls == ["https://dict.example.com/dictionary/english/run"]

    def test_transport_failure_closes_stream(self) -> None:
        with respx.mock:
            respx.get(_LISTING_URL).mock(side_effect=httpx.ReadTimeout)
            stream = crawl_vocab_urls(_LISTING_URL)
            assert list(stream) == []
        assert stream.closed

    def test_malformed_link_skipped_without_cutting_the_page(self, caplog) -> None:
        html = (
            '<html><body>'
            '<a class="tc-bd" href="/dictionary/english/a">a</a>'
            '<a class="tc-bd" href="//[bad/x">bad</a>'
            '<a class="tc-bd" href="/dictionary/english/b">b</a>'
            '</body></html>'
        )
        with respx.mock:
            respx.get(_LISTING_URL).mock(return_value=httpx.Response(200, text=html))
            with caplog.at_level("WARNING"):
                urls = list(crawl_vocab_urls(_LISTING_URL))

        assert urls == [
            "https://dict.example.com/dictionary/english/a",
            "https://dict.example.com/dictionary/english/b",
        ]
        skipped = [r for r in caplog.records if "malformed link" in r.getMessage()]
        assert len(skipped) == 1
        # Listing threads are named after the page they crawl.
        assert skipped[0].threadName == f"listing-{_LISTING_URL}"


# ---------------------------------------------------------------------------
# Entry stage
# ---------------------------------------------------------------------------

_ENTRY_URL = "https://dict.example.com/dictionary/english/run"


def _fetch(html: str) -> CrawlResult:
    with respx.mock:
        respx.get(_ENTRY_URL).mock(return_value=httpx.Response(200, text=html))
        return fetch_entry(_ENTRY_URL)


class TestCleanDefinition:
    def test_strips_whitespace_and_one_colon(self) -> None:
        assert clean_definition("  to run fast:  ") == "to run fast"

    def test_only_one_colon_removed(self) -> None:
        assert clean_definition("ratio 2::") == "ratio 2:"

    def test_no_colon_untouched(self) -> None:
        assert clean_definition("to run fast") == "to run fast"


class TestFetchEntry:
    def test_builds_entry_with_clean_definition(self) -> None:
        result = _fetch(_entry_page(definitions=("\n  to run fast: \n",)))

        assert result.ok
        assert result.url == _ENTRY_URL
        assert result.entry.word == "run"
        assert result.entry.definition == "to run fast"

    def test_missing_word_yields_word_not_found(self) -> None:
        result = _fetch(_entry_page(word=None))

        assert not result.ok
        assert result.entry is None
        assert isinstance(result.error, WordNotFoundError)

    def test_missing_definition_yields_definition_not_found(self) -> None:
        result = _fetch(_entry_page(definitions=()))

        assert isinstance(result.error, DefinitionNotFoundError)

    def test_level_defaults_to_b2(self) -> None:
        assert _fetch(_entry_page()).entry.level is ProficiencyLevel.B2

    def test_first_level_parsed(self) -> None:
        result = _fetch(_entry_page(levels=(" A2 ", "C1")))
        assert result.entry.level is ProficiencyLevel.A2

    def test_unrecognised_level_is_unparseable(self) -> None:
        result = _fetch(_entry_page(levels=("Z9",)))
        assert result.ok
        assert result.entry.level is ProficiencyLevel.UNPARSEABLE

    def test_first_definition_wins(self) -> None:
        result = _fetch(_entry_page(definitions=("first meaning:", "second meaning:")))
        assert result.entry.definition == "first meaning"

    def test_last_example_wins(self) -> None:
        result = _fetch(_entry_page(examples=("I run daily.", "She runs a shop.")))
        assert result.entry.example_usage == "She runs a shop."

    def test_transport_failure_yields_word_not_found(self) -> None:
        with respx.mock:
            respx.get(_ENTRY_URL).mock(side_effect=httpx.ConnectError)
            result = fetch_entry(_ENTRY_URL)

        assert isinstance(result.error, WordNotFoundError)

    def test_crawl_vocab_writes_exactly_one_result(self) -> None:
        responses: Channel[CrawlResult] = Channel()

        def run() -> None:
            crawl_vocab(_ENTRY_URL, responses)
            responses.close()

        with respx.mock:
            respx.get(_ENTRY_URL).mock(return_value=httpx.Response(200, text=_entry_page()))
            t = threading.Thread(target=run)
            t.start()
            results = list(responses)
            t.join(timeout=5)

        assert len(results) == 1
        assert results[0].entry.word == "run"

    def test_unexpected_visit_failure_still_yields_a_result(self, monkeypatch, caplog) -> None:
        def broken_visit(self, url: str) -> None:
            raise RuntimeError("parser blew up")

        monkeypatch.setattr("vocab_crawler.scraper.collector.Collector.visit", broken_visit)
        with caplog.at_level("ERROR"):
            result = fetch_entry(_ENTRY_URL)

        assert isinstance(result.error, WordNotFoundError)
        assert any("Unexpected failure" in r.getMessage() for r in caplog.records)


class TestCrawlHandleWithBadUrls:
    def test_unparseable_url_still_produces_a_result(self) -> None:
        bad_url = "https://dict.example.com:abc/x"
        with respx.mock:
            respx.get(_ENTRY_URL).mock(return_value=httpx.Response(200, text=_entry_page()))
            results = list(crawl_handle([_ENTRY_URL, bad_url], max_workers=2))

        assert len(results) == 2
        by_url = {r.url: r for r in results}
        assert by_url[_ENTRY_URL].ok
        assert isinstance(by_url[bad_url].error, WordNotFoundError)


class TestEntryAccumulator:
    def test_word_found_but_visit_failed_before_definition(self) -> None:
        acc = EntryAccumulator(url=_ENTRY_URL)
        acc.on_word(_element("run"))
        assert isinstance(acc.result().error, DefinitionNotFoundError)

    def test_first_word_kept(self) -> None:
        acc = EntryAccumulator(url=_ENTRY_URL)
        acc.on_word(_element("run"))
        acc.on_word(_element("running", index=1))
        acc.on_definition(_element("to move"))
        assert acc.result().entry.word == "run"

    def test_blank_definition_does_not_count(self) -> None:
        acc = EntryAccumulator(url=_ENTRY_URL)
        acc.on_word(_element("run"))
        acc.on_definition(_element("  :  "))
        assert not acc.definition_found
        acc.on_definition(_element("to move:", index=1))
        assert acc.result().entry.definition == "to move"

    def test_level_only_read_from_first_match(self) -> None:
        acc = EntryAccumulator(url=_ENTRY_URL)
        acc.on_level(_element("C1", index=1))
        assert acc.level is ProficiencyLevel.B2
        acc.on_level(_element("A1", index=0))
        assert acc.level is ProficiencyLevel.A1

    def test_fresh_accumulators_share_no_state(self) -> None:
        a = EntryAccumulator(url="https://x/a")
        b = EntryAccumulator(url="https://x/b")
        a.on_word(_element("alpha"))
        assert not b.word_found
